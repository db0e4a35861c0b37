"""Tests for bilinear interpolation and parameter resolution."""

import unittest

from lipo_simulator.plant.interpolation import (
    CellParameters,
    bilinear_interpolate,
    locate_soc,
    locate_temperature,
    resolve_parameters,
)
from lipo_simulator.plant.parameter_tables import (
    C1_TABLE,
    EM_TABLE,
    PARAMETER_TABLES,
    R0_TABLE,
    TEMPERATURES_C,
)


def approx_equal(a: float, b: float, rel: float = 1e-9) -> bool:
    return abs(a - b) <= rel * max(1.0, abs(b))


class TestLocateSoc(unittest.TestCase):

    def test_inside_range(self):
        self.assertEqual(locate_soc(0.5), (5.0, 5))
        self.assertEqual(locate_soc(0.0), (0.0, 0))
        self.assertEqual(locate_soc(1.0), (10.0, 10))

    def test_fractional(self):
        soc_number, soc_index = locate_soc(0.25)
        self.assertAlmostEqual(soc_number, 2.5)
        self.assertEqual(soc_index, 2)

    def test_clamped_below_zero(self):
        self.assertEqual(locate_soc(-0.05), (0.0, 0))
        self.assertEqual(locate_soc(-3.0), (0.0, 0))

    def test_clamped_above_one(self):
        self.assertEqual(locate_soc(1.05), (10.0, 10))
        self.assertEqual(locate_soc(2.0), (10.0, 10))


class TestLocateTemperature(unittest.TestCase):

    def test_grid_temperatures(self):
        for index, temp in enumerate(TEMPERATURES_C):
            with self.subTest(temperature=temp):
                self.assertEqual(locate_temperature(temp), (float(index), index))

    def test_between_buckets(self):
        t_number, t_index = locate_temperature(-15.0)
        self.assertEqual(t_index, 0)
        self.assertAlmostEqual(t_number, 0.5)

        # Non-uniform spacing: -5 -> 2 is a 7 degree bracket
        t_number, t_index = locate_temperature(-1.5)
        self.assertEqual(t_index, 2)
        self.assertAlmostEqual(t_number, 2.5)

    def test_below_range_is_flat(self):
        self.assertEqual(locate_temperature(-40.0), (0.0, 0))

    def test_above_range_is_flat(self):
        self.assertEqual(locate_temperature(25.0), (3.0, 3))


class TestBilinearInterpolate(unittest.TestCase):

    def test_midpoint_is_corner_average(self):
        value = bilinear_interpolate(EM_TABLE, 0.5, 0, 0.5, 0)
        self.assertAlmostEqual(value, (3.5 + 3.65 + 3.5 + 3.65) / 4.0)

        value = bilinear_interpolate(R0_TABLE, 0.5, 0, 0.5, 0)
        self.assertAlmostEqual(value, (0.26 + 0.26 + 0.3 + 0.050589) / 4.0)

    def test_last_temperature_row_does_not_read_past_table(self):
        self.assertEqual(bilinear_interpolate(EM_TABLE, 3.0, 3, 10.0, 10), 4.182739)
        # Fraction past the last row still reads only the last row
        self.assertAlmostEqual(bilinear_interpolate(EM_TABLE, 3.5, 3, 10.0, 10), 4.182739)

    def test_last_soc_column_clamps_neighbour(self):
        self.assertAlmostEqual(bilinear_interpolate(C1_TABLE, 0.0, 0, 10.5, 10), 596.0)

    def test_fraction_outside_cell_extrapolates(self):
        value = bilinear_interpolate(EM_TABLE, 0.0, 0, 2.0, 0)
        self.assertAlmostEqual(value, 3.5 + (3.65 - 3.5) * 2.0)

    def test_continuity_at_cell_boundaries(self):
        eps = 1e-9
        for name, table in PARAMETER_TABLES.items():
            grid_value = table.value_at(1, 5)
            from_below = bilinear_interpolate(table, 1.0 - eps, 0, 5.0 - eps, 4)
            from_above = bilinear_interpolate(table, 1.0 + eps, 1, 5.0 + eps, 5)
            with self.subTest(table=name):
                self.assertTrue(approx_equal(from_below, grid_value, rel=1e-4), (from_below, grid_value))
                self.assertTrue(approx_equal(from_above, grid_value, rel=1e-4), (from_above, grid_value))


class TestResolveParameters(unittest.TestCase):

    def test_exact_at_grid_points(self):
        for t_index, temp in enumerate(TEMPERATURES_C):
            for soc_index in range(11):
                param = resolve_parameters(soc_index / 10.0, float(temp))
                for name, table in PARAMETER_TABLES.items():
                    expected = table.value_at(t_index, soc_index)
                    actual = getattr(param, name)
                    with self.subTest(temp=temp, soc_index=soc_index, table=name):
                        self.assertTrue(approx_equal(actual, expected, rel=1e-9), (actual, expected))

    def test_full_cell_at_minus_twenty(self):
        param = resolve_parameters(1.0, -20.0)
        self.assertIsInstance(param, CellParameters)
        self.assertAlmostEqual(param.em, 4.2)
        self.assertAlmostEqual(param.r0, 0.67)
        self.assertAlmostEqual(param.r1, 0.85)
        self.assertAlmostEqual(param.c1, 596.0)

    def test_between_temperatures(self):
        param = resolve_parameters(0.0, -15.0)
        self.assertAlmostEqual(param.em, 3.5)
        self.assertAlmostEqual(param.r0, (0.26 + 0.3) / 2.0)

    def test_temperature_outside_range_is_flat(self):
        self.assertEqual(resolve_parameters(0.55, -40.0), resolve_parameters(0.55, -20.0))
        self.assertEqual(resolve_parameters(0.55, 30.0), resolve_parameters(0.55, 2.0))

    def test_soc_outside_range_is_clamped(self):
        self.assertEqual(resolve_parameters(-0.3, -10.0), resolve_parameters(0.0, -10.0))
        self.assertEqual(resolve_parameters(1.4, -10.0), resolve_parameters(1.0, -10.0))

    def test_below_range_logs_debug(self):
        with self.assertLogs('lipo_simulator.plant.interpolation', level='DEBUG') as cm:
            resolve_parameters(0.5, -30.0)
        self.assertTrue(any('below calibrated range' in line for line in cm.output))


if __name__ == '__main__':
    unittest.main()
