"""Tests for the lumped thermal model."""

import unittest

from lipo_simulator.plant.thermal_model import (
    ThermalEnvironment,
    cooling_energy,
    temperature_change,
)


class TestThermalFunctions(unittest.TestCase):

    def test_cooling_energy_sign(self):
        self.assertGreater(cooling_energy(10.0, 0.0, 0.1, 0.01, 12.0), 0.0)
        self.assertLess(cooling_energy(-10.0, 0.0, 0.1, 0.01, 12.0), 0.0)
        self.assertEqual(cooling_energy(5.0, 5.0, 0.1, 0.01, 12.0), 0.0)

    def test_cooling_energy_value(self):
        # 10 °C * 0.02 m² / 0.5 m²·°C/W = 0.4 W for 10 s
        self.assertAlmostEqual(cooling_energy(10.0, 0.0, 0.5, 0.02, 10.0), 4.0)

    def test_temperature_change_balances_heat_and_cooling(self):
        # Heat in equals cooling out: no change
        cool = cooling_energy(10.0, 0.0, 0.1, 0.01, 12.0)
        self.assertAlmostEqual(temperature_change(10.0, cool, 0.9, 150.0, 0.0, 0.1, 0.01, 12.0), 0.0)

    def test_temperature_change_scales_with_heat_capacity(self):
        small = temperature_change(0.0, 100.0, 0.9, 50.0, 0.0, 0.1, 0.01, 1.0)
        large = temperature_change(0.0, 100.0, 0.9, 100.0, 0.0, 0.1, 0.01, 1.0)
        self.assertAlmostEqual(small, 2.0 * large)

    def test_zero_heat_at_ambient(self):
        self.assertEqual(temperature_change(-20.0, 0.0, 0.9, 150.0, -20.0, 0.1, 0.01, 12.0), 0.0)


class TestThermalEnvironment(unittest.TestCase):

    def test_defaults(self):
        env = ThermalEnvironment()
        self.assertEqual(env.specific_heat_j_per_g_c, 0.9)
        self.assertEqual(env.mass_g, 150.0)
        self.assertEqual(env.ambient_temp_c, -20.0)
        self.assertEqual(env.r_value, 0.1)
        self.assertEqual(env.exposed_area_m2, 0.01)
        self.assertAlmostEqual(env.heat_capacity_j_per_c, 135.0)
        self.assertAlmostEqual(env.time_constant_s, 1350.0)

    def test_non_positive_values_rejected(self):
        for field_name in ('specific_heat_j_per_g_c', 'mass_g', 'r_value', 'exposed_area_m2'):
            for value in (0.0, -1.0):
                with self.subTest(field=field_name, value=value):
                    with self.assertRaises(ValueError):
                        ThermalEnvironment(**{field_name: value})

    def test_ambient_may_be_negative(self):
        self.assertEqual(ThermalEnvironment(ambient_temp_c=-40.0).ambient_temp_c, -40.0)

    def test_from_dict(self):
        env = ThermalEnvironment.from_dict({'mass_g': '45', 'ambient_temp_c': 2, 'unused': 1})
        self.assertEqual(env.mass_g, 45.0)
        self.assertEqual(env.ambient_temp_c, 2.0)
        self.assertEqual(env.r_value, 0.1)

    def test_frozen(self):
        env = ThermalEnvironment()
        with self.assertRaises(AttributeError):
            env.mass_g = 10.0


if __name__ == '__main__':
    unittest.main()
