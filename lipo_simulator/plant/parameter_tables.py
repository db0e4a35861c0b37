"""
Lithium-Ion Cell Calibration Tables

This module holds the empirically calibrated equivalent circuit parameters:
- Open circuit voltage Em (V)
- Series output resistance R0 (ohm)
- Short-term deep draw resistance R1 (ohm)
- Short-term capacitance C1 (F)

Each table is indexed by [temperature bucket][SOC bucket]. SOC buckets are
uniform (0.0, 0.1, ... 1.0); temperature buckets are NOT uniform, so lookups
must search TEMPERATURES_C rather than scale.
"""

import numpy as np


# Number of entries by state of charge: 0.0 0.1 ... 1.0
NUM_SOC_BUCKETS = 11

# Number of entries by temperature
NUM_TEMP_BUCKETS = 4

# Calibration temperatures (°C), ascending
TEMPERATURES_C = np.array([-20.0, -10.0, -5.0, 2.0])
TEMPERATURES_C.flags.writeable = False

# SOC value of each column
SOC_BUCKETS = np.linspace(0.0, 1.0, NUM_SOC_BUCKETS)
SOC_BUCKETS.flags.writeable = False


class ParameterTable:
    """
    Read-only 2-D table of one circuit parameter.

    Rows are calibration temperatures, columns are SOC buckets.

    Parameters:
        name: Short parameter name (e.g. 'R0')
        units: Units of the stored values
        values: Nested sequence of shape (NUM_TEMP_BUCKETS, NUM_SOC_BUCKETS)
    """

    def __init__(self, name: str, units: str, values):
        data = np.array(values, dtype=np.float64)
        if data.shape != (NUM_TEMP_BUCKETS, NUM_SOC_BUCKETS):
            raise ValueError(
                f"{name} table must have shape ({NUM_TEMP_BUCKETS}, {NUM_SOC_BUCKETS}), got {data.shape}"
            )
        if not np.all(np.isfinite(data)):
            raise ValueError(f"{name} table contains non-finite values")
        data.flags.writeable = False

        self.name = name
        self.units = units
        self._values = data

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the table values."""
        return self._values

    @property
    def shape(self):
        return self._values.shape

    def value_at(self, temp_index: int, soc_index: int) -> float:
        """
        Get the stored value at a grid point.

        Raises:
            IndexError: If either index is outside the table
        """
        if not 0 <= temp_index < NUM_TEMP_BUCKETS:
            raise IndexError(f"temperature index {temp_index} out of range for {self.name}")
        if not 0 <= soc_index < NUM_SOC_BUCKETS:
            raise IndexError(f"SOC index {soc_index} out of range for {self.name}")
        return float(self._values[temp_index, soc_index])

    def __repr__(self) -> str:
        return f"ParameterTable(name={self.name!r}, units={self.units!r})"


# Open circuit voltage, Em (volts)
EM_TABLE = ParameterTable("Em", "V", [
    [3.5, 3.65, 3.7, 3.75, 3.78, 3.8, 3.85, 3.9, 3.95, 4.1, 4.2],  # -20°C
    [3.5, 3.65, 3.7, 3.746368, 3.794009, 3.824597, 3.870755, 3.921037, 3.984153, 4.1, 4.2],  # -10°C
    [3.5, 3.717802, 3.751656, 3.779548, 3.805342, 3.837747, 3.886275, 3.92452, 4.019383, 4.131402, 4.2],  # -5°C
    [3.5, 3.723299, 3.754516, 3.788628, 3.812054, 3.840599, 3.888213, 3.933897, 4.024288, 4.130746, 4.182739],  # 2°C
])

# Series output resistance R0 (ohms)
R0_TABLE = ParameterTable("R0", "ohm", [
    [0.26, 0.26, 0.26, 0.13, 0.13, 0.13, 0.13, 0.13, 0.25, 0.2, 0.67],  # -20°C
    [0.3, 0.050589, 0.144401, 0.085073, 0.091675, 0.085872, 0.08382, 0.084737, 0.075961, 0.15, 0.25],  # -10°C
    [0.2, 0.029142, 0.029737, 0.031219, 0.031587, 0.030885, 0.031477, 0.030845, 0.030875, 0.025, 0.016],  # -5°C
    [0.032564, 0.022225, 0.019854, 0.024638, 0.022878, 0.021342, 0.022003, 0.02195, 0.021421, 0.023454, 0.014168],  # 2°C
])

# Short-term deep draw resistance R1 (ohms)
R1_TABLE = ParameterTable("R1", "ohm", [
    [2.0, 0.75, 0.21, 0.190953, 0.147748, 0.127334, 0.143009, 0.180778, 0.1, 0.261743, 0.85],  # -20°C
    [0.003815, 0.007988, 0.020238, 0.015108, 0.01404, 0.014878, 0.014838, 0.014781, 0.015083, 0.15, 0.3],  # -10°C
    [0.011421, 0.003253, 0.012514, 0.00939, 0.010378, 0.009284, 0.008821, 0.008391, 0.010644, 0.008414, 0.007233],  # -5°C
    [0.025991, 0.003294, 0.013872, 0.013772, 0.013957, 0.011306, 0.01088, 0.01135, 0.015937, 0.012274, 0.007585],  # 2°C
])

# Short-term capacitance C1 (farads)
C1_TABLE = ParameterTable("C1", "F", [
    [400.0, 500.0, 600.0, 846.0, 846.0, 846.0, 846.0, 846.0, 600.0, 846.0, 596.0],  # -20°C
    [14.34898, 28719.38, 1818.858, 5832.355, 8962.667, 8772.705, 8750.688, 8565.881, 7004.807, 11188.4, 7370.326],  # -10°C
    [0.881527, 33414.97, 2179.029, 11289.18, 7234.158, 6226.428, 5750.18, 9030.291, 3869.932, 11851.0, 7122.03],  # -5°C
    [0.262732, 50759.86, 3022.06, 15720.72, 8308.124, 7180.572, 6619.685, 13150.94, 4201.662, 15103.12, 6852.036],  # 2°C
])

PARAMETER_TABLES = {
    'em': EM_TABLE,
    'r0': R0_TABLE,
    'r1': R1_TABLE,
    'c1': C1_TABLE,
}
