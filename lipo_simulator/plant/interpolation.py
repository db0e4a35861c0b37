"""
Bilinear Interpolation of Cell Parameters

Maps a cell's (SOC, temperature) state onto continuous grid coordinates of the
calibration tables and interpolates all four circuit parameters:
1. Interpolate along SOC at the two bracketing temperature rows
2. Interpolate those two results along temperature
"""

import logging
import math
from typing import NamedTuple, Tuple

from .parameter_tables import (
    NUM_SOC_BUCKETS,
    NUM_TEMP_BUCKETS,
    TEMPERATURES_C,
    EM_TABLE,
    R0_TABLE,
    R1_TABLE,
    C1_TABLE,
    ParameterTable,
)

logger = logging.getLogger(__name__)


class CellParameters(NamedTuple):
    """Circuit parameters resolved for one (SOC, temperature) pair."""
    em: float  # Open circuit voltage (V)
    r0: float  # Series output resistance (ohm)
    r1: float  # Short-term resistance (ohm)
    c1: float  # Short-term capacitance (F)


def bilinear_interpolate(
    table: ParameterTable,
    t_number: float,
    t_index: int,
    soc_number: float,
    soc_index: int
) -> float:
    """
    Bilinear interpolation of one parameter from a calibration table.

    Args:
        table: Parameter table to read
        t_number: Continuous temperature coordinate (row units)
        t_index: Floor row index of t_number
        soc_number: Continuous SOC coordinate (column units)
        soc_index: Floor column index of soc_number

    Returns:
        Interpolated value. Fractional offsets outside [0, 1) extrapolate linearly.
    """
    # Neighbours stop at the table edge instead of reading past it
    soc_next = min(soc_index + 1, NUM_SOC_BUCKETS - 1)
    t_next = min(t_index + 1, NUM_TEMP_BUCKETS - 1)

    ii = table.value_at(t_index, soc_index)
    i_n = table.value_at(t_index, soc_next)
    ti = table.value_at(t_next, soc_index)
    tn = table.value_at(t_next, soc_next)

    soc_frac = soc_number - soc_index
    low_row = ii + (i_n - ii) * soc_frac
    high_row = ti + (tn - ti) * soc_frac

    return low_row + (high_row - low_row) * (t_number - t_index)


def locate_soc(soc: float) -> Tuple[float, int]:
    """
    Map SOC onto the uniform SOC axis.

    The stored SOC may drift outside [0, 1]; only this working copy is clamped.

    Returns:
        Tuple of (soc_number, soc_index)
    """
    last = NUM_SOC_BUCKETS - 1
    soc_number = min(max(soc * last, 0.0), float(last))
    soc_index = min(int(math.floor(soc_number)), last)
    return soc_number, soc_index


def locate_temperature(temperature_c: float) -> Tuple[float, int]:
    """
    Find the bracketing calibration temperatures by linear scan.

    Below the first or at/above the last calibration temperature the
    fractional part is forced to 0 (flat extrapolation).

    Returns:
        Tuple of (t_number, t_index)
    """
    t_index = 0
    while t_index + 1 < NUM_TEMP_BUCKETS and TEMPERATURES_C[t_index + 1] <= temperature_c:
        t_index += 1

    t_frac = 0.0
    if t_index + 1 < NUM_TEMP_BUCKETS:
        last = TEMPERATURES_C[t_index]
        nxt = TEMPERATURES_C[t_index + 1]
        t_frac = float((temperature_c - last) / (nxt - last))
        if t_frac < 0.0:
            logger.debug(f"Temperature {temperature_c:.2f}°C below calibrated range, using {last:.1f}°C")
            t_frac = 0.0
    elif temperature_c > TEMPERATURES_C[-1]:
        logger.debug(
            f"Temperature {temperature_c:.2f}°C above calibrated range, using {TEMPERATURES_C[-1]:.1f}°C"
        )

    return t_index + t_frac, t_index


def resolve_parameters(soc: float, temperature_c: float) -> CellParameters:
    """
    Resolve all four circuit parameters for the given state.

    Args:
        soc: State of charge (fraction, not clamped by the caller)
        temperature_c: Cell temperature in °C

    Returns:
        CellParameters valid only for this (SOC, temperature) pair
    """
    soc_number, soc_index = locate_soc(soc)
    t_number, t_index = locate_temperature(temperature_c)

    return CellParameters(
        em=bilinear_interpolate(EM_TABLE, t_number, t_index, soc_number, soc_index),
        r0=bilinear_interpolate(R0_TABLE, t_number, t_index, soc_number, soc_index),
        r1=bilinear_interpolate(R1_TABLE, t_number, t_index, soc_number, soc_index),
        c1=bilinear_interpolate(C1_TABLE, t_number, t_index, soc_number, soc_index),
    )
