"""
Cell Plant Model

Calibration tables, parameter interpolation, the equivalent circuit cell
model, its thermal model, current profiles and the simulation loop.
"""

from .parameter_tables import (
    ParameterTable,
    EM_TABLE,
    R0_TABLE,
    R1_TABLE,
    C1_TABLE,
    PARAMETER_TABLES,
    TEMPERATURES_C,
    SOC_BUCKETS,
)
from .interpolation import CellParameters, bilinear_interpolate, resolve_parameters
from .thermal_model import ThermalEnvironment
from .cell_model import LipoCell
from .current_profile import (
    CurrentProfile,
    ConstantCurrentProfile,
    PulsedLoadProfile,
    create_current_profile,
)
from .run_cell_simulation import run_simulation, save_timeseries, create_simulation_plots

__all__ = [
    # Tables
    'ParameterTable',
    'EM_TABLE',
    'R0_TABLE',
    'R1_TABLE',
    'C1_TABLE',
    'PARAMETER_TABLES',
    'TEMPERATURES_C',
    'SOC_BUCKETS',
    # Interpolation
    'CellParameters',
    'bilinear_interpolate',
    'resolve_parameters',
    # Cell
    'ThermalEnvironment',
    'LipoCell',
    # Profiles
    'CurrentProfile',
    'ConstantCurrentProfile',
    'PulsedLoadProfile',
    'create_current_profile',
    # Simulation
    'run_simulation',
    'save_timeseries',
    'create_simulation_plots',
]
