"""
Lithium-Ion Cell Simulator

Table-calibrated equivalent circuit and thermal model of a rechargeable
lithium-ion cell, for offline estimation of terminal voltage, SOC and cell
temperature under arbitrary load profiles.
"""

from .plant.cell_model import LipoCell
from .plant.interpolation import CellParameters
from .plant.thermal_model import ThermalEnvironment

__version__ = "0.1.0"

__all__ = [
    'LipoCell',
    'CellParameters',
    'ThermalEnvironment',
]
