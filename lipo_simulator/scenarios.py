"""
Simulation Scenario Loading and Management

This module provides functions to load, save, validate and build simulation
scenarios from YAML files.

Scenario layout (every section optional except 'name'):
    name: cold_soak_pulse
    cell:       {capacity_ah, initial_soc, initial_temperature_c}
    thermal:    {specific_heat_j_per_g_c, mass_g, ambient_temp_c, r_value, exposed_area_m2}
    profile:    {type: constant | pulsed, current_a, period_s, pulse_duration_s, pulse_delay_s}
    simulation: {dt_s, duration_s, series_cells}
"""

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .plant.cell_model import LipoCell
from .plant.current_profile import PROFILE_TYPES, CurrentProfile, create_current_profile
from .plant.thermal_model import ThermalEnvironment

logger = logging.getLogger(__name__)

# Defaults reproduce the -20°C self-heating demonstration run
DEFAULT_SCENARIO = {
    'name': 'cold_soak_pulse',
    'cell': {
        'capacity_ah': 1.8,
        'initial_soc': 1.0,
    },
    'thermal': {
        'specific_heat_j_per_g_c': 0.9,  # aluminum
        'mass_g': 150.0,
        'ambient_temp_c': -20.0,
        'r_value': 0.1,  # air film
        'exposed_area_m2': 0.01,
    },
    'profile': {
        'type': 'pulsed',
        'current_a': 1.8,
        'period_s': 17.0 * 60.0,
        'pulse_duration_s': 5.0 * 60.0,
        'pulse_delay_s': 10.0,
    },
    'simulation': {
        'dt_s': 12.0,
        'duration_s': 30.0 * 60.0,
        'series_cells': 1,
    },
}

SECTIONS = ('cell', 'thermal', 'profile', 'simulation')


class ScenarioError(ValueError):
    """Raised when a scenario file is invalid."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid scenario: " + "; ".join(self.errors))


@dataclass
class SimulationSetup:
    """Everything needed to run one simulation."""
    name: str
    cell: LipoCell
    profile: CurrentProfile
    environment: ThermalEnvironment
    dt_s: float
    duration_s: float
    series_cells: int


def load_scenario(yaml_file: Union[str, Path]) -> Dict[str, Any]:
    """
    Load simulation scenario from YAML file.

    Args:
        yaml_file: Path to YAML scenario file

    Returns:
        Scenario dictionary
    """
    with open(yaml_file, 'r', encoding='utf-8') as f:
        try:
            scenario = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ScenarioError([f"{yaml_file}: {exc}"]) from exc

    if not isinstance(scenario, dict):
        raise ScenarioError([f"{yaml_file}: top level must be a mapping"])

    logger.debug(f"Loaded scenario '{scenario.get('name')}' from {yaml_file}")
    return scenario


def save_scenario(scenario: Dict[str, Any], yaml_file: Union[str, Path]):
    """
    Save simulation scenario to YAML file.

    Args:
        scenario: Scenario dictionary
        yaml_file: Path to output YAML file
    """
    with open(yaml_file, 'w', encoding='utf-8') as f:
        yaml.dump(scenario, f, default_flow_style=False, sort_keys=False)


def merge_with_defaults(scenario: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing sections and keys from DEFAULT_SCENARIO."""
    merged = copy.deepcopy(DEFAULT_SCENARIO)
    for key, value in scenario.items():
        if key in SECTIONS and isinstance(value, dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def _check_number(errors: List[str], section: str, config: dict, key: str,
                  positive: bool = False, non_negative: bool = False):
    if key not in config:
        return
    try:
        value = float(config[key])
    except (TypeError, ValueError):
        errors.append(f"{section}.{key}: must be a number, got {config[key]!r}")
        return
    if positive and not value > 0.0:
        errors.append(f"{section}.{key}: must be positive, got {value}")
    elif non_negative and value < 0.0:
        errors.append(f"{section}.{key}: must be non-negative, got {value}")


def validate_scenario(scenario: Dict[str, Any]) -> List[str]:
    """
    Validate scenario configuration.

    Args:
        scenario: Scenario dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    # Check required fields
    if 'name' not in scenario:
        errors.append("Missing required field: 'name'")

    for section in SECTIONS:
        if section in scenario and not isinstance(scenario[section], dict):
            errors.append(f"Section '{section}' must be a mapping")

    cell = scenario.get('cell') if isinstance(scenario.get('cell'), dict) else {}
    _check_number(errors, 'cell', cell, 'capacity_ah', positive=True)
    _check_number(errors, 'cell', cell, 'initial_soc')
    _check_number(errors, 'cell', cell, 'initial_temperature_c')

    thermal = scenario.get('thermal') if isinstance(scenario.get('thermal'), dict) else {}
    for key in ('specific_heat_j_per_g_c', 'mass_g', 'r_value', 'exposed_area_m2'):
        _check_number(errors, 'thermal', thermal, key, positive=True)
    _check_number(errors, 'thermal', thermal, 'ambient_temp_c')

    profile = scenario.get('profile') if isinstance(scenario.get('profile'), dict) else {}
    profile_type = str(profile.get('type', 'pulsed')).lower()
    if profile_type not in PROFILE_TYPES:
        errors.append(f"profile.type: Invalid profile type: {profile_type}. Must be one of {sorted(PROFILE_TYPES)}")
    _check_number(errors, 'profile', profile, 'current_a')
    _check_number(errors, 'profile', profile, 'period_s', positive=True)
    _check_number(errors, 'profile', profile, 'pulse_duration_s', non_negative=True)
    _check_number(errors, 'profile', profile, 'pulse_delay_s', non_negative=True)

    simulation = scenario.get('simulation') if isinstance(scenario.get('simulation'), dict) else {}
    _check_number(errors, 'simulation', simulation, 'dt_s', positive=True)
    _check_number(errors, 'simulation', simulation, 'duration_s', positive=True)
    if 'series_cells' in simulation:
        series = simulation['series_cells']
        if isinstance(series, bool) or not isinstance(series, int) or series < 1:
            errors.append(f"simulation.series_cells: must be an integer >= 1, got {series!r}")

    return errors


def build_simulation(scenario: Dict[str, Any]) -> SimulationSetup:
    """
    Create cell, profile and thermal environment from a scenario dictionary.

    Args:
        scenario: Scenario dictionary (missing keys take demonstration defaults)

    Returns:
        Configured SimulationSetup

    Raises:
        ScenarioError: If the scenario fails validation
    """
    errors = validate_scenario(scenario)
    if errors:
        raise ScenarioError(errors)

    merged = merge_with_defaults(scenario)
    environment = ThermalEnvironment.from_dict(merged['thermal'])

    cell_cfg = merged['cell']
    # Cell starts in equilibrium with ambient unless told otherwise
    initial_temp_c = float(cell_cfg.get('initial_temperature_c', environment.ambient_temp_c))
    cell = LipoCell(
        capacity_ah=float(cell_cfg['capacity_ah']),
        initial_soc=float(cell_cfg['initial_soc']),
        temperature_c=initial_temp_c,
    )

    sim_cfg = merged['simulation']
    return SimulationSetup(
        name=str(merged['name']),
        cell=cell,
        profile=create_current_profile(merged['profile']),
        environment=environment,
        dt_s=float(sim_cfg['dt_s']),
        duration_s=float(sim_cfg['duration_s']),
        series_cells=int(sim_cfg['series_cells']),
    )
