"""
Fixed-Timestep Cell Simulation

Drives a LipoCell through a current profile:
1. Terminal voltage at the applied current (before the update)
2. Electrical update -> heat
3. Thermal update with that heat

series_cells is a caller-applied multiplier on voltage and heat (cells stacked
in series); the thermal update still acts on the single modelled cell.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .cell_model import LipoCell
from .current_profile import CurrentProfile
from .thermal_model import ThermalEnvironment

logger = logging.getLogger(__name__)

TIMESERIES_COLUMNS = [
    'time_s',
    'time_min',
    'voltage_v',
    'current_a',
    'heat_j',
    'temperature_c',
    'soc',
    'c1_charge_c',
]


def run_simulation(
    cell: LipoCell,
    profile: CurrentProfile,
    environment: ThermalEnvironment,
    dt_s: float = 12.0,
    duration_s: float = 30.0 * 60.0,
    series_cells: int = 1,
    on_step: Optional[Callable[[dict], None]] = None
) -> List[dict]:
    """
    Run the cell simulation loop.

    Args:
        cell: Cell to simulate (mutated in place)
        profile: Applied current profile
        environment: Thermal properties and ambient temperature
        dt_s: Timestep in seconds (default: 12)
        duration_s: Simulated time in seconds (default: 30 minutes)
        series_cells: Cells stacked in series (default: 1)
        on_step: Optional callback receiving each step record

    Returns:
        List of step records (see TIMESERIES_COLUMNS)
    """
    if not dt_s > 0.0:
        raise ValueError(f"dt_s must be positive, got {dt_s}")
    if duration_s < 0.0:
        raise ValueError(f"duration_s must be non-negative, got {duration_s}")
    if series_cells < 1:
        raise ValueError(f"series_cells must be at least 1, got {series_cells}")

    if dt_s > environment.time_constant_s:
        logger.warning(
            f"Timestep {dt_s:.1f}s exceeds thermal time constant {environment.time_constant_s:.1f}s; "
            f"temperature update may be unstable"
        )

    logger.info(f"Simulating {duration_s:.1f}s at dt={dt_s:.2f}s: {cell!r}")

    records = []
    step = 0
    time_s = 0.0
    while time_s < duration_s:
        current_a = profile.current_at(time_s)

        volts = series_cells * cell.voltage(current_a)
        heat_j = series_cells * cell.electrical_step(current_a, dt_s)
        cell.apply_environment(heat_j, environment, dt_s)

        record = {
            'time_s': time_s,
            'time_min': time_s / 60.0,
            'voltage_v': volts,
            'current_a': current_a,
            'heat_j': heat_j,
            'temperature_c': cell.temperature_c,
            'soc': cell.soc,
            'c1_charge_c': cell.c1_charge_c,
        }
        records.append(record)
        logger.debug(format_step(record))
        if on_step is not None:
            on_step(record)

        step += 1
        time_s = step * dt_s

    logger.info(f"Simulation finished after {step} steps: {cell!r}")
    return records


def format_step(record: dict) -> str:
    """Format one step record as a single report line."""
    return (
        f"{record['time_min']:.2f} minutes: {record['voltage_v']:.2f} V @ {record['current_a']:.2f} A "
        f"( {record['temperature_c']:.2f} deg C, {record['soc']:.2f} SOC, {record['c1_charge_c']:.0f} C1Q)"
    )


def results_to_dataframe(records: List[dict]) -> pd.DataFrame:
    """Convert step records to a DataFrame with fixed column order."""
    return pd.DataFrame(records, columns=TIMESERIES_COLUMNS)


def save_timeseries(records: List[dict], output_path: Path) -> Path:
    """
    Save step records as CSV.

    Args:
        records: Step records from run_simulation()
        output_path: Output directory (created if missing)

    Returns:
        Path of the written CSV file
    """
    output_path = Path(output_path)
    output_path.mkdir(parents=True, exist_ok=True)

    csv_file = output_path / 'timeseries_data.csv'
    results_to_dataframe(records).to_csv(csv_file, index=False)
    logger.info(f"Time series saved to: {csv_file}")
    return csv_file


def create_simulation_plots(records: List[dict], output_path: Path) -> List[Path]:
    """Create voltage, temperature and SOC plots for a simulation run."""
    output_path = Path(output_path)
    output_path.mkdir(parents=True, exist_ok=True)
    df = results_to_dataframe(records)

    plots = [
        ('voltage_v', 'Terminal Voltage (V)', 'voltage.png'),
        ('temperature_c', 'Cell Temperature (°C)', 'temperature.png'),
        ('soc', 'State of Charge', 'soc.png'),
    ]

    written = []
    for column, label, filename in plots:
        plt.figure(figsize=(10, 6))
        plt.plot(df['time_min'], df[column])
        plt.xlabel('Time (min)')
        plt.ylabel(label)
        plt.title(f'{label} vs Time')
        plt.grid(True, alpha=0.3)
        plt.savefig(output_path / filename, dpi=150)
        plt.close()
        written.append(output_path / filename)

    logger.info(f"Plots saved to: {output_path}")
    return written
