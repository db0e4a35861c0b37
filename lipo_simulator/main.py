"""
Lithium-Ion Cell Simulator - Command Line Driver

Runs a single cell through a current profile and prints, for every timestep:
time, terminal voltage, current, cell temperature, SOC and C1 charge.

Without --scenario the -20°C self-heating demonstration is run (1.8 Ah cell,
1.8 A load pulses of 5 minutes every 17 minutes, 12 s steps for 30 minutes).
Command line values override scenario values.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logger import setup_logging
from .plant.run_cell_simulation import (
    create_simulation_plots,
    format_step,
    run_simulation,
    save_timeseries,
)
from .scenarios import ScenarioError, build_simulation, load_scenario, merge_with_defaults

logger = logging.getLogger(__name__)

# Command line option -> (scenario section, key)
OVERRIDES = {
    'capacity': ('cell', 'capacity_ah'),
    'soc': ('cell', 'initial_soc'),
    'temperature': ('cell', 'initial_temperature_c'),
    'ambient': ('thermal', 'ambient_temp_c'),
    'current': ('profile', 'current_a'),
    'dt': ('simulation', 'dt_s'),
    'duration': ('simulation', 'duration_s'),
    'series': ('simulation', 'series_cells'),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Simulate a lithium-ion cell (equivalent circuit + thermal model) under a load profile.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # -20°C self-heating demonstration
  lipo-sim

  # Scenario file with a 2-cell stack, saving CSV and plots
  lipo-sim --scenario scenarios/cold_soak_pulse.yaml --series 2 --output-dir output
        """
    )
    parser.add_argument('--scenario', type=str, default=None,
                        help='Path to YAML simulation scenario file')
    parser.add_argument('--capacity', type=float, default=None,
                        help='Cell capacity in Ah')
    parser.add_argument('--soc', type=float, default=None,
                        help='Initial SOC (0.0 to 1.0)')
    parser.add_argument('--temperature', type=float, default=None,
                        help='Initial cell temperature in °C (default: ambient)')
    parser.add_argument('--ambient', type=float, default=None,
                        help='Ambient temperature in °C')
    parser.add_argument('--current', type=float, default=None,
                        help='Profile current in Amperes (positive = discharge)')
    parser.add_argument('--dt', type=float, default=None,
                        help='Time step in seconds')
    parser.add_argument('--duration', type=float, default=None,
                        help='Duration in seconds')
    parser.add_argument('--series', type=int, default=None,
                        help='Cells stacked in series (multiplies voltage and heat)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Output directory for time series CSV and plots')
    parser.add_argument('--no-plots', action='store_true',
                        help='Disable plot generation')
    parser.add_argument('--no-print', action='store_true',
                        help='Disable per-step printing')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Append log messages to this file')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')
    return parser


def apply_overrides(scenario: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Return a copy of the scenario with command line values applied."""
    merged = merge_with_defaults(scenario)
    for option, (section, key) in OVERRIDES.items():
        value = getattr(args, option)
        # Malformed sections are left for validate_scenario() to report
        if value is not None and isinstance(merged[section], dict):
            merged[section][key] = value
    return merged


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        scenario = load_scenario(args.scenario) if args.scenario else {}
        setup = build_simulation(apply_overrides(scenario, args))
    except (ScenarioError, OSError) as e:
        logger.error(f"Failed to load scenario: {e}")
        return 1

    logger.info(f"Running scenario: {setup.name}")
    on_step = None if args.no_print else (lambda record: print(format_step(record)))

    records = run_simulation(
        setup.cell,
        setup.profile,
        setup.environment,
        dt_s=setup.dt_s,
        duration_s=setup.duration_s,
        series_cells=setup.series_cells,
        on_step=on_step,
    )

    if args.output_dir:
        output_path = Path(args.output_dir)
        try:
            save_timeseries(records, output_path)
            if not args.no_plots:
                create_simulation_plots(records, output_path)
        except OSError as e:
            logger.error(f"Failed to write results to {output_path}: {e}")
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
