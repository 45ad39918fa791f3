#!/usr/bin/env python3
"""
Command line generator of Guinea-Pig input beam files.

Usage:
    python -m beamsmear.cli [--output FILE] [--config CONFIG.yaml] [options]

Or from command line after installation:
    beamsmear --output electronZ.ini --particles 80000 --seed 13
"""

import sys
import argparse
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .generators import DEFAULT_MAX_ATTEMPTS, ProgressMonitor, generate_beam_file
from .io import read_beam_file
from .models import BeamConfig, BeamGenerationError, BeamStatistics, COLUMNS, COLUMN_UNITS

logger = logging.getLogger(__name__)

# argparse destination -> BeamConfig field
CONFIG_OPTIONS = {
    'seed': 'seed',
    'energy_spread': 'energy_spread',
    'particles': 'particle_count',
    'energy': 'mean_energy',
    'truncate': 'truncate',
    'bunch_length': 'bunch_length',
    'beta_x': 'beta_x',
    'beta_y': 'beta_y',
    'emitt_x': 'emittance_x',
    'emitt_y': 'emittance_y',
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser; beam options default to None so a config file can supply them."""
    parser = argparse.ArgumentParser(
        description="Generate a Guinea-Pig input beam file with truncated, uncorrelated Gaussian smearing"
    )
    parser.add_argument('-o', '--output', type=str, default='electronZ.ini',
                        help='Output beam file (default: electronZ.ini)')
    parser.add_argument('--config', type=str,
                        help='YAML file with BeamConfig fields; command line options override it')
    parser.add_argument('--save-config', type=str,
                        help='Write the effective configuration to this YAML file')

    beam = parser.add_argument_group('beam parameters')
    beam.add_argument('--seed', type=int, help='Base random seed (default: 13)')
    beam.add_argument('--energy-spread', type=float, help='Fractional energy spread sigma_E/E (default: 0.003)')
    beam.add_argument('-n', '--particles', type=int, help='Number of macroparticles (default: 80000)')
    beam.add_argument('--energy', type=float, help='Mean beam energy in GeV (default: 45.6)')
    beam.add_argument('--truncate', type=float, help='Truncation bound in sigma (default: 4.0)')
    beam.add_argument('--bunch-length', type=float, help='RMS bunch length in um (default: 410.0)')
    beam.add_argument('--beta-x', type=float, help='Horizontal beta function in mm (default: 18.0)')
    beam.add_argument('--beta-y', type=float, help='Vertical beta function in mm (default: 0.39)')
    beam.add_argument('--emitt-x', type=float, help='Horizontal normalized emittance in 1e-6 m rad (default: 6.2)')
    beam.add_argument('--emitt-y', type=float, help='Vertical normalized emittance in 1e-6 m rad (default: 0.0485)')
    beam.add_argument('--no-update', action='store_true',
                      help='Keep nominal-energy transverse widths for every particle')

    run = parser.add_argument_group('run control')
    run.add_argument('--max-attempts', type=int, default=DEFAULT_MAX_ATTEMPTS,
                     help=f'Candidate tuples allowed per particle (default: {DEFAULT_MAX_ATTEMPTS})')
    run.add_argument('--report-every', type=int, default=10000,
                     help='Log progress every N particles, 0 to disable (default: 10000)')
    run.add_argument('--summary', action='store_true',
                     help='Read the written file back and log column statistics')
    run.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def config_from_args(args: argparse.Namespace) -> BeamConfig:
    """Merge the optional config file with command line overrides."""
    data: Dict[str, Any] = {}
    if args.config:
        data.update(BeamConfig.from_yaml(args.config).to_dict())

    for option, field_name in CONFIG_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            data[field_name] = value
    if args.no_update:
        data['update_transverse'] = False

    return BeamConfig.from_dict(data)


def log_beam_statistics(statistics: BeamStatistics):
    logger.info(f"Column statistics over {statistics.num_particles} particles:")
    for name, unit in zip(COLUMNS, COLUMN_UNITS):
        logger.info(
            f"  {name:<6} mean = {statistics.mean[name]: .6e} {unit:<4} "
            f"rms = {statistics.rms[name]:.6e} {unit}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = config_from_args(args)
        if args.save_config:
            config.to_yaml(args.save_config)
            logger.info(f"Saved configuration to {args.save_config}")

        generate_beam_file(
            config,
            args.output,
            monitors=[ProgressMonitor(report_every=args.report_every)],
            max_attempts=args.max_attempts,
        )

        if args.summary and config.particle_count > 0:
            log_beam_statistics(BeamStatistics.from_array(read_beam_file(args.output)))
    except (BeamGenerationError, ValidationError, FileNotFoundError, ValueError) as e:
        logger.error(f"Beam generation failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
