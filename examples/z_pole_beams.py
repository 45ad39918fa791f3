"""
Demonstration script for beamsmear.

Generates the electron and positron input beams of an FCC-ee Z-pole
Guinea-Pig run and reports the resulting column statistics.
"""

import logging

from beamsmear.generators import ProgressMonitor, TruncatedSampler, generate_beam_file
from beamsmear.io import MemoryWriter, read_beam_file
from beamsmear.models import BeamConfig, BeamStatistics, COLUMNS, COLUMN_UNITS

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def report(name, statistics):
    logger.info(f"{name}: {statistics.num_particles} particles")
    for column, unit in zip(COLUMNS, COLUMN_UNITS):
        logger.info(f"  {column:<6} mean {statistics.mean[column]: .4e} {unit:<4} rms {statistics.rms[column]:.4e}")


def demo_in_memory():
    """Sample a small beam without touching the file system."""
    config = BeamConfig(particle_count=2000, seed=1)
    writer = MemoryWriter()
    stats = TruncatedSampler(config).run(writer)
    logger.info(f"In-memory beam: acceptance {stats.acceptance_rate:.3f}")
    report("in-memory", BeamStatistics.from_array(writer.to_array()))


def demo_files():
    """Write electron and positron beams with independent seeds."""
    electron = BeamConfig(seed=13)
    positron = BeamConfig(seed=113)

    for name, config in (("electronZ.ini", electron), ("positronZ.ini", positron)):
        generate_beam_file(config, name, monitors=[ProgressMonitor(report_every=20000)])
        report(name, BeamStatistics.from_array(read_beam_file(name)))


def demo_no_update():
    """Compare per-particle and nominal transverse widths."""
    for update in (True, False):
        config = BeamConfig(particle_count=5000, energy_spread=0.05, truncate=3.0, update_transverse=update)
        writer = MemoryWriter()
        TruncatedSampler(config).run(writer)
        x_rms = BeamStatistics.from_array(writer.to_array()).rms["x"]
        logger.info(f"update_transverse={update}: x rms {x_rms:.4f} um")


def main():
    demo_in_memory()
    demo_no_update()
    demo_files()


if __name__ == "__main__":
    main()
