"""
End-to-end beam file generation.

Composes the width derivation, the truncated sampler and the Guinea-Pig
writer: the configuration is checked and the widths derived before the
output file is touched, so an invalid configuration never leaves a file
behind.
"""

from pathlib import Path
from typing import List, Optional, Union
import logging

from ..io.guineapig import GuineaPigWriter
from ..models.beam import BeamConfig, SamplingStatistics
from ..optics.sigmas import DerivedSigmas, lorentz_gamma
from .sampler import DEFAULT_MAX_ATTEMPTS, ProgressMonitor, SamplingMonitor, TruncatedSampler

logger = logging.getLogger(__name__)


def log_beam_summary(config: BeamConfig, sigmas: DerivedSigmas,
                     output_path: Optional[Union[str, Path]] = None):
    """Log the run parameters and nominal widths at INFO level."""
    if output_path is not None:
        logger.info(f"bfile          {output_path}")
    logger.info(f"N              {config.particle_count}")
    logger.info(f"seed           {config.seed}")
    logger.info(f"Ebeam  (GeV) = {config.mean_energy}")
    logger.info(f"gamma        = {lorentz_gamma(config.mean_energy):.6g}")
    logger.info(f"sE/E         = {config.energy_spread}")
    logger.info(f"sigmaE (GeV) = {sigmas.sigma_e:.6g}")
    logger.info(f"sigmaX  (um) = {sigmas.sigma_x:.6g}")
    logger.info(f"sigmaY  (um) = {sigmas.sigma_y:.6g}")
    logger.info(f"sigmaZ  (um) = {sigmas.sigma_z:.6g}")
    logger.info(f"sigmaXP (urad) = {sigmas.sigma_xp:.6g}")
    logger.info(f"sigmaYP (urad) = {sigmas.sigma_yp:.6g}")
    logger.info(f"truncate at +- {config.truncate} sigma")
    logger.info(f"update flag    {config.update_transverse}")


def generate_beam_file(
    config: BeamConfig,
    output_path: Union[str, Path],
    monitors: Optional[List[SamplingMonitor]] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> SamplingStatistics:
    """
    Generate a Guinea-Pig input beam file.

    Args:
        config: Beam configuration
        output_path: File to create; an existing file is overwritten
        monitors: Sampling monitors; a ``ProgressMonitor`` when None
        max_attempts: Candidate tuples allowed per particle

    Returns:
        SamplingStatistics of the run

    Raises:
        InvalidConfiguration: Before any file is created
        SinkUnavailable: If the file cannot be opened or written
        RejectionLimitExceeded: If a particle exhausts ``max_attempts``
    """
    if monitors is None:
        monitors = [ProgressMonitor()]

    sampler = TruncatedSampler(config, max_attempts=max_attempts, monitors=monitors)
    log_beam_summary(config, sampler.nominal_sigmas, output_path)

    with GuineaPigWriter(output_path) as writer:
        statistics = sampler.run(writer)

    logger.info(f"Wrote {writer.lines_written} particles to {writer.path}")
    return statistics
