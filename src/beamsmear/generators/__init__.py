"""
beamsmear Beam Generators Package.

Truncated Gaussian sampling of Guinea-Pig input beams.

Key Components:
- RandomStreams: six independently seeded generators, one per variable
- TruncatedSampler: rejection sampler with per-particle transverse widths
- SamplingMonitor / ProgressMonitor: callbacks during a run
- generate_beam_file: configuration to finished beam file

Example Usage:
    from beamsmear.models import BeamConfig
    from beamsmear.generators import generate_beam_file

    config = BeamConfig(particle_count=10000, seed=13)
    statistics = generate_beam_file(config, "electron.ini")
"""

from .streams import RandomStreams, STREAM_OFFSETS
from .sampler import (
    TruncatedSampler,
    SamplingMonitor,
    ProgressMonitor,
    DEFAULT_MAX_ATTEMPTS,
)
from .engine import generate_beam_file, log_beam_summary

__all__ = [
    "RandomStreams",
    "STREAM_OFFSETS",
    "TruncatedSampler",
    "SamplingMonitor",
    "ProgressMonitor",
    "DEFAULT_MAX_ATTEMPTS",
    "generate_beam_file",
    "log_beam_summary",
]
