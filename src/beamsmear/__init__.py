"""
beamsmear - Guinea-Pig input beam generator

Truncated, uncorrelated Gaussian smearing of macroparticle energy and
phase-space coordinates for beam-beam simulations.
"""

import logging

from .models import (
    BeamConfig, ParticleRecord, SamplingStatistics, BeamStatistics,
    BeamGenerationError, InvalidConfiguration, SinkUnavailable, RejectionLimitExceeded
)
from .optics import DerivedSigmas, ParameterDeriver
from .generators import RandomStreams, TruncatedSampler, generate_beam_file
from .io import GuineaPigWriter, MemoryWriter, read_beam_file

__version__ = "0.1.0"

__all__ = [
    'BeamConfig',
    'ParticleRecord',
    'SamplingStatistics',
    'BeamStatistics',
    'BeamGenerationError',
    'InvalidConfiguration',
    'SinkUnavailable',
    'RejectionLimitExceeded',
    'DerivedSigmas',
    'ParameterDeriver',
    'RandomStreams',
    'TruncatedSampler',
    'generate_beam_file',
    'GuineaPigWriter',
    'MemoryWriter',
    'read_beam_file',
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
