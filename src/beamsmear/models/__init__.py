"""
beamsmear Pydantic Models Package

Configuration, record and statistics models for beam-file generation,
together with the exception hierarchy.
"""

from .base import PhysicsBaseModel
from .beam import (
    BeamConfig, ParticleRecord, SamplingStatistics, BeamStatistics,
    check_beam_config, COLUMNS, COLUMN_UNITS, MIN_ACCEPTANCE
)
from .errors import (
    BeamGenerationError, InvalidConfiguration, SinkUnavailable,
    RejectionLimitExceeded
)

__all__ = [
    'PhysicsBaseModel',
    'BeamConfig',
    'ParticleRecord',
    'SamplingStatistics',
    'BeamStatistics',
    'check_beam_config',
    'COLUMNS',
    'COLUMN_UNITS',
    'MIN_ACCEPTANCE',
    'BeamGenerationError',
    'InvalidConfiguration',
    'SinkUnavailable',
    'RejectionLimitExceeded',
]
