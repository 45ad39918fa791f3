"""
Beam data models for Guinea-Pig input file generation.

Defines the immutable beam configuration, the per-particle output record
and the statistics gathered over a generated beam.
"""

from dataclasses import dataclass, astuple
from typing import Dict, Iterator, Optional, Tuple
import logging

from pydantic import ConfigDict, Field, model_validator
import numpy as np

from .base import PhysicsBaseModel
from .errors import InvalidConfiguration
from .validators import (
    validate_beam_energy, validate_energy_spread, validate_bunch_length,
    validate_emittance, validate_beta_function, validate_truncation
)

logger = logging.getLogger(__name__)

# Column order of a Guinea-Pig electron/positron input file
COLUMNS = ("energy", "x", "y", "z", "xp", "yp")
COLUMN_UNITS = ("GeV", "um", "um", "um", "urad", "urad")

# Smallest expected acceptance probability of one candidate tuple
MIN_ACCEPTANCE = 1.0e-4

# Below this bound rejection becomes expensive enough to report
PRACTICAL_TRUNCATION = 1.0


class BeamConfig(PhysicsBaseModel):
    """
    Immutable configuration of one beam of macroparticles.

    Units follow the Guinea-Pig input conventions: energies in GeV,
    bunch length in microns, normalized emittances in 1e-6 m rad and
    beta functions in mm. The defaults describe an FCC-ee Z-pole electron
    beam.

    Physics checks run after field validation and raise
    ``InvalidConfiguration``; malformed field types still raise
    ``pydantic.ValidationError``.

    Example:
        >>> config = BeamConfig(particle_count=1000, seed=42)
        >>> config.mean_energy
        45.6
    """

    model_config = ConfigDict(frozen=True)

    mean_energy: float = Field(default=45.6, description="Mean beam energy in GeV")
    energy_spread: float = Field(default=0.003, description="Fractional RMS energy spread sigma_E/E")
    bunch_length: float = Field(default=410.0, description="RMS bunch length sigma_z in um")
    emittance_x: float = Field(default=6.2, description="Horizontal normalized emittance in 1e-6 m rad")
    emittance_y: float = Field(default=0.0485, description="Vertical normalized emittance in 1e-6 m rad")
    beta_x: float = Field(default=18.0, description="Horizontal beta function at the IP in mm")
    beta_y: float = Field(default=0.39, description="Vertical beta function at the IP in mm")
    truncate: float = Field(default=4.0, description="Gaussian truncation bound in standard deviations")
    particle_count: int = Field(default=80000, ge=0, description="Number of macroparticles to generate")
    seed: int = Field(default=13, ge=0, description="Base seed of the six random streams")
    update_transverse: bool = Field(
        default=True,
        description="Recompute transverse sigmas from each particle's sampled energy"
    )

    @model_validator(mode='after')
    def validate_physics(self):
        """Reject configurations the sampler cannot handle."""
        check_beam_config(self)
        return self

    @property
    def truncated_components(self) -> int:
        """Number of components with a non-zero width at nominal energy."""
        widths = (
            self.energy_spread,
            self.emittance_x, self.emittance_y,
            self.bunch_length,
            self.emittance_x, self.emittance_y,
        )
        return sum(1 for w in widths if w > 0.0)


def check_beam_config(config: BeamConfig) -> BeamConfig:
    """
    Run the physics checks on a beam configuration.

    Args:
        config: Configuration to check

    Returns:
        The same configuration

    Raises:
        InvalidConfiguration: If any value makes sampling meaningless or
            non-terminating
    """
    try:
        validate_beam_energy(config.mean_energy)
        validate_energy_spread(config.energy_spread)
        validate_bunch_length(config.bunch_length)
        validate_emittance(config.emittance_x, "x")
        validate_emittance(config.emittance_y, "y")
        validate_beta_function(config.beta_x, "x")
        validate_beta_function(config.beta_y, "y")
        validate_truncation(config.truncate, MIN_ACCEPTANCE, config.truncated_components)
        if config.truncate * config.energy_spread >= 1.0:
            raise ValueError(
                f"Truncation at {config.truncate} sigma with energy spread {config.energy_spread} "
                f"admits non-positive particle energies"
            )
    except ValueError as e:
        raise InvalidConfiguration(str(e)) from e

    if config.truncate < PRACTICAL_TRUNCATION:
        logger.warning(
            f"Truncation at {config.truncate} sigma is below {PRACTICAL_TRUNCATION} sigma; "
            f"most candidate particles will be rejected"
        )
    return config


@dataclass(frozen=True)
class ParticleRecord:
    """One accepted macroparticle: (E, x, y, z, x', y') in (GeV, um, um, um, urad, urad)."""
    energy: float
    x: float
    y: float
    z: float
    xp: float
    yp: float

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return astuple(self)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())


class SamplingStatistics(PhysicsBaseModel):
    """Bookkeeping of one rejection-sampling run."""
    particles_accepted: int = Field(default=0, ge=0, description="Records emitted")
    attempts: int = Field(default=0, ge=0, description="Candidate tuples drawn")
    max_attempts_per_particle: int = Field(default=0, ge=0, description="Largest number of attempts any particle needed")
    execution_time: Optional[float] = Field(default=None, ge=0, description="Wall time in seconds")

    @property
    def rejections(self) -> int:
        return self.attempts - self.particles_accepted

    @property
    def acceptance_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.particles_accepted / self.attempts


class BeamStatistics(PhysicsBaseModel):
    """
    Column statistics of a generated beam.

    Means and RMS values are keyed by column name (see ``COLUMNS``).
    """
    num_particles: int = Field(ge=0, description="Number of particles")
    mean: Dict[str, float] = Field(description="Column means")
    rms: Dict[str, float] = Field(description="Column RMS spreads about the mean")
    minimum: Dict[str, float] = Field(description="Column minima")
    maximum: Dict[str, float] = Field(description="Column maxima")

    @classmethod
    def from_array(cls, particles: np.ndarray) -> "BeamStatistics":
        """
        Compute statistics from an (N, 6) particle array.

        Args:
            particles: Array with one row per particle in file column order

        Returns:
            BeamStatistics for the array

        Raises:
            ValueError: If the array is not (N, 6) or is empty
        """
        particles = np.asarray(particles, dtype=float)
        if particles.ndim != 2 or particles.shape[1] != len(COLUMNS):
            raise ValueError(f"Particle array must have shape (N, {len(COLUMNS)}), got {particles.shape}")
        if particles.shape[0] == 0:
            raise ValueError("Cannot compute statistics of an empty beam")

        means = particles.mean(axis=0)
        rms = particles.std(axis=0)
        mins = particles.min(axis=0)
        maxs = particles.max(axis=0)
        return cls(
            num_particles=particles.shape[0],
            mean={name: float(v) for name, v in zip(COLUMNS, means)},
            rms={name: float(v) for name, v in zip(COLUMNS, rms)},
            minimum={name: float(v) for name, v in zip(COLUMNS, mins)},
            maximum={name: float(v) for name, v in zip(COLUMNS, maxs)},
        )
