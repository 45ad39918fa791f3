"""
Truncated Gaussian rejection sampler for Guinea-Pig beam particles.

This module draws one (E, x, y, z, x', y') tuple per macroparticle from six
independent Gaussian streams. The transverse widths of every candidate are
recomputed from that candidate's own energy sample, and the whole tuple is
redrawn until all six components lie within the truncation bound.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterator, List, Optional, Tuple
import logging
import time

from ..models.beam import BeamConfig, ParticleRecord, SamplingStatistics
from ..models.errors import BeamGenerationError, RejectionLimitExceeded
from ..optics.sigmas import DerivedSigmas, ParameterDeriver
from .streams import RandomStreams

logger = logging.getLogger(__name__)

# Safety cap on candidate tuples per particle
DEFAULT_MAX_ATTEMPTS = 1_000_000


class SamplingMonitor(ABC):
    """
    Abstract base class for sampling monitors and callbacks.

    Monitors attached to a sampler are notified when a run starts, after
    every accepted particle, when the run completes and when it fails.
    """

    @abstractmethod
    def on_sampling_start(self, config: BeamConfig, sigmas: DerivedSigmas):
        """Called before the first particle is drawn."""
        pass

    @abstractmethod
    def on_particle_accepted(self, index: int, record: ParticleRecord, attempts: int):
        """Called after each accepted particle."""
        pass

    @abstractmethod
    def on_sampling_complete(self, statistics: SamplingStatistics):
        """Called when all particles have been emitted."""
        pass

    @abstractmethod
    def on_error(self, error: Exception):
        """Called when sampling or writing fails."""
        pass


class ProgressMonitor(SamplingMonitor):
    """Logs sampling progress every ``report_every`` particles."""

    def __init__(self, report_every: int = 10000, show_progress: bool = True):
        self.report_every = report_every
        self.show_progress = show_progress
        self.start_time = None
        self.total_particles = 0

    def on_sampling_start(self, config: BeamConfig, sigmas: DerivedSigmas):
        self.start_time = time.time()
        self.total_particles = config.particle_count
        if self.show_progress:
            logger.info(f"Generating {config.particle_count} particles truncated at +-{config.truncate} sigma")

    def on_particle_accepted(self, index: int, record: ParticleRecord, attempts: int):
        done = index + 1
        if self.show_progress and self.report_every > 0 and done % self.report_every == 0:
            elapsed = time.time() - self.start_time if self.start_time else 0
            progress = (done / self.total_particles) * 100
            logger.info(f"Progress: {progress:.1f}% ({done}/{self.total_particles} particles, {elapsed:.1f}s elapsed)")

    def on_sampling_complete(self, statistics: SamplingStatistics):
        if self.show_progress:
            logger.info(
                f"Generated {statistics.particles_accepted} particles from {statistics.attempts} "
                f"candidates (acceptance {statistics.acceptance_rate:.4f})"
            )

    def on_error(self, error: Exception):
        logger.error(f"Beam generation error: {error}")


class TruncatedSampler:
    """
    Rejection sampler producing exactly ``config.particle_count`` records.

    Per attempt the streams are advanced in the fixed order energy, x, y, z,
    x', y'. A component with zero width always sits exactly at its mean and
    counts as inside the bound.

    Args:
        config: Validated beam configuration
        streams: Random streams; seeded from ``config.seed`` when None
        deriver: Width calculator; a default ``ParameterDeriver`` when None
        max_attempts: Candidate tuples allowed per particle before
            ``RejectionLimitExceeded`` is raised
        monitors: Monitors notified during ``run``

    Raises:
        InvalidConfiguration: If the configuration fails the physics checks
        ValueError: If ``max_attempts`` is not positive
    """

    def __init__(
        self,
        config: BeamConfig,
        streams: Optional[RandomStreams] = None,
        deriver: Optional[ParameterDeriver] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        monitors: Optional[List[SamplingMonitor]] = None
    ):
        if max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")

        self.config = config
        self.deriver = deriver or ParameterDeriver()
        self.nominal_sigmas = self.deriver.initial(config)
        self.sigmas = replace(self.nominal_sigmas)
        self.streams = streams if streams is not None else RandomStreams(config.seed)
        self.max_attempts = max_attempts
        self.monitors: List[SamplingMonitor] = list(monitors) if monitors else []

        self._attempts = 0
        self._accepted = 0
        self._max_particle_attempts = 0
        self._execution_time: Optional[float] = None

    def add_monitor(self, monitor: SamplingMonitor):
        """Attach a monitor notified during ``run``."""
        self.monitors.append(monitor)

    @property
    def statistics(self) -> SamplingStatistics:
        """Counters of the particles sampled so far."""
        return SamplingStatistics(
            particles_accepted=self._accepted,
            attempts=self._attempts,
            max_attempts_per_particle=self._max_particle_attempts,
            execution_time=self._execution_time,
        )

    @staticmethod
    def normalized_deviation(value: float, mean: float, sigma: float) -> float:
        """Deviation from the mean in units of sigma; zero for a zero-width variable."""
        if sigma == 0.0:
            return 0.0
        return (value - mean) / sigma

    def draw_candidate(self) -> Optional[Tuple[float, float, float, float, float, float]]:
        """
        Draw one candidate tuple, updating ``self.sigmas`` for its energy.

        Returns:
            The candidate (E, x, y, z, x', y'), or None when the energy
            sample is non-positive and no transverse widths exist for it
        """
        config = self.config
        sigmas = self.sigmas

        energy = self.streams.energy.normal(config.mean_energy, sigmas.sigma_e)
        if config.update_transverse:
            if energy <= 0.0:
                # keep the other streams in step with the energy stream
                for name in ("x", "y", "z", "xp", "yp"):
                    self.streams[name].standard_normal()
                return None
            self.deriver.rederive_transverse(sigmas, energy, config)

        x = self.streams.x.normal(0.0, sigmas.sigma_x)
        y = self.streams.y.normal(0.0, sigmas.sigma_y)
        z = self.streams.z.normal(0.0, sigmas.sigma_z)
        xp = self.streams.xp.normal(0.0, sigmas.sigma_xp)
        yp = self.streams.yp.normal(0.0, sigmas.sigma_yp)
        return (float(energy), float(x), float(y), float(z), float(xp), float(yp))

    def in_range(self, candidate: Tuple[float, float, float, float, float, float]) -> bool:
        """True if every component of ``candidate`` lies strictly within the truncation bound."""
        means = (self.config.mean_energy, 0.0, 0.0, 0.0, 0.0, 0.0)
        truncate = self.config.truncate
        return all(
            abs(self.normalized_deviation(value, mean, sigma)) < truncate
            for value, mean, sigma in zip(candidate, means, self.sigmas.as_tuple())
        )

    def sample_particle(self) -> ParticleRecord:
        """
        Draw candidate tuples until one is accepted.

        Returns:
            The accepted particle

        Raises:
            RejectionLimitExceeded: If ``max_attempts`` candidates were all rejected
        """
        for attempt in range(1, self.max_attempts + 1):
            self._attempts += 1
            candidate = self.draw_candidate()
            if candidate is not None and self.in_range(candidate):
                self._accepted += 1
                self._max_particle_attempts = max(self._max_particle_attempts, attempt)
                return ParticleRecord(*candidate)

        raise RejectionLimitExceeded(
            f"No candidate accepted within {self.max_attempts} attempts "
            f"(truncate={self.config.truncate} sigma)"
        )

    def generate(self) -> Iterator[ParticleRecord]:
        """Yield ``config.particle_count`` accepted particles, one at a time."""
        for index in range(self.config.particle_count):
            before = self._attempts
            record = self.sample_particle()
            for monitor in self.monitors:
                monitor.on_particle_accepted(index, record, self._attempts - before)
            yield record

    def __iter__(self) -> Iterator[ParticleRecord]:
        return self.generate()

    def run(self, writer) -> SamplingStatistics:
        """
        Sample the whole beam and hand every record to ``writer``.

        Args:
            writer: Object with a ``write(record)`` method

        Returns:
            SamplingStatistics of the run
        """
        start_time = time.time()
        for monitor in self.monitors:
            monitor.on_sampling_start(self.config, self.nominal_sigmas)

        try:
            for record in self.generate():
                writer.write(record)
        except BeamGenerationError as e:
            for monitor in self.monitors:
                monitor.on_error(e)
            raise

        self._execution_time = time.time() - start_time
        statistics = self.statistics
        for monitor in self.monitors:
            monitor.on_sampling_complete(statistics)
        logger.debug(f"Sampling statistics: {statistics.to_dict()}")
        return statistics
