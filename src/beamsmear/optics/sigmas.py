"""
Beam sizes and divergences derived from IP optics.

Converts the Guinea-Pig style optics inputs (normalized emittance in
1e-6 m rad, beta in mm) into the six Gaussian widths used by the sampler,
in GeV, microns and micro-radians. No correlations are modelled: the
horizontal and vertical planes are taken at a waist (alpha = 0) and the
longitudinal plane is independent of energy.
"""

from dataclasses import dataclass
import math

from ..models.beam import BeamConfig, check_beam_config

# Electron rest mass in GeV
ELECTRON_MASS = 0.5109989461e-3

# Metres to microns, radians to micro-radians
CONV = 1.0e6

BETA_TO_SI = 1.0e-3        # mm -> m
EMITTANCE_TO_SI = 1.0e-6   # 1e-6 m rad -> m rad


def lorentz_gamma(energy: float, mass: float = ELECTRON_MASS) -> float:
    """Relativistic factor of a particle of total energy ``energy`` (same units as ``mass``)."""
    return energy / mass


def beam_size(emittance: float, beta: float, gamma: float) -> float:
    """
    RMS beam size in microns.

    Args:
        emittance: Normalized emittance in 1e-6 m rad
        beta: Beta function in mm
        gamma: Relativistic factor
    """
    return CONV * math.sqrt(emittance * EMITTANCE_TO_SI * beta * BETA_TO_SI / gamma)


def beam_divergence(emittance: float, beta: float, gamma: float) -> float:
    """RMS angular divergence in micro-radians (same arguments as ``beam_size``)."""
    return CONV * math.sqrt(emittance * EMITTANCE_TO_SI / (gamma * beta * BETA_TO_SI))


@dataclass
class DerivedSigmas:
    """Gaussian widths of the six sampled variables."""
    sigma_e: float    # GeV
    sigma_x: float    # um
    sigma_y: float    # um
    sigma_z: float    # um
    sigma_xp: float   # urad
    sigma_yp: float   # urad

    def as_tuple(self):
        return (self.sigma_e, self.sigma_x, self.sigma_y,
                self.sigma_z, self.sigma_xp, self.sigma_yp)


class ParameterDeriver:
    """
    Derives Gaussian widths from a beam configuration.

    ``initial`` is evaluated once per run at the nominal energy;
    ``rederive_transverse`` refreshes the four transverse widths for the
    energy actually sampled for a particle.
    """

    def __init__(self, mass: float = ELECTRON_MASS):
        self.mass = mass

    def initial(self, config: BeamConfig) -> DerivedSigmas:
        """
        Compute the widths at the nominal beam energy.

        Args:
            config: Beam configuration

        Returns:
            DerivedSigmas at gamma0 = mean_energy / mass

        Raises:
            InvalidConfiguration: If the configuration fails the physics checks
        """
        check_beam_config(config)
        gamma0 = lorentz_gamma(config.mean_energy, self.mass)
        sigmas = DerivedSigmas(
            sigma_e=config.energy_spread * config.mean_energy,
            sigma_x=0.0,
            sigma_y=0.0,
            sigma_z=config.bunch_length,
            sigma_xp=0.0,
            sigma_yp=0.0,
        )
        self._set_transverse(sigmas, gamma0, config)
        return sigmas

    def rederive_transverse(self, sigmas: DerivedSigmas, sampled_energy: float,
                            config: BeamConfig) -> DerivedSigmas:
        """
        Recompute the transverse widths in place for a sampled energy.

        sigma_e and sigma_z are left unchanged.

        Args:
            sigmas: Widths to update
            sampled_energy: Particle energy in GeV, must be positive
            config: Beam configuration providing emittances and betas

        Returns:
            The updated ``sigmas``
        """
        gamma = lorentz_gamma(sampled_energy, self.mass)
        self._set_transverse(sigmas, gamma, config)
        return sigmas

    @staticmethod
    def _set_transverse(sigmas: DerivedSigmas, gamma: float, config: BeamConfig):
        sigmas.sigma_x = beam_size(config.emittance_x, config.beta_x, gamma)
        sigmas.sigma_y = beam_size(config.emittance_y, config.beta_y, gamma)
        sigmas.sigma_xp = beam_divergence(config.emittance_x, config.beta_x, gamma)
        sigmas.sigma_yp = beam_divergence(config.emittance_y, config.beta_y, gamma)
