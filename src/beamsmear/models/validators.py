"""
Custom validators for beam optics constraints in beamsmear.

Each validator returns the value it was given and raises ``ValueError``
when the value is physically meaningless for beam-file generation.
"""

from typing import Optional
import math


def validate_beam_energy(energy: float) -> float:
    """
    Validate the mean beam energy.

    Args:
        energy: Mean beam energy in GeV

    Returns:
        Validated energy

    Raises:
        ValueError: If energy is not finite and strictly positive
    """
    if not math.isfinite(energy) or energy <= 0.0:
        raise ValueError(f"Mean beam energy must be finite and positive, got {energy} GeV")
    return energy


def validate_energy_spread(spread: float) -> float:
    """
    Validate the fractional energy spread (sigma_E / E).

    Raises:
        ValueError: If the spread is negative or not finite
    """
    if not math.isfinite(spread) or spread < 0.0:
        raise ValueError(f"Fractional energy spread must be finite and non-negative, got {spread}")
    return spread


def validate_bunch_length(length: float) -> float:
    """Validate the RMS bunch length in microns."""
    if not math.isfinite(length) or length < 0.0:
        raise ValueError(f"Bunch length must be finite and non-negative, got {length} um")
    return length


def validate_emittance(emittance: float, plane: str = "x") -> float:
    """
    Validate a normalized emittance.

    Args:
        emittance: Normalized emittance in 1e-6 m rad
        plane: Plane label used in the error message

    Returns:
        Validated emittance

    Raises:
        ValueError: If emittance is negative or not finite
    """
    if not math.isfinite(emittance) or emittance < 0.0:
        raise ValueError(f"Emittance {plane} must be finite and non-negative, got {emittance}")
    return emittance


def validate_beta_function(beta: float, plane: str = "x") -> float:
    """
    Validate a beta function value at the interaction point.

    Args:
        beta: Beta function in mm
        plane: Plane label used in the error message

    Returns:
        Validated beta

    Raises:
        ValueError: If beta is not finite and strictly positive
    """
    if not math.isfinite(beta) or beta <= 0.0:
        raise ValueError(f"Beta function {plane} must be finite and positive, got {beta} mm")
    return beta


def validate_truncation(truncate: float, min_acceptance: Optional[float] = None,
                        components: int = 6) -> float:
    """
    Validate the Gaussian truncation bound.

    Args:
        truncate: Rejection bound in standard deviations
        min_acceptance: Smallest tolerated acceptance probability of a full
            candidate tuple. Not checked when None.
        components: Number of independently truncated components

    Returns:
        Validated truncation bound

    Raises:
        ValueError: If the bound is non-positive or not finite, or if rejection sampling
            would accept too rarely to terminate in practice
    """
    if not math.isfinite(truncate) or truncate <= 0.0:
        raise ValueError(f"Truncation bound must be finite and positive, got {truncate} sigma")
    if min_acceptance is not None:
        acceptance = acceptance_probability(truncate, components)
        if acceptance < min_acceptance:
            raise ValueError(
                f"Truncation at {truncate} sigma accepts only {acceptance:.3e} of candidate "
                f"tuples (minimum {min_acceptance:.1e}); sampling would not terminate in practice"
            )
    return truncate


def acceptance_probability(truncate: float, components: int = 6) -> float:
    """
    Probability that ``components`` independent standard normal draws all
    satisfy ``|z| < truncate``.
    """
    if truncate <= 0.0:
        return 0.0
    return math.erf(truncate / math.sqrt(2.0)) ** components
