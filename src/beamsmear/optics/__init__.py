"""
Beam optics for beamsmear.

Derivation of Gaussian beam widths from emittances, beta functions,
energy spread and bunch length.
"""

from .sigmas import (
    ELECTRON_MASS, CONV, DerivedSigmas, ParameterDeriver,
    lorentz_gamma, beam_size, beam_divergence
)

__all__ = [
    'ELECTRON_MASS',
    'CONV',
    'DerivedSigmas',
    'ParameterDeriver',
    'lorentz_gamma',
    'beam_size',
    'beam_divergence',
]
