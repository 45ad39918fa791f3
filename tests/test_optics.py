"""
Test suite for the width derivation in beamsmear.optics.
"""

import math

import pytest

from beamsmear.models import BeamConfig, InvalidConfiguration
from beamsmear.optics import (
    ELECTRON_MASS, CONV, DerivedSigmas, ParameterDeriver,
    lorentz_gamma, beam_size, beam_divergence
)


def expected_size(emittance, beta, gamma):
    return CONV * math.sqrt(emittance * 1e-6 * beta * 1e-3 / gamma)


def expected_divergence(emittance, beta, gamma):
    return CONV * math.sqrt(emittance * 1e-6 / (gamma * beta * 1e-3))


class TestHelpers:
    """Test the scalar helpers."""

    def test_electron_mass(self):
        assert ELECTRON_MASS == 0.5109989461e-3

    def test_lorentz_gamma(self):
        assert lorentz_gamma(ELECTRON_MASS) == pytest.approx(1.0)
        assert lorentz_gamma(45.6) == pytest.approx(45.6 / 0.5109989461e-3)

    def test_beam_size_and_divergence(self):
        gamma = lorentz_gamma(45.6)
        assert beam_size(6.2, 18.0, gamma) == pytest.approx(expected_size(6.2, 18.0, gamma))
        assert beam_divergence(6.2, 18.0, gamma) == pytest.approx(expected_divergence(6.2, 18.0, gamma))

    def test_size_times_divergence_is_geometric_emittance(self):
        """sigma_x * sigma_x' equals the geometric emittance in um urad."""
        gamma = lorentz_gamma(45.6)
        product = beam_size(6.2, 18.0, gamma) * beam_divergence(6.2, 18.0, gamma)
        assert product == pytest.approx(6.2e-6 / gamma * CONV ** 2)

    def test_zero_emittance_gives_zero_width(self):
        gamma = lorentz_gamma(45.6)
        assert beam_size(0.0, 0.39, gamma) == 0.0
        assert beam_divergence(0.0, 0.39, gamma) == 0.0


class TestParameterDeriverInitial:
    """Test ParameterDeriver.initial."""

    def test_energy_spread_example(self):
        """45.6 GeV with 0.3 % spread gives sigma_E = 0.1368 GeV."""
        sigmas = ParameterDeriver().initial(BeamConfig(mean_energy=45.6, energy_spread=0.003))
        assert sigmas.sigma_e == pytest.approx(0.1368)

    def test_bunch_length_passes_through(self):
        sigmas = ParameterDeriver().initial(BeamConfig(bunch_length=321.5))
        assert sigmas.sigma_z == 321.5

    def test_transverse_widths_at_nominal_energy(self):
        config = BeamConfig()
        sigmas = ParameterDeriver().initial(config)
        gamma0 = config.mean_energy / ELECTRON_MASS

        assert sigmas.sigma_x == pytest.approx(expected_size(6.2, 18.0, gamma0))
        assert sigmas.sigma_y == pytest.approx(expected_size(0.0485, 0.39, gamma0))
        assert sigmas.sigma_xp == pytest.approx(expected_divergence(6.2, 18.0, gamma0))
        assert sigmas.sigma_yp == pytest.approx(expected_divergence(0.0485, 0.39, gamma0))
        # FCC-ee Z numbers: about 1.12 um by 0.0146 um
        assert sigmas.sigma_x == pytest.approx(1.118, rel=1e-3)
        assert sigmas.sigma_y == pytest.approx(0.01456, rel=1e-3)

    def test_all_transverse_widths_positive(self):
        sigmas = ParameterDeriver().initial(BeamConfig())
        assert min(sigmas.sigma_x, sigmas.sigma_y, sigmas.sigma_xp, sigmas.sigma_yp) > 0.0

    def test_zero_vertical_emittance(self):
        sigmas = ParameterDeriver().initial(BeamConfig(emittance_y=0.0))
        assert sigmas.sigma_y == 0.0
        assert sigmas.sigma_yp == 0.0
        assert sigmas.sigma_x > 0.0

    @pytest.mark.parametrize("overrides", [
        {"mean_energy": 0.0},
        {"emittance_x": -1.0},
        {"beta_y": 0.0},
        {"truncate": 0.0},
    ])
    def test_unchecked_invalid_config_raises(self, overrides):
        """A configuration built without validation is still refused."""
        config = BeamConfig.model_construct(**overrides)
        with pytest.raises(InvalidConfiguration):
            ParameterDeriver().initial(config)


class TestParameterDeriverRederive:
    """Test ParameterDeriver.rederive_transverse."""

    def test_rederive_updates_in_place(self):
        config = BeamConfig()
        deriver = ParameterDeriver()
        sigmas = deriver.initial(config)

        result = deriver.rederive_transverse(sigmas, 2 * config.mean_energy, config)
        assert result is sigmas

    def test_transverse_widths_scale_with_energy(self):
        """Doubling the energy shrinks every transverse width by sqrt(2)."""
        config = BeamConfig()
        deriver = ParameterDeriver()
        nominal = deriver.initial(config)
        sigmas = DerivedSigmas(*nominal.as_tuple())

        deriver.rederive_transverse(sigmas, 2 * config.mean_energy, config)
        root2 = math.sqrt(2.0)
        assert sigmas.sigma_x == pytest.approx(nominal.sigma_x / root2)
        assert sigmas.sigma_y == pytest.approx(nominal.sigma_y / root2)
        assert sigmas.sigma_xp == pytest.approx(nominal.sigma_xp / root2)
        assert sigmas.sigma_yp == pytest.approx(nominal.sigma_yp / root2)

    def test_energy_and_length_unchanged(self):
        config = BeamConfig()
        deriver = ParameterDeriver()
        sigmas = deriver.initial(config)
        sigma_e, sigma_z = sigmas.sigma_e, sigmas.sigma_z

        deriver.rederive_transverse(sigmas, 45.0, config)
        assert sigmas.sigma_e == sigma_e
        assert sigmas.sigma_z == sigma_z

    def test_rederive_at_mean_energy_matches_initial(self):
        config = BeamConfig()
        deriver = ParameterDeriver()
        nominal = deriver.initial(config)
        sigmas = DerivedSigmas(*nominal.as_tuple())

        deriver.rederive_transverse(sigmas, config.mean_energy, config)
        assert sigmas == nominal
