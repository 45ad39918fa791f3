"""
Tests for the beamsmear command line interface.
"""

import logging

import pytest
import yaml

from beamsmear.cli import build_parser, config_from_args, main
from beamsmear.io import read_beam_file
from beamsmear.models import BeamConfig, InvalidConfiguration


class TestArgumentParsing:
    """Test option handling without generating files."""

    def test_defaults_match_beam_config(self):
        args = build_parser().parse_args([])
        assert args.output == "electronZ.ini"
        assert config_from_args(args) == BeamConfig()

    def test_overrides(self):
        args = build_parser().parse_args([
            "--seed", "7", "-n", "123", "--energy", "120", "--energy-spread", "0.001",
            "--truncate", "3", "--bunch-length", "300", "--beta-x", "15", "--beta-y", "0.8",
            "--emitt-x", "5", "--emitt-y", "0.01", "--no-update",
        ])
        config = config_from_args(args)
        assert config == BeamConfig(
            seed=7, particle_count=123, mean_energy=120.0, energy_spread=0.001,
            truncate=3.0, bunch_length=300.0, beta_x=15.0, beta_y=0.8,
            emittance_x=5.0, emittance_y=0.01, update_transverse=False,
        )

    def test_config_file_with_override(self, tmp_path):
        config_path = tmp_path / "beam.yaml"
        config_path.write_text(yaml.safe_dump({"mean_energy": 182.5, "particle_count": 10, "seed": 3}))
        args = build_parser().parse_args(["--config", str(config_path), "--seed", "4"])
        config = config_from_args(args)
        assert config.mean_energy == 182.5
        assert config.particle_count == 10
        assert config.seed == 4

    def test_invalid_option_value(self):
        args = build_parser().parse_args(["--truncate", "0"])
        with pytest.raises(InvalidConfiguration):
            config_from_args(args)


class TestMain:
    """Test the full command."""

    def test_generates_file(self, tmp_path):
        path = tmp_path / "electron.ini"
        assert main(["-o", str(path), "-n", "100", "--seed", "5"]) == 0
        assert read_beam_file(path).shape == (100, 6)

    def test_reproducible(self, tmp_path):
        first = tmp_path / "first.ini"
        second = tmp_path / "second.ini"
        assert main(["-o", str(first), "-n", "50"]) == 0
        assert main(["-o", str(second), "-n", "50"]) == 0
        assert first.read_bytes() == second.read_bytes()

    @pytest.mark.parametrize("option", [["--truncate", "0"], ["--energy", "0"], ["--emitt-x", "-1"]])
    def test_invalid_configuration_exit_status(self, tmp_path, option):
        path = tmp_path / "electron.ini"
        assert main(["-o", str(path), "-n", "10"] + option) == 1
        assert not path.exists()

    def test_unwritable_output(self, tmp_path):
        assert main(["-o", str(tmp_path / "missing" / "electron.ini"), "-n", "10"]) == 1

    def test_missing_config_file(self, tmp_path):
        assert main(["--config", str(tmp_path / "nope.yaml"), "-o", str(tmp_path / "b.ini")]) == 1

    def test_save_config(self, tmp_path):
        saved = tmp_path / "saved.yaml"
        assert main(["-o", str(tmp_path / "b.ini"), "-n", "5", "--seed", "11",
                     "--save-config", str(saved)]) == 0
        assert BeamConfig.from_yaml(saved) == BeamConfig(particle_count=5, seed=11)

    def test_summary_logs_statistics(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO):
            assert main(["-o", str(tmp_path / "b.ini"), "-n", "200", "--summary"]) == 0
        assert "Column statistics over 200 particles" in caplog.text
        assert "energy mean =" in caplog.text
