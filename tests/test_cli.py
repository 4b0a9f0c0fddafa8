"""Tests for the bandscope command line."""

import json
import logging

import pytest

from bandscope.cli import build_parser, config_from_args, main
from bandscope.config import SpectrumConfig
from bandscope.errors import InvalidConfigurationError


def test_prints_spectrum(wav_file, capsys):
    assert main([str(wav_file)]) == 0
    out = capsys.readouterr().out
    assert "Audio format:" in out
    assert "Hz => " in out
    assert "Peak: " in out
    assert "Bands: low=" in out


def test_quiet_and_flat(wav_file, capsys):
    assert main([str(wav_file), "-q", "--flat"]) == 0
    out = capsys.readouterr().out
    assert "Hz => " not in out
    assert "Bands:" not in out


def test_writes_json(wav_file, tmp_path, capsys):
    out_path = tmp_path / "out.json"
    assert main([str(wav_file), "-q", "-o", str(out_path), "--gamma", "0.5"]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["metadata"]["n_samples"] == 2048
    assert "bands" in data


def test_writes_npz(wav_file, tmp_path, capsys):
    out_path = tmp_path / "out.npz"
    assert main([str(wav_file), "-q", "-o", str(out_path)]) == 0
    assert out_path.exists()


def test_all_samples(wav_file, tmp_path):
    out_path = tmp_path / "all.json"
    assert main([str(wav_file), "-q", "-n", "0", "-o", str(out_path)]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["metadata"]["n_samples"] == 22050


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.wav")]) == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_range(wav_file, capsys):
    assert main([str(wav_file), "--min-freq", "500", "--max-freq", "100"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_empty_range(wav_file, capsys):
    assert main([str(wav_file), "--min-freq", "19000", "--max-freq", "19001"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_unreadable_audio(tmp_path, capsys):
    bogus = tmp_path / "notes.wav"
    bogus.write_text("not audio at all", encoding="utf-8")
    assert main([str(bogus)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_malformed_config_file(wav_file, tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{min_freq: ", encoding="utf-8")
    assert main([str(wav_file), "--config", str(path)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_missing_config_file(wav_file, tmp_path, capsys):
    assert main([str(wav_file), "--config", str(tmp_path / "nope.json")]) == 1
    assert "Error:" in capsys.readouterr().err


class TestConfigFromArgs:
    def _args(self, *argv):
        return build_parser().parse_args(["dummy.wav", *argv])

    def test_defaults(self):
        assert config_from_args(self._args()) == SpectrumConfig()

    def test_flags_override_preset(self):
        config = config_from_args(self._args("--preset", "sparse", "--stride", "2"))
        assert config.stride == 2
        assert config.compression_gamma == 0.5

    def test_window_bands_clamp(self):
        config = config_from_args(
            self._args("--no-window", "--bands", "0.2", "0.7", "--boost", "2", "--no-clamp")
        )
        assert config.window_enabled is False
        assert config.band_thresholds == (0.2, 0.7)
        assert config.amplitude_boost == 2.0
        assert config.clamp_max is None

    def test_config_file(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"min_freq": 100, "band_thresholds": [0.4, 0.8]}), encoding="utf-8")
        config = config_from_args(self._args("--config", str(path), "--max-freq", "5000"))
        assert config.min_freq == 100
        assert config.max_freq == 5000.0
        assert config.band_thresholds == (0.4, 0.8)

    def test_invalid_combination(self):
        with pytest.raises(InvalidConfigurationError):
            config_from_args(self._args("--gamma", "0"))

    def test_bands_and_flat_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["x.wav", "--flat", "--bands", "0.1", "0.2"])


def test_verbose_logs_stage_counts(wav_file, caplog):
    caplog.set_level(logging.DEBUG, logger="bandscope")
    assert main([str(wav_file), "-q", "-v"]) == 0
    assert "Retained" in caplog.text
    assert "Band counts" in caplog.text
