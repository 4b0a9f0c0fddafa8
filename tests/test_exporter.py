"""Tests for spectrum export."""

import json

import numpy as np
import pytest

from bandscope import analyze
from bandscope.config import SpectrumConfig
from bandscope.io.exporter import SpectrumExporter


@pytest.fixture
def banded_model(mixed_signal):
    y, sr = mixed_signal
    return analyze(y, sr, SpectrumConfig(max_freq=10000.0, compression_gamma=0.5))


@pytest.fixture
def flat_model(sine_440):
    y, sr = sine_440
    return analyze(y, sr, SpectrumConfig(band_thresholds=None))


def test_manifest_metadata(banded_model):
    manifest = SpectrumExporter().build_manifest(banded_model)
    meta = manifest["metadata"]
    assert meta["sample_rate"] == 44100
    assert meta["n_samples"] == 2048
    assert meta["min_freq"] == 20.0
    assert meta["max_freq"] == 10000.0
    assert meta["n_bins"] == len(banded_model)
    assert isinstance(meta["schema_version"], str)


def test_manifest_spectrum_entries(banded_model):
    manifest = SpectrumExporter(precision=3).build_manifest(banded_model)
    spectrum = manifest["spectrum"]
    assert len(spectrum) == len(banded_model)
    for entry in spectrum:
        assert set(entry) == {"frequency", "amplitude", "frequency_hz"}
        assert 0.0 <= entry["frequency"] <= 1.0
        assert 0.0 <= entry["amplitude"] <= 1.0
        assert entry["amplitude"] == round(entry["amplitude"], 3)


def test_manifest_bands_block(banded_model):
    bands = SpectrumExporter().build_manifest(banded_model)["bands"]
    assert bands["counts"] == banded_model.bands.counts()
    assert len(bands["low"]) + len(bands["mid"]) + len(bands["high"]) == len(banded_model)
    assert bands["thresholds"] == [0.3333, 0.6667]


def test_flat_model_has_no_bands_block(flat_model):
    assert "bands" not in SpectrumExporter().build_manifest(flat_model)


def test_export_json(tmp_path, banded_model):
    path = SpectrumExporter().export_json(banded_model, tmp_path / "spectrum.json")
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    assert data["metadata"]["n_bins"] == len(banded_model)
    assert len(data["spectrum"]) == len(banded_model)


def test_export_numpy(tmp_path, banded_model):
    path = SpectrumExporter().export_numpy(banded_model, tmp_path / "spectrum.npz")
    data = np.load(path)
    np.testing.assert_array_equal(data["frequency"], banded_model.frequencies)
    np.testing.assert_array_equal(data["amplitude"], banded_model.amplitudes)
    assert len(data["band"]) == len(banded_model)
    counts = banded_model.bands.counts()
    assert int(np.sum(data["band"] == 0)) == counts["low"]
    assert int(np.sum(data["band"] == 2)) == counts["high"]
    assert list(np.diff(data["band"]) >= 0) == [True] * (len(banded_model) - 1)


def test_export_numpy_flat(tmp_path, flat_model):
    data = np.load(SpectrumExporter().export_numpy(flat_model, tmp_path / "flat.npz"))
    assert "band" not in data.files
    assert int(data["sample_rate"][0]) == 44100


def test_format_lines(flat_model):
    lines = SpectrumExporter().format_lines(flat_model)
    assert len(lines) == len(flat_model)
    assert lines[0] == "44.1Hz => " + str(round(flat_model.pairs[0].amplitude, 4))
    assert all(" => " in line for line in lines)
