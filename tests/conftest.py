"""Shared synthetic signals for the test suite."""

import numpy as np
import pytest
import soundfile

TEST_SR = 44100


def make_sine(freq: float, n: int, sr: int = TEST_SR, amplitude: float = 1.0) -> np.ndarray:
    t = np.arange(n) / sr
    return amplitude * np.sin(2 * np.pi * freq * t)


@pytest.fixture
def sine_440():
    """1000 samples of a 440 Hz sine at 44.1 kHz."""
    return make_sine(440.0, 1000), TEST_SR


@pytest.fixture
def mixed_signal():
    """Three tones (200 Hz, 2 kHz, 8 kHz) at falling levels, 2048 samples."""
    n = 2048
    y = (
        make_sine(200.0, n)
        + make_sine(2000.0, n, amplitude=0.5)
        + make_sine(8000.0, n, amplitude=0.25)
    )
    return y, TEST_SR


@pytest.fixture
def silence():
    return np.zeros(1024), TEST_SR


@pytest.fixture
def wav_file(tmp_path):
    """One second of a 440 Hz tone, 16-bit mono WAV at 22.05 kHz."""
    sr = 22050
    path = tmp_path / "tone.wav"
    soundfile.write(str(path), 0.5 * make_sine(440.0, sr, sr=sr), sr, subtype="PCM_16")
    return path


@pytest.fixture
def stereo_wav_file(tmp_path):
    """Half a second of a 1 kHz tone in both channels, 24-bit WAV."""
    sr = 22050
    path = tmp_path / "stereo.wav"
    tone = 0.5 * make_sine(1000.0, sr // 2, sr=sr)
    soundfile.write(str(path), np.stack([tone, tone], axis=1), sr, subtype="PCM_24")
    return path
