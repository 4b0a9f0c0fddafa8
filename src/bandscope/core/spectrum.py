"""
Spectrum data structures handed between stages and to renderers.

Everything here is frozen.  A :class:`SpectrumModel` is built once per
analysis run and only ever read afterwards.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

import numpy as np

if TYPE_CHECKING:
    from bandscope.core.bands import Band


@dataclass(frozen=True)
class FrequencyAmplitudePair:
    """One retained bin after normalization."""

    frequency: float      # normalized [0, 1] within the configured window
    amplitude: float      # normalized [0, 1] (or [0, boost] when unclamped)
    frequency_hz: float   # raw bin frequency, always inside the window


@dataclass(frozen=True)
class RawSpectrum:
    """Per-bin magnitudes straight out of the transform, one entry per bin."""

    frequencies_hz: np.ndarray  # Shape: (n_samples,), ascending
    amplitudes: np.ndarray      # Shape: (n_samples,), non-negative
    sample_rate: int
    n_samples: int

    @property
    def bin_width(self) -> float:
        """Frequency spacing between adjacent bins in Hz."""
        return self.sample_rate / self.n_samples

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2.0

    def peak_index(self, max_freq: Optional[float] = None) -> int:
        """
        Index of the loudest bin, optionally ignoring bins above ``max_freq``.

        Bin 0 (DC) is considered like any other bin.
        """
        amplitudes = self.amplitudes
        if max_freq is not None:
            amplitudes = np.where(self.frequencies_hz <= max_freq, amplitudes, -1.0)
        return int(np.argmax(amplitudes))

    def peak_frequency(self, max_freq: Optional[float] = None) -> float:
        return float(self.frequencies_hz[self.peak_index(max_freq)])


@dataclass(frozen=True)
class BandedSpectrum:
    """The retained pairs split into low/mid/high groups."""

    low: tuple[FrequencyAmplitudePair, ...]
    mid: tuple[FrequencyAmplitudePair, ...]
    high: tuple[FrequencyAmplitudePair, ...]
    thresholds: tuple[float, float]

    def get(self, band: "Band") -> tuple[FrequencyAmplitudePair, ...]:
        """Pairs of one band; ``band`` is a :class:`bandscope.core.bands.Band`."""
        return getattr(self, band.value)

    def counts(self) -> dict[str, int]:
        return {"low": len(self.low), "mid": len(self.mid), "high": len(self.high)}

    def __len__(self) -> int:
        return len(self.low) + len(self.mid) + len(self.high)


@dataclass(frozen=True)
class SpectrumModel:
    """
    Finished analysis result consumed by the rendering layer.

    ``pairs`` is always populated and frequency-ascending.  ``bands`` holds
    the same pairs partitioned into three groups when banding was requested.
    """

    pairs: tuple[FrequencyAmplitudePair, ...]
    sample_rate: int
    n_samples: int
    min_freq: float
    max_freq: float
    bands: Optional[BandedSpectrum] = None

    @property
    def is_banded(self) -> bool:
        return self.bands is not None

    @property
    def frequencies(self) -> np.ndarray:
        """Normalized frequencies as a fresh array."""
        return np.array([p.frequency for p in self.pairs], dtype=np.float64)

    @property
    def amplitudes(self) -> np.ndarray:
        """Normalized amplitudes as a fresh array."""
        return np.array([p.amplitude for p in self.pairs], dtype=np.float64)

    def peak(self) -> FrequencyAmplitudePair:
        """The loudest retained pair (lowest frequency wins ties)."""
        return max(self.pairs, key=lambda p: p.amplitude)

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[FrequencyAmplitudePair]:
        return iter(self.pairs)
