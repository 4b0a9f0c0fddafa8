"""
Spectral transform and magnitude extraction.

Takes a (optionally windowed) sample buffer through a full discrete
Fourier transform and maps every bin to a physical frequency and a
magnitude.  No mirror removal happens here: a real input yields a
Hermitian-symmetric spectrum, and the upper half is left for the range
filter to drop via a ``max_freq`` at or below Nyquist.
"""

from typing import Sequence, Union

import numpy as np

from bandscope.core.source import SampleBuffer, validate_sample_rate
from bandscope.core.spectrum import RawSpectrum
from bandscope.core.window import apply_window
from bandscope.errors import InvalidInputError


def direct_dft(samples: Union[Sequence[complex], np.ndarray]) -> np.ndarray:
    """
    Direct-form DFT, ``X[k] = sum_n x[n] * exp(-2j*pi*k*n/N)``.

    O(N^2) in time and memory.  Only meant as a reference for checking
    the fast path on small inputs.
    """
    x = np.asarray(samples, dtype=np.complex128)
    n = len(x)
    if n == 0:
        raise InvalidInputError("Cannot transform an empty sample buffer")
    k = np.arange(n)
    # k*n mod N keeps the phase argument small
    kernel = np.exp(-2j * np.pi * (np.outer(k, k) % n) / n)
    return kernel @ x


def bin_index_for(frequency_hz: float, sample_rate: int, n_samples: int) -> int:
    """Nearest bin index for a frequency, ``round(f * N / sr)``."""
    return int(round(frequency_hz * n_samples / sample_rate))


class SpectrumAnalyzer:
    """
    Turns samples into a :class:`RawSpectrum`.

    Stateless; one instance can serve any number of buffers.
    """

    def transform(self, samples: Union[Sequence[complex], np.ndarray]) -> np.ndarray:
        """
        Forward DFT of N real or complex samples.

        Args:
            samples: Time-ordered input of length N >= 1.

        Returns:
            N complex coefficients; coefficient k correlates the input with
            a complex exponential at normalized frequency k/N.

        Raises:
            InvalidInputError: If the input is empty.
        """
        x = np.asarray(samples)
        if x.ndim != 1 or len(x) == 0:
            raise InvalidInputError(
                f"Transform needs a non-empty 1-D buffer, got shape {x.shape}"
            )
        return np.fft.fft(x)

    def extract(self, coefficients: np.ndarray, sample_rate: int) -> RawSpectrum:
        """
        Map each coefficient to (frequency in Hz, magnitude).

        ``frequency = i * sample_rate / N`` and
        ``amplitude = sqrt(re^2 + im^2)`` for every bin i in [0, N).
        """
        validate_sample_rate(sample_rate)
        coefficients = np.asarray(coefficients)
        n = len(coefficients)
        if n == 0:
            raise InvalidInputError("No coefficients to extract")

        frequencies = np.arange(n, dtype=np.float64) * sample_rate / n
        amplitudes = np.hypot(coefficients.real, coefficients.imag).astype(np.float64)

        frequencies.setflags(write=False)
        amplitudes.setflags(write=False)

        return RawSpectrum(
            frequencies_hz=frequencies,
            amplitudes=amplitudes,
            sample_rate=int(sample_rate),
            n_samples=n,
        )

    def analyze(self, buffer: SampleBuffer, window_enabled: bool = True) -> RawSpectrum:
        """
        Window (optionally), transform and extract in one step.

        Args:
            buffer: Validated sample buffer.
            window_enabled: Apply a Hann taper sized to the buffer first.

        Returns:
            RawSpectrum with one entry per bin.
        """
        samples = buffer.samples
        if window_enabled:
            samples = apply_window(samples)
        coefficients = self.transform(samples)
        return self.extract(coefficients, buffer.sample_rate)
