"""
Range filtering, amplitude compression and normalization.

Shapes a raw per-bin spectrum into something a renderer can map directly:
only bins inside the configured window survive, amplitudes are flattened
with a power law, and both axes are rescaled to [0, 1].
"""

import numpy as np

from bandscope.config import SpectrumConfig
from bandscope.core.spectrum import FrequencyAmplitudePair, RawSpectrum
from bandscope.errors import EmptyResultSetError, InvalidConfigurationError


class SpectrumPolisher:
    """
    Applies the post-transform stages to a :class:`RawSpectrum`.

    Each stage is exposed on its own so callers (and tests) can run them
    independently; :meth:`polish` chains them in order.
    """

    def range_filter(
        self,
        raw: RawSpectrum,
        min_freq: float,
        max_freq: float,
        stride: int = 1,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Keep bins with ``min_freq <= f <= max_freq``, then every stride-th one.

        Decimation counts positions within the in-range set, so the first
        in-range bin is always kept.

        Args:
            raw: Spectrum from the analyzer.
            min_freq: Lower bound in Hz (inclusive).
            max_freq: Upper bound in Hz (inclusive).
            stride: Keep every Kth retained bin (K >= 1).

        Returns:
            Tuple of (frequencies_hz, amplitudes), ascending, possibly empty.

        Raises:
            InvalidConfigurationError: If ``min_freq > max_freq`` or ``stride < 1``.
        """
        if min_freq > max_freq:
            raise InvalidConfigurationError(
                f"min_freq ({min_freq}) must not exceed max_freq ({max_freq})"
            )
        if stride < 1:
            raise InvalidConfigurationError(f"stride must be >= 1, got {stride}")

        mask = (raw.frequencies_hz >= min_freq) & (raw.frequencies_hz <= max_freq)
        frequencies = raw.frequencies_hz[mask][::stride]
        amplitudes = raw.amplitudes[mask][::stride]
        return frequencies.copy(), amplitudes.copy()

    def compress(self, amplitudes: np.ndarray, gamma: float) -> np.ndarray:
        """
        Power-law compression, ``amplitude ** gamma``.

        Values of gamma near 0 flatten the dynamic range heavily; 1.0 is a
        no-op.  Zero stays zero.
        """
        if not 0.0 < gamma <= 1.0:
            raise InvalidConfigurationError(
                f"compression_gamma must be in (0, 1], got {gamma}"
            )
        if gamma == 1.0:
            return np.array(amplitudes, dtype=np.float64, copy=True)
        return np.power(amplitudes, gamma)

    def normalize_frequency(
        self,
        frequencies_hz: np.ndarray,
        min_freq: float,
        max_freq: float,
    ) -> np.ndarray:
        """
        Rescale Hz to [0, 1] using the configured window bounds.

        A zero-width window maps every bin to 0.0.
        """
        span = max_freq - min_freq
        if span == 0:
            return np.zeros_like(frequencies_hz, dtype=np.float64)
        normalized = (frequencies_hz - min_freq) / span
        return np.clip(normalized, 0.0, 1.0)

    def normalize_amplitude(
        self,
        amplitudes: np.ndarray,
        boost: float = 1.0,
        clamp_max: float | None = 1.0,
    ) -> np.ndarray:
        """
        Divide by the retained maximum, then optionally boost and clamp.

        Args:
            amplitudes: Non-negative amplitudes of the retained set.
            boost: Multiplier applied after normalization (>= 1.0).
            clamp_max: Upper clip bound; None disables clipping.

        Returns:
            Normalized amplitudes; the loudest bin maps to exactly 1.0
            before boosting.

        Raises:
            EmptyResultSetError: If the set is empty or entirely zero.
        """
        if len(amplitudes) == 0:
            raise EmptyResultSetError(
                "No frequency bins fall inside the configured range"
            )
        peak = float(np.max(amplitudes))
        if peak == 0.0:
            raise EmptyResultSetError(
                "Every retained bin has zero amplitude; nothing to normalize"
            )

        normalized = amplitudes / peak
        if boost != 1.0:
            normalized = normalized * boost
        if clamp_max is not None:
            normalized = np.clip(normalized, 0.0, clamp_max)
        return normalized

    def polish(
        self,
        raw: RawSpectrum,
        config: SpectrumConfig,
    ) -> tuple[FrequencyAmplitudePair, ...]:
        """
        Run range filter, compression and normalization in order.

        Args:
            raw: Spectrum from the analyzer.
            config: Validated analysis configuration.

        Returns:
            Frequency-ascending pairs, one per retained bin.
        """
        frequencies_hz, amplitudes = self.range_filter(
            raw,
            config.min_freq,
            config.max_freq,
            config.stride,
        )
        if len(frequencies_hz) == 0:
            raise EmptyResultSetError(
                f"No bins between {config.min_freq} Hz and {config.max_freq} Hz "
                f"(sample_rate={raw.sample_rate}, n_samples={raw.n_samples}, "
                f"bin width {raw.bin_width:.3f} Hz)"
            )

        compressed = self.compress(amplitudes, config.compression_gamma)
        norm_amp = self.normalize_amplitude(
            compressed,
            boost=config.amplitude_boost,
            clamp_max=config.clamp_max,
        )
        norm_freq = self.normalize_frequency(
            frequencies_hz,
            config.min_freq,
            config.max_freq,
        )

        return tuple(
            FrequencyAmplitudePair(
                frequency=float(f),
                amplitude=float(a),
                frequency_hz=float(hz),
            )
            for f, a, hz in zip(norm_freq, norm_amp, frequencies_hz)
        )
