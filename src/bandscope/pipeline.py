"""
End-to-end spectrum analysis.

    samples -> [window] -> DFT -> magnitudes -> range filter
            -> compression -> normalization -> [bands] -> SpectrumModel

A run either returns a complete :class:`SpectrumModel` or raises one
:class:`bandscope.errors.SpectrumError`; nothing partial is ever visible.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from bandscope.config import SpectrumConfig
from bandscope.core.analyzer import SpectrumAnalyzer
from bandscope.core.bands import BandClassifier
from bandscope.core.polisher import SpectrumPolisher
from bandscope.core.source import SampleBuffer, SampleLoader, validate_sample_rate
from bandscope.core.spectrum import SpectrumModel

logger = logging.getLogger(__name__)


class SpectrumPipeline:
    """
    Runs every stage for one configuration.

    Holds no per-run state, so a single instance may be reused and called
    from several threads at once.
    """

    def __init__(self, config: Optional[SpectrumConfig] = None):
        """
        Initialize the pipeline.

        Args:
            config: Analysis options (default: :class:`SpectrumConfig()`).

        Raises:
            InvalidConfigurationError: If any option is out of range.
        """
        self.config = (config or SpectrumConfig()).validate()
        self.analyzer = SpectrumAnalyzer()
        self.polisher = SpectrumPolisher()
        self.classifier = None
        if self.config.band_thresholds is not None:
            self.classifier = BandClassifier(*self.config.band_thresholds)

    def process(self, buffer: SampleBuffer) -> SpectrumModel:
        """
        Analyze one sample buffer.

        Args:
            buffer: Decoded mono samples.

        Returns:
            Immutable SpectrumModel for the renderer.

        Raises:
            InvalidInputError: If the buffer's sample rate is not a positive
                integer.
        """
        validate_sample_rate(buffer.sample_rate)
        cfg = self.config
        logger.debug(
            "Analyzing %d samples at %d Hz (window=%s)",
            buffer.n_samples,
            buffer.sample_rate,
            cfg.window_enabled,
        )
        if cfg.max_freq > buffer.sample_rate / 2.0:
            logger.debug(
                "max_freq %.1f Hz is above Nyquist %.1f Hz; mirrored bins will be kept",
                cfg.max_freq,
                buffer.sample_rate / 2.0,
            )

        raw = self.analyzer.analyze(buffer, window_enabled=cfg.window_enabled)
        pairs = self.polisher.polish(raw, cfg)
        logger.debug(
            "Retained %d of %d bins in [%.1f, %.1f] Hz",
            len(pairs),
            raw.n_samples,
            cfg.min_freq,
            cfg.max_freq,
        )

        bands = None
        if self.classifier is not None:
            bands = self.classifier.classify(pairs)
            logger.debug("Band counts: %s", bands.counts())

        return SpectrumModel(
            pairs=pairs,
            sample_rate=buffer.sample_rate,
            n_samples=buffer.n_samples,
            min_freq=cfg.min_freq,
            max_freq=cfg.max_freq,
            bands=bands,
        )

    def process_samples(
        self,
        samples: Union[Sequence[float], np.ndarray],
        sample_rate: int,
    ) -> SpectrumModel:
        """Validate raw samples into a buffer, then analyze it."""
        return self.process(SampleBuffer.from_array(samples, sample_rate))

    def process_file(
        self,
        audio_path: Union[str, Path],
        max_samples: Optional[int] = None,
        offset: float = 0.0,
    ) -> SpectrumModel:
        """
        Load an audio file and analyze it in one step.

        Args:
            audio_path: Path to an audio file (wav, flac, ogg ...).
            max_samples: Analyze only the first N samples.
            offset: Seconds to skip before reading.

        Returns:
            SpectrumModel for the loaded samples.
        """
        buffer = SampleLoader(max_samples=max_samples).load(audio_path, offset=offset)
        return self.process(buffer)


def analyze(
    samples: Union[Sequence[float], np.ndarray],
    sample_rate: int,
    config: Optional[SpectrumConfig] = None,
) -> SpectrumModel:
    """
    Pure entry point: ``(samples, sample_rate, config) -> SpectrumModel``.

    Configuration is validated before the samples are touched.
    """
    return SpectrumPipeline(config).process_samples(samples, sample_rate)
