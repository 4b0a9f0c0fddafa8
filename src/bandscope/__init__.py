"""Spectrum analysis engine for audio-reactive visuals."""

from bandscope.config import SpectrumConfig
from bandscope.core.analyzer import SpectrumAnalyzer
from bandscope.core.bands import Band, BandClassifier
from bandscope.core.polisher import SpectrumPolisher
from bandscope.core.source import SampleBuffer, SampleLoader
from bandscope.core.spectrum import BandedSpectrum, FrequencyAmplitudePair, SpectrumModel
from bandscope.errors import (
    EmptyResultSetError,
    InvalidConfigurationError,
    InvalidInputError,
    SpectrumError,
)
from bandscope.io.exporter import SpectrumExporter
from bandscope.pipeline import SpectrumPipeline, analyze

__version__ = "0.1.0"
__all__ = [
    "SpectrumConfig",
    "SpectrumAnalyzer",
    "Band",
    "BandClassifier",
    "SpectrumPolisher",
    "SampleBuffer",
    "SampleLoader",
    "BandedSpectrum",
    "FrequencyAmplitudePair",
    "SpectrumModel",
    "EmptyResultSetError",
    "InvalidConfigurationError",
    "InvalidInputError",
    "SpectrumError",
    "SpectrumExporter",
    "SpectrumPipeline",
    "analyze",
]
