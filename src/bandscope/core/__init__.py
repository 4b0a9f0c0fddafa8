"""Core spectrum processing modules."""

from bandscope.core.analyzer import SpectrumAnalyzer
from bandscope.core.bands import Band, BandClassifier
from bandscope.core.polisher import SpectrumPolisher
from bandscope.core.source import SampleBuffer, SampleLoader

__all__ = [
    "SpectrumAnalyzer",
    "Band",
    "BandClassifier",
    "SpectrumPolisher",
    "SampleBuffer",
    "SampleLoader",
]
