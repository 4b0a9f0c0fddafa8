"""Serialization of finished spectra."""

from bandscope.io.exporter import SpectrumExporter

__all__ = ["SpectrumExporter"]
