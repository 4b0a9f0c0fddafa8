"""
Spectrum serialization module.

Exports a finished SpectrumModel to JSON, NumPy archives or plain text
lines for rendering engines and quick inspection.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import numpy as np

from bandscope.core.bands import Band
from bandscope.core.spectrum import FrequencyAmplitudePair, SpectrumModel


@dataclass
class SpectrumMetadata:
    """Metadata header for the exported spectrum."""

    sample_rate: int
    n_samples: int
    min_freq: float
    max_freq: float
    n_bins: int
    schema_version: str = "1.0"


class SpectrumExporter:
    """
    Exports SpectrumModel objects.

    Each exported bin carries its normalized frequency and amplitude plus
    the raw bin frequency in Hz.
    """

    def __init__(self, precision: int = 4):
        """
        Initialize the exporter.

        Args:
            precision: Decimal places for floating point values.
        """
        self.precision = precision

    def _round(self, value: float) -> float:
        """Round to configured precision."""
        return round(float(value), self.precision)

    def _pair_dict(self, pair: FrequencyAmplitudePair) -> dict[str, float]:
        return {
            "frequency": self._round(pair.frequency),
            "amplitude": self._round(pair.amplitude),
            "frequency_hz": self._round(pair.frequency_hz),
        }

    def build_manifest(self, model: SpectrumModel) -> dict[str, Any]:
        """
        Build the complete export dictionary.

        Args:
            model: Finished spectrum.

        Returns:
            Dictionary with ``metadata``, ``spectrum`` and, when the model
            is banded, a ``bands`` block.
        """
        metadata = SpectrumMetadata(
            sample_rate=model.sample_rate,
            n_samples=model.n_samples,
            min_freq=self._round(model.min_freq),
            max_freq=self._round(model.max_freq),
            n_bins=len(model),
        )

        manifest: dict[str, Any] = {
            "metadata": {
                "sample_rate": metadata.sample_rate,
                "n_samples": metadata.n_samples,
                "min_freq": metadata.min_freq,
                "max_freq": metadata.max_freq,
                "n_bins": metadata.n_bins,
                "schema_version": metadata.schema_version,
            },
            "spectrum": [self._pair_dict(p) for p in model.pairs],
        }

        if model.bands is not None:
            manifest["bands"] = {
                "thresholds": [self._round(t) for t in model.bands.thresholds],
                "counts": model.bands.counts(),
            }
            for band in Band:
                manifest["bands"][band.value] = [
                    self._pair_dict(p) for p in model.bands.get(band)
                ]

        return manifest

    def export_json(
        self,
        model: SpectrumModel,
        output_path: Union[str, Path],
        indent: int = 2,
    ) -> Path:
        """
        Export the spectrum to a JSON file.

        Returns:
            Path to written file.
        """
        manifest = self.build_manifest(model)
        output_path = Path(output_path)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=indent)

        return output_path

    def export_numpy(
        self,
        model: SpectrumModel,
        output_path: Union[str, Path],
    ) -> Path:
        """
        Export the spectrum as a NumPy .npz archive.

        Band membership is stored as an index array (0 low, 1 mid, 2 high)
        aligned with ``frequency``.

        Returns:
            Path to written file.
        """
        output_path = Path(output_path)

        arrays: dict[str, Any] = dict(
            frequency=model.frequencies,
            amplitude=model.amplitudes,
            frequency_hz=np.array([p.frequency_hz for p in model.pairs]),
            sample_rate=np.array([model.sample_rate]),
            n_samples=np.array([model.n_samples]),
            freq_range=np.array([model.min_freq, model.max_freq]),
        )

        if model.bands is not None:
            band_index = {band: i for i, band in enumerate(Band)}
            labels = []
            for band in Band:
                labels.extend([band_index[band]] * len(model.bands.get(band)))
            arrays["band"] = np.array(labels, dtype=np.int8)
            arrays["band_thresholds"] = np.array(model.bands.thresholds)

        np.savez_compressed(output_path, **arrays)

        return output_path

    def format_lines(self, model: SpectrumModel) -> list[str]:
        """One ``"<hz>Hz => <amplitude>"`` line per retained bin."""
        return [
            f"{self._round(p.frequency_hz)}Hz => {self._round(p.amplitude)}"
            for p in model.pairs
        ]
