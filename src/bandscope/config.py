"""
Analysis configuration.

One frozen dataclass carries every tunable of the pipeline.  The named
presets below capture the handful of variants that keep recurring in
visualizer scripts (different frequency windows, strides, exponents and
boosts) so they can be selected by name instead of copy-pasted.
"""

import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from bandscope.errors import InvalidConfigurationError


@dataclass(frozen=True)
class SpectrumConfig:
    """Options recognized by :class:`bandscope.pipeline.SpectrumPipeline`."""

    # Retained frequency window in Hz (inclusive on both ends)
    min_freq: float = 20.0
    max_freq: float = 20000.0

    # Keep every Kth bin of the in-range set; 1 keeps all
    stride: int = 1

    # Power-law exponent in (0, 1]; 1.0 disables compression
    compression_gamma: float = 1.0

    # Apply a Hann taper before the transform
    window_enabled: bool = True

    # Normalized low/mid and mid/high cut points; None yields a flat model
    band_thresholds: Optional[tuple[float, float]] = (1.0 / 3.0, 2.0 / 3.0)

    # Post-normalization scale, then clip to [0, clamp_max] (None: no clip)
    amplitude_boost: float = 1.0
    clamp_max: Optional[float] = 1.0

    def validate(self) -> "SpectrumConfig":
        """
        Check every option against its documented domain.

        Returns:
            The config itself, so calls can be chained.

        Raises:
            InvalidConfigurationError: On the first violated constraint.
        """
        # NaN compares False against every bound below
        numeric = {
            "min_freq": self.min_freq,
            "max_freq": self.max_freq,
            "compression_gamma": self.compression_gamma,
            "amplitude_boost": self.amplitude_boost,
        }
        if self.clamp_max is not None:
            numeric["clamp_max"] = self.clamp_max
        if self.band_thresholds is not None:
            for i, t in enumerate(self.band_thresholds):
                numeric[f"band_thresholds[{i}]"] = t
        for name, value in numeric.items():
            if not _is_finite_number(value):
                raise InvalidConfigurationError(
                    f"{name} must be a finite number, got {value!r}"
                )

        if self.min_freq < 0:
            raise InvalidConfigurationError(
                f"min_freq must be non-negative, got {self.min_freq}"
            )
        if self.min_freq > self.max_freq:
            raise InvalidConfigurationError(
                f"min_freq ({self.min_freq}) must not exceed max_freq ({self.max_freq})"
            )
        if isinstance(self.stride, bool) or not isinstance(self.stride, numbers.Integral):
            raise InvalidConfigurationError(
                f"stride must be an integer, got {self.stride!r}"
            )
        if self.stride < 1:
            raise InvalidConfigurationError(f"stride must be >= 1, got {self.stride}")
        if not 0.0 < self.compression_gamma <= 1.0:
            raise InvalidConfigurationError(
                f"compression_gamma must be in (0, 1], got {self.compression_gamma}"
            )
        if self.band_thresholds is not None:
            if len(self.band_thresholds) != 2:
                raise InvalidConfigurationError(
                    "band_thresholds must hold exactly two values"
                )
            t_low, t_high = self.band_thresholds
            if not (0.0 <= t_low < t_high <= 1.0):
                raise InvalidConfigurationError(
                    "band_thresholds must be ascending and within [0, 1], "
                    f"got ({t_low}, {t_high})"
                )
        if self.amplitude_boost < 1.0:
            raise InvalidConfigurationError(
                f"amplitude_boost must be >= 1.0, got {self.amplitude_boost}"
            )
        if self.clamp_max is not None and self.clamp_max <= 0.0:
            raise InvalidConfigurationError(
                f"clamp_max must be positive, got {self.clamp_max}"
            )
        return self

    @property
    def is_banded(self) -> bool:
        return self.band_thresholds is not None

    def replace(self, **changes: Any) -> "SpectrumConfig":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        if self.band_thresholds is not None:
            data["band_thresholds"] = list(self.band_thresholds)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpectrumConfig":
        """
        Build a config from a plain mapping (e.g. parsed JSON).

        Unknown keys are rejected rather than ignored.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration option(s): {', '.join(unknown)}"
            )
        values = dict(data)
        thresholds = values.get("band_thresholds")
        if thresholds is not None:
            values["band_thresholds"] = tuple(float(t) for t in thresholds)
        return cls(**values)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


PRESETS: dict[str, SpectrumConfig] = {
    # Full audible range, no compression
    "audible": SpectrumConfig(),
    # Low end only, wider mid band
    "bass": SpectrumConfig(
        min_freq=20.0,
        max_freq=250.0,
        band_thresholds=(0.25, 0.6),
    ),
    # Square-root compression to lift mids and highs
    "compressed": SpectrumConfig(compression_gamma=0.5),
    # Gentle compression with a boost that saturates the loudest bins
    "boosted": SpectrumConfig(
        compression_gamma=0.7,
        amplitude_boost=1.5,
        clamp_max=1.0,
    ),
    # Decimated output for renderers that draw one shape per bin
    "sparse": SpectrumConfig(stride=4, compression_gamma=0.5),
}


def get_preset(name: str) -> SpectrumConfig:
    """Look up a named preset."""
    try:
        return PRESETS[name]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown preset '{name}'. Choose from: {', '.join(sorted(PRESETS))}"
        ) from None
