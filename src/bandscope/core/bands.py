"""
Low/mid/high band classification.

Splits normalized pairs into three groups by normalized frequency.  The
cut points are configurable; a third/two-thirds split is only the default.
"""

from enum import Enum
from typing import Iterable

from bandscope.core.spectrum import BandedSpectrum, FrequencyAmplitudePair
from bandscope.errors import InvalidConfigurationError


class Band(Enum):
    """Closed set of band tags used for per-band styling downstream."""

    LOW = "low"
    MID = "mid"
    HIGH = "high"


class BandClassifier:
    """
    Partitions a normalized spectrum by two frequency thresholds.

    ``low`` takes ``f <= t_low``, ``mid`` takes ``t_low < f <= t_high`` and
    ``high`` takes the rest.  Order inside each group follows input order.
    """

    def __init__(self, t_low: float = 1.0 / 3.0, t_high: float = 2.0 / 3.0):
        """
        Initialize the classifier.

        Args:
            t_low: Low/mid cut point in normalized frequency.
            t_high: Mid/high cut point in normalized frequency.

        Raises:
            InvalidConfigurationError: If the thresholds are not ascending
                or fall outside [0, 1].
        """
        if not (0.0 <= t_low < t_high <= 1.0):
            raise InvalidConfigurationError(
                "Band thresholds must satisfy 0 <= t_low < t_high <= 1, "
                f"got ({t_low}, {t_high})"
            )
        self.t_low = t_low
        self.t_high = t_high

    def band_of(self, normalized_frequency: float) -> Band:
        """Return the band a single normalized frequency falls into."""
        if normalized_frequency <= self.t_low:
            return Band.LOW
        if normalized_frequency <= self.t_high:
            return Band.MID
        return Band.HIGH

    def classify(self, pairs: Iterable[FrequencyAmplitudePair]) -> BandedSpectrum:
        groups: dict[Band, list[FrequencyAmplitudePair]] = {band: [] for band in Band}
        for pair in pairs:
            groups[self.band_of(pair.frequency)].append(pair)

        return BandedSpectrum(
            low=tuple(groups[Band.LOW]),
            mid=tuple(groups[Band.MID]),
            high=tuple(groups[Band.HIGH]),
            thresholds=(self.t_low, self.t_high),
        )
