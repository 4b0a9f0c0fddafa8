"""Tests for low/mid/high band classification."""

import pytest

from bandscope.core.bands import Band, BandClassifier
from bandscope.core.spectrum import FrequencyAmplitudePair
from bandscope.errors import InvalidConfigurationError


def _pairs(freqs):
    return [FrequencyAmplitudePair(frequency=f, amplitude=0.5, frequency_hz=f * 1000.0) for f in freqs]


def test_reference_partition():
    freqs = [0.05, 0.1, 0.3, 0.34, 0.5, 0.6, 0.7, 0.9, 0.99]
    banded = BandClassifier(0.33, 0.66).classify(_pairs(freqs))
    assert [p.frequency for p in banded.low] == [0.05, 0.1, 0.3]
    assert [p.frequency for p in banded.mid] == [0.34, 0.5, 0.6]
    assert [p.frequency for p in banded.high] == [0.7, 0.9, 0.99]
    assert banded.thresholds == (0.33, 0.66)


def test_thresholds_are_inclusive_upper_bounds():
    classifier = BandClassifier(0.25, 0.75)
    assert classifier.band_of(0.25) is Band.LOW
    assert classifier.band_of(0.2500001) is Band.MID
    assert classifier.band_of(0.75) is Band.MID
    assert classifier.band_of(0.7500001) is Band.HIGH
    assert classifier.band_of(0.0) is Band.LOW
    assert classifier.band_of(1.0) is Band.HIGH


def test_partition_is_complete_and_ordered():
    freqs = [i / 99 for i in range(100)]
    banded = BandClassifier().classify(_pairs(freqs))
    assert len(banded) == 100
    merged = list(banded.low) + list(banded.mid) + list(banded.high)
    assert [p.frequency for p in merged] == freqs
    for band in Band:
        group = [p.frequency for p in banded.get(band)]
        assert group == sorted(group)


def test_counts_and_get():
    banded = BandClassifier(0.5, 0.9).classify(_pairs([0.1, 0.6, 0.95, 0.99]))
    assert banded.counts() == {"low": 1, "mid": 1, "high": 2}
    assert banded.get(Band.HIGH) == banded.high


def test_empty_input():
    banded = BandClassifier().classify([])
    assert len(banded) == 0


def test_band_enum_is_closed():
    assert [b.value for b in Band] == ["low", "mid", "high"]


@pytest.mark.parametrize(
    "t_low,t_high",
    [(0.5, 0.5), (0.7, 0.3), (-0.1, 0.5), (0.2, 1.1)],
)
def test_rejects_bad_thresholds(t_low, t_high):
    with pytest.raises(InvalidConfigurationError):
        BandClassifier(t_low, t_high)
