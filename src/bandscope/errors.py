"""
Error types raised by the spectrum pipeline.

Every stage validates its own preconditions and raises one of these
immediately.  All of them derive from ``ValueError`` so callers that only
care about "bad input somewhere" can catch a single type.
"""


class SpectrumError(ValueError):
    """Base class for every pipeline failure."""


class InvalidInputError(SpectrumError):
    """Empty buffer, bad sample rate, or a window/sample length mismatch."""


class InvalidConfigurationError(SpectrumError):
    """A configuration value is outside its documented domain."""


class EmptyResultSetError(SpectrumError):
    """
    No usable bins survived range filtering.

    Raised when the frequency window retains zero bins, or when every
    retained amplitude is exactly zero, since amplitude normalization is
    undefined in both cases.
    """
