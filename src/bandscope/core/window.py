"""Tapering windows applied before the transform to reduce spectral leakage."""

from typing import Optional

import numpy as np
from scipy.signal import windows

from bandscope.errors import InvalidInputError


def hann_window(n: int) -> np.ndarray:
    """
    Symmetric Hann (raised-cosine) window of length ``n``.

    Zero at both ends and 1.0 at the center for odd ``n``.
    """
    if n <= 0:
        raise InvalidInputError(f"Window length must be positive, got {n}")
    return windows.hann(n, sym=True)


def apply_window(
    samples: np.ndarray,
    window: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Multiply samples by a taper, index by index.

    Args:
        samples: 1-D sample array.
        window: Precomputed taper.  Defaults to a Hann window sized to
            the samples.

    Returns:
        New array of the same length.

    Raises:
        InvalidInputError: On empty samples or a window of the wrong length.
    """
    n = len(samples)
    if n == 0:
        raise InvalidInputError("Cannot window an empty sample buffer")
    if window is None:
        window = hann_window(n)
    elif len(window) != n:
        raise InvalidInputError(
            f"Window length {len(window)} does not match sample count {n}"
        )
    return np.asarray(samples, dtype=np.float64) * window
