"""
Sample source boundary.

The pipeline consumes already-decoded mono samples.  :class:`SampleBuffer`
is that data contract; :class:`SampleLoader` is a thin file reader built on
librosa for the command line and for callers that start from a file.
"""

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import librosa
import numpy as np
import soundfile

from bandscope.errors import InvalidInputError


def to_float_samples(samples: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """
    Convert samples to a fresh 1-D float64 array.

    Integer ndarrays are treated as fixed-width PCM and scaled to floating
    point full scale: signed types are divided by ``2**(bits - 1)``,
    unsigned types are centered on their midpoint first.  Anything else,
    including a plain Python list of ints, is copied as float64 unchanged.

    Raises:
        InvalidInputError: For empty, multi-dimensional, non-numeric or
            non-finite input.
    """
    arr = np.asarray(samples)

    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.number):
        raise InvalidInputError(f"Samples must be numeric, got dtype {arr.dtype}")
    if arr.ndim != 1:
        raise InvalidInputError(
            f"Samples must be a 1-D mono sequence, got shape {arr.shape}"
        )
    if arr.size == 0:
        raise InvalidInputError("Sample buffer is empty")
    if np.issubdtype(arr.dtype, np.complexfloating):
        raise InvalidInputError("Audio samples must be real-valued")

    # only a real ndarray carries a sample width; lists are plain values
    is_pcm = isinstance(samples, np.ndarray)
    if is_pcm and np.issubdtype(arr.dtype, np.signedinteger):
        full_scale = float(2 ** (arr.dtype.itemsize * 8 - 1))
        out = arr.astype(np.float64) / full_scale
    elif is_pcm and np.issubdtype(arr.dtype, np.unsignedinteger):
        midpoint = float(2 ** (arr.dtype.itemsize * 8 - 1))
        out = (arr.astype(np.float64) - midpoint) / midpoint
    else:
        out = np.array(arr, dtype=np.float64, copy=True)

    if not np.all(np.isfinite(out)):
        raise InvalidInputError("Samples contain NaN or infinite values")
    return out


@dataclass(frozen=True)
class SampleBuffer:
    """Decoded mono samples plus the metadata needed to interpret them."""

    samples: np.ndarray
    sample_rate: int
    channels: int = 1
    bit_depth: Optional[int] = None
    sample_format: Optional[str] = None

    @property
    def n_samples(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> float:
        """Buffer length in seconds."""
        return self.n_samples / self.sample_rate

    @classmethod
    def from_array(
        cls,
        samples: Union[Sequence[float], np.ndarray],
        sample_rate: int,
        channels: int = 1,
        sample_format: Optional[str] = None,
    ) -> "SampleBuffer":
        """
        Validate and copy raw samples into a buffer.

        Args:
            samples: Time-ordered mono samples (any int or float width).
            sample_rate: Samples per second, positive integer.
            channels: Channel count of the source before downmixing.
            sample_format: Free-form format label (e.g. ``"PCM_16"``).

        Returns:
            A buffer whose samples never alias the caller's memory.

        Raises:
            InvalidInputError: On an empty buffer or a bad sample rate.
        """
        validate_sample_rate(sample_rate)

        arr = np.asarray(samples)
        bit_depth = None
        if isinstance(samples, np.ndarray) and np.issubdtype(arr.dtype, np.number):
            bit_depth = arr.dtype.itemsize * 8

        floats = to_float_samples(samples)
        floats.setflags(write=False)

        return cls(
            samples=floats,
            sample_rate=int(sample_rate),
            channels=channels,
            bit_depth=bit_depth,
            sample_format=sample_format,
        )


def validate_sample_rate(sample_rate: Any) -> None:
    """Raise InvalidInputError unless ``sample_rate`` is a positive integer."""
    if isinstance(sample_rate, bool) or not isinstance(sample_rate, (int, np.integer)):
        raise InvalidInputError(
            f"Sample rate must be a positive integer, got {sample_rate!r}"
        )
    if sample_rate <= 0:
        raise InvalidInputError(f"Sample rate must be positive, got {sample_rate}")


# Bit depth implied by libsndfile subtypes
_SUBTYPE_BITS = {
    "PCM_S8": 8,
    "PCM_U8": 8,
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
    "FLOAT": 32,
    "DOUBLE": 64,
}


class SampleLoader:
    """
    Loads audio files into :class:`SampleBuffer` objects.

    Multi-channel files are downmixed to mono by librosa; the original
    channel count is kept as metadata only.
    """

    def __init__(self, max_samples: Optional[int] = None):
        """
        Initialize the loader.

        Args:
            max_samples: Keep only the first N decoded samples (None keeps all).
        """
        if max_samples is not None and max_samples <= 0:
            raise InvalidInputError(f"max_samples must be positive, got {max_samples}")
        self.max_samples = max_samples

    def describe(self, audio_path: Union[str, Path]) -> dict[str, Any]:
        """
        Read the file header without decoding samples.

        Returns:
            Dict with sample_rate, channels, frames, duration, format, subtype
            and bit_depth (None for compressed subtypes).
        """
        info = soundfile.info(str(audio_path))
        return {
            "sample_rate": int(info.samplerate),
            "channels": int(info.channels),
            "frames": int(info.frames),
            "duration": float(info.duration),
            "format": info.format,
            "subtype": info.subtype,
            "bit_depth": _SUBTYPE_BITS.get(info.subtype),
        }

    def load(
        self,
        audio_path: Union[str, Path],
        offset: float = 0.0,
    ) -> SampleBuffer:
        """
        Decode a file at its native sample rate.

        Args:
            audio_path: Path to an audio file readable by librosa.
            offset: Start reading this many seconds into the file.

        Returns:
            SampleBuffer holding the (possibly truncated) mono signal.

        Raises:
            FileNotFoundError: If the file does not exist.
            InvalidInputError: If nothing could be decoded.
        """
        audio_path = Path(audio_path)
        if not audio_path.exists():
            raise FileNotFoundError(f"Audio file not found: {audio_path}")

        description = self.describe(audio_path)

        duration = None
        if self.max_samples is not None:
            # one spare sample so float rounding never comes up short
            duration = (self.max_samples + 1) / description["sample_rate"]

        y, sr = librosa.load(
            audio_path,
            sr=None,
            mono=True,
            offset=offset,
            duration=duration,
        )
        if self.max_samples is not None:
            y = y[: self.max_samples]

        buffer = SampleBuffer.from_array(
            y,
            int(sr),
            channels=description["channels"],
            sample_format=description["subtype"],
        )
        # librosa always hands back float32; report the file's own depth
        return dataclasses.replace(buffer, bit_depth=description["bit_depth"])
