"""Frame buffer types and the single owned output buffer of a node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .state import COMPLEX_DTYPE, REAL_DTYPE

# Time domain data buffer (float32 samples).
RealBuffer = np.ndarray
# Frequency domain data buffer (complex64 bins).
ComplexBuffer = np.ndarray

FrameLike = Union[np.ndarray, Sequence[float], Sequence[complex]]


@dataclass(slots=True)
class NodeBuffer:
    """Fixed-capacity storage owned by exactly one node.

    ``array`` is written in place by the owning node.  ``view`` is a read-only
    alias of the same memory, created once, and is what the node hands back to
    callers.  Every call to the node overwrites the contents seen through
    ``view``; callers that need to keep a frame must copy it.
    """

    size: int
    array: np.ndarray
    view: np.ndarray

    @classmethod
    def allocate(cls, size: int, dtype) -> "NodeBuffer":
        size = int(size)
        if size < 0:
            raise ValueError("Node buffer size must be non-negative")
        array = np.zeros(size, dtype=dtype)
        view = array.view()
        view.flags.writeable = False
        return cls(size=size, array=array, view=view)

    @property
    def dtype(self) -> np.dtype:
        return self.array.dtype


def as_real_frame(frame: FrameLike) -> np.ndarray:
    """Return ``frame`` as a 1-D float32 array, without copying when possible."""

    return np.asarray(frame, dtype=REAL_DTYPE).reshape(-1)


def as_complex_frame(frame: FrameLike) -> np.ndarray:
    """Return ``frame`` as a 1-D complex64 array, without copying when possible."""

    return np.asarray(frame, dtype=COMPLEX_DTYPE).reshape(-1)


__all__ = [
    "ComplexBuffer",
    "FrameLike",
    "NodeBuffer",
    "RealBuffer",
    "as_complex_frame",
    "as_real_frame",
]
