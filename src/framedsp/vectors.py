# vectors.py
"""Elementwise helpers used by nodes to fill their output buffers in place.

Every ``*_into`` helper writes only the first ``n`` positions of ``out`` and
leaves the remainder untouched, which is how nodes implement truncation on
size mismatch.
"""

from __future__ import annotations

import numpy as np


def overlap(*lengths: int) -> int:
    """Number of positions shared by buffers of the given lengths."""

    if not lengths:
        return 0
    return max(0, min(int(length) for length in lengths))


def scale_into(out: np.ndarray, src: np.ndarray, factor: float, n: int) -> np.ndarray:
    np.multiply(src[:n], factor, out=out[:n], casting="unsafe")
    return out


def add_into(out: np.ndarray, a: np.ndarray, b: np.ndarray, n: int) -> np.ndarray:
    np.add(a[:n], b[:n], out=out[:n], casting="unsafe")
    return out


def multiply_into(out: np.ndarray, a: np.ndarray, b: np.ndarray, n: int) -> np.ndarray:
    np.multiply(a[:n], b[:n], out=out[:n], casting="unsafe")
    return out


def lift_into(out: np.ndarray, src: np.ndarray, n: int) -> np.ndarray:
    """Write ``complex(src[i], 0)`` into ``out[i]`` for ``i < n``."""

    out.real[:n] = src[:n]
    out.imag[:n] = 0.0
    return out


def real_into(out: np.ndarray, src: np.ndarray, n: int) -> np.ndarray:
    """Write the real part of ``src[i]`` into ``out[i]`` for ``i < n``."""

    out[:n] = np.real(src[:n])
    return out


def magnitude_into(out: np.ndarray, src: np.ndarray, n: int) -> np.ndarray:
    np.abs(src[:n], out=out[:n], casting="unsafe")
    return out


def frame_peak(frame: np.ndarray) -> float:
    a = np.asarray(frame)
    if a.size == 0:
        return 0.0
    return float(np.max(np.abs(a)))


def frame_rms(frame: np.ndarray) -> float:
    a = np.asarray(frame)
    if a.size == 0:
        return 0.0
    mag = np.abs(a).astype(np.float64)
    return float(np.sqrt(np.mean(mag * mag)))


__all__ = [
    "add_into",
    "frame_peak",
    "frame_rms",
    "lift_into",
    "magnitude_into",
    "multiply_into",
    "overlap",
    "real_into",
    "scale_into",
]
