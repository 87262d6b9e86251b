"""Window functions applied to time domain frames."""

from __future__ import annotations

import numpy as np

from .buffers import as_real_frame
from .nodes import Node
from .state import REAL_DTYPE, TIME_DOMAIN
from .vectors import multiply_into

WINDOW_KINDS = ("rectangular", "hann", "hamming", "blackman")


def window_coefficients(kind: str, size: int) -> np.ndarray:
    """Return the ``size``-point ``kind`` window as float32."""

    kind = kind.lower()
    if kind == "rectangular":
        coeffs = np.ones(size)
    elif kind == "hann":
        coeffs = np.hanning(size)
    elif kind == "hamming":
        coeffs = np.hamming(size)
    elif kind == "blackman":
        coeffs = np.blackman(size)
    else:
        raise ValueError(f"Unknown window kind '{kind}'; expected one of {', '.join(WINDOW_KINDS)}")
    return coeffs.astype(REAL_DTYPE)


class WindowNode(Node):
    __slots__ = ("kind", "_coeffs")

    input_domain = TIME_DOMAIN
    output_domain = TIME_DOMAIN

    def __init__(self, kind: str, frame_size: int, *, name: str = "window") -> None:
        super().__init__(name, frame_size, dtype=REAL_DTYPE)
        self.kind = kind.lower()
        self._coeffs = window_coefficients(self.kind, self.frame_size)
        self._coeffs.flags.writeable = False

    @property
    def coefficients(self) -> np.ndarray:
        return self._coeffs

    def process(self, input) -> np.ndarray:
        real = as_real_frame(input)
        n = self._overlap(real)
        multiply_into(self._buffer.array, real, self._coeffs, n)
        return self._buffer.view


__all__ = ["WINDOW_KINDS", "WindowNode", "window_coefficients"]
