"""Time/frequency transforms expressed as pipeline transformers."""

from __future__ import annotations

import numpy as np

from .buffers import NodeBuffer, as_complex_frame, as_real_frame
from .nodes import Node
from .state import COMPLEX_DTYPE, FREQUENCY_DOMAIN, REAL_DTYPE, TIME_DOMAIN


class ForwardFFTNode(Node):
    """Real frame -> complex spectrum of the same length.

    The input prefix is first copied into a staging frame owned by the node
    (with the usual truncation: staging samples past the input length keep
    their previous value) and the whole staging frame is transformed.
    """

    __slots__ = ("_staging",)

    input_domain = TIME_DOMAIN
    output_domain = FREQUENCY_DOMAIN

    def __init__(self, frame_size: int, *, name: str = "fft") -> None:
        super().__init__(name, frame_size, dtype=COMPLEX_DTYPE)
        self._staging = NodeBuffer.allocate(frame_size, REAL_DTYPE)

    def process(self, input) -> np.ndarray:
        real = as_real_frame(input)
        n = self._overlap(real)
        self._staging.array[:n] = real[:n]
        if self.frame_size:
            self._buffer.array[:] = np.fft.fft(self._staging.array)
        return self._buffer.view


class InverseFFTNode(Node):
    """Complex spectrum -> real frame (normalised inverse, real part kept)."""

    __slots__ = ("_staging",)

    input_domain = FREQUENCY_DOMAIN
    output_domain = TIME_DOMAIN

    def __init__(self, frame_size: int, *, name: str = "ifft") -> None:
        super().__init__(name, frame_size, dtype=REAL_DTYPE)
        self._staging = NodeBuffer.allocate(frame_size, COMPLEX_DTYPE)

    def process(self, input) -> np.ndarray:
        data = as_complex_frame(input)
        n = self._overlap(data)
        self._staging.array[:n] = data[:n]
        if self.frame_size:
            self._buffer.array[:] = np.fft.ifft(self._staging.array).real
        return self._buffer.view


__all__ = ["ForwardFFTNode", "InverseFFTNode"]
