# nodes.py
from __future__ import annotations

import numpy as np

from .buffers import (
    ComplexBuffer,
    FrameLike,
    NodeBuffer,
    RealBuffer,
    as_complex_frame,
    as_real_frame,
)
from .diagnostics import log_node_event, node_logging_enabled
from .state import COMPLEX_DTYPE, FREQUENCY_DOMAIN, REAL_DTYPE, TIME_DOMAIN
from .vectors import add_into, lift_into, overlap, real_into, scale_into


# =========================
# Pipeline nodes
# =========================
#
# Every node owns exactly one output buffer, allocated at construction and
# never resized.  ``process``/``next_batch`` overwrite it in place and return
# the same read-only view each time.  When an input is shorter or longer than
# the node's frame size only the overlapping prefix is recomputed; anything
# past it keeps the value left by the previous call.
class Node:
    """Base class holding the fixed-capacity output buffer of a node."""

    __slots__ = ("name", "_buffer")

    input_domain: str | None = None
    output_domain: str = TIME_DOMAIN

    def __init__(self, name: str, frame_size: int, *, dtype=REAL_DTYPE) -> None:
        self.name = name
        self._buffer = NodeBuffer.allocate(frame_size, dtype)

    @property
    def frame_size(self) -> int:
        return self._buffer.size

    @property
    def output(self) -> np.ndarray:
        """Read-only view of the output buffer as left by the last call."""

        return self._buffer.view

    def _overlap(self, *inputs: np.ndarray) -> int:
        """Return how many output positions the current call recomputes."""

        size = self._buffer.size
        n = overlap(size, *(len(x) for x in inputs))
        if node_logging_enabled():
            lengths = [len(x) for x in inputs]
            if any(length != size for length in lengths):
                log_node_event(
                    f"{self.name}: input lengths {lengths} != frame size {size}; "
                    f"recomputed {n}, stale {size - n}"
                )
        return n


class RealToComplexNode(Node):
    """Lift a time domain frame into a complex frame with zero imaginary part."""

    __slots__ = ()

    input_domain = TIME_DOMAIN
    output_domain = FREQUENCY_DOMAIN

    def __init__(self, frame_size: int, *, name: str = "real_to_complex") -> None:
        super().__init__(name, frame_size, dtype=COMPLEX_DTYPE)

    def process(self, input: FrameLike) -> ComplexBuffer:
        real = as_real_frame(input)
        n = self._overlap(real)
        lift_into(self._buffer.array, real, n)
        return self._buffer.view


class ComplexToRealNode(Node):
    """Project a complex frame onto its real part (the imaginary part is dropped)."""

    __slots__ = ()

    input_domain = FREQUENCY_DOMAIN
    output_domain = TIME_DOMAIN

    def __init__(self, frame_size: int, *, name: str = "complex_to_real") -> None:
        super().__init__(name, frame_size, dtype=REAL_DTYPE)

    def process(self, input: FrameLike) -> RealBuffer:
        data = as_complex_frame(input)
        n = self._overlap(data)
        real_into(self._buffer.array, data, n)
        return self._buffer.view


class GainNode(Node):
    """Change signal amplitude by a constant factor.

    >>> gain = GainNode(2.0, 4)
    >>> gain.process([0.0, 1.0, 0.0, -1.0]).tolist()
    [0.0, 2.0, 0.0, -2.0]
    """

    __slots__ = ("_scale",)

    input_domain = TIME_DOMAIN
    output_domain = TIME_DOMAIN

    def __init__(self, scale: float, frame_size: int, *, name: str = "gain") -> None:
        super().__init__(name, frame_size, dtype=REAL_DTYPE)
        self._scale = float(scale)

    @property
    def scale(self) -> float:
        return self._scale

    def process(self, input: FrameLike) -> RealBuffer:
        real = as_real_frame(input)
        n = self._overlap(real)
        scale_into(self._buffer.array, real, self._scale, n)
        return self._buffer.view


class SumNode(Node):
    """Add two time domain frames elementwise.

    Combination is binary, so this node exposes ``process(a, b)`` and does
    not satisfy the single-input transformer shape; call it directly.
    """

    __slots__ = ()

    input_domain = TIME_DOMAIN
    output_domain = TIME_DOMAIN

    def __init__(self, frame_size: int, *, name: str = "sum") -> None:
        super().__init__(name, frame_size, dtype=REAL_DTYPE)

    def process(self, a: FrameLike, b: FrameLike) -> RealBuffer:
        first = as_real_frame(a)
        second = as_real_frame(b)
        n = self._overlap(first, second)
        add_into(self._buffer.array, first, second, n)
        return self._buffer.view


__all__ = [
    "ComplexToRealNode",
    "GainNode",
    "Node",
    "RealToComplexNode",
    "SumNode",
]
