"""Spectrum analysis: complex bins -> real magnitude/power/dB frames."""

from __future__ import annotations

import numpy as np

from .buffers import as_complex_frame
from .nodes import Node
from .state import FREQUENCY_DOMAIN, REAL_DTYPE, TIME_DOMAIN
from .vectors import magnitude_into

SPECTRUM_MODES = ("magnitude", "power", "db")
DB_FLOOR = 1e-12


class SpectrumNode(Node):
    """Per-bin magnitude, power (``|x|**2``) or level in dB (``20*log10|x|``).

    The output is a real frame indexed by bin; its domain tag is ``time``
    because it carries real samples, which lets it feed gain/sum nodes.
    """

    __slots__ = ("mode",)

    input_domain = FREQUENCY_DOMAIN
    output_domain = TIME_DOMAIN

    def __init__(self, frame_size: int, mode: str = "magnitude", *, name: str = "spectrum") -> None:
        mode = mode.lower()
        if mode not in SPECTRUM_MODES:
            raise ValueError(f"Unknown spectrum mode '{mode}'; expected one of {', '.join(SPECTRUM_MODES)}")
        super().__init__(name, frame_size, dtype=REAL_DTYPE)
        self.mode = mode

    def process(self, input) -> np.ndarray:
        data = as_complex_frame(input)
        n = self._overlap(data)
        out = self._buffer.array
        magnitude_into(out, data, n)
        if self.mode == "power":
            np.multiply(out[:n], out[:n], out=out[:n])
        elif self.mode == "db":
            np.maximum(out[:n], DB_FLOOR, out=out[:n])
            np.log10(out[:n], out=out[:n])
            out[:n] *= 20.0
        return self._buffer.view


__all__ = ["DB_FLOOR", "SPECTRUM_MODES", "SpectrumNode"]
