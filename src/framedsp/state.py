"""Frame dtypes, domain names and runtime defaults."""

from __future__ import annotations

import numpy as np

# =========================
# Settings / fidelity
# =========================
REAL_DTYPE = np.float32
COMPLEX_DTYPE = np.complex64

DEFAULT_FRAME_SIZE = 1024
DEFAULT_SAMPLE_RATE = 44100.0
DEFAULT_ITERATIONS = 16

# =========================
# Domains
# =========================
TIME_DOMAIN = "time"
FREQUENCY_DOMAIN = "frequency"
ANY_DOMAIN = "any"


__all__ = [
    "ANY_DOMAIN",
    "COMPLEX_DTYPE",
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_ITERATIONS",
    "DEFAULT_SAMPLE_RATE",
    "FREQUENCY_DOMAIN",
    "REAL_DTYPE",
    "TIME_DOMAIN",
]
