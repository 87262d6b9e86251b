"""Signal generators and the producer node that renders them frame by frame."""

from __future__ import annotations

import math

import numpy as np

from .nodes import Node
from .state import REAL_DTYPE, TIME_DOMAIN


class SignalGenerator:
    """A signal evaluated at arbitrary time instants (seconds)."""

    def sample(self, t: np.ndarray, dt: float) -> np.ndarray:
        """Return the signal at times ``t``; ``dt`` is the sample period."""

        raise NotImplementedError


class SineGen(SignalGenerator):
    def __init__(self, frequency: float, phase: float = 0.0) -> None:
        self.frequency = float(frequency)
        self.phase = float(phase)

    def sample(self, t: np.ndarray, dt: float) -> np.ndarray:
        return np.sin(2.0 * math.pi * self.frequency * t + self.phase)


class StepGen(SignalGenerator):
    """Unit step switching from 0 to 1 at ``step_time``."""

    def __init__(self, step_time: float) -> None:
        self.step_time = float(step_time)

    def sample(self, t: np.ndarray, dt: float) -> np.ndarray:
        return np.where(t >= self.step_time, 1.0, 0.0)


class ImpulseGen(SignalGenerator):
    """Single unit impulse on the sample closest to ``time``."""

    def __init__(self, time: float = 0.0) -> None:
        self.time = float(time)

    def sample(self, t: np.ndarray, dt: float) -> np.ndarray:
        return np.where(np.abs(t - self.time) < 0.5 * dt, 1.0, 0.0)


class NoiseGen(SignalGenerator):
    """Uniform white noise in ``[-amplitude, amplitude)``."""

    def __init__(self, amplitude: float = 1.0, seed: int | None = None) -> None:
        self.amplitude = float(amplitude)
        self._rng = np.random.default_rng(seed)

    def sample(self, t: np.ndarray, dt: float) -> np.ndarray:
        return self._rng.uniform(-self.amplitude, self.amplitude, size=t.shape)


class GenNode(Node):
    """Producer rendering successive frames of a :class:`SignalGenerator`.

    Frame ``k`` holds the samples at ``t = (k * frame_size + i) / sample_rate``.
    The returned frame is the node's own buffer and is overwritten by the
    next call to :meth:`next_batch`.
    """

    __slots__ = ("generator", "sample_rate", "_position", "_offsets")

    input_domain = None
    output_domain = TIME_DOMAIN

    def __init__(
        self,
        generator: SignalGenerator,
        sample_rate: float,
        frame_size: int,
        *,
        name: str = "gen",
    ) -> None:
        if not sample_rate > 0.0:
            raise ValueError("sample_rate must be positive")
        super().__init__(name, frame_size, dtype=REAL_DTYPE)
        self.generator = generator
        self.sample_rate = float(sample_rate)
        self._position = 0
        self._offsets = np.arange(self.frame_size, dtype=np.float64)

    @property
    def position(self) -> int:
        """Index of the first sample of the next frame."""

        return self._position

    def reset(self) -> None:
        self._position = 0

    def next_batch(self) -> np.ndarray:
        t = (self._position + self._offsets) / self.sample_rate
        self._buffer.array[:] = self.generator.sample(t, 1.0 / self.sample_rate)
        self._position += self.frame_size
        return self._buffer.view


__all__ = [
    "GenNode",
    "ImpulseGen",
    "NoiseGen",
    "SignalGenerator",
    "SineGen",
    "StepGen",
]
