"""Consumers terminating a pipeline."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Tuple

import numpy as np

from .vectors import frame_peak, frame_rms


class FrameCollector:
    """Keep copies of consumed frames.

    Frames handed to a consumer are borrowed from the upstream node, so they
    are copied before being stored.  With ``limit`` set only the most recent
    ``limit`` frames are kept.
    """

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._frames: Deque[np.ndarray] = deque(maxlen=limit)

    def consume(self, input) -> None:
        self._frames.append(np.array(input, copy=True))

    @property
    def frames(self) -> List[np.ndarray]:
        return list(self._frames)

    def signal(self) -> np.ndarray:
        """Concatenate every kept frame into one array."""

        if not self._frames:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(list(self._frames))

    def clear(self) -> None:
        self._frames.clear()


class LevelMeterSink:
    """Record ``(peak, rms)`` for every consumed frame."""

    def __init__(self) -> None:
        self.levels: List[Tuple[float, float]] = []

    def consume(self, input) -> None:
        self.levels.append((frame_peak(input), frame_rms(input)))

    @property
    def last(self) -> Tuple[float, float] | None:
        return self.levels[-1] if self.levels else None


class NullSink:
    def __init__(self) -> None:
        self.count = 0

    def consume(self, input) -> None:
        self.count += 1


__all__ = ["FrameCollector", "LevelMeterSink", "NullSink"]
