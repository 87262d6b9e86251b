"""High level application orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import AppConfig, load_configuration
from .diagnostics import enable_node_logging
from .pipeline import Pipeline
from .vectors import frame_peak, frame_rms


@dataclass(slots=True)
class PipelineApplication:
    """Runtime container for a configured pipeline.

    The application loads a configuration, builds the pipeline once and
    exposes a small API for rendering frames in-process.  No audio devices
    are involved, which keeps tests and command line usage deterministic.
    """

    config: AppConfig
    pipeline: Pipeline

    @classmethod
    def from_config(cls, config: AppConfig) -> "PipelineApplication":
        enable_node_logging(config.runtime.log_node_events)
        pipeline = Pipeline.from_config(
            config.pipeline, config.sample_rate, config.runtime.frame_size
        )
        return cls(config=config, pipeline=pipeline)

    @classmethod
    def from_file(cls, path: str) -> "PipelineApplication":
        return cls.from_config(load_configuration(path))

    def render(self, iterations: Optional[int] = None) -> np.ndarray:
        """Pull ``iterations`` frames (runtime default when omitted) and return a copy."""

        count = self.config.runtime.iterations if iterations is None else iterations
        return self.pipeline.render(count)

    def summary(self) -> str:
        """Return a human-readable description of the pipeline."""

        lines = [
            f"Sample rate: {self.config.sample_rate:g} Hz",
            f"Frame size: {self.config.runtime.frame_size}",
            f"Iterations: {self.config.runtime.iterations}",
            "Nodes:",
        ]
        for node in self.pipeline.nodes:
            name = getattr(node, "name", node.__class__.__name__)
            lines.append(f"  - {name} ({node.__class__.__name__})")
        return "\n".join(lines)


def describe_render(data: np.ndarray, frames: int) -> str:
    return (
        f"Rendered {frames} frames ({data.size} samples) "
        f"peak={frame_peak(data):.6f} rms={frame_rms(data):.6f}"
    )


__all__ = ["PipelineApplication", "describe_render"]
