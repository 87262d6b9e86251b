"""Configuration loading for frame pipelines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping

from .state import DEFAULT_FRAME_SIZE, DEFAULT_ITERATIONS, DEFAULT_SAMPLE_RATE

_REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = _REPO_ROOT / "configs" / "default.json"


@dataclass(slots=True)
class RuntimeConfig:
    """Runtime parameters that are independent of the pipeline layout."""

    frame_size: int = DEFAULT_FRAME_SIZE
    iterations: int = DEFAULT_ITERATIONS
    log_node_events: bool = False


@dataclass(slots=True)
class NodeConfig:
    name: str
    type: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class PipelineConfig:
    sources: List[NodeConfig]
    stages: List[NodeConfig] = field(default_factory=list)
    sink: NodeConfig | None = None


@dataclass(slots=True)
class AppConfig:
    sample_rate: float
    runtime: RuntimeConfig
    pipeline: PipelineConfig


def _normalise_runtime(data: MutableMapping[str, Any]) -> RuntimeConfig:
    runtime = RuntimeConfig(
        frame_size=int(data.get("frame_size", DEFAULT_FRAME_SIZE)),
        iterations=int(data.get("iterations", DEFAULT_ITERATIONS)),
        log_node_events=bool(data.get("log_node_events", False)),
    )
    if runtime.frame_size < 0:
        raise ValueError("runtime.frame_size must be non-negative")
    if runtime.iterations < 0:
        raise ValueError("runtime.iterations must be non-negative")
    return runtime


def _node(item: Any, *, where: str) -> NodeConfig:
    if not isinstance(item, Mapping):
        raise TypeError(f"{where} must be an object with 'type' and optional 'name'/'params'")
    if "type" not in item:
        raise ValueError(f"{where}.type must be provided")
    params = item.get("params", {}) or {}
    if not isinstance(params, Mapping):
        raise TypeError(f"{where}.params must be an object")
    node_type = str(item["type"])
    return NodeConfig(name=str(item.get("name", node_type)), type=node_type, params=dict(params))


def _normalise_pipeline(data: Mapping[str, Any]) -> PipelineConfig:
    if not isinstance(data, Mapping):
        raise TypeError("pipeline must be an object with 'sources' and optional 'stages'/'sink'")
    source_items = data.get("sources", [])
    if not source_items:
        raise ValueError("pipeline.sources must contain at least one node definition")
    sources = [_node(item, where=f"pipeline.sources[{idx}]") for idx, item in enumerate(source_items)]
    stages = [
        _node(item, where=f"pipeline.stages[{idx}]")
        for idx, item in enumerate(data.get("stages", []) or [])
    ]
    sink_item = data.get("sink")
    sink = _node(sink_item, where="pipeline.sink") if sink_item else None
    return PipelineConfig(sources=sources, stages=stages, sink=sink)


def parse_configuration(raw: Mapping[str, Any]) -> AppConfig:
    """Build an :class:`AppConfig` from already decoded JSON data."""

    if not isinstance(raw, Mapping):
        raise TypeError("configuration must be a JSON object")
    runtime_items = raw.get("runtime", {}) or {}
    if not isinstance(runtime_items, Mapping):
        raise TypeError("runtime must be an object")
    runtime = _normalise_runtime(dict(runtime_items))
    pipeline = _normalise_pipeline(raw.get("pipeline", {}) or {})
    sample_rate = float(raw.get("sample_rate", DEFAULT_SAMPLE_RATE))
    if not sample_rate > 0.0:
        raise ValueError("sample_rate must be positive")
    return AppConfig(sample_rate=sample_rate, runtime=runtime, pipeline=pipeline)


def load_configuration(path: str | Path) -> AppConfig:
    """Load an :class:`AppConfig` from ``path``."""

    with open(path, "r", encoding="utf8") as fh:
        raw = json.load(fh)
    return parse_configuration(raw)


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "NodeConfig",
    "PipelineConfig",
    "RuntimeConfig",
    "load_configuration",
    "parse_configuration",
]
