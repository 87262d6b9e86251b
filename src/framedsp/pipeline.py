"""Caller-side composition of producers, transformers and a consumer."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence

import numpy as np

from .config import NodeConfig, PipelineConfig
from .fft import ForwardFFTNode, InverseFFTNode
from .generators import GenNode, ImpulseGen, NoiseGen, SineGen, StepGen
from .interfaces import Combiner, Consumer, Producer, Transformer
from .node_contracts import CONSUMER, PRODUCER, TRANSFORMER, get_node_contract
from .nodes import ComplexToRealNode, GainNode, RealToComplexNode, SumNode
from .sinks import FrameCollector, LevelMeterSink, NullSink
from .spectrums import SpectrumNode
from .windows import WindowNode

NodeFactory = Callable[[str, Mapping[str, Any], int, float], Any]


def _gen(make) -> NodeFactory:
    def build(name: str, params: Mapping[str, Any], frame_size: int, sample_rate: float) -> GenNode:
        generator = make(params)
        rate = float(params.get("sample_rate", sample_rate))
        return GenNode(generator, rate, frame_size, name=name)

    return build


NODE_TYPES: Dict[str, NodeFactory] = {
    "sine": _gen(lambda p: SineGen(float(p.get("frequency", 440.0)), float(p.get("phase", 0.0)))),
    "step": _gen(lambda p: StepGen(float(p.get("step_time", 0.0)))),
    "impulse": _gen(lambda p: ImpulseGen(float(p.get("time", 0.0)))),
    "noise": _gen(
        lambda p: NoiseGen(
            float(p.get("amplitude", 1.0)),
            None if p.get("seed") is None else int(p["seed"]),
        )
    ),
    "gain": lambda name, p, size, sr: GainNode(float(p.get("scale", 1.0)), size, name=name),
    "sum": lambda name, p, size, sr: SumNode(size, name=name),
    "real_to_complex": lambda name, p, size, sr: RealToComplexNode(size, name=name),
    "complex_to_real": lambda name, p, size, sr: ComplexToRealNode(size, name=name),
    "fft": lambda name, p, size, sr: ForwardFFTNode(size, name=name),
    "ifft": lambda name, p, size, sr: InverseFFTNode(size, name=name),
    "window": lambda name, p, size, sr: WindowNode(str(p.get("kind", "hann")), size, name=name),
    "spectrum": lambda name, p, size, sr: SpectrumNode(size, str(p.get("mode", "magnitude")), name=name),
    "collector": lambda name, p, size, sr: FrameCollector(
        None if p.get("limit") is None else int(p["limit"])
    ),
    "level_meter": lambda name, p, size, sr: LevelMeterSink(),
    "null": lambda name, p, size, sr: NullSink(),
}


def build_node(config: NodeConfig, frame_size: int, sample_rate: float):
    """Instantiate the node described by ``config``."""

    node_type = config.type.lower()
    try:
        factory = NODE_TYPES[node_type]
    except KeyError as exc:
        raise KeyError(f"Unknown node type '{config.type}'") from exc
    return factory(config.name, dict(config.params), int(frame_size), float(sample_rate))


class Pipeline:
    """Linear pull-based pipeline.

    Each :meth:`pull` asks every source for its next frame, folds multiple
    sources together with :class:`SumNode` instances (left to right), passes
    the result through each stage in order and finally hands it to the sink.
    The frame returned by :meth:`pull` is borrowed from the last node that
    touched it and is overwritten by the next pull.
    """

    def __init__(
        self,
        sources: Sequence[Producer],
        stages: Sequence[Transformer] = (),
        sink: Consumer | None = None,
        *,
        frame_size: int,
    ) -> None:
        sources = tuple(sources)
        stages = tuple(stages)
        if not sources:
            raise ValueError("Pipeline requires at least one source")
        for source in sources:
            if not isinstance(source, Producer):
                raise ValueError(f"Source '{_label(source)}' is not a producer")
        for stage in stages:
            if isinstance(stage, Combiner) or not isinstance(stage, Transformer):
                raise ValueError(f"Stage '{_label(stage)}' is not a single-input transformer")
        if sink is not None and not isinstance(sink, Consumer):
            raise ValueError(f"Sink '{_label(sink)}' is not a consumer")
        self.frame_size = int(frame_size)
        self.sources: tuple[Producer, ...] = sources
        self.stages: tuple[Transformer, ...] = stages
        self.sink = sink
        self._mixers = tuple(
            SumNode(self.frame_size, name=f"sum{idx}") for idx in range(len(self.sources) - 1)
        )
        self.frames_pulled = 0

    @classmethod
    def from_config(cls, config: PipelineConfig, sample_rate: float, frame_size: int) -> "Pipeline":
        domain: str | None = None
        sources = []
        for node_cfg in config.sources:
            contract = _contract_for(node_cfg)
            if contract is not None and contract.role != PRODUCER:
                raise ValueError(f"Source '{node_cfg.name}' ({node_cfg.type}) is not a producer")
            sources.append(build_node(node_cfg, frame_size, sample_rate))
            if contract is not None:
                domain = contract.output_domain
        stages = []
        for node_cfg in config.stages:
            contract = _contract_for(node_cfg)
            if contract is not None:
                if contract.role != TRANSFORMER:
                    raise ValueError(
                        f"Stage '{node_cfg.name}' ({node_cfg.type}) is not a single-input transformer"
                    )
                if not contract.accepts(domain):
                    raise ValueError(
                        f"Stage '{node_cfg.name}' expects {contract.input_domain} frames "
                        f"but receives {domain} frames"
                    )
                domain = contract.output_domain
            stages.append(build_node(node_cfg, frame_size, sample_rate))
        sink = None
        if config.sink is not None:
            contract = _contract_for(config.sink)
            if contract is not None and contract.role != CONSUMER:
                raise ValueError(f"Sink '{config.sink.name}' ({config.sink.type}) is not a consumer")
            sink = build_node(config.sink, frame_size, sample_rate)
        return cls(sources, stages, sink, frame_size=frame_size)

    @property
    def nodes(self) -> List[Any]:
        ordered: List[Any] = [*self.sources, *self._mixers, *self.stages]
        if self.sink is not None:
            ordered.append(self.sink)
        return ordered

    def pull(self) -> np.ndarray:
        """Run one frame through the pipeline and return the final frame."""

        frame = self.sources[0].next_batch()
        for source, mixer in zip(self.sources[1:], self._mixers):
            frame = mixer.process(frame, source.next_batch())
        for stage in self.stages:
            frame = stage.process(frame)
        if self.sink is not None:
            self.sink.consume(frame)
        self.frames_pulled += 1
        return frame

    def run(self, iterations: int) -> int:
        """Pull ``iterations`` frames and return how many were pulled."""

        count = 0
        for _ in range(int(iterations)):
            self.pull()
            count += 1
        return count

    def render(self, iterations: int) -> np.ndarray:
        """Pull ``iterations`` frames and return copies of them concatenated."""

        chunks = [np.array(self.pull(), copy=True) for _ in range(int(iterations))]
        if not chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(chunks)


def _contract_for(node_cfg: NodeConfig):
    return get_node_contract(node_cfg.type.lower())


def _label(node: Any) -> str:
    return getattr(node, "name", type(node).__name__)


__all__ = ["NODE_TYPES", "Pipeline", "build_node"]
