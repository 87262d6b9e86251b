"""Fixed-size frame pipelines for time and frequency domain signal processing."""

from __future__ import annotations

from .generators import GenNode, ImpulseGen, NoiseGen, SineGen, StepGen
from .interfaces import Combiner, Consumer, Producer, Transformer
from .nodes import ComplexToRealNode, GainNode, Node, RealToComplexNode, SumNode
from .pipeline import Pipeline

__all__ = [
    "Combiner",
    "ComplexToRealNode",
    "Consumer",
    "GainNode",
    "GenNode",
    "ImpulseGen",
    "Node",
    "NoiseGen",
    "Pipeline",
    "Producer",
    "RealToComplexNode",
    "SineGen",
    "StepGen",
    "SumNode",
    "Transformer",
]
