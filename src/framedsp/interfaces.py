"""Capability protocols shared by every node in a pipeline.

Nodes are written against these shapes, parameterised by the frame type they
handle rather than by a common base class:

``Producer[F]``
    ``next_batch()`` yields successive frames.
``Transformer[I, O]``
    ``process(frame)`` maps one frame type to another (possibly the same).
``Combiner[A, B, O]``
    ``process(a, b)`` merges two frames into one.
``Consumer[F]``
    ``consume(frame)`` accepts a frame and returns nothing.

``Transformer`` and ``Combiner`` share the ``process`` name, so an
``isinstance`` check against either also compares how many frames the
node's ``process`` requires.  A two-input node is never a ``Transformer``.

Frames returned by ``next_batch``/``process`` are borrowed: they alias storage
owned by the node and are overwritten by the node's next call.  Pass them on,
copy them, or drop them before calling the same node again.
"""

from __future__ import annotations

import inspect
from typing import Any, Protocol, TypeVar, runtime_checkable

F = TypeVar("F")
F_co = TypeVar("F_co", covariant=True)
F_contra = TypeVar("F_contra", contravariant=True)
I_contra = TypeVar("I_contra", contravariant=True)
A_contra = TypeVar("A_contra", contravariant=True)
B_contra = TypeVar("B_contra", contravariant=True)
O_co = TypeVar("O_co", covariant=True)

# Number of frames ``process`` must take for each arity-checked protocol.
_PROCESS_ARITY: dict[type, int] = {}


def process_arity(node: Any) -> int | None:
    """Return how many positional frames ``node.process`` requires."""

    method = getattr(node, "process", None)
    if method is None or not callable(method):
        return None
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        return None
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in positional and param.default is inspect.Parameter.empty
    )


class _FrameProtocolMeta(type(Protocol)):
    def __instancecheck__(cls, instance: Any) -> bool:
        if not super().__instancecheck__(instance):
            return False
        arity = _PROCESS_ARITY.get(cls)
        return arity is None or process_arity(instance) == arity


@runtime_checkable
class Producer(Protocol[F_co]):
    """Node that produces a frame on every call."""

    def next_batch(self) -> F_co:
        ...


@runtime_checkable
class Transformer(Protocol[I_contra, O_co], metaclass=_FrameProtocolMeta):
    """Node mapping an input frame to a node-owned output frame."""

    def process(self, input: I_contra) -> O_co:
        ...


@runtime_checkable
class Combiner(Protocol[A_contra, B_contra, O_co], metaclass=_FrameProtocolMeta):
    """Node merging two input frames into a node-owned output frame."""

    def process(self, a: A_contra, b: B_contra) -> O_co:
        ...


@runtime_checkable
class Consumer(Protocol[F_contra]):
    """Node that accepts frames without returning anything."""

    def consume(self, input: F_contra) -> None:
        ...


_PROCESS_ARITY[Transformer] = 1
_PROCESS_ARITY[Combiner] = 2


__all__ = ["Combiner", "Consumer", "Producer", "Transformer", "process_arity"]
