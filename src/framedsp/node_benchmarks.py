"""Utilities for benchmarking individual nodes across varying frame sizes.

This module provides a small harness that instantiates each node type, feeds
it synthetic frames, and records the processing latency for a set of frame
sizes.  Nodes are timed in isolation, without a pipeline around them, so the
numbers reflect only the in-place buffer work of each node.
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

import numpy as np
import pandas as pd

from .fft import ForwardFFTNode, InverseFFTNode
from .generators import GenNode, NoiseGen, SineGen
from .nodes import ComplexToRealNode, GainNode, RealToComplexNode, SumNode
from .spectrums import SpectrumNode
from .state import COMPLEX_DTYPE, REAL_DTYPE
from .windows import WindowNode


# ---------------------------------------------------------------------------
# Benchmark specification helpers


PrepareFn = Callable[[np.random.Generator, int], tuple[np.ndarray, ...]]
RunnerFn = Callable[[Any, tuple[np.ndarray, ...]], np.ndarray]


@dataclass(slots=True)
class NodeBenchmarkSpec:
    """Definition for how to benchmark a particular node type."""

    factory: Callable[[int], Any]
    prepare: PrepareFn
    runner: RunnerFn | None = None


@dataclass(slots=True)
class BenchmarkStats:
    """Simple statistics captured for each (node, frame size) pair."""

    mean_seconds: float
    stdev_seconds: float
    min_seconds: float
    max_seconds: float


def _random_real(rng: np.random.Generator, frames: int) -> np.ndarray:
    return rng.uniform(-1.0, 1.0, size=frames).astype(REAL_DTYPE, copy=False)


def _random_complex(rng: np.random.Generator, frames: int) -> np.ndarray:
    data = rng.uniform(-1.0, 1.0, size=frames) + 1j * rng.uniform(-1.0, 1.0, size=frames)
    return data.astype(COMPLEX_DTYPE, copy=False)


def _real_prepare(rng: np.random.Generator, frames: int) -> tuple[np.ndarray, ...]:
    return (_random_real(rng, frames),)


def _pair_prepare(rng: np.random.Generator, frames: int) -> tuple[np.ndarray, ...]:
    return (_random_real(rng, frames), _random_real(rng, frames))


def _complex_prepare(rng: np.random.Generator, frames: int) -> tuple[np.ndarray, ...]:
    return (_random_complex(rng, frames),)


def _no_input(rng: np.random.Generator, frames: int) -> tuple[np.ndarray, ...]:
    return ()


def _producer_runner(node: GenNode, inputs: tuple[np.ndarray, ...]) -> np.ndarray:
    return node.next_batch()


NODE_BENCHMARKS: dict[str, NodeBenchmarkSpec] = {
    "sine": NodeBenchmarkSpec(
        factory=lambda size: GenNode(SineGen(440.0), 48_000.0, size),
        prepare=_no_input,
        runner=_producer_runner,
    ),
    "noise": NodeBenchmarkSpec(
        factory=lambda size: GenNode(NoiseGen(seed=0), 48_000.0, size),
        prepare=_no_input,
        runner=_producer_runner,
    ),
    "gain": NodeBenchmarkSpec(factory=lambda size: GainNode(0.5, size), prepare=_real_prepare),
    "sum": NodeBenchmarkSpec(factory=lambda size: SumNode(size), prepare=_pair_prepare),
    "real_to_complex": NodeBenchmarkSpec(
        factory=lambda size: RealToComplexNode(size), prepare=_real_prepare
    ),
    "complex_to_real": NodeBenchmarkSpec(
        factory=lambda size: ComplexToRealNode(size), prepare=_complex_prepare
    ),
    "fft": NodeBenchmarkSpec(factory=lambda size: ForwardFFTNode(size), prepare=_real_prepare),
    "ifft": NodeBenchmarkSpec(factory=lambda size: InverseFFTNode(size), prepare=_complex_prepare),
    "window": NodeBenchmarkSpec(factory=lambda size: WindowNode("hann", size), prepare=_real_prepare),
    "spectrum": NodeBenchmarkSpec(factory=lambda size: SpectrumNode(size), prepare=_complex_prepare),
}


def _default_runner(node: Any, inputs: tuple[np.ndarray, ...]) -> np.ndarray:
    return node.process(*inputs)


def run_node_benchmarks(
    frame_sizes: Iterable[int],
    *,
    iterations: int = 5,
    node_names: Iterable[str] | None = None,
    seed: int = 0,
) -> dict[str, dict[int, BenchmarkStats]]:
    """Execute the benchmark suite and return summary statistics."""

    selected = list(node_names) if node_names is not None else list(NODE_BENCHMARKS)
    unknown = sorted(name for name in selected if name not in NODE_BENCHMARKS)
    if unknown:
        raise KeyError(f"Unknown node types requested: {', '.join(unknown)}")

    sizes = list(frame_sizes)
    if not sizes:
        raise ValueError("at least one frame size must be provided")
    for size in sizes:
        if size <= 0:
            raise ValueError("frame sizes must be positive integers")
    if iterations <= 0:
        raise ValueError("iterations must be a positive integer")

    results: dict[str, dict[int, BenchmarkStats]] = {}
    for node_name in selected:
        spec = NODE_BENCHMARKS[node_name]
        runner = spec.runner or _default_runner
        node_results: dict[int, BenchmarkStats] = {}
        for size in sizes:
            rng = np.random.default_rng([seed, size, len(node_name)])
            node = spec.factory(size)
            runner(node, spec.prepare(rng, size))

            times: list[float] = []
            for _ in range(iterations):
                inputs = spec.prepare(rng, size)
                start = time.perf_counter()
                output = runner(node, inputs)
                _ = float(np.sum(np.abs(output)))
                times.append(time.perf_counter() - start)

            times_arr = np.array(times, dtype=np.float64)
            node_results[size] = BenchmarkStats(
                mean_seconds=float(times_arr.mean()),
                stdev_seconds=float(times_arr.std(ddof=0)),
                min_seconds=float(times_arr.min()),
                max_seconds=float(times_arr.max()),
            )
        results[node_name] = node_results
    return results


def results_dataframe(results: Mapping[str, Mapping[int, BenchmarkStats]]) -> pd.DataFrame:
    """Flatten benchmark results into one row per (node, frame size)."""

    rows = [
        {
            "node": name,
            "frame_size": size,
            "mean_ms": stats.mean_seconds * 1e3,
            "stdev_ms": stats.stdev_seconds * 1e3,
            "min_ms": stats.min_seconds * 1e3,
            "max_ms": stats.max_seconds * 1e3,
        }
        for name, per_size in results.items()
        for size, stats in per_size.items()
    ]
    columns = ["node", "frame_size", "mean_ms", "stdev_ms", "min_ms", "max_ms"]
    frame = pd.DataFrame(rows, columns=columns)
    return frame.sort_values(["node", "frame_size"], ignore_index=True)


def _format_table(results: Mapping[str, Mapping[int, BenchmarkStats]]) -> str:
    if not results:
        return "No results"
    frame = results_dataframe(results)
    if frame.empty:
        return "No results"
    frame["cell"] = [
        f"{mean:6.3f}+/-{stdev:5.3f} ms" for mean, stdev in zip(frame["mean_ms"], frame["stdev_ms"])
    ]
    table = frame.pivot(index="node", columns="frame_size", values="cell")
    table.columns = [f"N={size}" for size in table.columns]
    return table.to_string()


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark framedsp nodes across frame sizes")
    parser.add_argument(
        "--frame-sizes",
        type=int,
        nargs="*",
        default=[64, 256, 1024, 4096],
        help="Frame sizes to benchmark",
    )
    parser.add_argument("--iterations", type=int, default=5, help="Samples per measurement")
    parser.add_argument("--seed", type=int, default=0, help="RNG seed for synthetic data")
    parser.add_argument(
        "--nodes",
        nargs="*",
        default=None,
        help="Optional subset of node names to benchmark",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available node names and exit",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.list:
        for name in sorted(NODE_BENCHMARKS):
            print(name)
        return 0

    results = run_node_benchmarks(
        args.frame_sizes,
        iterations=args.iterations,
        node_names=args.nodes,
        seed=args.seed,
    )
    print(_format_table(results))
    return 0


__all__ = [
    "BenchmarkStats",
    "NODE_BENCHMARKS",
    "NodeBenchmarkSpec",
    "main",
    "results_dataframe",
    "run_node_benchmarks",
]


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
