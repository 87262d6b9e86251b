"""Command line entry point for rendering a configured pipeline."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_CONFIG_PATH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="framedsp pipeline runner")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to configuration file")
    parser.add_argument(
        "--iterations",
        type=int,
        help="Number of frames to pull through the pipeline (overrides runtime.iterations)",
    )
    parser.add_argument(
        "--log-node-events",
        action="store_true",
        help="Append frame size mismatches to logs/node_events.log",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the render line, not the pipeline summary",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.iterations is not None and args.iterations < 0:
        parser.error("--iterations must be non-negative")

    from .application import PipelineApplication, describe_render
    from .config import load_configuration

    config = load_configuration(args.config)
    if args.log_node_events:
        config.runtime.log_node_events = True
    app = PipelineApplication.from_config(config)
    iterations = config.runtime.iterations if args.iterations is None else args.iterations

    if not args.quiet:
        print(app.summary())
    data = app.render(iterations)
    print(describe_render(data, iterations))
    return 0


__all__ = ["main", "build_parser"]
