"""Runtime diagnostics helpers for optional node event logging."""
from __future__ import annotations

import threading
from pathlib import Path

__all__ = ["enable_node_logging", "node_logging_enabled", "log_node_event", "LOG_PATH"]


_LOG_NODE_EVENTS = False
LOG_PATH = Path("logs/node_events.log")
_LOG_LOCK = threading.Lock()


def enable_node_logging(enabled: bool) -> None:
    """Enable or disable logging of node events (frame size mismatches)."""

    global _LOG_NODE_EVENTS
    _LOG_NODE_EVENTS = bool(enabled)


def node_logging_enabled() -> bool:
    """Return ``True`` when node event logging is enabled."""

    return _LOG_NODE_EVENTS


def log_node_event(message: str) -> None:
    """Append ``message`` to the node event log when logging is enabled."""

    if not _LOG_NODE_EVENTS:
        return
    try:
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return
    try:
        with _LOG_LOCK:
            with LOG_PATH.open("a", encoding="utf-8") as handle:
                handle.write(f"{message}\n")
    except OSError:
        return
