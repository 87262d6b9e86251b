from __future__ import annotations

from framedsp import diagnostics, nodes


def test_logging_disabled_by_default(tmp_path, monkeypatch):
    log_path = tmp_path / "node_events.log"
    monkeypatch.setattr(diagnostics, "LOG_PATH", log_path)
    monkeypatch.setattr(diagnostics, "_LOG_NODE_EVENTS", False)

    nodes.GainNode(1.0, 4).process([1.0])

    assert not diagnostics.node_logging_enabled()
    assert not log_path.exists()


def test_size_mismatch_logged_when_enabled(tmp_path, monkeypatch):
    log_path = tmp_path / "logs" / "node_events.log"
    monkeypatch.setattr(diagnostics, "LOG_PATH", log_path)
    monkeypatch.setattr(diagnostics, "_LOG_NODE_EVENTS", False)
    diagnostics.enable_node_logging(True)

    summer = nodes.SumNode(4, name="mixdown")
    summer.process([1.0, 2.0], [1.0, 2.0, 3.0, 4.0])
    summer.process([1.0, 2.0, 3.0, 4.0], [1.0, 2.0, 3.0, 4.0])

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("mixdown:")
    assert "recomputed 2, stale 2" in lines[0]


def test_log_node_event_is_noop_when_disabled(tmp_path, monkeypatch):
    log_path = tmp_path / "node_events.log"
    monkeypatch.setattr(diagnostics, "LOG_PATH", log_path)
    monkeypatch.setattr(diagnostics, "_LOG_NODE_EVENTS", False)

    diagnostics.log_node_event("ignored")

    assert not log_path.exists()
