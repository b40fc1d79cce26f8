"""Tests for the engine's structlog setup."""

import structlog

from lineage.logging import configure_logging, get_logger


def test_logger_is_bound_to_its_component():
    with structlog.testing.capture_logs() as logs:
        get_logger("graph").warning("orphaned_edges", count=2)
    assert logs == [{"component": "graph", "count": 2, "event": "orphaned_edges", "log_level": "warning"}]


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("LINEAGE_LOG_LEVEL", "error")
    configure_logging()
    try:
        with structlog.testing.capture_logs() as logs:
            get_logger("resolver").info("ignored")
        assert logs == []
    finally:
        configure_logging("WARNING")
