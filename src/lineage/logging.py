"""Structlog-based logging for the lineage engine.

The engine never prints; callers decide where the JSON lines end up.
"""
from __future__ import annotations

import logging
import os
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LEVEL_ENV = "LINEAGE_LOG_LEVEL"


def configure_logging(level: LogLevel | None = None) -> None:
    """Route structlog output through stdlib logging at the given level.

    Falls back to $LINEAGE_LOG_LEVEL, then WARNING.
    """
    name = (level or os.getenv(_LEVEL_ENV) or "WARNING").upper()
    numeric = getattr(logging, name, logging.WARNING)
    logging.basicConfig(format="%(message)s", level=numeric)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.typing.FilteringBoundLogger:
    """Return the engine logger bound to one component name."""
    return structlog.get_logger("lineage").bind(component=component)


configure_logging()
