"""
Structured logging setup for Whisperwire.

Configures structlog for JSON-formatted structured logging. Every log
line includes timestamp, level, service name, and event. Per-call context
(call_id) is bound at evaluation time through ``structlog.contextvars``.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def _add_service(service: str) -> structlog.types.Processor:
    """Build a processor that stamps *service* on every event."""

    def processor(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service)
        return event_dict

    return processor


def configure_logging(service: str, level: str = "INFO", json: bool = True) -> None:
    """Configure structlog for the current process.

    Args:
        service: Service name stamped on every log line.
        level: Minimum log level name (e.g. ``"INFO"``).
        json: Render JSON lines; otherwise use the console renderer.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service(service),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )
