"""Structured logging configuration using structlog.

linkset never configures logging on import; hosts call ``setup_logging``
(or ``linkset.config.configure_logging``) when they want its debug events.
Changeset entries attached to events are rendered as short summaries so
large compared values never flood the log.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_MAX_VALUE_REPR = 120
_MAX_SUMMARY_KEYS = 10


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_VALUE_REPR:
        return text[: _MAX_VALUE_REPR - 3] + "..."
    return text


def render_changes(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace LeafChange and Changeset values with JSON-friendly summaries."""
    from linkset.changeset import Changeset
    from linkset.models.change import LeafChange

    for key, value in event_dict.items():
        if isinstance(value, LeafChange):
            event_dict[key] = {
                "old": _short_repr(value.old),
                "new": _short_repr(value.new),
                "old_type": type(value.old).__name__,
                "new_type": type(value.new).__name__,
            }
        elif isinstance(value, Changeset):
            event_dict[key] = {
                "changed": value.count(),
                "keys": [_short_repr(k) for k in value.keys()[:_MAX_SUMMARY_KEYS]],
            }
    return event_dict


def setup_logging(level: str = "warning", json: bool = False) -> None:
    """Configure structlog for console (or JSON) output to stderr."""
    log_level = getattr(logging, level.upper(), logging.WARNING)
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            render_changes,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with the ``linkset.<component>`` name."""
    return structlog.get_logger(component=f"linkset.{component}")  # type: ignore[return-value]
