from __future__ import annotations

import logging
import sys

import structlog


def configure_logger(level: str = "INFO") -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "studiobot-clips"):
    return structlog.get_logger(name)


def _resolve_level(level: str) -> int:
    value = getattr(logging, level.strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO
