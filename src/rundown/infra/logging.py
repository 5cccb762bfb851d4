"""
Logging configuration for rundown.

This module configures structlog for JSON logging across the application.
"""

import logging
from datetime import datetime, timedelta
from typing import Any

import structlog

from .settings import settings


def isoformat_instants(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render datetime and timedelta values so the JSON renderer can emit them."""
    for key, value in event_dict.items():
        if isinstance(value, datetime):
            event_dict[key] = value.isoformat()
        elif isinstance(value, timedelta):
            event_dict[key] = int(value / timedelta(milliseconds=1))
    return event_dict


def configure_logging(level: str | None = None) -> None:
    """Configure structlog for JSON logging."""
    level = (level or settings.log_level).upper()
    logging.basicConfig(format="%(message)s", level=level)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            isoformat_instants,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger with service context.

    The logger is resolved lazily, so it picks up whatever
    :func:`configure_logging` installs later.
    """
    return structlog.get_logger(
        name,
        service="rundown",
        env=settings.env,
    )
