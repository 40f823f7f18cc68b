"""
Structured logging configuration.
Designed for easy debugging without exposing user data.
"""
import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from liftledger.core.config import settings


def setup_logging() -> None:
    """Configure structured logging for the application."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_dropped_record(
    logger: structlog.stdlib.BoundLogger,
    kind: str,
    reason: str,
    **extra: Any
) -> None:
    """
    Report a record that was left out of aggregation.

    Normalization never raises on malformed input; this is the side channel
    that makes the drops visible. NEVER logs full documents, only identifiers.
    """
    logger.debug(
        "Dropped malformed record",
        kind=kind,
        reason=reason,
        **extra
    )


def log_analytics_computed(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    record_count: int,
    **extra: Any
) -> None:
    """Log that an analytics view was computed."""
    logger.debug(
        "Analytics computed",
        operation=operation,
        record_count=record_count,
        **extra
    )
