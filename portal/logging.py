"""Structured logging setup using structlog."""

import logging
import sys

import structlog

from portal.config import settings


def configure_logging(level: str = None, log_format: str = None) -> None:
    """Configure structlog on top of stdlib logging.

    Logs go to stderr so that command output on stdout stays clean.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        log_format: "json" or "console", defaults to settings.LOG_FORMAT
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT

    # Configure stdlib logging level (required for structlog.stdlib.filter_by_level)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
