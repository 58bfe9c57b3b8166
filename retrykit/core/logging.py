"""Structured logging configuration for retrykit.

Uses structlog for JSON-formatted, production-ready logging with context management.
"""

import logging
from typing import Optional

import structlog

from retrykit.config import Config


def configure_logging(level: Optional[str] = None):
    """Configure structured logging with JSON output for production observability."""
    level_name = (level or Config.log_level()).upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger()


# Global logger instance
logger = configure_logging()


def get_logger():
    """Get the configured logger instance."""
    return logger
