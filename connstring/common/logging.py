"""
structlog setup for applications embedding the builders.
The builders themselves only emit events; they never configure logging.
"""
import logging
import sys
from typing import List, Optional

import structlog

from config.settings import Settings, get_settings


def _processors(json_format: bool) -> List:
    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        renderer,
    ]


def configure_logging(log_level: str = "INFO", json_format: bool = False):
    """
    Configure stdlib logging and structlog to write to stdout.

    Args:
        log_level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
        json_format: JSON lines when True, console text otherwise
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: Optional[Settings] = None):
    """Configure logging from LOG_LEVEL and LOG_JSON (environment or .env)."""
    settings = settings or get_settings()
    configure_logging(log_level=settings.get_log_level(), json_format=settings.LOG_JSON)
