"""Structured logging configuration."""

import logging
import sys
from typing import Any

import structlog

from api.config import get_settings

# Third-party loggers that only add noise at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "asyncio")


def setup_logging(level: str | None = None, *, json_output: bool | None = None) -> None:
    """Configure structured logging with structlog.

    Args:
        level: Overrides the configured log level (the CLI passes DEBUG for --verbose).
        json_output: Force JSON rendering on or off. Defaults to JSON in production.
    """
    settings = get_settings()

    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    render_json = settings.is_production if json_output is None else json_output

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if render_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)
