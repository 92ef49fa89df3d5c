"""Structured logging configuration for smartspend."""

import logging
import os
import sys
from typing import Literal, Optional

import structlog

LOG_LEVEL_ENV = "SMARTSPEND_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def use_stdlib_logging() -> None:
    """Send structlog events through stdlib logging unless already configured.

    Applied when the package is imported, so an embedding application that
    never calls ``configure_logging`` gets the stdlib defaults (warnings and
    above on stderr) instead of every event printed to stdout. A host that
    configured structlog itself is left alone.
    """
    if structlog.is_configured():
        return

    structlog.configure(
        processors=_shared_processors() + [structlog.dev.ConsoleRenderer(colors=False)],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def configure_logging(
    level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR"]] = None,
    format: Literal["json", "console"] = "console",
) -> None:
    """Configure structured logging for the application.

    Log lines go to stderr so they never mix with command output.

    Args:
        level: Log level. Defaults to SMARTSPEND_LOG_LEVEL, then WARNING.
        format: Output format (json or console).
    """
    log_level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level, logging.WARNING),
        force=True,
    )

    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=_shared_processors() + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
