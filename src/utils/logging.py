"""
Structured logging setup built on structlog.

Every module obtains its logger through get_logger(__name__); the service
entrypoint calls configure_logging() exactly once with the resolved log level.
Output goes to stderr so that CLI scripts can keep stdout for their results.
"""

import logging
import sys
from typing import Optional

import structlog

# Level names accepted in addition to the stdlib ones.
LEVEL_ALIASES = {
    "TRACE": logging.DEBUG,
    "OFF": logging.CRITICAL + 10,
}


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    stream=None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL),
               case-insensitive. TRACE logs like DEBUG and OFF silences
               every logger.
        format_json: Render one JSON object per line instead of console output.
        include_timestamp: Add an ISO-8601 UTC "timestamp" field to each event.
        stream: Output stream (default: sys.stderr).

    Raises:
        ValueError: If level is not a known logging level name.
    """
    log_level = LEVEL_ALIASES.get(level.upper())
    if log_level is None:
        log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stderr,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    """Return a structlog logger bound to the given module name."""
    return structlog.get_logger(name)
