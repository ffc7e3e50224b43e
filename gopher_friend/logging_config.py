"""
structlog setup for the CLI.

Log records are routed through the standard `logging` module to stderr so
that stdout only ever carries command output (saved-file messages and
completion scripts).

Importing this module installs a stdlib-backed structlog configuration if
none exists yet, so library use of `GopherClient` never prints to stdout.
Handlers and levels are then left to the host application.
"""
import logging
import sys
from typing import Optional

import structlog

from .config import LOG_FORMAT, LOG_LEVEL


def _renderer(fmt: Optional[str]):
    if (fmt or LOG_FORMAT) == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def _configure_structlog(fmt: Optional[str] = None) -> None:
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
            _renderer(fmt),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_default_logging() -> None:
    """Routes structlog through stdlib logging unless already configured."""
    if not structlog.is_configured():
        _configure_structlog()


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configures structlog and the root stdlib logger.

    Args:
        level: Log level name; falls back to GOPHER_FRIEND_LOG_LEVEL.
        fmt: "console" or "json"; falls back to GOPHER_FRIEND_LOG_FORMAT.
    """
    level_name = (level or LOG_LEVEL).upper()

    # force=True so each invocation binds the handler to the current stderr.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level_name, logging.WARNING),
        force=True,
    )
    _configure_structlog(fmt)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)


configure_default_logging()
