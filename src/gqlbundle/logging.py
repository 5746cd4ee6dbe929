"""
Centralized logging configuration using structlog
"""

import base64
import logging
import secrets
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TextIO

import structlog

from .config import settings

# Identifies the bundling call a log line belongs to
bundle_id_ctx: ContextVar[str | None] = ContextVar("bundle_id", default=None)


class BundleContextFilter:
    """Add bundling call context to log records."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """Add bundle context to the event dict."""
        # Required by the structlog processor interface
        _ = logger, method_name

        bundle_id = bundle_id_ctx.get()
        if bundle_id:
            event_dict["bundle_id"] = bundle_id

        return event_dict


def _configured_level() -> int:
    """Log level named by settings.log_level, INFO when unrecognized."""
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Configure structlog with appropriate processors and formatters.

    Args:
        debug: If True, use human-readable console output at DEBUG level. If
            False, use JSON at settings.log_level.
        stream: Where log lines go; stdout by default
    """

    log_level = logging.DEBUG if debug else _configured_level()

    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        BundleContextFilter(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        # Development: human-readable console output
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        # Production: JSON output
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def generate_bundle_id() -> str:
    """Generate a compact ID for one bundling call.

    Microsecond timestamp plus two random bytes, base64 encoded without
    padding (e.g. 'Ab3X9mF2xYz').
    """
    timestamp_us = int(time.time() * 1_000_000)
    random_bytes = secrets.token_bytes(2)

    combined_bytes = timestamp_us.to_bytes(8, byteorder="big") + random_bytes
    return base64.urlsafe_b64encode(combined_bytes).decode("ascii").rstrip("=")


@contextmanager
def bundle_context(bundle_id: str | None = None) -> Iterator[str]:
    """Tag every log line emitted inside the block with a bundle ID.

    The previous value is restored on exit, so nested and concurrent
    bundling calls keep their own IDs.
    """
    if bundle_id is None:
        bundle_id = generate_bundle_id()

    token = bundle_id_ctx.set(bundle_id)
    try:
        yield bundle_id
    finally:
        bundle_id_ctx.reset(token)


def get_bundle_id() -> str | None:
    """Get the current bundle ID."""
    return bundle_id_ctx.get()
