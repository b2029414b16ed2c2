"""Logging setup for envied.

Library modules only obtain loggers through :func:`get_logger`; handlers are
installed by the CLI via :func:`configure_logging`.
"""

import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "envied"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context to each message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        extra = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
        return f"{message} {extra}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
) -> None:
    """Configure the ``envied`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string (structured mode only)
        structured: Emit plain ``key=value`` lines instead of rich output
    """
    handler: logging.Handler
    if structured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            StructuredFormatter(format_string or "%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the ``envied`` namespace.

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger instance
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Adapter that attaches fixed context (environment, file) to records."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["context"] = self.extra
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger that tags every record with ``context``.

    Args:
        name: Module name
        **context: Context fields, e.g. ``environment="dev"``

    Returns:
        ContextAdapter wrapping the module logger
    """
    return ContextAdapter(get_logger(name), context)
