"""Logging for photosearch.

Operator diagnostics (HTTP status codes, raw error bodies, tracebacks) go
through this channel only; nothing logged here is ever returned to the agent
or the end user. Records go to stderr because stdout carries the MCP stdio
transport.

Usage:
    from photosearch.logging import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Search completed", extra={"total": 42, "duration_ms": 150})
    # ... | Search completed | total=42 | duration_ms=150
"""

import logging
import sys
from collections.abc import Callable
from typing import Any

from photosearch.constants import LOG_DATE_FORMAT, LOG_FORMAT

# Anything on a record beyond these came in through `extra` or LogContext.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

# Field names whose values are credentials.
_MASKED_FIELDS = frozenset({"access_key", "client_id"})
_MASK = "***"

# httpx logs full request URLs at INFO, and those include client_id.
_NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite")


class StructuredFormatter(logging.Formatter):
    """Append `extra` fields to the message as ``key=value`` pairs.

    Underscore-prefixed attributes are skipped and credential fields are
    masked.
    """

    def format(self, record: logging.LogRecord) -> str:
        base_message = super().format(record)

        pairs = [
            f"{key}={_MASK if key in _MASKED_FIELDS else value}"
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        ]
        if not pairs:
            return base_message
        return " | ".join([base_message, *pairs])


def setup_logging(
    level: int = logging.INFO,
    *,
    include_timestamp: bool = True,
) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Level for the root and ``photosearch`` loggers.
        include_timestamp: Whether to prefix records with a timestamp.
    """
    fmt = LOG_FORMAT if include_timestamp else LOG_FORMAT.removeprefix("%(asctime)s | ")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(fmt, datefmt=LOG_DATE_FORMAT))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("photosearch").setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Stamp fields onto every record created inside the block.

    Usage:
        with LogContext(tool="search-photos"):
            logger.info("Tool call received")
            # ... | Tool call received | tool=search-photos

    Fields set here must not also be passed through ``extra`` inside the
    block; logging refuses to overwrite an existing record attribute.
    """

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self._previous: Callable[..., logging.LogRecord] | None = None

    def __enter__(self) -> "LogContext":
        previous = logging.getLogRecordFactory()
        self._previous = previous
        fields = self.fields

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = previous(*args, **kwargs)
            for key, value in fields.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._previous is not None:
            logging.setLogRecordFactory(self._previous)
