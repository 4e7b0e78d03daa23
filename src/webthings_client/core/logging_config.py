"""Logging setup for the `webthings_client` namespace.

Every module logs through `logging.getLogger(__name__)`, so all records share
the `webthings_client` prefix as diagnostic identifier.
"""

from __future__ import annotations

import logging
import re

LOGGER_NAME = "webthings_client"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE)


class TokenRedactingFilter(logging.Filter):
    """Masks `Bearer <token>` values in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER_RE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Calling it again only updates the level.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if not any(getattr(h, "_webthings_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATE_FORMAT))
        handler.addFilter(TokenRedactingFilter())
        handler._webthings_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
