"""Logging setup driven by ``log_level`` and ``log_format`` from config."""

from __future__ import annotations

import json
import logging

from rich.console import Console
from rich.logging import RichHandler

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_HANDLER_TAG = "_untracker_handler"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Attach a single stderr handler to the ``untracker`` logger.

    Safe to call repeatedly; the previous handler is replaced.
    """
    logger = logging.getLogger("untracker")
    logger.setLevel(_LEVEL_MAP.get(level.lower(), logging.INFO))

    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_TAG, False):
            logger.removeHandler(existing)
            existing.close()

    handler: logging.Handler
    if fmt == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=False,
        )
    setattr(handler, _HANDLER_TAG, True)
    logger.addHandler(handler)
    return logger
