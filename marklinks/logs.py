"""Logging setup for the marklinks command line."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

from .config import LoggingConfig

LOGGER_NAME = "marklinks"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Attributes every LogRecord has; anything else arrived through ``extra``.
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class FieldsFormatter(logging.Formatter):
    """Text formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED and not key.startswith("_")
        ]
        if fields:
            line = f"{line} {' '.join(fields)}"
        return line


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """Configure the ``marklinks`` logger from ``config``.

    Existing handlers are replaced so repeated CLI invocations in one process
    do not duplicate output.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.level)
    logger.propagate = False

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    if config.output_to_file:
        handler = logging.FileHandler(config.file_path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)

    if config.use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(FieldsFormatter(TEXT_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(config.level)
    logger.addHandler(handler)
    return logger
