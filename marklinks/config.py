"""Configuration objects for link validation and logging.

Environment variables are read at call time so that a late ``.env`` load or
a monkeypatched environment is always honoured:

- ``MARKLINKS_TIMEOUT``: request timeout in seconds (default ``3``)
- ``MARKLINKS_ALLOWED_STATUSES``: comma-separated status codes (default ``200``)
- ``MARKLINKS_CONCURRENCY``: maximum in-flight checks (default: unbounded)
- ``MARKLINKS_LOG_LEVEL``: ``debug``, ``info``, ``warn`` or ``error``
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Union

DEFAULT_TIMEOUT = 3.0
DEFAULT_STATUSES = "200"
DEFAULT_LOG_FILE = "./marklinks.log"
DEFAULT_USER_AGENT = "marklinks/0.1"

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""

    def __init__(self, message: str, value: str = ""):
        self.value = value
        super().__init__(message)


def prepare_allowed_statuses(*statuses: int) -> FrozenSet[int]:
    """Build the allow-set of HTTP status codes."""
    return frozenset(statuses)


@dataclass(frozen=True)
class ValidatorConfig:
    """Settings shared by every external link check of a run."""

    allowed_statuses: FrozenSet[int] = field(
        default_factory=lambda: prepare_allowed_statuses(200)
    )
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class LoggingConfig:
    """Where and how log records are written."""

    level: int = logging.INFO
    file_path: Optional[str] = None
    use_json: bool = False

    @property
    def output_to_file(self) -> bool:
        return self.file_path is not None


def parse_status_codes(value: str) -> FrozenSet[int]:
    """Parse ``"200, 301"`` into a set of status codes."""
    codes = []
    for raw in value.split(","):
        candidate = raw.strip()
        try:
            code = int(candidate)
        except ValueError as exc:
            raise ConfigError(f"Invalid status code: {raw!r}", value=raw) from exc
        if not 100 <= code <= 599:
            raise ConfigError(f"Status code out of range: {code}", value=raw)
        codes.append(code)
    return prepare_allowed_statuses(*codes)


def parse_timeout(value: Union[str, float, int]) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout: {value!r}", value=str(value)) from exc
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive: {value!r}", value=str(value))
    return timeout


def parse_concurrency(value: Union[str, int, None]) -> Optional[int]:
    """Parse a concurrency bound; empty or ``0`` means unbounded."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid concurrency: {value!r}", value=str(value)
        ) from exc
    if limit < 0:
        raise ConfigError(
            f"Concurrency cannot be negative: {value!r}", value=str(value)
        )
    return limit or None


def parse_log_level(value: Optional[str]) -> int:
    """Map a level name to a logging level; unknown names fall back to INFO."""
    return _LOG_LEVELS.get((value or "").strip().lower(), logging.INFO)


def load_validator_config(
    *,
    timeout: Union[str, float, None] = None,
    statuses: Union[str, Iterable[int], None] = None,
    follow_redirects: bool = True,
) -> ValidatorConfig:
    """Build a ValidatorConfig, falling back to environment variables."""
    if timeout is None:
        timeout = os.getenv("MARKLINKS_TIMEOUT", str(DEFAULT_TIMEOUT))
    if statuses is None:
        statuses = os.getenv("MARKLINKS_ALLOWED_STATUSES", DEFAULT_STATUSES)

    if isinstance(statuses, str):
        allowed = parse_status_codes(statuses)
    else:
        allowed = prepare_allowed_statuses(*statuses)

    return ValidatorConfig(
        allowed_statuses=allowed,
        timeout=parse_timeout(timeout),
        follow_redirects=follow_redirects,
    )


def load_logging_config(
    *,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    use_json: bool = False,
) -> LoggingConfig:
    """Build a LoggingConfig; an empty ``log_file`` selects the default file."""
    if level is None:
        level = os.getenv("MARKLINKS_LOG_LEVEL", "info")
    file_path = None
    if log_file is not None:
        file_path = log_file or DEFAULT_LOG_FILE
    return LoggingConfig(
        level=parse_log_level(level),
        file_path=file_path,
        use_json=use_json,
    )


def load_concurrency(value: Union[str, int, None] = None) -> Optional[int]:
    if value is None:
        value = os.getenv("MARKLINKS_CONCURRENCY")
    return parse_concurrency(value)
