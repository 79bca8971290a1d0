"""Parsing and classification of link destinations."""

from __future__ import annotations

import re
from typing import Tuple
from urllib.parse import SplitResult, unquote, urlsplit

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class InvalidDestinationError(ValueError):
    """Raised when a link destination is not a valid URI reference."""

    def __init__(self, message: str, destination: str = ""):
        self.destination = destination
        super().__init__(message)


def parse_destination(destination: str) -> SplitResult:
    """Split ``destination`` as a URI reference.

    Raises:
        InvalidDestinationError: On control characters, malformed percent
            escapes, hosts ``urlsplit`` rejects, or a scheme-less reference
            whose first path segment contains a colon.
    """
    if _CONTROL_CHARS.search(destination):
        raise InvalidDestinationError(
            "invalid control character in destination", destination
        )
    if _BAD_ESCAPE.search(destination):
        raise InvalidDestinationError("invalid percent escape", destination)
    try:
        parts = urlsplit(destination)
    except ValueError as exc:
        raise InvalidDestinationError(str(exc), destination) from exc

    if not parts.scheme and not parts.netloc:
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            raise InvalidDestinationError(
                "first path segment cannot contain a colon", destination
            )
    return parts


def is_relative(destination: str, parts: SplitResult) -> bool:
    """A destination is relative when it has no scheme and is not mailto."""
    if destination.lower().startswith("mailto:"):
        return False
    return not parts.scheme


def reference_path(parts: SplitResult) -> str:
    return unquote(parts.path)


def reference_fragment(parts: SplitResult) -> str:
    return unquote(parts.fragment)


def classify(destination: str) -> Tuple[bool, str]:
    """Return ``(is_relative, fragment)`` for a raw destination.

    Raises:
        InvalidDestinationError: If the destination cannot be parsed.
    """
    parts = parse_destination(destination)
    return is_relative(destination, parts), reference_fragment(parts)
