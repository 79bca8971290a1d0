"""Heading anchor generation compatible with GitHub-style slugs."""

from __future__ import annotations

_ALLOWED = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-")


def generate_anchor(text: str) -> str:
    """Return the anchor slug for a heading's flattened text.

    The text is lowercased and trimmed, each space or tab becomes a hyphen,
    and every character outside ``[a-z0-9-]`` is dropped. Consecutive
    hyphens are kept as-is and the result is not trimmed again.
    """
    slug = text.lower().strip()
    slug = slug.replace(" ", "-").replace("\t", "-")
    return "".join(ch for ch in slug if ch in _ALLOWED)
