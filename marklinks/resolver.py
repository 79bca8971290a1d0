"""Resolution of relative links against the document corpus."""

from __future__ import annotations

import logging
import posixpath

from .anchors import generate_anchor
from .document import Corpus
from .markdown import flatten_text, iter_nodes, parse_document
from .references import (
    InvalidDestinationError,
    parse_destination,
    reference_fragment,
    reference_path,
)

LOGGER = logging.getLogger(__name__)


def resolve_target(source: str, path: str) -> str:
    """Join ``path`` onto the directory of ``source`` and normalise it.

    A leading slash in ``path`` does not restart the join from the root.
    """
    base = posixpath.dirname(source)
    joined = "/".join(part for part in (base, path) if part)
    if not joined:
        return "."
    return posixpath.normpath(joined)


def has_anchor(content: bytes, fragment: str) -> bool:
    """Return True when some heading in ``content`` slugs to ``fragment``."""
    tree = parse_document(content)
    for heading in iter_nodes(tree, "heading"):
        if generate_anchor(flatten_text(heading)) == fragment:
            return True
    return False


def resolve_relative(destination: str, source: str, corpus: Corpus) -> bool:
    """Check that a relative link points at an existing document and anchor."""
    try:
        parts = parse_destination(destination)
    except InvalidDestinationError as exc:
        LOGGER.debug(
            "Relative link does not parse: %s",
            exc,
            extra={"path": source, "url": destination},
        )
        return False

    target = resolve_target(source, reference_path(parts))
    content = corpus.get(target)
    if content is None:
        LOGGER.debug(
            "Relative link target not found",
            extra={"path": source, "url": destination, "target": target},
        )
        return False

    fragment = reference_fragment(parts)
    if not fragment:
        return True

    if has_anchor(content, fragment):
        return True

    LOGGER.debug(
        "Anchor not found in target document",
        extra={"path": source, "url": destination, "target": target, "anchor": fragment},
    )
    return False
