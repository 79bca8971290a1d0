"""Link extraction from a corpus of Markdown documents."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .document import Corpus, Link
from .markdown import flatten_text, is_link, link_destination, parse_document
from .references import InvalidDestinationError, classify

LOGGER = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


def extract_links(
    corpus: Corpus,
    *,
    suffixes: Optional[Iterable[str]] = None,
) -> List[Link]:
    """Collect every link in the corpus.

    Links come out grouped by document in corpus iteration order, and in
    document order within each document. Destinations that do not parse as
    URI references are skipped.

    Args:
        corpus: Mapping of document identifier to raw content.
        suffixes: Only parse documents whose identifier ends with one of
            these suffixes (case-insensitive). ``None`` parses everything.
    """
    wanted = tuple(s.lower() for s in suffixes) if suffixes is not None else None
    links: List[Link] = []

    LOGGER.debug("Start parsing %d documents", len(corpus))
    for source, content in corpus.items():
        if wanted is not None and not source.lower().endswith(wanted):
            LOGGER.debug("Skipping non-markdown document", extra={"path": source})
            continue
        links.extend(_extract_document_links(source, content))
    LOGGER.debug("Parsing finished, %d links found", len(links))

    return links


def _extract_document_links(source: str, content: bytes) -> Iterable[Link]:
    LOGGER.debug("Parsing document", extra={"path": source})
    tree = parse_document(content)

    for node in tree.walk():
        if not is_link(node):
            continue
        destination = link_destination(node)
        text = flatten_text(node)
        try:
            relative, fragment = classify(destination)
        except InvalidDestinationError as exc:
            LOGGER.debug(
                "Skipping unparsable link destination: %s",
                exc,
                extra={"path": source, "url": destination},
            )
            continue

        LOGGER.debug(
            "Found link",
            extra={"path": source, "url": destination, "text": text},
        )
        yield Link(
            source=source,
            text=text,
            destination=destination,
            is_relative=relative,
            fragment=fragment,
        )
