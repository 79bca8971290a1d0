"""Link checker for Markdown document trees.

This module provides a small API for finding links in Markdown documents and
checking that they resolve. It supports:

- Extraction of inline and reference links with their display text
- Relative links to other documents, including GitHub-style heading anchors
- External links checked with a single HTTP GET against allowed statuses
- Concurrent checking with an optional bound on in-flight checks

Example usage:

    from marklinks import check_corpus, load_validator_config, read_documents

    corpus = read_documents("docs/")
    config = load_validator_config(timeout=5, statuses="200,301")
    results = check_corpus(corpus, config, concurrency=16)
    for result in results:
        if not result.ok:
            print(result.link)

    # Inside an event loop
    results = await check_corpus_async(corpus, config)
"""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

from .anchors import generate_anchor
from .config import (
    ConfigError,
    LoggingConfig,
    ValidatorConfig,
    load_validator_config,
    prepare_allowed_statuses,
)
from .corpus import read_documents
from .document import CheckResult, Corpus, Link
from .external import build_client, check_external
from .extract import MARKDOWN_SUFFIXES, extract_links
from .references import InvalidDestinationError
from .resolver import resolve_relative
from .validator import CheckSummary, summarize, validate_all, validate_all_async

__all__ = [
    # Data types
    "Corpus",
    "Link",
    "CheckResult",
    "CheckSummary",
    # Config
    "ValidatorConfig",
    "LoggingConfig",
    "ConfigError",
    "load_validator_config",
    "prepare_allowed_statuses",
    # Building blocks
    "generate_anchor",
    "read_documents",
    "extract_links",
    "MARKDOWN_SUFFIXES",
    "InvalidDestinationError",
    "resolve_relative",
    "build_client",
    "check_external",
    # Validation
    "validate_all",
    "validate_all_async",
    "summarize",
    "check_corpus",
    "check_corpus_async",
]


async def check_corpus_async(
    corpus: Corpus,
    config: ValidatorConfig,
    *,
    concurrency: Optional[int] = None,
    suffixes: Optional[Iterable[str]] = None,
) -> List[CheckResult]:
    """
    Extract every link from the corpus and check it.

    Args:
        corpus: Mapping of document identifier to raw content.
        config: Allowed statuses and request timeout for external links.
        concurrency: Maximum number of concurrent checks (None = unbounded).
        suffixes: Only scan documents with these suffixes for links.

    Returns:
        One CheckResult per extracted link, in completion order.
    """
    links = extract_links(corpus, suffixes=suffixes)
    async with build_client(config) as client:
        return await validate_all_async(
            links, client, config, corpus, concurrency=concurrency
        )


def check_corpus(
    corpus: Corpus,
    config: ValidatorConfig,
    *,
    concurrency: Optional[int] = None,
    suffixes: Optional[Iterable[str]] = None,
) -> List[CheckResult]:
    """Synchronous wrapper for check_corpus_async."""
    return asyncio.run(
        check_corpus_async(
            corpus, config, concurrency=concurrency, suffixes=suffixes
        )
    )
