"""Concurrent validation of extracted links."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import httpx

from .config import ValidatorConfig
from .document import CheckResult, Corpus, Link
from .external import build_client, check_external
from .resolver import resolve_relative

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckSummary:
    """Counts over a batch of check results."""

    total: int
    available: int
    unavailable: int

    @property
    def ok(self) -> bool:
        return self.unavailable == 0


def summarize(results: Sequence[CheckResult]) -> CheckSummary:
    available = sum(1 for result in results if result.ok)
    return CheckSummary(
        total=len(results),
        available=available,
        unavailable=len(results) - available,
    )


async def check_link(
    link: Link,
    client: httpx.AsyncClient,
    config: ValidatorConfig,
    corpus: Corpus,
) -> bool:
    """Dispatch one link to the relative resolver or the HTTP check."""
    if link.is_relative:
        return await asyncio.to_thread(
            resolve_relative, link.destination, link.source, corpus
        )
    return await check_external(link.destination, client, config)


def report_result(result: CheckResult) -> None:
    """Emit the per-link outcome; unavailable links also go to stdout."""
    fields = {
        "path": result.link.source,
        "url": result.link.destination,
        "text": result.link.text,
    }
    if result.ok:
        LOGGER.debug("Link available: %s", result.link, extra=fields)
        return
    print(f"Link unavailable: {result.link}")
    LOGGER.info("Link unavailable: %s", result.link, extra=fields)


async def validate_all_async(
    links: Sequence[Link],
    client: httpx.AsyncClient,
    config: ValidatorConfig,
    corpus: Corpus,
    *,
    concurrency: Optional[int] = None,
) -> List[CheckResult]:
    """Check every link concurrently and return one result per link.

    Args:
        links: Links to check.
        client: HTTP client shared by all external checks.
        config: Allowed statuses and timeout.
        corpus: Documents that relative links resolve against.
        concurrency: Maximum number of in-flight checks. ``None`` starts
            every check at once.

    Returns:
        CheckResult objects in completion order. Each one carries its link,
        so callers must not rely on positional pairing.
    """
    if not links:
        LOGGER.info("No links to check")
        return []

    results: asyncio.Queue[CheckResult] = asyncio.Queue()
    limiter = asyncio.Semaphore(concurrency) if concurrency else None

    async def run_one(link: Link) -> None:
        try:
            if limiter is None:
                ok = await check_link(link, client, config, corpus)
            else:
                async with limiter:
                    ok = await check_link(link, client, config, corpus)
        except Exception as exc:
            LOGGER.warning("Unexpected error while checking %s: %s", link, exc)
            ok = False
        result = CheckResult(link=link, ok=ok)
        report_result(result)
        results.put_nowait(result)

    await asyncio.gather(*(run_one(link) for link in links))

    collected: List[CheckResult] = []
    while not results.empty():
        collected.append(results.get_nowait())

    summary = summarize(collected)
    LOGGER.info(
        "All links checked: %d total, %d available, %d unavailable",
        summary.total,
        summary.available,
        summary.unavailable,
    )
    return collected


def validate_all(
    links: Sequence[Link],
    config: ValidatorConfig,
    corpus: Corpus,
    *,
    client: Optional[httpx.AsyncClient] = None,
    concurrency: Optional[int] = None,
) -> List[CheckResult]:
    """Synchronous wrapper for validate_all_async.

    When no client is given, one is built from ``config`` and closed
    afterwards.
    """

    async def _run() -> List[CheckResult]:
        if client is not None:
            return await validate_all_async(
                links, client, config, corpus, concurrency=concurrency
            )
        async with build_client(config) as owned:
            return await validate_all_async(
                links, owned, config, corpus, concurrency=concurrency
            )

    return asyncio.run(_run())
