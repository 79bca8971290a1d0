"""External link checks over HTTP."""

from __future__ import annotations

import logging

import httpx

from .config import ValidatorConfig

LOGGER = logging.getLogger(__name__)


def build_client(config: ValidatorConfig) -> httpx.AsyncClient:
    """Create the HTTP client shared by every external check of a run."""
    return httpx.AsyncClient(
        timeout=config.timeout,
        follow_redirects=config.follow_redirects,
        headers={"User-Agent": config.user_agent},
    )


async def check_external(
    url: str,
    client: httpx.AsyncClient,
    config: ValidatorConfig,
) -> bool:
    """Fetch ``url`` once and test its status against the allow-set.

    Transport failures (DNS, refused connections, timeouts, unsupported or
    malformed URLs) count as unavailable. The body is never read; the
    response is closed on every path.
    """
    LOGGER.debug("Check URL", extra={"url": url})
    try:
        async with client.stream("GET", url) as response:
            status = response.status_code
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        LOGGER.debug(
            "Error while checking URL: %s",
            exc,
            extra={"url": url, "error": type(exc).__name__},
        )
        return False

    LOGGER.debug("URL responded", extra={"url": url, "status": status})
    return status in config.allowed_statuses
