"""Shared fixtures and strict test-accounting guardrails."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict

import httpx
import pytest


@dataclass
class _TestAccounting:
    deselected: int = 0
    skipped: int = 0
    xfailed: int = 0
    xpassed: int = 0


_ACCOUNTING = _TestAccounting()


@pytest.fixture(autouse=True)
def _reset_marklinks_logger():
    """Undo CLI logging setup so caplog keeps seeing records."""
    logger = logging.getLogger("marklinks")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def status_client() -> Callable[[Dict[str, int]], httpx.AsyncClient]:
    """Build an AsyncClient answering each URL with a fixed status code.

    Unknown URLs fail with a connection error.
    """

    def factory(statuses: Dict[str, int]) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            if url not in statuses:
                raise httpx.ConnectError("Connection refused", request=request)
            return httpx.Response(statuses[url])

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


def pytest_deselected(items):  # pragma: no cover - pytest hook
    _ACCOUNTING.deselected += len(items)


def pytest_runtest_logreport(report):  # pragma: no cover - pytest hook
    if report.when not in {"setup", "call"}:
        return

    is_xfail = bool(getattr(report, "wasxfail", False))
    if is_xfail:
        if report.outcome == "skipped":
            _ACCOUNTING.xfailed += 1
        elif report.outcome == "passed":
            _ACCOUNTING.xpassed += 1
        return

    if report.outcome == "skipped":
        _ACCOUNTING.skipped += 1


def pytest_sessionfinish(session, exitstatus):  # pragma: no cover - pytest hook
    violations = []
    if _ACCOUNTING.deselected:
        violations.append(f"deselected={_ACCOUNTING.deselected}")
    if _ACCOUNTING.skipped:
        violations.append(f"skipped={_ACCOUNTING.skipped}")
    if _ACCOUNTING.xfailed:
        violations.append(f"xfailed={_ACCOUNTING.xfailed}")
    if _ACCOUNTING.xpassed:
        violations.append(f"xpassed={_ACCOUNTING.xpassed}")

    if not violations:
        return

    reporter = session.config.pluginmanager.get_plugin("terminalreporter")
    if reporter:
        reporter.write_sep(
            "=",
            "Strict guard failed: test accounting violations detected "
            f"({', '.join(violations)})",
        )
        reporter.write_line(
            "Hard guard requires zero skipped/deselected/xfail/xpass tests."
        )

    session.exitstatus = 1
