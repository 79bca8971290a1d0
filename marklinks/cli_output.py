"""Report formatting and writing for the CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Sequence

from .document import CheckResult
from .validator import summarize

LOGGER = logging.getLogger(__name__)


def result_to_dict(result: CheckResult) -> Dict[str, Any]:
    """Convert a check result to a JSON-serializable dict."""
    link = result.link
    return {
        "source": link.source,
        "text": link.text,
        "destination": link.destination,
        "relative": link.is_relative,
        "fragment": link.fragment,
        "ok": result.ok,
    }


def build_report(results: Sequence[CheckResult]) -> Dict[str, Any]:
    """Group results into a report, sorted by source then destination."""
    summary = summarize(results)
    ordered = sorted(
        results, key=lambda r: (r.link.source, r.link.destination, r.link.text)
    )
    return {
        "total": summary.total,
        "available": summary.available,
        "unavailable": summary.unavailable,
        "results": [result_to_dict(result) for result in ordered],
    }


def write_report(results: Sequence[CheckResult], output: str) -> Path:
    """Write the JSON report to ``output``, creating parent directories."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_report(results), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    LOGGER.info("Wrote report to %s", path)
    return path
