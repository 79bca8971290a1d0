"""Data structures for extracted links and their check results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

# Document identifier (POSIX-style path) -> raw document content.
Corpus = Mapping[str, bytes]


@dataclass(frozen=True, slots=True)
class Link:
    """A hyperlink discovered in one document of the corpus."""

    source: str
    text: str
    destination: str
    is_relative: bool
    fragment: str = ""

    def __str__(self) -> str:
        return f"[{self.text}]({self.destination}) in file {self.source}"


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of checking a single link."""

    link: Link
    ok: bool
