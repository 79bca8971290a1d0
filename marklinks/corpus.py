"""Loading a document corpus from disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Union

LOGGER = logging.getLogger(__name__)


def read_documents(path: Union[str, Path]) -> Dict[str, bytes]:
    """Read every regular file under ``path`` into memory.

    ``path`` may be a single file. Keys are POSIX-style paths rooted at
    ``path`` as given, so relative links resolve the same on every platform.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        OSError: If a file cannot be read.
    """
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"Path does not exist: {root}")

    if root.is_file():
        return {root.as_posix(): _read(root)}

    documents: Dict[str, bytes] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        LOGGER.debug("Reading directory", extra={"path": Path(dirpath).as_posix()})
        for filename in sorted(filenames):
            file_path = Path(dirpath) / filename
            if not file_path.is_file():
                continue
            documents[file_path.as_posix()] = _read(file_path)
    LOGGER.debug("Read %d documents from %s", len(documents), root)
    return documents


def _read(file_path: Path) -> bytes:
    try:
        return file_path.read_bytes()
    except OSError as exc:
        LOGGER.error(
            "File reading error: %s",
            exc,
            extra={"path": file_path.as_posix()},
        )
        raise
