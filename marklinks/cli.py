"""Command-line interface for the Markdown link checker."""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .cli_config import CONFIG_ENV_FILE, load_config
from .cli_output import write_report
from .cli_parsers import parse_args
from .config import (
    ConfigError,
    load_concurrency,
    load_logging_config,
    load_validator_config,
)
from .corpus import read_documents
from .extract import MARKDOWN_SUFFIXES
from .logs import setup_logging
from .validator import summarize

LOGGER = logging.getLogger(__name__)


def _load_env() -> None:
    load_config(
        config_env_file=CONFIG_ENV_FILE,
        cwd=Path.cwd(),
        load_env=load_dotenv,
        copy_file=shutil.copy,
    )


async def _run_async(args: argparse.Namespace) -> int:
    """Main async entry point."""
    from . import check_corpus_async

    try:
        config = load_validator_config(
            timeout=args.timeout,
            statuses=args.status,
            follow_redirects=not args.no_redirects,
        )
        concurrency = load_concurrency(args.concurrency)
    except ConfigError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2

    try:
        corpus = read_documents(args.path)
    except FileNotFoundError as exc:
        LOGGER.error("%s", exc)
        return 2

    LOGGER.debug(
        "Checking %d documents (timeout=%.1fs, statuses=%s, concurrency=%s)",
        len(corpus),
        config.timeout,
        ",".join(str(code) for code in sorted(config.allowed_statuses)),
        concurrency or "unbounded",
    )
    results = await check_corpus_async(
        corpus,
        config,
        concurrency=concurrency,
        suffixes=None if args.all_files else MARKDOWN_SUFFIXES,
    )

    if args.output:
        write_report(results, args.output)

    return 0 if summarize(results).ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    _load_env()

    try:
        setup_logging(
            load_logging_config(
                level="debug" if args.verbose else args.level,
                log_file=args.log,
                use_json=args.json_logs,
            )
        )
    except OSError as exc:
        print(f"Cannot open log file: {exc}", file=sys.stderr)
        return 1

    try:
        return asyncio.run(_run_async(args))
    except KeyboardInterrupt:
        LOGGER.info("Interrupted")
        return 130
    except Exception as exc:
        LOGGER.error("Error: %s", exc)
        if args.verbose:
            LOGGER.exception("Full traceback:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
