"""Argument parser construction for the CLI."""

from __future__ import annotations

import argparse
from typing import List, Optional

EPILOG = """\
Examples:
  # Check every Markdown file under docs/
  marklinks docs/

  # Accept redirects as valid and give slow hosts more time
  marklinks docs/ --status 200,301,302 --timeout 10

  # Cap the number of checks in flight
  marklinks docs/ --concurrency 16

  # Debug logs as JSON lines into a file, report to report.json
  marklinks docs/ --level debug --json --log marklinks.log -o report.json
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marklinks",
        description="Check links in Markdown documents.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        "path",
        help="File or directory to check",
    )

    validation = parser.add_argument_group("validation")
    validation.add_argument(
        "--timeout",
        type=str,
        default=None,
        help="Timeout in seconds for HTTP requests (default: 3, env MARKLINKS_TIMEOUT)",
    )
    validation.add_argument(
        "--status",
        type=str,
        default=None,
        help="Comma-separated list of allowed HTTP status codes "
             "(default: 200, env MARKLINKS_ALLOWED_STATUSES)",
    )
    validation.add_argument(
        "--concurrency",
        type=str,
        default=None,
        help="Maximum number of links checked at once "
             "(default: unbounded, env MARKLINKS_CONCURRENCY)",
    )
    validation.add_argument(
        "--no-redirects",
        action="store_true",
        help="Do not follow HTTP redirects",
    )
    validation.add_argument(
        "--all-files",
        action="store_true",
        help="Scan every file for links, not only .md/.markdown",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Write logs to a file instead of stdout "
             "(default file: ./marklinks.log)",
    )
    logging_group.add_argument(
        "--level",
        type=str,
        default=None,
        help="Log level: debug, info, warn, error (default: info)",
    )
    logging_group.add_argument(
        "--json",
        action="store_true",
        dest="json_logs",
        help="Use JSON log format",
    )
    logging_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Shortcut for --level debug",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write a JSON report of all results to this file",
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
