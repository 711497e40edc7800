"""Command line interface for converting ADF documents to Markdown."""
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv

from .config import build_options
from .errors import ConfigError
from .formatting import format_bullet_list, format_heading, format_separator
from .logging_config import configure_logging, get_logger
from .renderer import MarkdownRenderer

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def _load_local_dotenv() -> None:
    """Load a ``.env`` file from the working directory when one exists."""

    env_path = Path.cwd() / ".env"
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adfmd",
        description="Convert an Atlassian Document Format (ADF) document to Markdown",
    )
    parser.add_argument("source", help="Path to an ADF JSON file, or '-' to read stdin")
    parser.add_argument(
        "--title",
        help="Wrap the output in a small report headed by this title",
    )
    parser.add_argument(
        "--config",
        help="Path to an adfmd.yaml file (defaults to ./adfmd.yaml if present)",
    )
    parser.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        help="Maximum node nesting depth to render",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    return parser


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments into a namespace."""

    parser = build_parser()
    return parser.parse_args(list(argv) if argv is not None else None)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _compose_report(title: str, source: str, body: str) -> str:
    metadata = format_bullet_list(
        {
            "Source": "stdin" if source == "-" else source,
            "Rendered at": datetime.now(timezone.utc),
        }
    )
    return "\n\n".join(
        [format_heading(title), metadata, format_separator(), body]
    )


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Run the converter and return a process exit code."""

    args = parse_args(argv)
    _load_local_dotenv()
    configure_logging(args.log_level)

    try:
        options = build_options(args)
    except ConfigError as exc:
        LOGGER.error("Invalid configuration: %s", exc, extra={"context": exc.context})
        return EXIT_USAGE

    try:
        raw = _read_source(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Unable to read %s: %s", args.source, exc)
        return EXIT_USAGE

    LOGGER.debug("Rendering document", extra={"source": args.source, "options": options.as_dict()})
    markdown = MarkdownRenderer(options).render(raw)
    if args.title:
        markdown = _compose_report(args.title, args.source, markdown)

    sys.stdout.write(markdown)
    if not markdown.endswith("\n"):
        sys.stdout.write("\n")
    return EXIT_OK


__all__ = ["build_parser", "main", "parse_args"]
