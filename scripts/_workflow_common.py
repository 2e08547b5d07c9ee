"""Shared utilities for the graph integrity batch scripts."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from civic_graph.core.config import Settings, get_settings
from civic_graph.core.constants import JURISDICTIONS
from civic_graph.core.exceptions import CivicGraphError
from civic_graph.core.logging import bind_run_context, configure_logging
from civic_graph.storage import FileDocumentRepository
from civic_graph.validation import CorpusReport

RULE = "=" * 60


def add_common_arguments(parser: argparse.ArgumentParser, *, dry_run: bool = True) -> None:
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the jurisdiction JSON files (default: settings data_dir).",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default=None,
        help="Override the configured log level.",
    )
    if dry_run:
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing any file.",
        )


def add_jurisdiction_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--jurisdiction",
        dest="jurisdictions",
        action="append",
        choices=JURISDICTIONS,
        help="Limit the run to this jurisdiction (repeatable; default: all).",
    )


def add_strict_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures.",
    )


def report_exit_code(report: CorpusReport, *, strict: bool = False) -> int:
    """Exit status for a validation run; strict runs fail on the first finding of any severity."""
    if not strict:
        return report.exit_code
    try:
        report.raise_for_errors(include_warnings=True)
    except CivicGraphError as exc:
        print(f"ERROR (strict) {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    return 0


def selected_jurisdictions(args: argparse.Namespace) -> list[str]:
    chosen = getattr(args, "jurisdictions", None) or []
    return [name for name in JURISDICTIONS if name in chosen] if chosen else list(JURISDICTIONS)


def bootstrap(args: argparse.Namespace) -> tuple[Settings, FileDocumentRepository]:
    """Resolve settings for this invocation, configure logging, and open the repository."""
    settings = get_settings().with_data_dir(args.data_dir)
    configure_logging(args.log_level, settings=settings)
    bind_run_context(data_dir=str(settings.data_dir), dry_run=getattr(args, "dry_run", False))
    return settings, FileDocumentRepository(settings)


def print_banner(title: str, *, dry_run: bool = False) -> None:
    print(RULE)
    print(title)
    if dry_run:
        print("(DRY RUN - No changes will be made)")
    print(RULE)


def print_footer(lines: Iterable[str]) -> None:
    print()
    print(RULE)
    for line in lines:
        print(line)
    print(RULE)
