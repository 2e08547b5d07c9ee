#!/usr/bin/env python
"""Validate that every process and subgraph node reference exists."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable

try:  # Allow execution via `python` or `python -m`
    from scripts._workflow_common import (  # type: ignore
        add_common_arguments,
        add_jurisdiction_argument,
        add_strict_argument,
        bootstrap,
        report_exit_code,
        selected_jurisdictions,
    )
except ModuleNotFoundError:  # pragma: no cover
    from _workflow_common import (  # type: ignore
        add_common_arguments,
        add_jurisdiction_argument,
        add_strict_argument,
        bootstrap,
        report_exit_code,
        selected_jurisdictions,
    )

from civic_graph.core.exceptions import CivicGraphError
from civic_graph.validation import NODE_REFS_STATS, ReferenceValidator, render_report

NEXT_STEPS = (
    "Next steps:",
    "1. Fix typos in process/subgraph files",
    "2. Add missing nodes to jurisdiction JSON files",
    "3. Re-run validation until clean",
)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_common_arguments(parser, dry_run=False)
    add_jurisdiction_argument(parser)
    add_strict_argument(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    settings, repository = bootstrap(args)
    try:
        report = ReferenceValidator(repository, settings).validate(selected_jurisdictions(args))
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    print(render_report(report, stat_labels=NODE_REFS_STATS))
    if not report.passed:
        print("\n".join(NEXT_STEPS))
    return report_exit_code(report, strict=args.strict)


if __name__ == "__main__":
    raise SystemExit(main())
