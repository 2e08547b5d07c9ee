#!/usr/bin/env python
"""Backfill id, relation, and category on process edges."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable

try:  # Allow execution via `python` or `python -m`
    from scripts._workflow_common import (  # type: ignore
        add_common_arguments,
        add_jurisdiction_argument,
        bootstrap,
        print_banner,
        print_footer,
        selected_jurisdictions,
    )
except ModuleNotFoundError:  # pragma: no cover
    from _workflow_common import (  # type: ignore
        add_common_arguments,
        add_jurisdiction_argument,
        bootstrap,
        print_banner,
        print_footer,
        selected_jurisdictions,
    )

from civic_graph.core.exceptions import CivicGraphError
from civic_graph.edge_metadata import EdgeMetadataResolver, EdgeMetadataResult


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_common_arguments(parser)
    add_jurisdiction_argument(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def _print_result(result: EdgeMetadataResult) -> None:
    print(f"\nProcessing {result.jurisdiction}...")
    if result.skipped:
        print(f"  WARN  {result.jurisdiction}-processes.json not found, skipping")
        return
    verb = "Would update" if result.dry_run else "Updated"
    print(f"  {verb} {result.updated_edges}/{result.total_edges} edges ({result.untouched_edges} untouched)")
    if result.dry_run and result.updated_edges and result.example is not None:
        edge = result.example
        print(f"     Example: {edge.source} -> {edge.target}")
        print(f"              id: {edge.id}")
        print(f"              relation: {edge.relation}")
        print(f"              category: {edge.category}")


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    _, repository = bootstrap(args)
    print_banner("ADDING EDGE METADATA TO PROCESS FILES", dry_run=args.dry_run)
    resolver = EdgeMetadataResolver()
    try:
        results = resolver.apply_all(repository, selected_jurisdictions(args), dry_run=args.dry_run)
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    for result in results:
        _print_result(result)

    if args.dry_run:
        print_footer(["DRY RUN COMPLETE - Run without --dry-run to apply"])
        return 0
    lines = ["EDGE METADATA COMPLETE"]
    written = [result.written for result in results if result.written]
    if written:
        lines.append("Backups created (.backup-edges) for:")
        lines.extend(f"  - {key}" for key in written)
    print_footer(lines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
