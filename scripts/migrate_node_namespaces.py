#!/usr/bin/env python
"""Prefix every node id with its jurisdiction and rewrite dependent files."""

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
from civic_graph.namespacing import MigrationResult, NamespaceMigrator


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_common_arguments(parser)
    add_jurisdiction_argument(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def _print_result(result: MigrationResult) -> None:
    print(f"\nMigrating {result.jurisdiction}...")
    if result.skipped:
        print(f"  WARN  {result.jurisdiction}.json not found, skipping")
        return
    verb = "Would update" if result.dry_run else "Updated"
    print(f"  {verb} {result.renamed_nodes}/{result.node_count} node ids")
    if result.example:
        print(f'     Example: "{result.example[0]}" -> "{result.example[1]}"')
    if result.renamed_nodes == 0:
        print("  Already namespaced; no node ids changed")
    for label in result.files_pending:
        print(f"  Would rewrite {label}")
    for key in result.files_written:
        print(f"  Rewrote {key}")


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    _, repository = bootstrap(args)
    print_banner("MIGRATING NODE IDs TO NAMESPACED FORMAT", dry_run=args.dry_run)
    migrator = NamespaceMigrator(repository)
    try:
        results = migrator.migrate_all(selected_jurisdictions(args), dry_run=args.dry_run)
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    for result in results:
        _print_result(result)

    if args.dry_run:
        print_footer(["DRY RUN COMPLETE - Run without --dry-run to apply"])
        return 0
    written = [key for result in results for key in result.files_written]
    lines = ["MIGRATION COMPLETE"]
    if written:
        lines.append("Backups created (.backup-namespace) for:")
        lines.extend(f"  - {key}" for key in written)
    lines.append("Node ids now use format jurisdiction:node_id; legacy ids kept in legacyId")
    lines.append("Next step: re-run validation to confirm all references resolve")
    print_footer(lines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
