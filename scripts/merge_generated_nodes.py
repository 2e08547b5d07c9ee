#!/usr/bin/env python
"""Merge a batch of generated nodes into a jurisdiction's canonical file.

Usage: merge_generated_nodes.py <jurisdiction> <generated-file> [--dry-run]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

try:  # Allow execution via `python` or `python -m`
    from scripts._workflow_common import add_common_arguments, bootstrap, print_banner, print_footer  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    from _workflow_common import add_common_arguments, bootstrap, print_banner, print_footer  # type: ignore

from civic_graph.core.constants import JURISDICTIONS, is_jurisdiction
from civic_graph.core.exceptions import CivicGraphError, ValidationError
from civic_graph.merge import MergeResult, NodeMergeEngine, load_node_batch

PREVIEW_LIMIT = 5


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("jurisdiction", help=f"One of: {', '.join(JURISDICTIONS)}")
    parser.add_argument("generated_file", type=Path, help="JSON file with the generated nodes.")
    parser.add_argument(
        "--require-namespaced",
        action="store_true",
        help="Reject the batch unless every id already carries the jurisdiction prefix.",
    )
    add_common_arguments(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def _print_plan(result: MergeResult) -> None:
    plan = result.plan
    print(f"Loaded {plan.total_before} existing nodes")
    for warning in plan.warnings:
        print(f"  WARN  {warning}")
    if plan.duplicates:
        print(f"Found {len(plan.duplicates)} duplicate IDs (skipped):")
        for node_id in plan.duplicates:
            print(f"   - {node_id}")
    else:
        print("No duplicates found")
    if not plan.additions:
        print("No new nodes to add (all were duplicates)")
        return
    if result.dry_run:
        print("DRY RUN - Changes that would be made:")
        print(f"   Total nodes after merge: {plan.total_after}")
        print("   New nodes to be added:")
        for node in plan.additions[:PREVIEW_LIMIT]:
            print(f"     - {node.id}: {node.label}")
        if len(plan.additions) > PREVIEW_LIMIT:
            print(f"     ... and {len(plan.additions) - PREVIEW_LIMIT} more")
        return
    print(f"Backup created: {result.backup}")
    print(f"Merged {len(plan.additions)} nodes into {result.written}")
    print(f"   Total nodes: {plan.total_before} -> {plan.total_after}")


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    if not is_jurisdiction(args.jurisdiction):
        print(f"Invalid jurisdiction: {args.jurisdiction}", file=sys.stderr)
        print(f"   Must be one of: {', '.join(JURISDICTIONS)}", file=sys.stderr)
        return 1
    settings, repository = bootstrap(args)
    print_banner(f"MERGING GENERATED NODES INTO {args.jurisdiction.upper()}", dry_run=args.dry_run)
    try:
        candidates = load_node_batch(args.generated_file)
        print(f"Loaded {len(candidates)} generated nodes")
        result = NodeMergeEngine(repository, settings).merge(
            args.jurisdiction,
            candidates,
            namespace=not args.require_namespaced,
            dry_run=args.dry_run,
        )
    except ValidationError as exc:
        print("Validation errors found:", file=sys.stderr)
        for message in exc.messages:
            print(f"   {message}", file=sys.stderr)
        print("Fix these errors in the generated file and try again.", file=sys.stderr)
        return 1
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    _print_plan(result)
    print_footer(["DRY RUN COMPLETE" if args.dry_run else "MERGE COMPLETE"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
