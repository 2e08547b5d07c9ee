#!/usr/bin/env python
"""Rebuild the aggregate main.json from per-jurisdiction backups and the regional overlay."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable

try:  # Allow execution via `python` or `python -m`
    from scripts._workflow_common import add_common_arguments, bootstrap, print_banner, print_footer  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    from _workflow_common import add_common_arguments, bootstrap, print_banner, print_footer  # type: ignore

from civic_graph.compose import MainTierComposer, count_by_namespace
from civic_graph.core.exceptions import CivicGraphError


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_common_arguments(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    settings, repository = bootstrap(args)
    print_banner("REBUILDING MAIN TIER FROM BACKUPS", dry_run=args.dry_run)
    try:
        composition = MainTierComposer(repository, settings).compose(dry_run=args.dry_run)
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1

    document = composition.document
    for source, counts in composition.counts.items():
        print(f"  {source}: {counts['nodes']} nodes, {counts['edges']} edges")
    for jurisdiction, count in count_by_namespace(document).items():
        print(f"  {jurisdiction.capitalize()} nodes in output: {count}")
    if composition.skipped_regional_nodes:
        print(f"  Skipped regional nodes: {', '.join(composition.skipped_regional_nodes)}")
    if composition.dropped_regional_edges:
        print(f"  Dropped {len(composition.dropped_regional_edges)} regional edges with missing endpoints")
    target = composition.written or settings.main_output_filename
    verb = "Would write" if args.dry_run else "Rebuilt"
    print_footer([f"{verb} {target} with {len(document.nodes)} nodes and {len(document.edges)} edges"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
