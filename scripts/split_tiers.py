#!/usr/bin/env python
"""Split flat jurisdiction files into main (constitutional) and intra tiers."""

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
from civic_graph.namespacing import split_repository_tiers


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_common_arguments(parser)
    add_jurisdiction_argument(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    _, repository = bootstrap(args)
    print_banner("SPLITTING MAIN AND INTRA TIERS", dry_run=args.dry_run)
    try:
        for jurisdiction in selected_jurisdictions(args):
            if not repository.has(jurisdiction, "main"):
                print(f"\n{jurisdiction}: no {jurisdiction}.json, skipping")
                continue
            split = split_repository_tiers(repository, jurisdiction, dry_run=args.dry_run)
            print(f"\n{jurisdiction}:")
            print(f"  main:  {len(split.main.nodes)} nodes, {len(split.main.edges)} edges")
            print(f"  intra: {len(split.intra.nodes)} nodes, {len(split.intra.edges)} edges")
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    print_footer(["DRY RUN COMPLETE" if args.dry_run else "TIER SPLIT COMPLETE"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
