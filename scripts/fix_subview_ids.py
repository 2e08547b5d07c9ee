#!/usr/bin/env python
"""Rename stale node ids referenced by intra-tier subviews."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Mapping

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

from civic_graph.core.exceptions import CivicGraphError, DocumentSchemaError
from civic_graph.core.json_utils import load_json
from civic_graph.namespacing import SUBVIEW_RENAMES, fix_repository_subviews


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_common_arguments(parser)
    add_jurisdiction_argument(parser)
    parser.add_argument(
        "--mapping",
        type=Path,
        help="JSON object of {jurisdiction: {old_id: new_id}} replacing the built-in rename table.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _load_mapping(path: Path | None) -> Mapping[str, Mapping[str, str]]:
    if path is None:
        return SUBVIEW_RENAMES
    payload = load_json(path)
    if not isinstance(payload, dict) or not all(isinstance(value, dict) for value in payload.values()):
        raise DocumentSchemaError(f"{path}: expected an object of per-jurisdiction rename tables")
    return payload


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    _, repository = bootstrap(args)
    print_banner("FIXING SUBVIEW NODE IDS", dry_run=args.dry_run)
    try:
        mapping = _load_mapping(args.mapping)
        total = 0
        for jurisdiction in selected_jurisdictions(args):
            renames = mapping.get(jurisdiction)
            if not renames:
                continue
            result = fix_repository_subviews(repository, jurisdiction, renames, dry_run=args.dry_run)
            print(f"\n{jurisdiction}:")
            if result.skipped:
                print("  No intra subviews found, skipping")
                continue
            for fix in result.fixes:
                print(f"  {fix}")
            if not result.fixes:
                print("  No stale ids found")
            elif result.written:
                print(f"  Updated {result.written} (backup: {result.written}.backup)")
            total += len(result.fixes)
    except CivicGraphError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    verb = "Would apply" if args.dry_run else "Applied"
    print_footer([f"{verb} {total} subview id fixes"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
