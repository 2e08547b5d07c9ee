"""Ordering of jurisdictions by cross-document id references."""

from __future__ import annotations

from graphlib import CycleError, TopologicalSorter
from typing import Iterable, Mapping

from civic_graph.core.constants import CROSS_JURISDICTION_REFERENCES, JURISDICTIONS
from civic_graph.core.exceptions import CivicGraphError


def document_dependencies(
    references: Mapping[str, Iterable[str]] = CROSS_JURISDICTION_REFERENCES,
) -> dict[str, set[str]]:
    """Return ``referencing jurisdiction -> owners whose ids it references``."""
    upstream: dict[str, set[str]] = {}
    for owner, dependents in references.items():
        for dependent in dependents:
            if dependent != owner:
                upstream.setdefault(dependent, set()).add(owner)
    return upstream


def migration_order(
    jurisdictions: Iterable[str] = JURISDICTIONS,
    references: Mapping[str, Iterable[str]] = CROSS_JURISDICTION_REFERENCES,
) -> list[str]:
    """Topologically order ``jurisdictions`` so owners precede their dependents.

    Jurisdictions without dependencies keep their given relative order.
    """
    selected = list(jurisdictions)
    upstream = document_dependencies(references)
    sorter: TopologicalSorter[str] = TopologicalSorter()
    for name in selected:
        sorter.add(name, *sorted(owner for owner in upstream.get(name, ()) if owner in selected))
    try:
        sorter.prepare()
    except CycleError as exc:
        raise CivicGraphError(f"Cyclic jurisdiction references: {exc.args[1]}") from exc
    rank = {name: index for index, name in enumerate(selected)}
    ordered: list[str] = []
    while sorter.is_active():
        ready = sorted(sorter.get_ready(), key=rank.__getitem__)
        ordered.extend(ready)
        sorter.done(*ready)
    return ordered


def upstream_owners(
    jurisdiction: str,
    references: Mapping[str, Iterable[str]] = CROSS_JURISDICTION_REFERENCES,
) -> list[str]:
    return sorted(document_dependencies(references).get(jurisdiction, set()))
