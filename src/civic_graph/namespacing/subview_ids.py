"""Rename stale node references inside intra-tier subviews."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Mapping

from civic_graph.core.constants import BACKUP_SUFFIX
from civic_graph.core.logging import get_logger
from civic_graph.core.models import JurisdictionDocument
from civic_graph.storage import DocumentRepository

from .ids import apply_namespace, has_namespace, strip_namespace

LOGGER = get_logger(__name__)

# Subviews drafted before the generated agency nodes landed use these short ids.
SUBVIEW_RENAMES: dict[str, dict[str, str]] = {
    "state": {
        "state_police": "state_police_ny",
        "dot": "dot_ny",
        "dec": "dec_ny",
        "health": "doh_ny",
        "education": "sed_ny",
        "labor": "dol_ny",
        "parks": "parks_ny",
        "agriculture": "agm_ny",
        "budget_division": "division_of_budget",
        "comptroller": "state_comptroller",
    },
    "federal": {
        "state_dept": "state",
    },
}


@dataclass(slots=True)
class SubviewFixResult:
    jurisdiction: str
    fixes: list[str] = field(default_factory=list)
    written: str | None = None
    skipped: bool = False


def _rename(node_id: str, jurisdiction: str, renames: Mapping[str, str]) -> str:
    prefixed = has_namespace(node_id, jurisdiction)
    bare = strip_namespace(node_id) if prefixed else node_id
    replacement = renames.get(bare)
    if replacement is None:
        return node_id
    return apply_namespace(replacement, jurisdiction) if prefixed else replacement


def fix_subview_ids(
    document: JurisdictionDocument,
    jurisdiction: str,
    renames: Mapping[str, str],
) -> tuple[JurisdictionDocument, list[str]]:
    """Return a copy of ``document`` with renamed subview references and a log of fixes."""
    fixed = deepcopy(document)
    fixes: list[str] = []

    def rename(subview_id: str, kind: str, node_id: str) -> str:
        new_id = _rename(node_id, jurisdiction, renames)
        if new_id != node_id:
            fixes.append(f"{subview_id}: {kind} {node_id} -> {new_id}")
        return new_id

    for subview in fixed.subviews or []:
        anchor = subview.anchor
        if anchor is not None:
            if anchor.node_id:
                anchor.node_id = rename(subview.id, "anchor", anchor.node_id)
            if anchor.node_ids is not None:
                anchor.node_ids = [rename(subview.id, "anchor", item) for item in anchor.node_ids]
        subview.nodes = [rename(subview.id, "node", item) for item in subview.nodes]
        for edge in subview.edges:
            for attr in ("source", "target"):
                old = getattr(edge, attr)
                new = rename(subview.id, f"edge {attr}", old)
                if new != old:
                    setattr(edge, attr, new)
                    if edge.id:
                        edge.id = edge.id.replace(old, new, 1)
    return fixed, fixes


def fix_repository_subviews(
    repository: DocumentRepository,
    jurisdiction: str,
    renames: Mapping[str, str] | None = None,
    *,
    dry_run: bool = False,
) -> SubviewFixResult:
    result = SubviewFixResult(jurisdiction=jurisdiction)
    document = repository.load_optional(jurisdiction, "intra")
    if document is None or not document.subviews:
        LOGGER.info("subview_fix.no_subviews", jurisdiction=jurisdiction)
        result.skipped = True
        return result
    table = renames if renames is not None else SUBVIEW_RENAMES.get(jurisdiction, {})
    fixed, result.fixes = fix_subview_ids(document, jurisdiction, table)
    if result.fixes and not dry_run:
        result.written = repository.save(jurisdiction, "intra", fixed, backup_suffix=BACKUP_SUFFIX)
    LOGGER.info("subview_fix.done", jurisdiction=jurisdiction, fixes=len(result.fixes), dry_run=dry_run)
    return result
