"""Split a flat jurisdiction document into ``main`` and ``intra`` tiers."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Collection, Mapping

from civic_graph.core.constants import BACKUP_SUFFIX
from civic_graph.core.logging import get_logger
from civic_graph.core.models import DocumentMeta, JurisdictionDocument
from civic_graph.storage import DocumentRepository

from .ids import apply_namespace, has_namespace, normalize_reference, strip_namespace

LOGGER = get_logger(__name__)

# Constitutional and charter-defined entities; everything else is intra detail.
MAIN_TIER_IDS: dict[str, frozenset[str]] = {
    "city": frozenset(
        {
            "nyc_charter",
            "mayor_nyc",
            "comptroller",
            "public_advocate",
            "city_council",
            "administrative_code",
            "borough_presidents",
            "community_boards",
            "charter_revision_commission",
            "voters",
            "district_attorneys",
            "city_clerk",
        }
    ),
    "state": frozenset(
        {
            "ny_constitution",
            "governor",
            "lieutenant_governor",
            "attorney_general",
            "comptroller_ny",
            "state_legislature",
            "senate",
            "assembly",
            "court_of_appeals",
            "appellate_divisions",
            "unified_court_system",
            "state_board_of_elections",
        }
    ),
    "federal": frozenset(
        {
            "us_constitution",
            "president",
            "vice_president",
            "congress",
            "house_of_representatives",
            "senate_us",
            "supreme_court",
            "federal_courts",
            "cabinet",
        }
    ),
}

MAIN_DESCRIPTION_SUFFIX = " - Main constitutional structure"


@dataclass(slots=True)
class TierSplit:
    main: JurisdictionDocument
    intra: JurisdictionDocument


def _bare(node_id: str, jurisdiction: str) -> str:
    return strip_namespace(node_id) if has_namespace(node_id, jurisdiction) else node_id


def split_tiers(
    document: JurisdictionDocument,
    jurisdiction: str,
    main_ids: Collection[str] | None = None,
    *,
    existing_intra: JurisdictionDocument | None = None,
) -> TierSplit:
    """Partition nodes by ``main_ids`` (bare ids) and namespace everything.

    An edge belongs to ``main`` only when both endpoints are main-tier nodes.
    References already prefixed by another jurisdiction are kept as written.
    Subviews and any nodes or edges already held by ``existing_intra`` are kept.
    """
    selected = frozenset(main_ids if main_ids is not None else MAIN_TIER_IDS.get(jurisdiction, ()))
    main = JurisdictionDocument(meta=_main_meta(document.meta))
    intra = JurisdictionDocument(meta=_intra_meta(jurisdiction, existing_intra), subviews=[])

    for node in document.nodes:
        moved = deepcopy(node)
        moved.id = apply_namespace(node.id, jurisdiction)
        if moved.parent:
            moved.parent = normalize_reference(moved.parent, jurisdiction)
        target = main if _bare(node.id, jurisdiction) in selected else intra
        target.nodes.append(moved)

    for edge in document.edges:
        moved = deepcopy(edge)
        moved.source = normalize_reference(edge.source, jurisdiction)
        moved.target = normalize_reference(edge.target, jurisdiction)
        both_main = _bare(edge.source, jurisdiction) in selected and _bare(edge.target, jurisdiction) in selected
        (main if both_main else intra).edges.append(moved)

    if existing_intra is not None:
        known = {node.id for node in main.nodes} | {node.id for node in intra.nodes}
        intra.nodes.extend(deepcopy(node) for node in existing_intra.nodes if node.id not in known)
        seen = {(edge.source, edge.target, edge.relation) for edge in intra.edges}
        intra.edges.extend(
            deepcopy(edge)
            for edge in existing_intra.edges
            if (edge.source, edge.target, edge.relation) not in seen
        )
        intra.subviews = deepcopy(existing_intra.subviews or [])
    return TierSplit(main=main, intra=intra)


def _main_meta(meta: DocumentMeta) -> DocumentMeta:
    updated = deepcopy(meta)
    updated.tier = "main"
    description = updated.description or ""
    if not description.endswith(MAIN_DESCRIPTION_SUFFIX):
        updated.description = description + MAIN_DESCRIPTION_SUFFIX
    return updated


def _intra_meta(jurisdiction: str, existing: JurisdictionDocument | None) -> DocumentMeta:
    if existing is not None:
        meta = deepcopy(existing.meta)
        meta.tier = "intra"
        return meta
    return DocumentMeta(
        description=f"{jurisdiction} agencies, departments, and intra-agency subviews",
        tier="intra",
        extra={"jurisdiction": jurisdiction, "version": "1.0.0"},
    )


def split_repository_tiers(
    repository: DocumentRepository,
    jurisdiction: str,
    main_ids: Mapping[str, Collection[str]] | None = None,
    *,
    dry_run: bool = False,
) -> TierSplit:
    document = repository.load(jurisdiction, "main")
    existing_intra = repository.load_optional(jurisdiction, "intra")
    ids = (main_ids or MAIN_TIER_IDS).get(jurisdiction)
    split = split_tiers(document, jurisdiction, ids, existing_intra=existing_intra)
    LOGGER.info(
        "tier_split.done",
        jurisdiction=jurisdiction,
        main_nodes=len(split.main.nodes),
        intra_nodes=len(split.intra.nodes),
        dry_run=dry_run,
    )
    if not dry_run:
        repository.save(jurisdiction, "main", split.main, backup_suffix=BACKUP_SUFFIX)
        repository.save(jurisdiction, "intra", split.intra, backup_suffix=BACKUP_SUFFIX)
    return split
