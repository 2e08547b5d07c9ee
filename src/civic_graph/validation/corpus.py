"""Three-tier corpus validation: uniqueness, namespaces, and reference closure.

Problems are collected exhaustively per jurisdiction; nothing here raises for
an integrity problem.
"""

from __future__ import annotations

from typing import Iterable

from civic_graph.core.constants import JURISDICTIONS
from civic_graph.core.logging import get_logger
from civic_graph.core.models import JurisdictionDocument, Subview
from civic_graph.namespacing.ids import has_namespace, namespace_prefix, normalize_reference
from civic_graph.storage import DocumentRepository, document_filename

from .report import (
    DANGLING_REFERENCE,
    DUPLICATE_ID,
    MISSING_DOCUMENT,
    NAMESPACE_FORMAT,
    SUBVIEW_EDGE_UNRESOLVED,
    TIER_METADATA,
    CorpusReport,
    JurisdictionReport,
)

LOGGER = get_logger(__name__)

THREE_TIER_TITLE = "VALIDATING THREE-TIER DATA STRUCTURE"
THREE_TIER_STATS = (
    ("main_nodes", "Main nodes"),
    ("intra_nodes", "Intra nodes"),
    ("total_nodes", "Total unique nodes"),
    ("subviews", "Subviews"),
)


def combined_node_ids(*documents: JurisdictionDocument | None) -> set[str]:
    return {node.id for document in documents if document is not None for node in document.nodes}


def validate_jurisdiction(
    jurisdiction: str,
    main: JurisdictionDocument | None,
    intra: JurisdictionDocument | None,
) -> JurisdictionReport:
    """Validate one jurisdiction's main and intra documents together."""
    report = JurisdictionReport(jurisdiction=jurisdiction)
    if main is None:
        report.error(MISSING_DOCUMENT, f"Missing main file {document_filename(jurisdiction, 'main')}")
        return report

    all_ids = _check_duplicates(report, main, intra)
    report.stats.update(
        main_nodes=len(main.nodes),
        intra_nodes=len(intra.nodes) if intra is not None else 0,
        total_nodes=len(all_ids),
    )
    _check_namespaces(report, jurisdiction, all_ids)

    for tier, document in (("main", main), ("intra", intra)):
        if document is None:
            continue
        for index, edge in enumerate(document.edges):
            for end in ("source", "target"):
                ref = getattr(edge, end)
                if ref not in all_ids:
                    report.error(
                        DANGLING_REFERENCE,
                        f"{tier.capitalize()} edge references missing {end}: {ref}",
                        location=f"{tier}.edges[{index}].{end}",
                    )

    subviews = [
        (tier, subview)
        for tier, document in (("main", main), ("intra", intra))
        if document is not None
        for subview in document.subviews or []
    ]
    report.stats["subviews"] = len(subviews)
    for tier, subview in subviews:
        _check_subview(report, jurisdiction, tier, subview, all_ids)

    _check_tier_meta(report, "main", main)
    if intra is not None:
        _check_tier_meta(report, "intra", intra)
    return report


def _check_duplicates(
    report: JurisdictionReport,
    main: JurisdictionDocument,
    intra: JurisdictionDocument | None,
) -> set[str]:
    seen: dict[str, str] = {}
    for tier, document in (("main", main), ("intra", intra)):
        if document is None:
            continue
        for node in document.nodes:
            owner = seen.get(node.id)
            if owner is None:
                seen[node.id] = tier
                continue
            suffix = "" if owner == tier else f" (already in {owner})"
            report.error(DUPLICATE_ID, f"Duplicate node ID: {node.id}{suffix}", location=f"{tier}.nodes")
    return set(seen)


def _check_namespaces(report: JurisdictionReport, jurisdiction: str, node_ids: Iterable[str]) -> None:
    expected = namespace_prefix(jurisdiction)
    for node_id in sorted(node_ids):
        if not has_namespace(node_id, jurisdiction):
            report.error(NAMESPACE_FORMAT, f"Invalid namespace: {node_id} (expected {expected})")


def _check_subview(
    report: JurisdictionReport,
    jurisdiction: str,
    tier: str,
    subview: Subview,
    node_ids: set[str],
) -> None:
    location = f"{tier}.subviews[{subview.id}]"
    if subview.anchor is not None:
        for ref in subview.anchor.references():
            if ref not in node_ids:
                report.error(
                    DANGLING_REFERENCE,
                    f'Subview "{subview.id}" anchor missing: {ref}',
                    location=f"{location}.anchor",
                )
    for ref in subview.nodes:
        if ref not in node_ids:
            report.error(
                DANGLING_REFERENCE,
                f'Subview "{subview.id}" references missing node: {ref}',
                location=f"{location}.nodes",
            )
    for edge in subview.edges:
        for end in ("source", "target"):
            ref = getattr(edge, end)
            resolved = normalize_reference(ref, jurisdiction)
            if resolved not in node_ids:
                report.warning(
                    SUBVIEW_EDGE_UNRESOLVED,
                    f'Subview "{subview.id}" edge {end} missing namespace or node: {ref} (looking for {resolved})',
                    location=f"{location}.edges",
                )


def _check_tier_meta(report: JurisdictionReport, tier: str, document: JurisdictionDocument) -> None:
    if document.meta.tier != tier:
        report.warning(
            TIER_METADATA,
            f'{tier.capitalize()} file missing tier metadata (expected "{tier}", got "{document.meta.tier}")',
        )


class CorpusValidator:
    """Run the three-tier checks over every jurisdiction in a repository."""

    def __init__(self, repository: DocumentRepository) -> None:
        self._repository = repository

    def validate(self, jurisdictions: Iterable[str] = JURISDICTIONS) -> CorpusReport:
        report = CorpusReport(title=THREE_TIER_TITLE)
        for jurisdiction in jurisdictions:
            main = self._repository.load_optional(jurisdiction, "main")
            intra = self._repository.load_optional(jurisdiction, "intra")
            section = validate_jurisdiction(jurisdiction, main, intra)
            LOGGER.info(
                "corpus_validation.jurisdiction_done",
                jurisdiction=jurisdiction,
                errors=len(section.errors),
                warnings=len(section.warnings),
            )
            report.jurisdictions.append(section)
        return report
