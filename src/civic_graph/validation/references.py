"""Reference checks for process catalogs and subgraph files.

Every id a process or subgraph mentions must exist in the jurisdiction's
combined node set (plus the node sets of jurisdictions it is allowed to
reference). Missing ids get fuzzy-match suggestions from the same pool.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from civic_graph.core.config import Settings, get_settings
from civic_graph.core.constants import CROSS_JURISDICTION_REFERENCES, JURISDICTIONS
from civic_graph.core.logging import get_logger
from civic_graph.core.models import ProcessCatalog, SubgraphDocument
from civic_graph.namespacing.dependencies import upstream_owners
from civic_graph.storage import DocumentRepository

from .report import DANGLING_REFERENCE, CorpusReport, JurisdictionReport
from .similarity import find_similar

LOGGER = get_logger(__name__)

NODE_REFS_TITLE = "VALIDATING NODE REFERENCES"
NODE_REFS_STATS = (
    ("known_nodes", "Known nodes"),
    ("processes", "Processes"),
    ("subgraphs", "Subgraph files"),
)


def _ordered_unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def missing_process_references(catalog: ProcessCatalog, node_ids: set[str]) -> list[str]:
    return _ordered_unique(
        node_id for process in catalog.processes for node_id in process.nodes if node_id not in node_ids
    )


def missing_subgraph_references(document: SubgraphDocument, node_ids: set[str]) -> list[str]:
    refs: list[str] = list(document.node_ids())
    for edge in document.edges:
        refs.extend(str(edge.data[key]) for key in ("source", "target"))
    if document.entry_node_id:
        refs.append(document.entry_node_id)
    return _ordered_unique(ref for ref in refs if ref not in node_ids)


def check_references(
    jurisdiction: str,
    node_ids: Iterable[str],
    catalog: ProcessCatalog | None,
    subgraphs: Mapping[str, SubgraphDocument],
    *,
    suggestion_limit: int = 3,
    max_distance: int = 3,
) -> JurisdictionReport:
    """Report every process or subgraph reference absent from ``node_ids``."""
    known = set(node_ids)
    pool = sorted(known)
    report = JurisdictionReport(jurisdiction=jurisdiction)
    report.stats.update(
        known_nodes=len(known),
        processes=len(catalog.processes) if catalog is not None else 0,
        subgraphs=len(subgraphs),
    )

    def suggest(missing: str) -> list[str]:
        return find_similar(missing, pool, limit=suggestion_limit, max_distance=max_distance)

    if catalog is not None:
        for missing in missing_process_references(catalog, known):
            suggestions = suggest(missing)
            hint = "" if suggestions else f" (needs to be added to {jurisdiction} nodes)"
            report.error(
                DANGLING_REFERENCE,
                f'Processes reference missing node "{missing}"{hint}',
                location="processes",
                suggestions=suggestions,
            )
    for name, document in sorted(subgraphs.items()):
        for missing in missing_subgraph_references(document, known):
            report.error(
                DANGLING_REFERENCE,
                f'Subgraph {name} references missing node "{missing}"',
                location=f"subgraphs/{name}",
                suggestions=suggest(missing),
            )
    return report


class ReferenceValidator:
    """Check process and subgraph references for every jurisdiction in a repository."""

    def __init__(
        self,
        repository: DocumentRepository,
        settings: Settings | None = None,
        *,
        references: Mapping[str, Iterable[str]] = CROSS_JURISDICTION_REFERENCES,
    ) -> None:
        self._repository = repository
        self._settings = settings or get_settings()
        self._references = references

    def node_ids(self, jurisdiction: str) -> set[str]:
        ids: set[str] = set()
        for owner in (jurisdiction, *upstream_owners(jurisdiction, self._references)):
            for tier in ("main", "intra"):
                document = self._repository.load_optional(owner, tier)
                if document is not None:
                    ids.update(document.node_ids())
        return ids

    def validate(self, jurisdictions: Iterable[str] = JURISDICTIONS) -> CorpusReport:
        report = CorpusReport(title=NODE_REFS_TITLE)
        for jurisdiction in jurisdictions:
            catalog = (
                self._repository.load_processes(jurisdiction)
                if self._repository.has_processes(jurisdiction)
                else None
            )
            subgraphs = {
                name: self._repository.load_subgraph(name)
                for name in self._repository.list_subgraphs(jurisdiction)
            }
            section = check_references(
                jurisdiction,
                self.node_ids(jurisdiction),
                catalog,
                subgraphs,
                suggestion_limit=self._settings.suggestion_limit,
                max_distance=self._settings.suggestion_max_distance,
            )
            LOGGER.info(
                "reference_validation.jurisdiction_done",
                jurisdiction=jurisdiction,
                errors=len(section.errors),
            )
            report.jurisdictions.append(section)
        return report
