"""Backfill ``relation``, ``category`` and ``id`` on process edges.

Backfill is non-destructive: a field that is already set is never replaced,
so curated relations survive even when a rule table disagrees.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from civic_graph.core.constants import EDGE_ARROW, EDGE_BACKUP_SUFFIX, JURISDICTIONS
from civic_graph.core.logging import get_logger
from civic_graph.core.models import Edge, ProcessCatalog
from civic_graph.namespacing.ids import strip_namespace
from civic_graph.storage import DocumentRepository

from .taxonomy import DEFAULT_RELATION, FALLBACK_CATEGORY, PROCESS_RELATION_RULES, RELATION_CATEGORIES

LOGGER = get_logger(__name__)


def rule_key(source: str, target: str) -> str:
    return f"{source}{EDGE_ARROW}{target}"


def edge_id(source: str, target: str, relation: str) -> str:
    """Deterministic edge id: ``{source}→{target}:{relation}``."""
    return f"{rule_key(source, target)}:{relation}"


def category_for(
    relation: str,
    taxonomy: Mapping[str, str] = RELATION_CATEGORIES,
) -> str:
    return taxonomy.get(relation, FALLBACK_CATEGORY)


def infer_relation(
    process_id: str,
    source: str,
    target: str,
    rules: Mapping[str, Mapping[str, str]] = PROCESS_RELATION_RULES,
    default: str = DEFAULT_RELATION,
) -> str:
    """Look up a process rule by namespaced ids, then by bare ids, else ``default``."""
    table = rules.get(process_id)
    if not table:
        return default
    relation = table.get(rule_key(source, target))
    if relation:
        return relation
    relation = table.get(rule_key(strip_namespace(source), strip_namespace(target)))
    if relation:
        return relation
    return default


@dataclass(slots=True)
class EdgeMetadataResult:
    jurisdiction: str
    total_edges: int = 0
    updated_edges: int = 0
    example: Edge | None = None
    written: str | None = None
    skipped: bool = False
    dry_run: bool = False

    @property
    def untouched_edges(self) -> int:
        return self.total_edges - self.updated_edges


class EdgeMetadataResolver:
    """Resolve missing edge metadata with process rules and the relation taxonomy."""

    def __init__(
        self,
        *,
        rules: Mapping[str, Mapping[str, str]] = PROCESS_RELATION_RULES,
        taxonomy: Mapping[str, str] = RELATION_CATEGORIES,
        default_relation: str = DEFAULT_RELATION,
    ) -> None:
        self._rules = rules
        self._taxonomy = taxonomy
        self._default_relation = default_relation

    def resolve_edge(self, process_id: str, edge: Edge) -> bool:
        """Fill missing fields on ``edge`` in place; returns whether anything was added."""
        if edge.relation and edge.category and edge.id:
            return False
        relation = edge.relation or infer_relation(
            process_id, edge.source, edge.target, self._rules, self._default_relation
        )
        edge.relation = relation
        if not edge.category:
            edge.category = category_for(relation, self._taxonomy)
        if not edge.id:
            edge.id = edge_id(edge.source, edge.target, relation)
        return True

    def resolve_catalog(self, catalog: ProcessCatalog) -> tuple[ProcessCatalog, int, int]:
        """Return a resolved copy of ``catalog`` with (total, updated) edge counts."""
        resolved = deepcopy(catalog)
        total = updated = 0
        for process, edge in resolved.iter_edges():
            total += 1
            if self.resolve_edge(process.id, edge):
                updated += 1
        return resolved, total, updated

    def apply(
        self,
        repository: DocumentRepository,
        jurisdiction: str,
        *,
        dry_run: bool = False,
    ) -> EdgeMetadataResult:
        result = EdgeMetadataResult(jurisdiction=jurisdiction, dry_run=dry_run)
        if not repository.has_processes(jurisdiction):
            LOGGER.warning("edge_metadata.file_skipped", jurisdiction=jurisdiction)
            result.skipped = True
            return result
        catalog = repository.load_processes(jurisdiction)
        resolved, result.total_edges, result.updated_edges = self.resolve_catalog(catalog)
        result.example = next((edge for _, edge in resolved.iter_edges()), None)
        if result.updated_edges and not dry_run:
            result.written = repository.save_processes(
                jurisdiction, resolved, backup_suffix=EDGE_BACKUP_SUFFIX
            )
        LOGGER.info(
            "edge_metadata.done",
            jurisdiction=jurisdiction,
            total=result.total_edges,
            updated=result.updated_edges,
            dry_run=dry_run,
        )
        return result

    def apply_all(
        self,
        repository: DocumentRepository,
        jurisdictions: Iterable[str] = JURISDICTIONS,
        *,
        dry_run: bool = False,
    ) -> list[EdgeMetadataResult]:
        return [self.apply(repository, jurisdiction, dry_run=dry_run) for jurisdiction in jurisdictions]
