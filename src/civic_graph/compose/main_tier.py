"""Rebuild the aggregate cross-jurisdiction ``main`` document.

The aggregate is composed from the per-jurisdiction ``.backup`` documents plus
the regional overlay, whose nodes are folded into the ``state`` namespace.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Collection, Iterable, Mapping

from civic_graph.core.config import Settings, get_settings
from civic_graph.core.constants import BACKUP_SUFFIX, JURISDICTIONS, MAIN_DOCUMENT_META
from civic_graph.core.logging import get_logger
from civic_graph.core.models import DocumentMeta, Edge, JurisdictionDocument, Node
from civic_graph.namespacing.ids import apply_namespace, has_namespace, normalize_reference, strip_namespace
from civic_graph.storage import DocumentRepository, document_filename

LOGGER = get_logger(__name__)

REGIONAL = "regional"
REGIONAL_HOST = "state"


@dataclass(slots=True)
class Composition:
    document: JurisdictionDocument
    counts: dict[str, dict[str, int]] = field(default_factory=dict)
    skipped_regional_nodes: list[str] = field(default_factory=list)
    dropped_regional_edges: list[str] = field(default_factory=list)
    written: str | None = None


def _namespaced_node(node: Node, jurisdiction: str) -> Node:
    moved = deepcopy(node)
    moved.id = apply_namespace(node.id, jurisdiction)
    if moved.parent:
        moved.parent = normalize_reference(moved.parent, jurisdiction)
    return moved


def _namespaced_edge(edge: Edge, jurisdiction: str) -> Edge:
    # Endpoints already prefixed by any jurisdiction are cross-jurisdiction references.
    moved = deepcopy(edge)
    moved.source = normalize_reference(edge.source, jurisdiction)
    moved.target = normalize_reference(edge.target, jurisdiction)
    return moved


def compose_main(
    backups: Mapping[str, JurisdictionDocument],
    regional: JurisdictionDocument | None = None,
    *,
    excluded_regional_ids: Collection[str] = ("public_authorities",),
) -> Composition:
    """Namespace every backup node and edge, then overlay regional content onto ``state``."""
    document = JurisdictionDocument(meta=DocumentMeta.from_dict(MAIN_DOCUMENT_META))
    composition = Composition(document=document)
    node_ids: set[str] = set()

    for jurisdiction in JURISDICTIONS:
        source = backups.get(jurisdiction)
        if source is None:
            continue
        for node in source.nodes:
            moved = _namespaced_node(node, jurisdiction)
            document.nodes.append(moved)
            node_ids.add(moved.id)
        document.edges.extend(_namespaced_edge(edge, jurisdiction) for edge in source.edges)
        composition.counts[jurisdiction] = {"nodes": len(source.nodes), "edges": len(source.edges)}

    if regional is not None:
        excluded = set(excluded_regional_ids)
        added_nodes = added_edges = 0
        for node in regional.nodes:
            bare = strip_namespace(node.id) if has_namespace(node.id, REGIONAL_HOST) else node.id
            moved = _namespaced_node(node, REGIONAL_HOST)
            if bare in excluded or moved.id in node_ids:
                composition.skipped_regional_nodes.append(node.id)
                continue
            document.nodes.append(moved)
            node_ids.add(moved.id)
            added_nodes += 1
        for edge in regional.edges:
            moved = _namespaced_edge(edge, REGIONAL_HOST)
            if moved.source in node_ids and moved.target in node_ids:
                document.edges.append(moved)
                added_edges += 1
            else:
                composition.dropped_regional_edges.append(f"{moved.source} -> {moved.target}")
        composition.counts[REGIONAL] = {"nodes": added_nodes, "edges": added_edges}
    return composition


def count_by_namespace(document: JurisdictionDocument, jurisdictions: Iterable[str] = JURISDICTIONS) -> dict[str, int]:
    return {
        jurisdiction: sum(1 for node in document.nodes if has_namespace(node.id, jurisdiction))
        for jurisdiction in jurisdictions
    }


class MainTierComposer:
    def __init__(self, repository: DocumentRepository, settings: Settings | None = None) -> None:
        self._repository = repository
        self._settings = settings or get_settings()

    def compose(self, *, dry_run: bool = False) -> Composition:
        backups: dict[str, JurisdictionDocument] = {}
        for jurisdiction in JURISDICTIONS:
            key = document_filename(jurisdiction, "main") + BACKUP_SUFFIX
            if not self._repository.exists(key):
                LOGGER.warning("main_composer.backup_missing", jurisdiction=jurisdiction, key=key)
                continue
            backups[jurisdiction] = self._repository.load_backup(jurisdiction)

        regional = None
        if self._repository.has_regional():
            regional = self._repository.load_regional()
        else:
            LOGGER.warning("main_composer.regional_missing", key=self._settings.regional_filename)

        composition = compose_main(
            backups,
            regional,
            excluded_regional_ids=self._settings.regional_excluded_node_ids,
        )
        LOGGER.info(
            "main_composer.composed",
            nodes=len(composition.document.nodes),
            edges=len(composition.document.edges),
            dropped_regional_edges=len(composition.dropped_regional_edges),
        )
        if not dry_run:
            composition.written = self._repository.save_aggregate(composition.document)
        return composition
