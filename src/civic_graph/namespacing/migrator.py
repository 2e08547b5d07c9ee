"""Rewrite bare node ids to ``{jurisdiction}:{id}`` and propagate the rewrite.

A jurisdiction's canonical documents (main, then intra) are rewritten first;
the id map they produce then drives the rewrite of its process catalog and
subgraph files. Jurisdictions whose processes reference nodes owned elsewhere
are migrated after those owners, and the owners' maps are merged in.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from civic_graph.core.constants import (
    CROSS_JURISDICTION_REFERENCES,
    JURISDICTIONS,
    NAMESPACE_BACKUP_SUFFIX,
)
from civic_graph.core.logging import get_logger
from civic_graph.core.models import (
    Edge,
    JurisdictionDocument,
    ProcessCatalog,
    SubgraphDocument,
    Subview,
)
from civic_graph.storage import DocumentRepository

from .dependencies import migration_order, upstream_owners
from .ids import apply_namespace, has_namespace, strip_namespace

LOGGER = get_logger(__name__)

IdMap = dict[str, str]


@dataclass(slots=True)
class MigrationResult:
    jurisdiction: str
    node_count: int = 0
    renamed_nodes: int = 0
    example: tuple[str, str] | None = None
    files_written: list[str] = field(default_factory=list)
    files_pending: list[str] = field(default_factory=list)
    skipped: bool = False
    dry_run: bool = False


def build_id_map(document: JurisdictionDocument, jurisdiction: str) -> IdMap:
    """Map every id a node is or was known by to its namespaced id.

    Keys are the node's current id and its bare form (``legacyId`` when
    present, otherwise the id with any prefix stripped), so the map resolves
    references written before and after migration.
    """
    mapping: IdMap = {}
    for node in document.nodes:
        new_id = apply_namespace(node.id, jurisdiction)
        bare = node.legacy_id or (strip_namespace(node.id) if has_namespace(node.id, jurisdiction) else node.id)
        mapping.setdefault(bare, new_id)
        mapping[node.id] = new_id
    return mapping


def merge_id_maps(own: Mapping[str, str], *foreign: Mapping[str, str]) -> IdMap:
    """Combine maps; entries of the jurisdiction's own map win over foreign ones."""
    merged: IdMap = {}
    for mapping in foreign:
        merged.update(mapping)
    merged.update(own)
    return merged


def _remap(value: str, mapping: Mapping[str, str]) -> str:
    return mapping.get(value, value)


def _remap_edges(edges: Iterable[Edge], mapping: Mapping[str, str]) -> int:
    changed = 0
    for edge in edges:
        source, target = _remap(edge.source, mapping), _remap(edge.target, mapping)
        if (source, target) != (edge.source, edge.target):
            edge.source, edge.target = source, target
            changed += 1
    return changed


def _remap_subview(subview: Subview, mapping: Mapping[str, str]) -> None:
    if subview.anchor is not None:
        if subview.anchor.node_id:
            subview.anchor.node_id = _remap(subview.anchor.node_id, mapping)
        if subview.anchor.node_ids is not None:
            subview.anchor.node_ids = [_remap(item, mapping) for item in subview.anchor.node_ids]
    subview.nodes = [_remap(item, mapping) for item in subview.nodes]
    _remap_edges(subview.edges, mapping)


def namespace_document(
    document: JurisdictionDocument,
    jurisdiction: str,
    mapping: Mapping[str, str] | None = None,
) -> tuple[JurisdictionDocument, int]:
    """Return a namespaced copy of ``document`` and the number of renamed nodes.

    Nodes that already carry the prefix are left untouched, which makes the
    operation idempotent.
    """
    migrated = deepcopy(document)
    resolved = dict(mapping) if mapping is not None else build_id_map(document, jurisdiction)
    renamed = 0
    for node in migrated.nodes:
        new_id = apply_namespace(node.id, jurisdiction)
        if new_id != node.id:
            if node.legacy_id is None:
                node.legacy_id = node.id
            node.id = new_id
            renamed += 1
        if node.parent:
            node.parent = _remap(node.parent, resolved)
    _remap_edges(migrated.edges, resolved)
    for subview in migrated.subviews or []:
        _remap_subview(subview, resolved)
    return migrated, renamed


def namespace_processes(catalog: ProcessCatalog, mapping: Mapping[str, str]) -> tuple[ProcessCatalog, int]:
    """Rewrite each process' ``nodes`` list; returns the copy and the number of rewritten references."""
    migrated = deepcopy(catalog)
    changed = 0
    for process in migrated.processes:
        rewritten = [_remap(node_id, mapping) for node_id in process.nodes]
        changed += sum(1 for old, new in zip(process.nodes, rewritten) if old != new)
        process.nodes = rewritten
    return migrated, changed


def namespace_subgraph(document: SubgraphDocument, mapping: Mapping[str, str]) -> tuple[SubgraphDocument, int]:
    migrated = deepcopy(document)
    changed = 0
    for node in migrated.nodes:
        new_id = _remap(node.data["id"], mapping)
        if new_id != node.data["id"]:
            node.data["id"] = new_id
            changed += 1
    for edge in migrated.edges:
        for key in ("source", "target"):
            new_ref = _remap(edge.data[key], mapping)
            if new_ref != edge.data[key]:
                edge.data[key] = new_ref
                changed += 1
    if migrated.entry_node_id:
        new_entry = _remap(migrated.entry_node_id, mapping)
        if new_entry != migrated.entry_node_id:
            migrated.entry_node_id = new_entry
            changed += 1
    return migrated, changed


class NamespaceMigrator:
    """Apply namespace migration across the corpus held by a repository."""

    def __init__(
        self,
        repository: DocumentRepository,
        *,
        references: Mapping[str, Iterable[str]] = CROSS_JURISDICTION_REFERENCES,
    ) -> None:
        self._repository = repository
        self._references = references
        self._maps: dict[str, IdMap] = {}

    def migrate_all(
        self,
        jurisdictions: Iterable[str] = JURISDICTIONS,
        *,
        dry_run: bool = False,
    ) -> list[MigrationResult]:
        return [
            self.migrate(jurisdiction, dry_run=dry_run)
            for jurisdiction in migration_order(jurisdictions, self._references)
        ]

    def migrate(self, jurisdiction: str, *, dry_run: bool = False) -> MigrationResult:
        result = MigrationResult(jurisdiction=jurisdiction, dry_run=dry_run)
        if not self._repository.has(jurisdiction, "main"):
            LOGGER.warning("namespace_migration.file_skipped", jurisdiction=jurisdiction, tier="main")
            result.skipped = True
            return result

        own_map = self._migrate_canonical(jurisdiction, result)
        self._maps[jurisdiction] = own_map
        foreign = [self._owner_map(owner) for owner in upstream_owners(jurisdiction, self._references)]
        mapping = merge_id_maps(own_map, *foreign)
        self._migrate_processes(jurisdiction, mapping, result)
        self._migrate_subgraphs(jurisdiction, mapping, result)
        LOGGER.info(
            "namespace_migration.jurisdiction_done",
            jurisdiction=jurisdiction,
            renamed=result.renamed_nodes,
            written=len(result.files_written),
            dry_run=dry_run,
        )
        return result

    def _migrate_canonical(self, jurisdiction: str, result: MigrationResult) -> IdMap:
        main = self._repository.load(jurisdiction, "main")
        intra = self._repository.load_optional(jurisdiction, "intra")
        own_map = build_id_map(main, jurisdiction)
        if intra is not None:
            own_map = merge_id_maps(build_id_map(intra, jurisdiction), own_map)

        for tier, document in (("main", main), ("intra", intra)):
            if document is None:
                continue
            migrated, renamed = namespace_document(document, jurisdiction, own_map)
            result.node_count += len(document.nodes)
            result.renamed_nodes += renamed
            if result.example is None:
                for before, after in zip(document.nodes, migrated.nodes):
                    if before.id != after.id:
                        result.example = (before.id, after.id)
                        break
            if migrated.to_dict() == document.to_dict():
                continue
            self._persist(
                result,
                lambda doc=migrated, t=tier: self._repository.save(
                    jurisdiction, t, doc, backup_suffix=NAMESPACE_BACKUP_SUFFIX
                ),
                f"{jurisdiction}:{tier}",
            )
        return own_map

    def _owner_map(self, owner: str) -> IdMap:
        if owner in self._maps:
            return self._maps[owner]
        mapping: IdMap = {}
        for tier in ("main", "intra"):
            document = self._repository.load_optional(owner, tier)
            if document is not None:
                mapping = merge_id_maps(mapping, build_id_map(document, owner))
        self._maps[owner] = mapping
        return mapping

    def _migrate_processes(self, jurisdiction: str, mapping: IdMap, result: MigrationResult) -> None:
        if not self._repository.has_processes(jurisdiction):
            LOGGER.warning("namespace_migration.file_skipped", jurisdiction=jurisdiction, tier="processes")
            return
        catalog = self._repository.load_processes(jurisdiction)
        migrated, changed = namespace_processes(catalog, mapping)
        if not changed:
            return
        self._persist(
            result,
            lambda: self._repository.save_processes(
                jurisdiction, migrated, backup_suffix=NAMESPACE_BACKUP_SUFFIX
            ),
            f"{jurisdiction}:processes",
        )

    def _migrate_subgraphs(self, jurisdiction: str, mapping: IdMap, result: MigrationResult) -> None:
        for name in self._repository.list_subgraphs(jurisdiction):
            document = self._repository.load_subgraph(name)
            migrated, changed = namespace_subgraph(document, mapping)
            if not changed:
                continue
            self._persist(
                result,
                lambda doc=migrated, n=name: self._repository.save_subgraph(
                    n, doc, backup_suffix=NAMESPACE_BACKUP_SUFFIX
                ),
                f"subgraph:{name}",
            )

    @staticmethod
    def _persist(result: MigrationResult, write, label: str) -> None:
        if result.dry_run:
            result.files_pending.append(label)
            return
        result.files_written.append(write())
