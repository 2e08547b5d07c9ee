"""Validate and merge externally generated node batches into a canonical file."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from civic_graph.core.config import Settings, get_settings
from civic_graph.core.constants import BACKUP_SUFFIX, REQUIRED_NODE_FIELDS
from civic_graph.core.exceptions import DocumentSchemaError, ValidationError
from civic_graph.core.json_utils import load_json
from civic_graph.core.logging import get_logger
from civic_graph.core.models import JurisdictionDocument, Node
from civic_graph.core.schemas import validate_document
from civic_graph.namespacing.ids import apply_namespace, require_namespace
from civic_graph.storage import DocumentRepository

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class CandidateCheck:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class MergePlan:
    document: JurisdictionDocument
    additions: list[Node] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_before: int = 0

    @property
    def total_after(self) -> int:
        return len(self.document.nodes)


@dataclass(slots=True)
class MergeResult:
    jurisdiction: str
    plan: MergePlan
    written: str | None = None
    backup: str | None = None
    dry_run: bool = False


def load_node_batch(path: Path) -> list[dict[str, Any]]:
    """Read a generated batch: a JSON array of nodes or an object with ``nodes``."""
    payload = load_json(path)
    if isinstance(payload, dict):
        if "nodes" not in payload:
            raise DocumentSchemaError(f"{path}: expected a node array or an object with 'nodes'")
        payload = payload["nodes"]
    validate_document("node_batch", payload, source=str(path))
    return payload


def check_candidates(
    candidates: Sequence[Mapping[str, Any]],
    *,
    min_factoid_length: int = 20,
) -> CandidateCheck:
    """Collect every missing required field; short factoids are only warnings."""
    check = CandidateCheck()
    for index, node in enumerate(candidates):
        label = node.get("id") or f"at index {index}"
        for name in REQUIRED_NODE_FIELDS:
            value = node.get(name)
            if not isinstance(value, str) or not value.strip():
                check.errors.append(f"Node {label}: missing '{name}' field")
        factoid = node.get("factoid")
        if isinstance(factoid, str) and factoid.strip() and len(factoid) < min_factoid_length:
            check.warnings.append(f"Node {label}: factoid seems too short (< {min_factoid_length} chars)")
    return check


def plan_merge(
    existing: JurisdictionDocument,
    candidates: Sequence[Mapping[str, Any]],
    jurisdiction: str,
    *,
    namespace: bool = True,
    reserved_ids: Iterable[str] = (),
) -> MergePlan:
    """Compute additions and duplicates; the returned document is sorted by id.

    ``reserved_ids`` are ids held elsewhere in the jurisdiction (the intra tier)
    that a candidate must not reuse. With ``namespace=False`` every candidate
    must already carry the jurisdiction prefix.
    """
    merged = deepcopy(existing)
    plan = MergePlan(document=merged, total_before=len(existing.nodes))

    def normalise(node_id: str) -> str:
        return apply_namespace(node_id, jurisdiction) if namespace else node_id

    if not namespace:
        for payload in candidates:
            require_namespace(payload["id"], jurisdiction)

    existing_ids = {normalise(node.id) for node in existing.nodes}
    reserved = {normalise(node_id) for node_id in reserved_ids} - existing_ids
    batch_ids: set[str] = set()
    for payload in candidates:
        node = Node.from_dict(payload)
        node_id = normalise(node.id)
        if node_id != node.id:
            node.legacy_id = node.legacy_id or node.id
            node.id = node_id
        if node_id in existing_ids:
            plan.duplicates.append(node_id)
        elif node_id in reserved:
            plan.duplicates.append(f"{node_id} (already in intra tier)")
        elif node_id in batch_ids:
            plan.duplicates.append(f"{node_id} (duplicate in generated file)")
        else:
            batch_ids.add(node_id)
            plan.additions.append(node)

    merged.nodes.extend(deepcopy(node) for node in plan.additions)
    merged.nodes.sort(key=lambda node: node.id)
    return plan


class NodeMergeEngine:
    """All-or-nothing merge of candidate nodes into ``{jurisdiction}.json``."""

    def __init__(self, repository: DocumentRepository, settings: Settings | None = None) -> None:
        self._repository = repository
        self._settings = settings or get_settings()

    def merge(
        self,
        jurisdiction: str,
        candidates: Sequence[Mapping[str, Any]],
        *,
        namespace: bool = True,
        dry_run: bool = False,
    ) -> MergeResult:
        existing = self._repository.load(jurisdiction, "main")
        check = check_candidates(candidates, min_factoid_length=self._settings.min_factoid_length)
        if not check.ok:
            LOGGER.warning("node_merge.validation_failed", jurisdiction=jurisdiction, errors=len(check.errors))
            raise ValidationError(check.errors)

        intra = self._repository.load_optional(jurisdiction, "intra")
        reserved = intra.node_ids() if intra is not None else []
        plan = plan_merge(existing, candidates, jurisdiction, namespace=namespace, reserved_ids=reserved)
        plan.warnings = check.warnings
        result = MergeResult(jurisdiction=jurisdiction, plan=plan, dry_run=dry_run)
        LOGGER.info(
            "node_merge.planned",
            jurisdiction=jurisdiction,
            additions=len(plan.additions),
            duplicates=len(plan.duplicates),
            dry_run=dry_run,
        )
        if dry_run or not plan.additions:
            return result

        result.written = self._repository.save(jurisdiction, "main", plan.document, backup_suffix=BACKUP_SUFFIX)
        result.backup = result.written + BACKUP_SUFFIX
        LOGGER.info("node_merge.written", jurisdiction=jurisdiction, backup=result.backup)
        return result
