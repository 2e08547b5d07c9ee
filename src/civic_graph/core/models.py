"""Record types for graph documents.

Every record keeps the keys it does not model in ``extra`` so that documents
round-trip through the tools without losing authored fields.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Literal, Mapping


def _split_extra(payload: Mapping[str, Any], known: Iterable[str]) -> dict[str, Any]:
    known_keys = set(known)
    return {key: deepcopy(value) for key, value in payload.items() if key not in known_keys}


def _compact(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in items if value is not None}


@dataclass(slots=True)
class Node:
    id: str
    label: str | None = None
    type: str | None = None
    branch: str | None = None
    factoid: str | None = None
    legacy_id: str | None = None
    position: dict[str, Any] | None = None
    parent: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("id", "label", "type", "branch", "factoid", "legacyId", "position", "parent")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Node":
        return cls(
            id=payload["id"],
            label=payload.get("label"),
            type=payload.get("type"),
            branch=payload.get("branch"),
            factoid=payload.get("factoid"),
            legacy_id=payload.get("legacyId"),
            position=deepcopy(payload.get("position")),
            parent=payload.get("parent"),
            extra=_split_extra(payload, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = _compact(
            [
                ("id", self.id),
                ("label", self.label),
                ("type", self.type),
                ("branch", self.branch),
                ("factoid", self.factoid),
                ("legacyId", self.legacy_id),
                ("position", deepcopy(self.position)),
                ("parent", self.parent),
            ]
        )
        payload.update(deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class Edge:
    source: str
    target: str
    id: str | None = None
    relation: str | None = None
    category: str | None = None
    detail: str | None = None
    hierarchical: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("source", "target", "id", "relation", "category", "detail", "hierarchical")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Edge":
        return cls(
            source=payload["source"],
            target=payload["target"],
            id=payload.get("id"),
            relation=payload.get("relation"),
            category=payload.get("category"),
            detail=payload.get("detail"),
            hierarchical=payload.get("hierarchical"),
            extra=_split_extra(payload, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = _compact(
            [
                ("source", self.source),
                ("target", self.target),
                ("id", self.id),
                ("relation", self.relation),
                ("category", self.category),
                ("detail", self.detail),
                ("hierarchical", self.hierarchical),
            ]
        )
        payload.update(deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class Process:
    id: str
    label: str | None = None
    nodes: list[str] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    steps: list[Any] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("id", "label", "nodes", "edges", "steps")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Process":
        return cls(
            id=payload["id"],
            label=payload.get("label"),
            nodes=list(payload.get("nodes") or []),
            edges=[Edge.from_dict(item) for item in payload.get("edges") or []],
            steps=deepcopy(list(payload.get("steps") or [])),
            extra=_split_extra(payload, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = _compact([("id", self.id), ("label", self.label)])
        payload["nodes"] = list(self.nodes)
        payload["edges"] = [edge.to_dict() for edge in self.edges]
        payload["steps"] = deepcopy(self.steps)
        payload.update(deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class SubviewAnchor:
    node_id: str | None = None
    node_ids: list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SubviewAnchor":
        node_ids = payload.get("nodeIds")
        return cls(
            node_id=payload.get("nodeId"),
            node_ids=list(node_ids) if node_ids is not None else None,
            extra=_split_extra(payload, ("nodeId", "nodeIds")),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = _compact([("nodeId", self.node_id), ("nodeIds", self.node_ids)])
        payload.update(deepcopy(self.extra))
        return payload

    def references(self) -> list[str]:
        refs: list[str] = []
        if self.node_id:
            refs.append(self.node_id)
        refs.extend(self.node_ids or [])
        return refs


@dataclass(slots=True)
class Subview:
    id: str
    anchor: SubviewAnchor | None = None
    nodes: list[str] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("id", "anchor", "nodes", "edges")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Subview":
        anchor = payload.get("anchor")
        return cls(
            id=payload["id"],
            anchor=SubviewAnchor.from_dict(anchor) if isinstance(anchor, Mapping) else None,
            nodes=list(payload.get("nodes") or []),
            edges=[Edge.from_dict(item) for item in payload.get("edges") or []],
            extra=_split_extra(payload, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id}
        if self.anchor is not None:
            payload["anchor"] = self.anchor.to_dict()
        payload["nodes"] = list(self.nodes)
        payload["edges"] = [edge.to_dict() for edge in self.edges]
        payload.update(deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class DocumentMeta:
    title: str | None = None
    description: str | None = None
    tier: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "DocumentMeta":
        payload = payload or {}
        return cls(
            title=payload.get("title"),
            description=payload.get("description"),
            tier=payload.get("tier"),
            extra=_split_extra(payload, ("title", "description", "tier")),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = _compact(
            [("title", self.title), ("description", self.description), ("tier", self.tier)]
        )
        payload.update(deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class JurisdictionDocument:
    meta: DocumentMeta = field(default_factory=DocumentMeta)
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    subviews: list[Subview] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("meta", "nodes", "edges", "subviews")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "JurisdictionDocument":
        subviews = payload.get("subviews")
        return cls(
            meta=DocumentMeta.from_dict(payload.get("meta")),
            nodes=[Node.from_dict(item) for item in payload.get("nodes") or []],
            edges=[Edge.from_dict(item) for item in payload.get("edges") or []],
            subviews=[Subview.from_dict(item) for item in subviews] if subviews is not None else None,
            extra=_split_extra(payload, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "meta": self.meta.to_dict(),
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
        if self.subviews is not None:
            payload["subviews"] = [subview.to_dict() for subview in self.subviews]
        payload.update(deepcopy(self.extra))
        return payload

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]


@dataclass(slots=True)
class ProcessCatalog:
    processes: list[Process] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProcessCatalog":
        return cls(
            processes=[Process.from_dict(item) for item in payload.get("processes") or []],
            extra=_split_extra(payload, ("processes",)),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"processes": [process.to_dict() for process in self.processes]}
        payload.update(deepcopy(self.extra))
        return payload

    def iter_edges(self) -> Iterator[tuple[Process, Edge]]:
        for process in self.processes:
            for edge in process.edges:
                yield process, edge


@dataclass(slots=True)
class SubgraphElement:
    """A Cytoscape element: attributes under ``data`` plus any sibling keys."""

    data: dict[str, Any]
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SubgraphElement":
        return cls(data=deepcopy(dict(payload["data"])), extra=_split_extra(payload, ("data",)))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"data": deepcopy(self.data)}
        payload.update(deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class SubgraphDocument:
    nodes: list[SubgraphElement] = field(default_factory=list)
    edges: list[SubgraphElement] = field(default_factory=list)
    entry_node_id: str | None = None
    elements_extra: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SubgraphDocument":
        elements = payload.get("elements") or {}
        return cls(
            nodes=[SubgraphElement.from_dict(item) for item in elements.get("nodes") or []],
            edges=[SubgraphElement.from_dict(item) for item in elements.get("edges") or []],
            entry_node_id=payload.get("entryNodeId"),
            elements_extra=_split_extra(elements, ("nodes", "edges")),
            extra=_split_extra(payload, ("elements", "entryNodeId")),
        )

    def to_dict(self) -> dict[str, Any]:
        elements: dict[str, Any] = {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
        elements.update(deepcopy(self.elements_extra))
        payload: dict[str, Any] = {"elements": elements}
        if self.entry_node_id is not None:
            payload["entryNodeId"] = self.entry_node_id
        payload.update(deepcopy(self.extra))
        return payload

    def node_ids(self) -> list[str]:
        return [node.data["id"] for node in self.nodes]


@dataclass(slots=True)
class ValidationFinding:
    severity: Literal["warning", "error"]
    code: str
    message: str
    jurisdiction: str | None = None
    location: str | None = None
    suggestions: list[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.severity == "error"
