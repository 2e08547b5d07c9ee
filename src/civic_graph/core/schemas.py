"""JSON Schemas enforced when documents cross the load boundary."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from .exceptions import DocumentSchemaError

DocumentKind = Literal["jurisdiction", "processes", "subgraph", "node_batch"]

_ID = {"type": "string", "minLength": 1}

_EDGE = {
    "type": "object",
    "required": ["source", "target"],
    "properties": {
        "source": _ID,
        "target": _ID,
        "id": {"type": "string"},
        "relation": {"type": "string"},
        "category": {"type": "string"},
        "detail": {"type": "string"},
        "hierarchical": {"type": "boolean"},
    },
}

_NODE = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": _ID,
        "label": {"type": "string"},
        "type": {"type": "string"},
        "branch": {"type": "string"},
        "factoid": {"type": "string"},
        "legacyId": {"type": "string"},
        "position": {"type": "object"},
        "parent": {"type": "string"},
    },
}

_SUBVIEW = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": _ID,
        "anchor": {
            "type": "object",
            "properties": {
                "nodeId": {"type": "string"},
                "nodeIds": {"type": "array", "items": {"type": "string"}},
            },
        },
        "nodes": {"type": "array", "items": {"type": "string"}},
        "edges": {"type": "array", "items": _EDGE},
    },
}

_ELEMENT = {
    "type": "object",
    "required": ["data"],
    "properties": {"data": {"type": "object"}},
}

SCHEMAS: dict[str, dict[str, Any]] = {
    "jurisdiction": {
        "type": "object",
        "required": ["nodes"],
        "properties": {
            "meta": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "tier": {"type": "string"},
                },
            },
            "nodes": {"type": "array", "items": _NODE},
            "edges": {"type": "array", "items": _EDGE},
            "subviews": {"type": "array", "items": _SUBVIEW},
        },
    },
    "processes": {
        "type": "object",
        "required": ["processes"],
        "properties": {
            "processes": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["id"],
                    "properties": {
                        "id": _ID,
                        "label": {"type": "string"},
                        "nodes": {"type": "array", "items": {"type": "string"}},
                        "edges": {"type": "array", "items": _EDGE},
                        "steps": {"type": "array"},
                    },
                },
            }
        },
    },
    "subgraph": {
        "type": "object",
        "required": ["elements"],
        "properties": {
            "elements": {
                "type": "object",
                "properties": {
                    "nodes": {
                        "type": "array",
                        "items": {
                            "allOf": [
                                _ELEMENT,
                                {"properties": {"data": {"required": ["id"], "properties": {"id": _ID}}}},
                            ]
                        },
                    },
                    "edges": {
                        "type": "array",
                        "items": {
                            "allOf": [
                                _ELEMENT,
                                {
                                    "properties": {
                                        "data": {
                                            "required": ["source", "target"],
                                            "properties": {"source": _ID, "target": _ID},
                                        }
                                    }
                                },
                            ]
                        },
                    },
                },
            },
            "entryNodeId": {"type": "string"},
        },
    },
    # Required node fields are checked by the merge engine so that every
    # problem in a batch is reported at once.
    "node_batch": {"type": "array", "items": {"type": "object"}},
}


@lru_cache(maxsize=None)
def _validator(kind: str) -> Draft7Validator:
    schema = SCHEMAS[kind]
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def validate_document(kind: DocumentKind, payload: Any, *, source: str) -> None:
    """Raise ``DocumentSchemaError`` when ``payload`` does not match ``kind``."""
    error = best_match(_validator(kind).iter_errors(payload))
    if error is None:
        return
    location = "/" + "/".join(str(part) for part in error.absolute_path)
    raise DocumentSchemaError(f"{source}: invalid {kind} document at {location}: {error.message}")
