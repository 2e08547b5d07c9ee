"""Helpers for jurisdiction-prefixed node ids."""

from __future__ import annotations

from civic_graph.core.constants import JURISDICTIONS, NAMESPACE_SEPARATOR
from civic_graph.core.exceptions import NamespaceFormatError


def namespace_prefix(jurisdiction: str) -> str:
    return f"{jurisdiction}{NAMESPACE_SEPARATOR}"


def has_namespace(node_id: str, jurisdiction: str) -> bool:
    return node_id.startswith(namespace_prefix(jurisdiction))


def has_any_namespace(node_id: str) -> bool:
    return any(has_namespace(node_id, jurisdiction) for jurisdiction in JURISDICTIONS)


def apply_namespace(node_id: str, jurisdiction: str) -> str:
    """Prefix ``node_id`` with ``jurisdiction``; already-prefixed ids are returned unchanged."""
    if has_namespace(node_id, jurisdiction):
        return node_id
    return namespace_prefix(jurisdiction) + node_id


def strip_namespace(node_id: str) -> str:
    """Drop the leading ``{jurisdiction}:`` segment, if any."""
    head, separator, tail = node_id.partition(NAMESPACE_SEPARATOR)
    if not separator or not tail:
        return node_id
    return tail


def normalize_reference(node_id: str, jurisdiction: str) -> str:
    """Qualify a bare id with ``jurisdiction``; ids that carry any prefix are kept."""
    if NAMESPACE_SEPARATOR in node_id:
        return node_id
    return namespace_prefix(jurisdiction) + node_id


def require_namespace(node_id: str, jurisdiction: str) -> str:
    if not has_namespace(node_id, jurisdiction):
        raise NamespaceFormatError(
            f"{node_id!r} lacks the {namespace_prefix(jurisdiction)!r} namespace prefix"
        )
    return node_id
