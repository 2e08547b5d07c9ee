"""Edge metadata inference for process edges."""

from .resolver import (
    EdgeMetadataResolver,
    EdgeMetadataResult,
    category_for,
    edge_id,
    infer_relation,
    rule_key,
)
from .taxonomy import (
    CATEGORIES,
    DEFAULT_RELATION,
    FALLBACK_CATEGORY,
    PROCESS_RELATION_RULES,
    RELATION_CATEGORIES,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_RELATION",
    "FALLBACK_CATEGORY",
    "PROCESS_RELATION_RULES",
    "RELATION_CATEGORIES",
    "EdgeMetadataResolver",
    "EdgeMetadataResult",
    "category_for",
    "edge_id",
    "infer_relation",
    "rule_key",
]
