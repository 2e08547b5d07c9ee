"""Namespace migration, subview id repair, and tier splitting."""

from .dependencies import document_dependencies, migration_order, upstream_owners
from .ids import (
    apply_namespace,
    has_any_namespace,
    has_namespace,
    namespace_prefix,
    normalize_reference,
    require_namespace,
    strip_namespace,
)
from .migrator import (
    MigrationResult,
    NamespaceMigrator,
    build_id_map,
    merge_id_maps,
    namespace_document,
    namespace_processes,
    namespace_subgraph,
)
from .subview_ids import SUBVIEW_RENAMES, SubviewFixResult, fix_repository_subviews, fix_subview_ids
from .tiers import MAIN_TIER_IDS, TierSplit, split_repository_tiers, split_tiers

__all__ = [
    "MAIN_TIER_IDS",
    "SUBVIEW_RENAMES",
    "MigrationResult",
    "NamespaceMigrator",
    "SubviewFixResult",
    "TierSplit",
    "apply_namespace",
    "build_id_map",
    "document_dependencies",
    "fix_repository_subviews",
    "fix_subview_ids",
    "has_any_namespace",
    "has_namespace",
    "merge_id_maps",
    "migration_order",
    "namespace_document",
    "namespace_prefix",
    "namespace_processes",
    "namespace_subgraph",
    "normalize_reference",
    "require_namespace",
    "split_repository_tiers",
    "split_tiers",
    "strip_namespace",
    "upstream_owners",
]
