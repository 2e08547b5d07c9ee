"""Reference validation across the jurisdiction corpus."""

from .corpus import THREE_TIER_STATS, CorpusValidator, combined_node_ids, validate_jurisdiction
from .references import (
    NODE_REFS_STATS,
    ReferenceValidator,
    check_references,
    missing_process_references,
    missing_subgraph_references,
)
from .report import CorpusReport, JurisdictionReport, render_report
from .similarity import find_similar, is_similar, levenshtein_distance

__all__ = [
    "NODE_REFS_STATS",
    "THREE_TIER_STATS",
    "CorpusReport",
    "CorpusValidator",
    "JurisdictionReport",
    "ReferenceValidator",
    "check_references",
    "combined_node_ids",
    "find_similar",
    "is_similar",
    "levenshtein_distance",
    "missing_process_references",
    "missing_subgraph_references",
    "render_report",
    "validate_jurisdiction",
]
