"""Node batch merging."""

from .engine import (
    CandidateCheck,
    MergePlan,
    MergeResult,
    NodeMergeEngine,
    check_candidates,
    load_node_batch,
    plan_merge,
)

__all__ = [
    "CandidateCheck",
    "MergePlan",
    "MergeResult",
    "NodeMergeEngine",
    "check_candidates",
    "load_node_batch",
    "plan_merge",
]
