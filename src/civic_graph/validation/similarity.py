"""String similarity used to suggest corrections for broken references."""

from __future__ import annotations

from typing import Iterable


def levenshtein_distance(left: str, right: str) -> int:
    """Compute Levenshtein edit distance."""
    if len(left) < len(right):
        return levenshtein_distance(right, left)
    if not right:
        return len(left)

    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left):
        current = [i + 1]
        for j, right_char in enumerate(right):
            insertions = previous[j + 1] + 1
            deletions = current[j] + 1
            substitutions = previous[j] + (left_char != right_char)
            current.append(min(insertions, deletions, substitutions))
        previous = current
    return previous[-1]


def is_similar(missing: str, candidate: str, *, max_distance: int = 3) -> bool:
    """Case-insensitive containment either way, or edit distance below ``max_distance``."""
    missing_lower = missing.lower()
    candidate_lower = candidate.lower()
    if candidate_lower in missing_lower or missing_lower in candidate_lower:
        return True
    return levenshtein_distance(missing_lower, candidate_lower) < max_distance


def find_similar(
    missing: str,
    candidates: Iterable[str],
    *,
    limit: int = 3,
    max_distance: int = 3,
) -> list[str]:
    """Return up to ``limit`` candidates similar to ``missing``, in candidate order."""
    matches: list[str] = []
    for candidate in candidates:
        if candidate == missing:
            continue
        if is_similar(missing, candidate, max_distance=max_distance):
            matches.append(candidate)
            if len(matches) >= limit:
                break
    return matches
