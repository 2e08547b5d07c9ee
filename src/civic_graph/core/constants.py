"""Shared constant values used across the civic graph toolchain."""

from __future__ import annotations

from typing import Final, Literal

Jurisdiction = Literal["city", "state", "federal"]
Tier = Literal["main", "intra"]

JURISDICTIONS: Final[tuple[Jurisdiction, ...]] = ("city", "state", "federal")
TIERS: Final[tuple[Tier, ...]] = ("main", "intra")

NAMESPACE_SEPARATOR: Final[str] = ":"
EDGE_ARROW: Final[str] = "→"

BACKUP_SUFFIX: Final[str] = ".backup"
EDGE_BACKUP_SUFFIX: Final[str] = ".backup-edges"
NAMESPACE_BACKUP_SUFFIX: Final[str] = ".backup-namespace"

REQUIRED_NODE_FIELDS: Final[tuple[str, ...]] = ("id", "label", "type", "branch", "factoid")

# Process files of the dependent jurisdiction reference nodes owned by the key.
CROSS_JURISDICTION_REFERENCES: Final[dict[str, tuple[str, ...]]] = {
    "city": ("state",),
}

MAIN_DOCUMENT_META: Final[dict[str, str]] = {
    "title": "Main Government Structure",
    "description": "Constitutional structures of NYC, New York State, and U.S. Federal government",
    "tier": "main",
    "version": "1.0.0",
}


def is_jurisdiction(value: str) -> bool:
    return value in JURISDICTIONS
