"""Shared core utilities for the civic graph toolchain."""

from .config import Settings, get_settings
from .constants import JURISDICTIONS, TIERS, Jurisdiction, Tier, is_jurisdiction
from .exceptions import (
    CivicGraphError,
    DocumentNotFoundError,
    DocumentSchemaError,
    DuplicateIdError,
    NamespaceFormatError,
    ReferentialIntegrityError,
    UnknownJurisdictionError,
    ValidationError,
)
from .logging import bind_run_context, configure_logging, get_logger
from .models import (
    DocumentMeta,
    Edge,
    JurisdictionDocument,
    Node,
    Process,
    ProcessCatalog,
    SubgraphDocument,
    SubgraphElement,
    Subview,
    SubviewAnchor,
    ValidationFinding,
)

__all__ = [
    "JURISDICTIONS",
    "TIERS",
    "Jurisdiction",
    "Tier",
    "Settings",
    "get_settings",
    "is_jurisdiction",
    "bind_run_context",
    "configure_logging",
    "get_logger",
    "CivicGraphError",
    "DocumentNotFoundError",
    "DocumentSchemaError",
    "DuplicateIdError",
    "NamespaceFormatError",
    "ReferentialIntegrityError",
    "UnknownJurisdictionError",
    "ValidationError",
    "DocumentMeta",
    "Edge",
    "JurisdictionDocument",
    "Node",
    "Process",
    "ProcessCatalog",
    "SubgraphDocument",
    "SubgraphElement",
    "Subview",
    "SubviewAnchor",
    "ValidationFinding",
]
