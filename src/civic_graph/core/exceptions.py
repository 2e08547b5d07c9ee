"""Custom exception hierarchy for the civic graph toolchain."""

from __future__ import annotations

from typing import Iterable


class CivicGraphError(Exception):
    """Base error for the civic graph toolchain."""


class DocumentSchemaError(CivicGraphError):
    """Raised when a document fails schema validation at the load boundary."""


class DocumentNotFoundError(CivicGraphError, FileNotFoundError):
    """Raised when an expected document file is absent."""


class UnknownJurisdictionError(CivicGraphError):
    """Raised when a jurisdiction name is not one of city, state, federal."""


class ValidationError(CivicGraphError):
    """Raised when candidate nodes are missing required fields."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        summary = f"{len(self.messages)} validation error(s)"
        if self.messages:
            summary = f"{summary}: {self.messages[0]}"
        super().__init__(summary)


class ReferentialIntegrityError(CivicGraphError):
    """Raised when an id reference does not resolve to an existing node."""


class DuplicateIdError(CivicGraphError):
    """Raised when a node id occurs more than once in a jurisdiction."""


class NamespaceFormatError(CivicGraphError):
    """Raised when a node id lacks the expected jurisdiction prefix."""
