"""Document repositories: the only place graph documents touch storage."""

from .repository import (
    DocumentRepository,
    FileDocumentRepository,
    InMemoryDocumentRepository,
    document_filename,
)

__all__ = [
    "DocumentRepository",
    "FileDocumentRepository",
    "InMemoryDocumentRepository",
    "document_filename",
]
