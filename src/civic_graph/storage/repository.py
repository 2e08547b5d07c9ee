"""Repository abstraction over the per-jurisdiction JSON documents.

Services receive a repository and work on hydrated records; only the
repository knows about file names, backups and serialisation. Both
implementations share the load/save logic in ``DocumentRepository`` and differ
only in how a relative document key is read, written and copied.
"""

from __future__ import annotations

import shutil
from copy import deepcopy
from pathlib import Path
from typing import Any, Literal

from civic_graph.core.config import Settings, get_settings
from civic_graph.core.constants import BACKUP_SUFFIX, Tier, is_jurisdiction
from civic_graph.core.exceptions import DocumentNotFoundError, UnknownJurisdictionError
from civic_graph.core.json_utils import dump_json, load_json
from civic_graph.core.logging import get_logger
from civic_graph.core.models import JurisdictionDocument, ProcessCatalog, SubgraphDocument
from civic_graph.core.schemas import validate_document

LOGGER = get_logger(__name__)

DocumentSlot = Literal["main", "intra", "processes"]


def document_filename(jurisdiction: str, slot: DocumentSlot) -> str:
    if not is_jurisdiction(jurisdiction):
        raise UnknownJurisdictionError(f"Unknown jurisdiction: {jurisdiction!r}")
    if slot == "main":
        return f"{jurisdiction}.json"
    if slot == "intra":
        return f"{jurisdiction}-intra.json"
    if slot == "processes":
        return f"{jurisdiction}-processes.json"
    raise ValueError(f"Unknown document slot: {slot}")


class DocumentRepository:
    """Load and save graph documents addressed by jurisdiction and tier."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # -- storage primitives -------------------------------------------------

    def _read(self, key: str) -> Any:
        raise NotImplementedError

    def _write(self, key: str, payload: Any) -> None:
        raise NotImplementedError

    def _copy(self, key: str, target_key: str) -> None:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def _list(self, directory: str) -> list[str]:
        raise NotImplementedError

    # -- jurisdiction documents ---------------------------------------------

    def has(self, jurisdiction: str, tier: Tier) -> bool:
        return self.exists(document_filename(jurisdiction, tier))

    def load(self, jurisdiction: str, tier: Tier) -> JurisdictionDocument:
        return self._load_jurisdiction_document(document_filename(jurisdiction, tier))

    def load_optional(self, jurisdiction: str, tier: Tier) -> JurisdictionDocument | None:
        key = document_filename(jurisdiction, tier)
        if not self.exists(key):
            LOGGER.warning("repository.document_missing", key=key)
            return None
        return self._load_jurisdiction_document(key)

    def save(
        self,
        jurisdiction: str,
        tier: Tier,
        document: JurisdictionDocument,
        *,
        backup_suffix: str | None = None,
    ) -> str:
        key = document_filename(jurisdiction, tier)
        self._save(key, "jurisdiction", document.to_dict(), backup_suffix)
        return key

    def load_backup(self, jurisdiction: str, suffix: str = BACKUP_SUFFIX) -> JurisdictionDocument:
        return self._load_jurisdiction_document(document_filename(jurisdiction, "main") + suffix)

    # -- processes ----------------------------------------------------------

    def has_processes(self, jurisdiction: str) -> bool:
        return self.exists(document_filename(jurisdiction, "processes"))

    def load_processes(self, jurisdiction: str) -> ProcessCatalog:
        key = document_filename(jurisdiction, "processes")
        payload = self._read_validated(key, "processes")
        return ProcessCatalog.from_dict(payload)

    def save_processes(
        self,
        jurisdiction: str,
        catalog: ProcessCatalog,
        *,
        backup_suffix: str | None = None,
    ) -> str:
        key = document_filename(jurisdiction, "processes")
        self._save(key, "processes", catalog.to_dict(), backup_suffix)
        return key

    # -- subgraphs ----------------------------------------------------------

    def _subgraph_key(self, name: str) -> str:
        return f"{self._settings.subgraphs_dir.as_posix()}/{name}"

    def list_subgraphs(self, jurisdiction: str) -> list[str]:
        names = self._list(self._settings.subgraphs_dir.as_posix())
        return sorted(name for name in names if name.startswith(jurisdiction) and name.endswith(".json"))

    def load_subgraph(self, name: str) -> SubgraphDocument:
        payload = self._read_validated(self._subgraph_key(name), "subgraph")
        return SubgraphDocument.from_dict(payload)

    def save_subgraph(
        self,
        name: str,
        document: SubgraphDocument,
        *,
        backup_suffix: str | None = None,
    ) -> str:
        key = self._subgraph_key(name)
        self._save(key, "subgraph", document.to_dict(), backup_suffix)
        return key

    # -- regional overlay and aggregate -------------------------------------

    def has_regional(self) -> bool:
        return self.exists(self._settings.regional_filename)

    def load_regional(self) -> JurisdictionDocument:
        return self._load_jurisdiction_document(self._settings.regional_filename)

    def save_aggregate(self, document: JurisdictionDocument) -> str:
        key = self._settings.main_output_filename
        self._save(key, "jurisdiction", document.to_dict(), None)
        return key

    # -- shared logic -------------------------------------------------------

    def _load_jurisdiction_document(self, key: str) -> JurisdictionDocument:
        payload = self._read_validated(key, "jurisdiction")
        return JurisdictionDocument.from_dict(payload)

    def _read_validated(self, key: str, kind: Literal["jurisdiction", "processes", "subgraph"]) -> Any:
        if not self.exists(key):
            raise DocumentNotFoundError(f"{key} not found")
        payload = self._read(key)
        validate_document(kind, payload, source=key)
        return payload

    def _save(
        self,
        key: str,
        kind: Literal["jurisdiction", "processes", "subgraph"],
        payload: Any,
        backup_suffix: str | None,
    ) -> None:
        validate_document(kind, payload, source=key)
        if backup_suffix and self.exists(key):
            self._copy(key, key + backup_suffix)
            LOGGER.info("repository.backup_written", key=key, backup=key + backup_suffix)
        self._write(key, payload)
        LOGGER.info("repository.document_written", key=key)


class FileDocumentRepository(DocumentRepository):
    """Documents stored as pretty-printed JSON files under ``settings.data_dir``."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__(settings)
        self._root = Path(self._settings.data_dir)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        return self._root / key

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def _read(self, key: str) -> Any:
        return load_json(self.path_for(key))

    def _write(self, key: str, payload: Any) -> None:
        dump_json(payload, self.path_for(key), indent=self._settings.json_indent)

    def _copy(self, key: str, target_key: str) -> None:
        shutil.copyfile(self.path_for(key), self.path_for(target_key))

    def _list(self, directory: str) -> list[str]:
        folder = self._root / directory
        if not folder.is_dir():
            return []
        return [entry.name for entry in folder.iterdir() if entry.is_file()]


class InMemoryDocumentRepository(DocumentRepository):
    """Dictionary-backed repository used by tests and dry runs."""

    def __init__(
        self,
        documents: dict[str, Any] | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(settings or Settings())
        self.documents: dict[str, Any] = deepcopy(documents or {})
        self.backups: list[str] = []
        self.writes: list[str] = []

    def exists(self, key: str) -> bool:
        return key in self.documents

    def _read(self, key: str) -> Any:
        return deepcopy(self.documents[key])

    def _write(self, key: str, payload: Any) -> None:
        self.documents[key] = deepcopy(payload)
        self.writes.append(key)

    def _copy(self, key: str, target_key: str) -> None:
        self.documents[target_key] = deepcopy(self.documents[key])
        self.backups.append(target_key)

    def _list(self, directory: str) -> list[str]:
        prefix = directory.rstrip("/") + "/"
        return [key[len(prefix):] for key in self.documents if key.startswith(prefix) and "/" not in key[len(prefix):]]
