"""JSON file helpers shared by the repository and scripts."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .exceptions import DocumentNotFoundError, DocumentSchemaError


def load_json(path: Path) -> Any:
    """Read a UTF-8 JSON file, mapping decode failures to ``DocumentSchemaError``."""
    if not path.exists():
        raise DocumentNotFoundError(f"{path} not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DocumentSchemaError(f"{path}: malformed JSON ({exc})") from exc


def render_json(data: Any, *, indent: int = 2) -> str:
    return json.dumps(data, ensure_ascii=False, indent=indent) + "\n"


def dump_json(data: Any, path: Path, *, indent: int = 2) -> None:
    """Atomically write JSON to disk, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", dir=path.parent, encoding="utf-8", delete=False, suffix=".tmp"
    ) as tmp:
        tmp.write(render_json(data, indent=indent))
        tmp.flush()
        os.fsync(tmp.fileno())
        temp_name = tmp.name
    os.replace(temp_name, path)
