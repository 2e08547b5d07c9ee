"""Application configuration primitives."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OVERRIDES_PATH = Path(".civic_graph.toml")


class Settings(BaseSettings):
    """Central configuration for the graph integrity tools."""

    data_dir: Path = Path("data")
    subgraphs_dir: Path = Path("subgraphs")
    regional_filename: str = "regional.json"
    main_output_filename: str = "main.json"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "console"] = "json"
    json_indent: int = 2

    min_factoid_length: int = 20
    suggestion_limit: int = 3
    suggestion_max_distance: int = 3
    regional_excluded_node_ids: list[str] = ["public_authorities"]

    model_config = SettingsConfigDict(env_prefix="CIVIC_GRAPH_", env_file=(), extra="ignore")

    def with_data_dir(self, data_dir: Path | str | None) -> "Settings":
        """Return a copy rooted at ``data_dir`` (or ``self`` when not given)."""
        if data_dir is None:
            return self
        return self.model_copy(update={"data_dir": Path(data_dir)})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    overrides = _load_settings_overrides()
    return Settings(**overrides)


def _load_settings_overrides(path: Path = DEFAULT_OVERRIDES_PATH) -> dict[str, Any]:
    """Load configuration overrides from the optional TOML file."""
    if not path.exists():
        return {}
    data = _read_toml(path)
    section = data.get("civic_graph") or {}
    if not isinstance(section, dict):
        return {}
    overrides = {key: value for key, value in section.items() if key in Settings.model_fields}
    return {key: value for key, value in overrides.items() if value is not None}


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)
