from __future__ import annotations

from pathlib import Path

from civic_graph.core import config


def test_settings_defaults() -> None:
    settings = config.Settings()
    assert settings.data_dir == Path("data")
    assert settings.min_factoid_length == 20
    assert settings.regional_excluded_node_ids == ["public_authorities"]


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("CIVIC_GRAPH_MIN_FACTOID_LENGTH", "40")
    monkeypatch.setenv("CIVIC_GRAPH_LOG_LEVEL", "DEBUG")
    settings = config.Settings()
    assert settings.min_factoid_length == 40
    assert settings.log_level == "DEBUG"


def test_toml_overrides_keep_known_keys_only(tmp_path) -> None:
    path = tmp_path / ".civic_graph.toml"
    path.write_text(
        '[civic_graph]\ndata_dir = "corpus"\nsuggestion_limit = 5\nunknown_key = 1\n',
        encoding="utf-8",
    )
    overrides = config._load_settings_overrides(path)
    assert overrides == {"data_dir": "corpus", "suggestion_limit": 5}


def test_missing_toml_yields_no_overrides(tmp_path) -> None:
    assert config._load_settings_overrides(tmp_path / "absent.toml") == {}


def test_with_data_dir_returns_copy(tmp_path) -> None:
    settings = config.Settings()
    assert settings.with_data_dir(None) is settings
    moved = settings.with_data_dir(tmp_path)
    assert moved.data_dir == tmp_path
    assert settings.data_dir == Path("data")
