from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[2]))

from scripts import (
    add_edge_metadata,
    fix_subview_ids,
    migrate_node_namespaces,
    rebuild_main_from_backups,
    split_tiers,
)


def _write(root: Path, name: str, payload) -> None:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def _read(root: Path, name: str):
    return json.loads((root / name).read_text(encoding="utf-8"))


def test_migrate_cli_namespaces_and_backs_up(tmp_path, capsys) -> None:
    _write(tmp_path, "city.json", {"meta": {"tier": "main"}, "nodes": [{"id": "mayor_nyc"}], "edges": []})
    _write(tmp_path, "city-processes.json", {"processes": [{"id": "budget", "nodes": ["mayor_nyc"]}]})

    exit_code = migrate_node_namespaces.main(["--data-dir", str(tmp_path)])

    assert exit_code == 0
    assert _read(tmp_path, "city.json")["nodes"] == [{"id": "city:mayor_nyc", "legacyId": "mayor_nyc"}]
    assert _read(tmp_path, "city-processes.json")["processes"][0]["nodes"] == ["city:mayor_nyc"]
    assert (tmp_path / "city.json.backup-namespace").exists()
    output = capsys.readouterr().out
    assert "MIGRATION COMPLETE" in output
    assert "federal.json not found, skipping" in output


def test_edge_metadata_cli_dry_run_leaves_files(tmp_path, capsys) -> None:
    catalog = {"processes": [{"id": "ulurp", "edges": [{"source": "city:DCP", "target": "city:community_boards"}]}]}
    _write(tmp_path, "city-processes.json", catalog)

    exit_code = add_edge_metadata.main(["--data-dir", str(tmp_path), "--jurisdiction", "city", "--dry-run"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Would update 1/1 edges (0 untouched)" in output
    assert "relation: submits_to" in output
    assert _read(tmp_path, "city-processes.json") == catalog


def test_rebuild_main_cli_writes_aggregate(tmp_path, capsys) -> None:
    _write(tmp_path, "city.json.backup", {"nodes": [{"id": "mayor_nyc"}], "edges": []})
    _write(tmp_path, "regional.json", {"nodes": [{"id": "mta"}], "edges": []})

    exit_code = rebuild_main_from_backups.main(["--data-dir", str(tmp_path)])

    assert exit_code == 0
    ids = [node["id"] for node in _read(tmp_path, "main.json")["nodes"]]
    assert ids == ["city:mayor_nyc", "state:mta"]
    assert "Rebuilt main.json with 2 nodes and 0 edges" in capsys.readouterr().out


def test_fix_subview_ids_cli_uses_mapping_file(tmp_path, capsys) -> None:
    _write(
        tmp_path,
        "city-intra.json",
        {"nodes": [{"id": "city:dot_nyc"}], "edges": [], "subviews": [{"id": "transport", "nodes": ["city:dot"]}]},
    )
    mapping = tmp_path / "renames.json"
    mapping.write_text(json.dumps({"city": {"dot": "dot_nyc"}}), encoding="utf-8")

    exit_code = fix_subview_ids.main(["--data-dir", str(tmp_path), "--mapping", str(mapping)])

    assert exit_code == 0
    assert _read(tmp_path, "city-intra.json")["subviews"][0]["nodes"] == ["city:dot_nyc"]
    assert (tmp_path / "city-intra.json.backup").exists()
    assert "Applied 1 subview id fixes" in capsys.readouterr().out


def test_split_tiers_cli(tmp_path, capsys) -> None:
    _write(
        tmp_path,
        "federal.json",
        {"nodes": [{"id": "president"}, {"id": "fema"}], "edges": [{"source": "president", "target": "fema"}]},
    )

    exit_code = split_tiers.main(["--data-dir", str(tmp_path), "--jurisdiction", "federal"])

    assert exit_code == 0
    assert [node["id"] for node in _read(tmp_path, "federal.json")["nodes"]] == ["federal:president"]
    assert [node["id"] for node in _read(tmp_path, "federal-intra.json")["nodes"]] == ["federal:fema"]
    assert "intra: 1 nodes, 1 edges" in capsys.readouterr().out
