from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[2]))

from scripts import merge_generated_nodes

FACTOID = "Coordinates transportation planning across the five boroughs."


def _node(node_id: str, **overrides) -> dict:
    payload = {"id": node_id, "label": node_id, "type": "agency", "branch": "executive", "factoid": FACTOID}
    payload.update(overrides)
    return payload


def _seed(tmp_path: Path, batch: list[dict]) -> Path:
    (tmp_path / "city.json").write_text(
        json.dumps({"meta": {"tier": "main"}, "nodes": [_node("city:mayor_nyc")], "edges": []}),
        encoding="utf-8",
    )
    generated = tmp_path / "generated.json"
    generated.write_text(json.dumps(batch), encoding="utf-8")
    return generated


def test_merge_cli_appends_new_nodes(tmp_path, capsys) -> None:
    generated = _seed(tmp_path, [_node("mayor_nyc"), _node("dot")])

    exit_code = merge_generated_nodes.main(["city", str(generated), "--data-dir", str(tmp_path)])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Found 1 duplicate IDs (skipped):" in output
    assert "Total nodes: 1 -> 2" in output
    stored = json.loads((tmp_path / "city.json").read_text(encoding="utf-8"))
    assert [node["id"] for node in stored["nodes"]] == ["city:dot", "city:mayor_nyc"]
    assert (tmp_path / "city.json.backup").exists()


def test_merge_cli_dry_run_previews(tmp_path, capsys) -> None:
    generated = _seed(tmp_path, [_node("dot")])

    exit_code = merge_generated_nodes.main(["city", str(generated), "--data-dir", str(tmp_path), "--dry-run"])

    assert exit_code == 0
    assert "city:dot: dot" in capsys.readouterr().out
    assert not (tmp_path / "city.json.backup").exists()


def test_merge_cli_rejects_unknown_jurisdiction(tmp_path, capsys) -> None:
    generated = _seed(tmp_path, [_node("dot")])

    exit_code = merge_generated_nodes.main(["county", str(generated), "--data-dir", str(tmp_path)])

    assert exit_code == 1
    assert "Invalid jurisdiction: county" in capsys.readouterr().err


def test_merge_cli_lists_every_validation_error(tmp_path, capsys) -> None:
    generated = _seed(tmp_path, [_node("dot", label=""), _node("parks", branch=None)])

    exit_code = merge_generated_nodes.main(["city", str(generated), "--data-dir", str(tmp_path)])

    errors = capsys.readouterr().err
    assert exit_code == 1
    assert "Node dot: missing 'label' field" in errors
    assert "Node parks: missing 'branch' field" in errors
    assert not (tmp_path / "city.json.backup").exists()


def test_merge_cli_require_namespaced_rejects_bare_ids(tmp_path, capsys) -> None:
    generated = _seed(tmp_path, [_node("city:parks"), _node("dot")])

    exit_code = merge_generated_nodes.main(
        ["city", str(generated), "--data-dir", str(tmp_path), "--require-namespaced"]
    )

    assert exit_code == 1
    assert "'dot' lacks the 'city:' namespace prefix" in capsys.readouterr().err
    assert not (tmp_path / "city.json.backup").exists()
