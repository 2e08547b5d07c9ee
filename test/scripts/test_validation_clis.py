from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[2]))

from scripts import validate_node_refs, validate_three_tier


def _write(root: Path, name: str, payload) -> None:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def _seed_city(root: Path, *, edge_target: str = "city:city_council") -> None:
    _write(
        root,
        "city.json",
        {
            "meta": {"tier": "main"},
            "nodes": [{"id": "city:mayor_nyc"}, {"id": "city:city_council"}],
            "edges": [{"source": "city:mayor_nyc", "target": edge_target}],
        },
    )


def test_three_tier_validator_exits_one_for_dangling_edge(tmp_path, capsys) -> None:
    _seed_city(tmp_path, edge_target="city:ghost")

    exit_code = validate_three_tier.main(["--data-dir", str(tmp_path), "--jurisdiction", "city"])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert "Main edge references missing target: city:ghost" in output
    assert "VALIDATION FAILED - 1 errors found" in output


def test_three_tier_validator_passes_clean_corpus(tmp_path, capsys) -> None:
    _seed_city(tmp_path)

    exit_code = validate_three_tier.main(["--data-dir", str(tmp_path), "--jurisdiction", "city"])

    assert exit_code == 0
    assert "VALIDATION PASSED" in capsys.readouterr().out


def test_node_ref_validator_prints_suggestions(tmp_path, capsys) -> None:
    _seed_city(tmp_path)
    _write(tmp_path, "city-processes.json", {"processes": [{"id": "budget", "nodes": ["city:mayer_nyc"]}]})

    exit_code = validate_node_refs.main(["--data-dir", str(tmp_path), "--jurisdiction", "city"])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert "did you mean: city:mayor_nyc?" in output
    assert "Next steps:" in output


def test_node_ref_validator_reports_malformed_file(tmp_path, capsys) -> None:
    _write(tmp_path, "city.json", {"nodes": "not-a-list"})

    exit_code = validate_node_refs.main(["--data-dir", str(tmp_path), "--jurisdiction", "city"])

    assert exit_code == 1
    assert "invalid jurisdiction document" in capsys.readouterr().err


def test_strict_mode_fails_on_warnings(tmp_path, capsys) -> None:
    _write(
        tmp_path,
        "city.json",
        {"nodes": [{"id": "city:mayor_nyc"}], "edges": []},
    )
    args = ["--data-dir", str(tmp_path), "--jurisdiction", "city"]

    assert validate_three_tier.main(args) == 0
    capsys.readouterr()

    exit_code = validate_three_tier.main([*args, "--strict"])

    assert exit_code == 1
    assert "Main file missing tier metadata" in capsys.readouterr().err


def test_strict_mode_passes_clean_corpus(tmp_path, capsys) -> None:
    _seed_city(tmp_path)

    exit_code = validate_node_refs.main(["--data-dir", str(tmp_path), "--jurisdiction", "city", "--strict"])

    assert exit_code == 0
    assert "ERROR (strict)" not in capsys.readouterr().err
