from __future__ import annotations

import json

import pytest

from civic_graph.core.exceptions import DocumentSchemaError, NamespaceFormatError, ValidationError
from civic_graph.merge import NodeMergeEngine, check_candidates, load_node_batch
from civic_graph.storage import InMemoryDocumentRepository

FACTOID = "Long enough description of the office for review."


def _candidate(node_id: str, **overrides) -> dict:
    payload = {
        "id": node_id,
        "label": node_id.replace("_", " ").title(),
        "type": "agency",
        "branch": "executive",
        "factoid": FACTOID,
    }
    payload.update(overrides)
    return payload


def _repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository(
        {
            "city.json": {
                "meta": {"tier": "main"},
                "nodes": [_candidate("city:mayor_nyc"), _candidate("city:comptroller")],
                "edges": [],
            }
        }
    )


def test_merge_adds_new_node_and_reports_duplicate() -> None:
    repository = _repository()
    engine = NodeMergeEngine(repository, repository.settings)

    result = engine.merge("city", [_candidate("mayor_nyc"), _candidate("city_council")])

    plan = result.plan
    assert [node.id for node in plan.additions] == ["city:city_council"]
    assert plan.additions[0].legacy_id == "city_council"
    assert plan.duplicates == ["city:mayor_nyc"]
    assert (plan.total_before, plan.total_after) == (2, 3)
    ids = [node["id"] for node in repository.documents["city.json"]["nodes"]]
    assert ids == ["city:city_council", "city:comptroller", "city:mayor_nyc"]
    assert repository.backups == ["city.json.backup"]
    assert result.backup == "city.json.backup"


def test_missing_fields_abort_before_any_write() -> None:
    repository = _repository()
    engine = NodeMergeEngine(repository, repository.settings)
    broken = _candidate("dot")
    del broken["label"]
    broken["factoid"] = " "

    with pytest.raises(ValidationError) as excinfo:
        engine.merge("city", [broken, _candidate("parks")])

    assert excinfo.value.messages == [
        "Node dot: missing 'label' field",
        "Node dot: missing 'factoid' field",
    ]
    assert repository.writes == []


def test_dry_run_plans_without_writing() -> None:
    repository = _repository()
    result = NodeMergeEngine(repository, repository.settings).merge("city", [_candidate("parks")], dry_run=True)
    assert result.plan.total_after == 3
    assert result.written is None
    assert repository.writes == []


def test_all_duplicates_write_nothing() -> None:
    repository = _repository()
    result = NodeMergeEngine(repository, repository.settings).merge("city", [_candidate("city:comptroller")])
    assert result.plan.additions == []
    assert repository.writes == []


def test_duplicates_inside_batch_are_flagged() -> None:
    repository = _repository()
    result = NodeMergeEngine(repository, repository.settings).merge(
        "city", [_candidate("parks"), _candidate("city:parks")], dry_run=True
    )
    assert result.plan.duplicates == ["city:parks (duplicate in generated file)"]


def test_ids_held_by_intra_tier_are_duplicates() -> None:
    repository = _repository()
    repository.documents["city-intra.json"] = {
        "meta": {"tier": "intra"},
        "nodes": [_candidate("city:dot")],
        "edges": [],
    }
    engine = NodeMergeEngine(repository, repository.settings)

    result = engine.merge("city", [_candidate("dot"), _candidate("city:dot")])

    assert result.plan.additions == []
    assert result.plan.duplicates == [
        "city:dot (already in intra tier)",
        "city:dot (already in intra tier)",
    ]
    assert result.written is None
    assert repository.writes == []


def test_keeping_ids_rejects_unprefixed_candidate() -> None:
    repository = _repository()
    engine = NodeMergeEngine(repository, repository.settings)

    with pytest.raises(NamespaceFormatError):
        engine.merge("city", [_candidate("city:parks"), _candidate("dot")], namespace=False)
    assert repository.writes == []

    result = engine.merge("city", [_candidate("city:parks")], namespace=False, dry_run=True)
    assert [node.id for node in result.plan.additions] == ["city:parks"]
    assert result.plan.additions[0].legacy_id is None


def test_short_factoid_is_a_warning() -> None:
    check = check_candidates([_candidate("dot", factoid="Too short")])
    assert check.ok
    assert check.warnings == ["Node dot: factoid seems too short (< 20 chars)"]


def test_load_node_batch_accepts_list_or_wrapped_object(tmp_path) -> None:
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps([_candidate("dot")]), encoding="utf-8")
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"nodes": [_candidate("dot")]}), encoding="utf-8")
    assert load_node_batch(bare) == load_node_batch(wrapped)

    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"items": []}), encoding="utf-8")
    with pytest.raises(DocumentSchemaError):
        load_node_batch(invalid)
