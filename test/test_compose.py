from __future__ import annotations

from civic_graph.compose import MainTierComposer, compose_main, count_by_namespace
from civic_graph.core.models import JurisdictionDocument
from civic_graph.storage import InMemoryDocumentRepository


def _city_backup() -> dict:
    return {
        "meta": {"tier": "main"},
        "nodes": [{"id": "mayor_nyc"}, {"id": "city_council", "parent": "mayor_nyc"}],
        "edges": [{"source": "mayor_nyc", "target": "city_council"}],
    }


def _state_backup() -> dict:
    return {"meta": {"tier": "main"}, "nodes": [{"id": "state:governor_ny"}], "edges": []}


def _regional() -> dict:
    return {
        "meta": {"title": "Regional"},
        "nodes": [{"id": "mta"}, {"id": "public_authorities"}, {"id": "governor_ny"}],
        "edges": [
            {"source": "mta", "target": "governor_ny"},
            {"source": "mta", "target": "nowhere"},
        ],
    }


def test_compose_namespaces_backups_and_folds_regional_into_state() -> None:
    composition = compose_main(
        {
            "city": JurisdictionDocument.from_dict(_city_backup()),
            "state": JurisdictionDocument.from_dict(_state_backup()),
        },
        JurisdictionDocument.from_dict(_regional()),
    )

    document = composition.document
    assert document.meta.title == "Main Government Structure"
    assert document.node_ids() == ["city:mayor_nyc", "city:city_council", "state:governor_ny", "state:mta"]
    assert document.nodes[1].parent == "city:mayor_nyc"
    assert [(edge.source, edge.target) for edge in document.edges] == [
        ("city:mayor_nyc", "city:city_council"),
        ("state:mta", "state:governor_ny"),
    ]
    assert composition.skipped_regional_nodes == ["public_authorities", "governor_ny"]
    assert composition.dropped_regional_edges == ["state:mta -> state:nowhere"]
    assert composition.counts == {
        "city": {"nodes": 2, "edges": 1},
        "state": {"nodes": 1, "edges": 0},
        "regional": {"nodes": 1, "edges": 1},
    }
    assert count_by_namespace(document) == {"city": 2, "state": 2, "federal": 0}


def test_composer_reads_backups_and_writes_aggregate() -> None:
    repository = InMemoryDocumentRepository(
        {
            "city.json.backup": _city_backup(),
            "state.json.backup": _state_backup(),
            "regional.json": _regional(),
        }
    )

    composition = MainTierComposer(repository, repository.settings).compose()

    assert composition.written == "main.json"
    assert "federal" not in composition.counts
    assert len(repository.documents["main.json"]["nodes"]) == 4
    assert repository.documents["main.json"]["meta"]["version"] == "1.0.0"


def test_composer_dry_run_skips_write() -> None:
    repository = InMemoryDocumentRepository({"city.json.backup": _city_backup()})
    composition = MainTierComposer(repository, repository.settings).compose(dry_run=True)
    assert composition.written is None
    assert "main.json" not in repository.documents
    assert composition.document.node_ids() == ["city:mayor_nyc", "city:city_council"]


def test_prefixed_references_keep_their_own_jurisdiction() -> None:
    city = {
        "meta": {"tier": "main"},
        "nodes": [{"id": "mayor_nyc"}, {"id": "nyc_liaison", "parent": "state:governor_ny"}],
        "edges": [{"source": "mayor_nyc", "target": "state:governor_ny"}],
    }
    regional = {"nodes": [{"id": "mta"}], "edges": [{"source": "mta", "target": "city:mayor_nyc"}]}

    composition = compose_main(
        {
            "city": JurisdictionDocument.from_dict(city),
            "state": JurisdictionDocument.from_dict(_state_backup()),
        },
        JurisdictionDocument.from_dict(regional),
    )

    document = composition.document
    assert document.nodes[1].parent == "state:governor_ny"
    assert [(edge.source, edge.target) for edge in document.edges] == [
        ("city:mayor_nyc", "state:governor_ny"),
        ("state:mta", "city:mayor_nyc"),
    ]
    assert composition.dropped_regional_edges == []
    assert composition.counts["regional"] == {"nodes": 1, "edges": 1}
