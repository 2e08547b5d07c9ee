from __future__ import annotations

from civic_graph.core.models import (
    Edge,
    JurisdictionDocument,
    Node,
    ProcessCatalog,
    SubgraphDocument,
    ValidationFinding,
)


def test_node_round_trip_keeps_unmodelled_keys() -> None:
    payload = {
        "id": "city:mayor_nyc",
        "label": "Mayor",
        "type": "office",
        "branch": "executive",
        "factoid": "Chief executive of the City of New York.",
        "legacyId": "mayor_nyc",
        "website": "https://www.nyc.gov/office-of-the-mayor",
    }
    node = Node.from_dict(payload)
    assert node.legacy_id == "mayor_nyc"
    assert node.extra == {"website": "https://www.nyc.gov/office-of-the-mayor"}
    assert node.to_dict() == payload


def test_edge_to_dict_omits_absent_fields() -> None:
    edge = Edge(source="city:a", target="city:b")
    assert edge.to_dict() == {"source": "city:a", "target": "city:b"}


def test_document_without_subviews_serialises_without_key() -> None:
    document = JurisdictionDocument.from_dict({"meta": {"tier": "main"}, "nodes": [{"id": "city:a"}]})
    assert document.subviews is None
    assert "subviews" not in document.to_dict()
    assert document.node_ids() == ["city:a"]


def test_document_with_subviews_preserves_anchor() -> None:
    payload = {
        "meta": {"tier": "intra", "version": "1.0.0"},
        "nodes": [{"id": "city:dot"}],
        "edges": [],
        "subviews": [
            {
                "id": "dot_internal",
                "label": "DOT internal",
                "anchor": {"nodeId": "city:dot", "nodeIds": ["city:dot"]},
                "nodes": ["city:dot"],
                "edges": [],
            }
        ],
    }
    document = JurisdictionDocument.from_dict(payload)
    subview = document.subviews[0]
    assert subview.anchor.references() == ["city:dot", "city:dot"]
    assert subview.extra == {"label": "DOT internal"}
    assert document.to_dict() == payload


def test_process_catalog_iterates_edges_with_owner() -> None:
    catalog = ProcessCatalog.from_dict(
        {
            "processes": [
                {"id": "ulurp", "nodes": ["city:DCP"], "edges": [{"source": "city:DCP", "target": "city:community_boards"}]},
                {"id": "empty"},
            ]
        }
    )
    pairs = [(process.id, edge.target) for process, edge in catalog.iter_edges()]
    assert pairs == [("ulurp", "city:community_boards")]


def test_subgraph_document_round_trip() -> None:
    payload = {
        "elements": {
            "nodes": [{"data": {"id": "city:mayor_nyc", "label": "Mayor"}, "classes": "office"}],
            "edges": [{"data": {"source": "city:mayor_nyc", "target": "city:city_council"}}],
        },
        "entryNodeId": "city:mayor_nyc",
        "layout": "dagre",
    }
    document = SubgraphDocument.from_dict(payload)
    assert document.node_ids() == ["city:mayor_nyc"]
    assert document.extra == {"layout": "dagre"}
    assert document.to_dict() == payload


def test_validation_finding_error_flag() -> None:
    assert ValidationFinding(severity="error", code="x", message="m").is_error
    assert not ValidationFinding(severity="warning", code="x", message="m").is_error
