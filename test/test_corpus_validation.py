from __future__ import annotations

import pytest

from civic_graph.core.exceptions import CivicGraphError, ReferentialIntegrityError
from civic_graph.core.models import JurisdictionDocument
from civic_graph.storage import InMemoryDocumentRepository
from civic_graph.validation import THREE_TIER_STATS, CorpusValidator, render_report, validate_jurisdiction
from civic_graph.validation.report import (
    DANGLING_REFERENCE,
    DUPLICATE_ID,
    MISSING_DOCUMENT,
    NAMESPACE_FORMAT,
    SUBVIEW_EDGE_UNRESOLVED,
    TIER_METADATA,
)


def _main(**overrides) -> dict:
    payload = {
        "meta": {"title": "NYC", "tier": "main"},
        "nodes": [{"id": "city:mayor_nyc"}, {"id": "city:city_council"}],
        "edges": [{"source": "city:mayor_nyc", "target": "city:city_council"}],
    }
    payload.update(overrides)
    return payload


def _intra(**overrides) -> dict:
    payload = {
        "meta": {"tier": "intra"},
        "nodes": [{"id": "city:dot"}],
        "edges": [{"source": "city:mayor_nyc", "target": "city:dot"}],
        "subviews": [
            {
                "id": "dot_internal",
                "anchor": {"nodeId": "city:dot"},
                "nodes": ["city:dot", "city:mayor_nyc"],
                "edges": [{"source": "dot", "target": "city:mayor_nyc"}],
            }
        ],
    }
    payload.update(overrides)
    return payload


def _validate(main: dict | None, intra: dict | None = None):
    return validate_jurisdiction(
        "city",
        JurisdictionDocument.from_dict(main) if main is not None else None,
        JurisdictionDocument.from_dict(intra) if intra is not None else None,
    )


def test_clean_jurisdiction_has_no_findings() -> None:
    report = _validate(_main(), _intra())
    assert report.findings == []
    assert report.stats == {"main_nodes": 2, "intra_nodes": 1, "total_nodes": 3, "subviews": 1}


def test_single_dangling_edge_fails_with_exactly_one_error() -> None:
    main = _main(edges=[{"source": "city:mayor_nyc", "target": "city:ghost"}])
    repository = InMemoryDocumentRepository({"city.json": main, "city-intra.json": _intra()})

    report = CorpusValidator(repository).validate(["city"])

    assert report.error_count == 1
    assert report.exit_code == 1
    (finding,) = report.findings
    assert finding.code == DANGLING_REFERENCE
    assert "city:ghost" in finding.message
    assert finding.location == "main.edges[0].target"


def test_tier_metadata_warnings_do_not_fail() -> None:
    repository = InMemoryDocumentRepository({"city.json": _main(meta={"title": "NYC"})})

    report = CorpusValidator(repository).validate(["city"])

    assert report.exit_code == 0
    assert [finding.code for finding in report.findings] == [TIER_METADATA]
    assert "VALIDATION PASSED - 1 warnings found" in render_report(report)


def test_duplicates_across_tiers_are_errors() -> None:
    intra = _intra(nodes=[{"id": "city:dot"}, {"id": "city:mayor_nyc"}])
    report = _validate(_main(), intra)
    duplicates = report.errors_with_code(DUPLICATE_ID)
    assert [finding.message for finding in duplicates] == ["Duplicate node ID: city:mayor_nyc (already in main)"]


def test_bare_ids_are_namespace_errors() -> None:
    main = _main(nodes=[{"id": "city:mayor_nyc"}, {"id": "city_council"}], edges=[])
    report = _validate(main)
    assert [finding.code for finding in report.errors] == [NAMESPACE_FORMAT]


def test_subview_node_and_anchor_references_are_errors() -> None:
    intra = _intra()
    intra["subviews"][0]["anchor"] = {"nodeIds": ["city:dot", "city:nowhere"]}
    intra["subviews"][0]["nodes"].append("city:ghost")
    report = _validate(_main(), intra)
    assert len(report.errors_with_code(DANGLING_REFERENCE)) == 2


def test_unresolved_subview_edges_are_only_warnings() -> None:
    intra = _intra()
    intra["subviews"][0]["edges"] = [{"source": "dot", "target": "deputy_mayor"}]
    report = _validate(_main(), intra)
    assert report.errors == []
    (warning,) = report.warnings
    assert warning.code == SUBVIEW_EDGE_UNRESOLVED
    assert "city:deputy_mayor" in warning.message


def test_missing_main_document_is_reported() -> None:
    report = CorpusValidator(InMemoryDocumentRepository()).validate(["federal"])
    assert [finding.code for finding in report.findings] == [MISSING_DOCUMENT]
    assert report.exit_code == 1


def test_report_rendering_and_raise_for_errors() -> None:
    main = _main(edges=[{"source": "city:mayor_nyc", "target": "city:ghost"}])
    repository = InMemoryDocumentRepository({"city.json": main})
    report = CorpusValidator(repository).validate(["city"])

    text = render_report(report, stat_labels=THREE_TIER_STATS)

    assert "Main nodes: 2" in text
    assert "VALIDATION FAILED - 1 errors found" in text
    with pytest.raises(ReferentialIntegrityError):
        report.raise_for_errors()


def test_warnings_raise_only_when_included() -> None:
    main = _main(meta={"title": "NYC"})
    repository = InMemoryDocumentRepository({"city.json": main})
    report = CorpusValidator(repository).validate(["city"])

    assert report.exit_code == 0
    report.raise_for_errors()
    with pytest.raises(CivicGraphError, match="missing tier metadata"):
        report.raise_for_errors(include_warnings=True)
