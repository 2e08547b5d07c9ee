from __future__ import annotations

import pytest

from civic_graph.core.exceptions import CivicGraphError
from civic_graph.namespacing import document_dependencies, migration_order, upstream_owners


def test_document_dependencies_inverts_owner_table() -> None:
    assert document_dependencies() == {"state": {"city"}}


def test_owners_are_migrated_before_dependents() -> None:
    assert migration_order(["state", "city", "federal"]) == ["city", "federal", "state"]


def test_order_is_stable_without_dependencies() -> None:
    assert migration_order(["federal", "city"], references={}) == ["federal", "city"]


def test_cyclic_references_are_rejected() -> None:
    with pytest.raises(CivicGraphError):
        migration_order(references={"city": ("state",), "state": ("city",)})


def test_upstream_owners() -> None:
    assert upstream_owners("state") == ["city"]
    assert upstream_owners("city") == []
