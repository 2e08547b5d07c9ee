from __future__ import annotations

from civic_graph.validation import find_similar, is_similar, levenshtein_distance


def test_levenshtein_distance() -> None:
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("mayor_nyc", "mayor_nyc") == 0


def test_is_similar_by_containment_either_way() -> None:
    assert is_similar("mayor", "city:Mayor_NYC")
    assert is_similar("city:mayor_nyc_office", "mayor_nyc")


def test_is_similar_requires_distance_below_threshold() -> None:
    assert is_similar("dot_nx", "dot_ny")
    assert not is_similar("abcdef", "abcxyz")


def test_typo_suggests_the_intended_node() -> None:
    candidates = ["city:comptroller", "city:mayor_nyc"]
    assert find_similar("city:mayer_nyc", candidates) == ["city:mayor_nyc"]


def test_find_similar_respects_limit_and_skips_exact_match() -> None:
    candidates = ["city:dot", "city:dot_a", "city:dot_b", "city:dot_c", "city:dot_d"]
    assert find_similar("city:dot", candidates, limit=3) == ["city:dot_a", "city:dot_b", "city:dot_c"]
