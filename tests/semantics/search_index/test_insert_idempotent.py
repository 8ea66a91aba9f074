"""
Semantic test: index insertion is idempotent.

Invariant:
Inserting the same (text, id) pair twice yields the same search results as
inserting it once.
"""

from __future__ import annotations

from order_desk.core.search.search_index import SearchIndex


def _queries() -> list[str]:
    return ["", "w", "wi", "widget", "widgets", "g", "gadget"]


def test_double_insert_matches_single_insert() -> None:
    once = SearchIndex()
    once.insert("Widget", "p1")
    once.insert("Gadget", "p2")

    twice = SearchIndex()
    twice.insert("Widget", "p1")
    twice.insert("Widget", "p1")
    twice.insert("Gadget", "p2")
    twice.insert("gadget", "p2")

    for query in _queries():
        assert once.prefix_search(query) == twice.prefix_search(query)
    assert len(once) == len(twice) == 2


def test_search_results_are_fresh_sets() -> None:
    index = SearchIndex()
    index.insert("widget", "p1")

    found = index.prefix_search("w")
    found.add("intruder")

    assert index.prefix_search("w") == {"p1"}
