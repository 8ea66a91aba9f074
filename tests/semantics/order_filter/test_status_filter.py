"""
Semantic test: status filter.

Invariant:
A status filter other than "ALL" keeps only orders in that status, and the
text query only ever selects from the status-filtered list.
"""

from __future__ import annotations

from order_desk.core.domain.types import Order, OrderStatus, Product
from order_desk.core.search.order_filter import filter_orders
from order_desk.core.search.search_index import SearchIndex, build_index


def _orders() -> list[Order]:
    return [
        Order(id="o-1", product_id="p1", current_status=OrderStatus.ORDERED),
        Order(id="o-2", product_id="p1", current_status=OrderStatus.SHIPPED),
        Order(id="o-3", product_id="p2", current_status=OrderStatus.ORDERED),
    ]


def test_status_filter_keeps_matching_orders_in_order() -> None:
    result = filter_orders(_orders(), OrderStatus.ORDERED, "", SearchIndex())

    assert [order.id for order in result] == ["o-1", "o-3"]


def test_status_filter_accepts_plain_strings() -> None:
    result = filter_orders(_orders(), "SHIPPED", "", SearchIndex())

    assert [order.id for order in result] == ["o-2"]


def test_unknown_status_filter_matches_nothing() -> None:
    assert filter_orders(_orders(), "LOST", "", SearchIndex()) == []


def test_query_searches_only_within_status() -> None:
    index = build_index([Product(id="p1", name="Widget", sku="W-1")])

    result = filter_orders(_orders(), OrderStatus.SHIPPED, "widget", index)

    assert [order.id for order in result] == ["o-2"]
