"""Order list filtering for the orders view.

``filter_orders`` is a pure function of its inputs: it never mutates the
order list and is recomputed from scratch whenever any input changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from order_desk.core.domain.types import STATUS_FILTER_ALL, OrderStatus

if TYPE_CHECKING:
    from order_desk.core.domain.types import Order, StatusFilter
    from order_desk.core.search.search_index import SearchIndex


def _status_matches(order: Order, status_filter: StatusFilter | str) -> bool:
    if status_filter == STATUS_FILTER_ALL:
        return True
    return order.current_status == status_filter


def filter_orders(
    orders: Iterable[Order],
    status_filter: StatusFilter | str,
    query: str,
    index: SearchIndex,
) -> list[Order]:
    """Return the visible orders for ``(status_filter, query)``.

    - Orders are first restricted to ``status_filter`` unless it is "ALL".
    - A blank query returns that list unchanged.
    - Otherwise the result is orders whose id contains the query
      (case-insensitive substring), followed by orders whose product was
      found by a prefix search of the catalog index. Each order appears once,
      at its first position.
    """
    if status_filter != STATUS_FILTER_ALL:
        # Accept plain strings such as "SHIPPED" from query parameters.
        # An unknown status matches no order.
        try:
            status_filter = OrderStatus(status_filter)
        except ValueError:
            return []

    candidates = [order for order in orders if _status_matches(order, status_filter)]

    needle = query.strip().lower()
    if not needle:
        return candidates

    direct = [order for order in candidates if needle in order.id.lower()]

    catalog_ids = index.prefix_search(needle)
    catalog = [order for order in candidates if order.product_id in catalog_ids]

    result: list[Order] = []
    seen: set[str] = set()
    for order in (*direct, *catalog):
        if order.id in seen:
            continue
        seen.add(order.id)
        result.append(order)
    return result
