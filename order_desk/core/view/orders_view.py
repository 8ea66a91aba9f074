"""Orders view state.

Holds the latest order and catalog snapshots handed over by the collaborator
and derives the visible list from them. The search index is rebuilt only when
the catalog snapshot actually changes; the visible list is recomputed on
every call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from order_desk.core.config.desk_config import DeskConfig
from order_desk.core.domain.types import STATUS_FILTER_ALL
from order_desk.core.events.events import SearchIndexRebuiltEvent
from order_desk.core.search.order_filter import filter_orders
from order_desk.core.search.search_index import SearchIndex, build_index

if TYPE_CHECKING:
    from order_desk.core.domain.types import Order, OrderHistoryEntry, Product, StatusFilter
    from order_desk.core.events.event_bus import EventBus
    from order_desk.core.ports.order_service import OrderService

LOGGER = logging.getLogger(__name__)


class OrdersView:
    """Snapshot holder for the orders page."""

    def __init__(self, event_bus: EventBus, config: DeskConfig | None = None) -> None:
        self._event_bus = event_bus
        self._config = config if config is not None else DeskConfig()

        self._orders: tuple[Order, ...] = ()
        self._products: tuple[Product, ...] = ()
        self._products_by_id: dict[str, Product] = {}
        self._index = SearchIndex()
        self._catalog_loaded = False

    @property
    def orders(self) -> tuple[Order, ...]:
        return self._orders

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def index(self) -> SearchIndex:
        return self._index

    def set_orders(self, orders: Iterable[Order]) -> None:
        self._orders = tuple(orders)

    def set_products(self, products: Iterable[Product]) -> bool:
        """Replace the catalog snapshot.

        Returns True if the index was rebuilt, False if the snapshot was
        identical to the current one.
        """
        snapshot = tuple(products)
        if self._catalog_loaded and snapshot == self._products:
            return False

        self._catalog_loaded = True
        self._products = snapshot
        self._products_by_id = {product.id: product for product in snapshot}
        self._index = build_index(snapshot, fields=self._config.index_fields)

        LOGGER.debug(
            "Search index rebuilt",
            extra={"products": len(snapshot), "indexed_ids": len(self._index)},
        )
        self._event_bus.emit(
            SearchIndexRebuiltEvent(
                product_count=len(snapshot),
                indexed_ids=len(self._index),
            )
        )
        return True

    def refresh(self, order_service: OrderService) -> None:
        """Pull fresh order and catalog snapshots from the order service.

        Errors raised by the service propagate; the previous snapshots are
        kept in that case.
        """
        orders = order_service.get_orders()
        products = order_service.get_products()
        self.set_orders(orders)
        self.set_products(products)

    def visible_orders(
        self,
        status_filter: StatusFilter | str = STATUS_FILTER_ALL,
        query: str = "",
    ) -> list[Order]:
        return filter_orders(self._orders, status_filter, query, self._index)

    def find_order(self, order_id: str) -> Order | None:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def product_for(self, order: Order) -> Product | None:
        return self._products_by_id.get(order.product_id)

    def history(self, order_service: OrderService, order_id: str) -> list[OrderHistoryEntry]:
        return order_service.get_order_history(order_id)
