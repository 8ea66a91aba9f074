"""In-memory order service over JSON snapshots.

Implements the ``OrderService`` protocol the way the backend behaves:
transitions are checked against the status graph without role gating,
a request for the current status is an idempotent no-op, and every applied
change appends one history entry.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from pydantic import TypeAdapter

from order_desk.core.domain.order_state_machine import TRANSITION_RULES
from order_desk.core.domain.types import (
    Order,
    OrderHistoryEntry,
    OrderStatus,
    Product,
    StatusUpdateResult,
)
from order_desk.core.ports.order_service import OrderService, OrderServiceError

LOGGER = logging.getLogger(__name__)

_ORDERS = TypeAdapter(list[Order])
_PRODUCTS = TypeAdapter(list[Product])
_HISTORY = TypeAdapter(dict[str, list[OrderHistoryEntry]])

# The backend only knows the graph; role checks happen in the API layer.
_BACKEND_EDGES: frozenset[tuple[OrderStatus, OrderStatus]] = frozenset(
    (rule.from_status, rule.to_status) for rule in TRANSITION_RULES
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryOrderService(OrderService):
    """Snapshot-backed order service used by tests and the CLI."""

    def __init__(
        self,
        orders: Iterable[Order] = (),
        products: Iterable[Product] = (),
        history: dict[str, list[OrderHistoryEntry]] | None = None,
        *,
        updated_by: int | str = 0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._orders: dict[str, Order] = {order.id: order for order in orders}
        self._products: list[Product] = list(products)
        self._history: dict[str, list[OrderHistoryEntry]] = {
            order_id: list(entries) for order_id, entries in (history or {}).items()
        }
        self._updated_by = updated_by
        self._clock = clock

    @classmethod
    def from_json_obj(cls, snapshot: dict[str, Any], **kwargs: Any) -> InMemoryOrderService:
        """Create a service from ``{"orders": [...], "products": [...], "history": {...}}``."""
        return cls(
            orders=_ORDERS.validate_python(snapshot.get("orders", [])),
            products=_PRODUCTS.validate_python(snapshot.get("products", [])),
            history=_HISTORY.validate_python(snapshot.get("history", {})),
            **kwargs,
        )

    def get_orders(self) -> list[Order]:
        return list(self._orders.values())

    def get_products(self) -> list[Product]:
        return list(self._products)

    def get_order_history(self, order_id: str) -> list[OrderHistoryEntry]:
        if order_id not in self._orders:
            raise OrderServiceError(f"order not found: {order_id}")
        return list(self._history.get(order_id, []))

    def update_order_status(self, order_id: str, target_status: OrderStatus) -> StatusUpdateResult:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderServiceError(f"order not found: {order_id}")

        current = order.current_status
        now = self._clock()

        if current == target_status:
            return StatusUpdateResult(
                order_id=order_id,
                previous_status=current,
                current_status=current,
                updated_at=now,
            )

        if (current, target_status) not in _BACKEND_EDGES:
            raise OrderServiceError(f"invalid transition from {current} to {target_status}")

        self._orders[order_id] = order.model_copy(update={"current_status": target_status})
        self._history.setdefault(order_id, []).append(
            OrderHistoryEntry(
                previous_status=current,
                new_status=target_status,
                updated_by=self._updated_by,
                updated_at=now,
            )
        )

        LOGGER.debug(
            "Order status updated",
            extra={"order_id": order_id, "from": str(current), "to": str(target_status)},
        )

        return StatusUpdateResult(
            order_id=order_id,
            previous_status=current,
            current_status=target_status,
            updated_at=now,
        )
