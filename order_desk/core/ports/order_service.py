"""Order-service protocol consumed by the orders view core.

This module defines the collaborator boundary. Concrete implementations
adapt a transport (HTTP client, in-memory fake) to this protocol; retries,
authentication and serialization belong to them, not to the core.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from order_desk.core.domain.types import (
        Order,
        OrderHistoryEntry,
        OrderStatus,
        Product,
        StatusUpdateResult,
    )


class OrderServiceError(Exception):
    """Failure reported by the order-service collaborator.

    The message is user-facing and is surfaced verbatim.
    """


class OrderService(Protocol):
    """Order and catalog snapshots plus the status update request."""

    def get_orders(self) -> list[Order]:
        """Return the orders visible to the current caller."""

    def get_order_history(self, order_id: str) -> list[OrderHistoryEntry]:
        """Return the append-only status history of one order."""

    def get_products(self) -> list[Product]:
        """Return the current catalog snapshot."""

    def update_order_status(self, order_id: str, target_status: OrderStatus) -> StatusUpdateResult:
        """Request a status change. Raises OrderServiceError when refused."""
