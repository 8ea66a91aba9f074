"""
Semantic test: status selector entries.

Invariant:
The selector offers exactly the submittable successors as enabled entries,
shows the disabled admin-only DELIVERED entry to standard callers on shipped
orders, and a single disabled final-state entry for terminal orders.
"""

from __future__ import annotations

from order_desk.core.domain.order_state_machine import (
    StatusOption,
    requires_catalog_refresh,
    status_options,
    transition_hint,
)
from order_desk.core.domain.types import OrderStatus, Role


def test_admin_options() -> None:
    assert status_options(OrderStatus.ORDERED, Role.ELEVATED) == [
        StatusOption(OrderStatus.SHIPPED, "Shipped (ORDERED → SHIPPED)", enabled=True),
    ]
    assert status_options(OrderStatus.SHIPPED, "admin") == [
        StatusOption(OrderStatus.DELIVERED, "Delivered (SHIPPED → DELIVERED)", enabled=True),
    ]


def test_standard_options() -> None:
    assert status_options(OrderStatus.ORDERED, Role.STANDARD) == [
        StatusOption(OrderStatus.CANCELLED, "Cancelled (ORDERED → CANCELLED)", enabled=True),
    ]
    assert status_options(OrderStatus.SHIPPED, Role.STANDARD) == [
        StatusOption(OrderStatus.DELIVERED, "Delivered (SHIPPED → DELIVERED) - Admin only", enabled=False),
    ]


def test_terminal_options_are_single_disabled_entry() -> None:
    assert status_options(OrderStatus.DELIVERED, Role.STANDARD) == [
        StatusOption(OrderStatus.DELIVERED, "Delivered (Final state - no transitions)", enabled=False),
    ]
    assert status_options(OrderStatus.CANCELLED, Role.STANDARD) == [
        StatusOption(OrderStatus.CANCELLED, "Cancelled (Final state - no transitions)", enabled=False),
    ]


def test_admin_terminal_entry_shows_status_code() -> None:
    assert status_options(OrderStatus.DELIVERED, Role.ELEVATED) == [
        StatusOption(OrderStatus.DELIVERED, "DELIVERED (Final state - no transitions)", enabled=False),
    ]
    assert status_options(OrderStatus.CANCELLED, "admin") == [
        StatusOption(OrderStatus.CANCELLED, "CANCELLED (Final state - no transitions)", enabled=False),
    ]


def test_unknown_order_is_presented_as_ordered() -> None:
    assert status_options(None, Role.STANDARD) == status_options(OrderStatus.ORDERED, Role.STANDARD)


def test_hints() -> None:
    assert transition_hint(OrderStatus.ORDERED, Role.ELEVATED) == "Admin: ORDERED → Can update to: SHIPPED only"
    assert transition_hint(OrderStatus.SHIPPED, Role.ELEVATED) == "Admin: SHIPPED → Can update to: DELIVERED only"
    assert transition_hint(OrderStatus.CANCELLED, Role.ELEVATED) == (
        "Admin: CANCELLED → Final state (no transitions allowed)"
    )
    assert transition_hint(OrderStatus.ORDERED, Role.STANDARD) == (
        "Current: ORDERED → Can only cancel (CANCELLED). Only admin can update to SHIPPED"
    )
    assert transition_hint(OrderStatus.SHIPPED, Role.STANDARD) == (
        "Current: SHIPPED → Cannot be changed. Only admin can update to DELIVERED"
    )
    assert transition_hint(OrderStatus.DELIVERED, Role.STANDARD) == (
        "Current: DELIVERED → Final state (no transitions allowed)"
    )


def test_only_cancellation_requires_catalog_refresh() -> None:
    assert requires_catalog_refresh(OrderStatus.CANCELLED)
    assert not requires_catalog_refresh(OrderStatus.SHIPPED)
    assert not requires_catalog_refresh(OrderStatus.DELIVERED)
