"""
Semantic test: legal successors per (status, role).

Invariant:
Each (status, role) pair has at most one legal successor, exactly as the
transition table defines; terminal statuses have none.
"""

from __future__ import annotations

import pytest

from order_desk.core.domain.order_state_machine import (
    ORDER_TERMINAL_STATES,
    TRANSITION_RULES,
    is_terminal_state,
    legal_next_states,
)
from order_desk.core.domain.types import OrderStatus, Role


@pytest.mark.parametrize(
    ("current", "role", "expected"),
    [
        (OrderStatus.ORDERED, Role.ELEVATED, [OrderStatus.SHIPPED]),
        (OrderStatus.ORDERED, Role.STANDARD, [OrderStatus.CANCELLED]),
        (OrderStatus.SHIPPED, Role.ELEVATED, [OrderStatus.DELIVERED]),
        (OrderStatus.SHIPPED, Role.STANDARD, []),
        (OrderStatus.DELIVERED, Role.ELEVATED, []),
        (OrderStatus.DELIVERED, Role.STANDARD, []),
        (OrderStatus.CANCELLED, Role.ELEVATED, []),
        (OrderStatus.CANCELLED, Role.STANDARD, []),
    ],
)
def test_legal_next_states_table(current: OrderStatus, role: Role, expected: list[OrderStatus]) -> None:
    assert legal_next_states(current, role) == expected


def test_role_strings_are_normalized() -> None:
    assert legal_next_states("ORDERED", "admin") == [OrderStatus.SHIPPED]
    assert legal_next_states("ORDERED", "ADMIN") == [OrderStatus.SHIPPED]
    assert legal_next_states("ORDERED", "customer") == [OrderStatus.CANCELLED]
    assert legal_next_states("ORDERED", None) == [OrderStatus.CANCELLED]


def test_unknown_status_has_no_successor() -> None:
    assert legal_next_states("LOST", Role.ELEVATED) == []


def test_terminal_states_have_no_outgoing_rules() -> None:
    assert ORDER_TERMINAL_STATES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    for rule in TRANSITION_RULES:
        assert not is_terminal_state(rule.from_status)


def test_no_rule_targets_the_initial_state() -> None:
    assert all(rule.to_status != OrderStatus.ORDERED for rule in TRANSITION_RULES)
