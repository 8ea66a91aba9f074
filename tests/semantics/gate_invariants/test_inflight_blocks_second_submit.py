"""
Semantic test: one request in flight per order.

Invariant:
While a status change for an order is in flight, a second submit for the
same order is refused with REQUEST_IN_FLIGHT and never reaches the service.
Other orders are unaffected, and the marker is cleared once the first
request completes.
"""

from __future__ import annotations

from datetime import datetime, timezone

from order_desk.core.domain.reject_reasons import RejectReason
from order_desk.core.domain.types import Order, OrderStatus, StatusUpdateResult
from order_desk.core.events.sinks.null_event_bus import NullEventBus
from order_desk.core.gate.status_change_gate import StatusChangeGate, SubmissionOutcome

_TS = datetime(2025, 1, 7, tzinfo=timezone.utc)


class _ReentrantService:
    """Simulates a UI event firing while the first request is still open."""

    def __init__(self) -> None:
        self.gate: StatusChangeGate | None = None
        self.calls: list[str] = []
        self.nested: list[SubmissionOutcome] = []

    def update_order_status(self, order_id: str, target_status: OrderStatus) -> StatusUpdateResult:
        self.calls.append(order_id)
        assert self.gate is not None
        if order_id == "o-1":
            assert self.gate.is_in_flight("o-1")
            self.nested.append(self.gate.submit(Order(id="o-1", product_id="p1"), target_status, "user"))
            self.nested.append(self.gate.submit(Order(id="o-2", product_id="p1"), target_status, "user"))
        return StatusUpdateResult(
            order_id=order_id,
            previous_status=OrderStatus.ORDERED,
            current_status=target_status,
            updated_at=_TS,
        )


def test_second_submit_for_same_order_is_refused() -> None:
    service = _ReentrantService()
    gate = StatusChangeGate(order_service=service, event_bus=NullEventBus())
    service.gate = gate

    outcome = gate.submit(Order(id="o-1", product_id="p1"), OrderStatus.CANCELLED, "user")

    assert outcome.ok
    same_order, other_order = service.nested
    assert same_order.reason == RejectReason.REQUEST_IN_FLIGHT
    assert not same_order.sent
    assert other_order.ok
    assert service.calls == ["o-1", "o-2"]
    assert not gate.is_in_flight("o-1")
    assert not gate.is_in_flight("o-2")
