"""Status change gate: local validation in front of the order service."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from order_desk.core.config.desk_config import DeskConfig
from order_desk.core.domain.order_state_machine import requires_catalog_refresh, validate
from order_desk.core.domain.reject_reasons import RejectReason
from order_desk.core.domain.roles import normalize_role
from order_desk.core.domain.types import OrderStatus
from order_desk.core.events.events import (
    StatusChangeCompletedEvent,
    StatusChangeDecisionEvent,
    StatusChangeFailedEvent,
)
from order_desk.core.ports.order_service import OrderServiceError

if TYPE_CHECKING:
    from order_desk.core.domain.types import Order, Role, StatusUpdateResult
    from order_desk.core.events.event_bus import EventBus
    from order_desk.core.ports.order_service import OrderService

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmissionOutcome:
    """Result of one ``StatusChangeGate.submit`` call.

    - result: the order service reply, set only when the change was applied
    - reason: why nothing was applied (None on success)
    - message: user-visible text; service errors are passed through verbatim
    - catalog_refresh_required: the catalog snapshot should be reloaded
    """

    order_id: str
    target_status: str
    result: StatusUpdateResult | None = None
    reason: RejectReason | None = None
    message: str | None = None
    catalog_refresh_required: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def sent(self) -> bool:
        """True if the request reached the order service."""
        return self.result is not None or self.reason == RejectReason.SERVICE_ERROR


class StatusChangeGate:
    """Validate a proposed status change and forward it when allowed.

    This layer is allowed to:
    - reject transitions the state machine does not permit for the caller
    - refuse a second request for an order whose previous one is in flight
    - forward allowed requests to the order service exactly once

    It must NOT retry, and it never changes an order snapshot itself.
    """

    def __init__(
        self,
        order_service: OrderService,
        event_bus: EventBus,
        config: DeskConfig | None = None,
    ) -> None:
        self._order_service = order_service
        self._event_bus = event_bus
        self._config = config if config is not None else DeskConfig()

        self._lock = threading.Lock()
        self._inflight: set[str] = set()

    def is_in_flight(self, order_id: str) -> bool:
        with self._lock:
            return order_id in self._inflight

    def submit(
        self,
        order: Order,
        target: OrderStatus | str,
        role: Role | str | None,
    ) -> SubmissionOutcome:
        caller = normalize_role(role, self._config.elevated_roles)
        target_name = str(target)

        reason = validate(order.current_status, target, caller).reason
        marked = False
        if reason is None:
            marked = self._try_mark_in_flight(order.id)
            if not marked:
                reason = RejectReason.REQUEST_IN_FLIGHT

        try:
            return self._decide_and_send(order, target, target_name, caller, reason)
        finally:
            # Only the request that set the marker may clear it.
            if marked:
                self._clear_in_flight(order.id)

    def _decide_and_send(
        self,
        order: Order,
        target: OrderStatus | str,
        target_name: str,
        caller: Role,
        reason: RejectReason | None,
    ) -> SubmissionOutcome:
        self._event_bus.emit(
            StatusChangeDecisionEvent(
                order_id=order.id,
                current_status=str(order.current_status),
                target_status=target_name,
                role=str(caller),
                accepted=reason is None,
                reason=None if reason is None else str(reason),
            )
        )

        if reason is not None:
            LOGGER.info(
                "Status change rejected locally",
                extra={"order_id": order.id, "target": target_name, "reason": str(reason)},
            )
            return SubmissionOutcome(
                order_id=order.id,
                target_status=target_name,
                reason=reason,
                message=self._config.reject_message(reason),
            )

        try:
            result = self._order_service.update_order_status(order.id, OrderStatus(target))
        except OrderServiceError as exc:
            error = str(exc) or self._config.reject_message(RejectReason.SERVICE_ERROR)
            LOGGER.warning(
                "Order service refused status change",
                extra={"order_id": order.id, "target": target_name, "error": error},
            )
            self._event_bus.emit(
                StatusChangeFailedEvent(
                    order_id=order.id,
                    target_status=target_name,
                    error=error,
                )
            )
            return SubmissionOutcome(
                order_id=order.id,
                target_status=target_name,
                reason=RejectReason.SERVICE_ERROR,
                message=error,
            )

        self._event_bus.emit(
            StatusChangeCompletedEvent(
                order_id=result.order_id,
                previous_status=str(result.previous_status),
                current_status=str(result.current_status),
            )
        )

        return SubmissionOutcome(
            order_id=order.id,
            target_status=target_name,
            result=result,
            message=(
                f"Order {result.order_id} updated from "
                f"{result.previous_status} to {result.current_status}"
            ),
            catalog_refresh_required=requires_catalog_refresh(result.current_status),
        )

    def _try_mark_in_flight(self, order_id: str) -> bool:
        with self._lock:
            if order_id in self._inflight:
                return False
            self._inflight.add(order_id)
            return True

    def _clear_in_flight(self, order_id: str) -> None:
        with self._lock:
            self._inflight.discard(order_id)
