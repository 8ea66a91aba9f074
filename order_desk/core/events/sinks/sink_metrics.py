"""
Metrics event sink.

Counts status change decisions by outcome and pushes them once on close.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any

from order_desk.core.events.events import (
    StatusChangeCompletedEvent,
    StatusChangeDecisionEvent,
    StatusChangeFailedEvent,
)

if TYPE_CHECKING:
    from order_desk.runtime.prometheus_metrics import PrometheusMetricsClient

LOGGER = logging.getLogger(__name__)


class MetricsEventSink:
    """Aggregates status change events for the Pushgateway."""

    def __init__(self, client: PrometheusMetricsClient, job: str = "order_desk") -> None:
        self._client = client
        self._job = job
        self.decisions: Counter[str] = Counter()
        self.completed = 0
        self.failed = 0
        self._closed = False

    def on_event(self, event: Any) -> None:
        if isinstance(event, StatusChangeDecisionEvent):
            self.decisions[event.reason or "ACCEPTED"] += 1
        elif isinstance(event, StatusChangeCompletedEvent):
            self.completed += 1
        elif isinstance(event, StatusChangeFailedEvent):
            self.failed += 1

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if not self._client.is_enabled():
            return

        for outcome, count in self.decisions.items():
            self._client.set_gauge(
                name="order_desk_status_change_decisions",
                value=count,
                labels={"outcome": outcome},
            )
        self._client.set_gauge(
            name="order_desk_status_change_results",
            value=self.completed,
            labels={"result": "completed"},
        )
        self._client.set_gauge(
            name="order_desk_status_change_results",
            value=self.failed,
            labels={"result": "failed"},
        )

        try:
            self._client.push_all(job=self._job)
        except OSError:
            LOGGER.exception("Prometheus push failed")
