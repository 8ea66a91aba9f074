"""
Domain event models.

These events represent immutable facts observed while the orders view core
runs. They are consumed by loggers, recorders, and metrics sinks.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SearchIndexRebuiltEvent:
    product_count: int
    indexed_ids: int


@dataclass(slots=True)
class StatusChangeDecisionEvent:
    order_id: str
    current_status: str
    target_status: str
    role: str

    accepted: bool
    reason: str | None


@dataclass(slots=True)
class StatusChangeCompletedEvent:
    order_id: str
    previous_status: str
    current_status: str


@dataclass(slots=True)
class StatusChangeFailedEvent:
    order_id: str
    target_status: str
    error: str


DeskEvent = (
    SearchIndexRebuiltEvent
    | StatusChangeDecisionEvent
    | StatusChangeCompletedEvent
    | StatusChangeFailedEvent
)
