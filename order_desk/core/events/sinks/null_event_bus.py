from __future__ import annotations

from typing import TYPE_CHECKING

from order_desk.core.events.event_bus import EventBus

if TYPE_CHECKING:
    from order_desk.core.events.events import DeskEvent


class NullEventBus(EventBus):
    """Bus with no sinks; gates and views built without an audit trail use it."""

    def __init__(self) -> None:
        super().__init__(sinks=())

    def register(self, sink: object) -> None:
        raise TypeError("NullEventBus does not accept sinks")

    def emit(self, event: DeskEvent) -> None:
        return
