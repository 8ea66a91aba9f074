"""
Event sink interface.

A sink receives every event the orders view and the status change gate emit,
in emission order, on the caller's thread.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from order_desk.core.events.events import DeskEvent


class EventSink(Protocol):
    def on_event(self, event: DeskEvent) -> None:
        """Consume one desk event. Exceptions propagate to the emitter."""
