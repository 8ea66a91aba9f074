"""
Synchronous event bus for desk events.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from order_desk.core.events.event_sink import EventSink
    from order_desk.core.events.events import DeskEvent


class EventBus:
    """Dispatches desk events to registered sinks, in registration order.

    A failing sink stops the dispatch and its exception reaches the emitter;
    the gate relies on this to surface a broken audit trail.
    """

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    def register(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def emit(self, event: DeskEvent) -> None:
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """
        Close every sink that has a close() method (the file recorder flushes,
        the metrics sink pushes). Safe to call twice.
        """
        if self._closed:
            return
        self._closed = True

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()
