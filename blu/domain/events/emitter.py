"""Event emitter for dispatching events to observers."""

import logging
from typing import Any

from blu.domain.events.event import BluEvent
from blu.domain.events.event_types import BluEventType
from blu.domain.events.observer import BluObserver

logger = logging.getLogger(__name__)


class BluEventEmitter:
    """Dispatches events to observers in subscription order.

    An observer subscribed with no event types receives everything.
    """

    def __init__(self) -> None:
        self._subscriptions: list[tuple[BluObserver, frozenset[BluEventType] | None]] = []

    def subscribe(
        self,
        observer: BluObserver,
        event_types: list[BluEventType] | None = None,
    ) -> None:
        """Subscribe to specific event types, or all events if None."""
        wanted = frozenset(event_types) if event_types is not None else None
        self._subscriptions.append((observer, wanted))

    def unsubscribe(self, observer: BluObserver) -> None:
        """Remove observer from all subscriptions."""
        self._subscriptions = [
            (subscribed, wanted)
            for subscribed, wanted in self._subscriptions
            if subscribed is not observer
        ]

    def emit(self, event: BluEvent) -> None:
        """Dispatch event to every observer whose subscription matches."""
        for observer, wanted in list(self._subscriptions):
            if wanted is None or event.event_type in wanted:
                self._safe_notify(observer, event)

    def publish(self, event_type: BluEventType, **fields: Any) -> BluEvent:
        """Build an event from fields, emit it, and return it."""
        event = BluEvent(event_type=event_type, **fields)
        self.emit(event)
        return event

    def _safe_notify(self, observer: BluObserver, event: BluEvent) -> None:
        """Notify observer, catching and logging any exceptions."""
        try:
            observer.on_event(event)
        except Exception as e:
            logger.warning(f"Observer {observer} failed on {event.event_type.value}: {e}")
