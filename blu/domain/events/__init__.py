"""Event system for observer pattern notifications."""

from blu.domain.events.event_types import BluEventType
from blu.domain.events.event import BluEvent
from blu.domain.events.observer import BluObserver
from blu.domain.events.emitter import BluEventEmitter
from blu.domain.events.stderr_observer import StderrEventObserver

__all__ = [
    "BluEventType",
    "BluEvent",
    "BluObserver",
    "BluEventEmitter",
    "StderrEventObserver",
]
