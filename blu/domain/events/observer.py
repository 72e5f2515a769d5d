"""Observer protocol."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from blu.domain.events.event import BluEvent


class BluObserver(Protocol):
    """Protocol for event observers."""

    def on_event(self, event: "BluEvent") -> None:
        """Handle an event. Must not throw or block."""
        ...
