"""Stderr event observer for CLI integration."""

import click

from blu.domain.events.event import BluEvent


class StderrEventObserver:
    """Emits events as structured lines to stderr."""

    def on_event(self, event: BluEvent) -> None:
        """Emit event as structured line to stderr."""
        parts = [f"[EVENT] {event.event_type.value}"]
        if event.kind:
            parts.append(f"kind={event.kind}")
        if event.path:
            parts.append(f"path={event.path}")
        reason = event.metadata.get("reason")
        if reason:
            parts.append(f"reason={reason}")
        click.echo(" ".join(parts), err=True)
