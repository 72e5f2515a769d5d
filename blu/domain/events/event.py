"""Event payload model."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from blu.domain.events.event_types import BluEventType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BluEvent(BaseModel):
    """Immutable event payload for host notifications."""

    model_config = {"frozen": True}

    event_type: BluEventType
    timestamp: datetime = Field(default_factory=_utcnow)
    kind: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
