"""Event types for response handling notifications."""

from enum import Enum


class BluEventType(str, Enum):
    """Typed events the host editor can surface to the user."""

    # Classification
    RESPONSE_CLASSIFIED = "response_classified"

    # Materialization
    FILE_WRITTEN = "file_written"
    FILE_FAILED = "file_failed"
    MATERIALIZATION_COMPLETED = "materialization_completed"
