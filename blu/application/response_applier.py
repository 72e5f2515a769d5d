"""Host-facing pipeline: classify a model response, then apply it.

The host owns the editor: for a text response it substitutes
``ApplyOutcome.text`` for the selection; for a file set, the files have
already been written under the workspace root when ``apply`` returns.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from blu.domain.constants import DEFAULT_MAX_WORKERS
from blu.domain.events.emitter import BluEventEmitter
from blu.domain.events.event_types import BluEventType
from blu.domain.models.classified_response import FileSetResponse
from blu.domain.models.materialization_result import MaterializationResult
from blu.domain.response_classifier import classify
from blu.engine.file_io import write_files

logger = logging.getLogger(__name__)


class ApplyOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    text: str | None = None
    materialization: MaterializationResult | None = None

    @property
    def ok(self) -> bool:
        return self.materialization is None or self.materialization.ok

    @property
    def message(self) -> str:
        if self.materialization is None:
            return "Selection replaced."
        return self.materialization.summary()


class ResponseApplier:
    def __init__(
        self,
        *,
        emitter: BluEventEmitter | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._emitter = emitter
        self._max_workers = max_workers

    def _publish(self, event_type: BluEventType, **fields) -> None:
        if self._emitter is not None:
            self._emitter.publish(event_type, **fields)

    def apply(self, raw: str, workspace_root: Path) -> ApplyOutcome:
        """Classify raw and, for a file set, write it under workspace_root.

        Raises:
            InvalidFileSetKey: If the response names an unsafe path; nothing is written.
        """
        response = classify(raw)
        self._publish(BluEventType.RESPONSE_CLASSIFIED, kind=response.kind)

        if not isinstance(response, FileSetResponse):
            return ApplyOutcome(kind=response.kind, text=response.value)

        result = write_files(
            workspace_root,
            response.value,
            max_workers=self._max_workers,
            emitter=self._emitter,
        )
        logger.info(
            f"Materialized {len(result.succeeded)}/{len(result)} file(s) under {workspace_root}"
        )
        self._publish(
            BluEventType.MATERIALIZATION_COMPLETED,
            kind=response.kind,
            metadata={"succeeded": len(result.succeeded), "failed": len(result.failed)},
        )
        return ApplyOutcome(kind=response.kind, materialization=result)
