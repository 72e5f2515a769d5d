import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Mapping

from blu.domain.constants import DEFAULT_MAX_WORKERS, MATERIALIZE_ENCODING
from blu.domain.events.emitter import BluEventEmitter
from blu.domain.events.event_types import BluEventType
from blu.domain.models.materialization_result import (
    FailureKind,
    MaterializationEntry,
    MaterializationResult,
)
from blu.domain.validation.path_validator import PathValidator

logger = logging.getLogger(__name__)


def _describe(error: Exception) -> str:
    return getattr(error, "strerror", None) or str(error)


def _materialize_one(root: Path, path: str, content: str) -> MaterializationEntry:
    """Write one file under root; every failure is returned, never raised."""
    try:
        relative = PathValidator.to_relative(path)
        # SECURITY: resolve and re-check containment even for classifier-validated keys
        target = PathValidator.validate_within_root(root / relative, root)
    except ValueError as e:
        # PathValidationError, or a name the filesystem cannot encode
        return MaterializationEntry.failure(path, FailureKind.PATH_REJECTED, str(e))

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, ValueError) as e:
        return MaterializationEntry.failure(
            path,
            FailureKind.DIRECTORY_CREATION_FAILED,
            f"Cannot create directory '{target.parent}': {_describe(e)}",
        )

    try:
        # Last write wins: an existing file at this exact path is replaced.
        target.write_text(content, encoding=MATERIALIZE_ENCODING)
    except (OSError, ValueError, TypeError) as e:
        # TypeError: content that is not text
        return MaterializationEntry.failure(
            path,
            FailureKind.WRITE_FAILED,
            f"Failed to write file '{target}': {_describe(e)}",
        )

    return MaterializationEntry.success(path)


def _report(entry: MaterializationEntry, emitter: BluEventEmitter | None) -> None:
    if entry.ok:
        logger.info(f"Wrote {entry.path}")
    else:
        logger.warning(f"Could not write {entry.path}: {entry.reason}")

    if emitter is None:
        return
    emitter.publish(
        BluEventType.FILE_WRITTEN if entry.ok else BluEventType.FILE_FAILED,
        kind="files",
        path=entry.path,
        metadata={"error": entry.error.value, "reason": entry.reason} if not entry.ok else {},
    )


def write_files(
    root: Path,
    files: Mapping[str, str],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    emitter: BluEventEmitter | None = None,
) -> MaterializationResult:
    """Write a mapping of relative path -> content under root.

    Contract (defined by tests):
    - root must exist and be a directory; the caller guarantees this.
    - Creates parent directories as needed.
    - Writes text exactly as provided (UTF-8), overwriting existing files.
    - Rejects paths that are unsafe or resolve outside root, per entry.
    - Never aborts early: a failing path does not stop later paths.
    - Returns one entry per key, in the mapping's key order, regardless of
      max_workers.
    """
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1")

    root = Path(root).resolve()
    items = list(files.items())

    if max_workers == 1 or len(items) <= 1:
        entries = []
        for path, content in items:
            entry = _materialize_one(root, path, content)
            _report(entry, emitter)
            entries.append(entry)
        return MaterializationResult(entries=entries)

    # Slots are pre-allocated by index so completion order cannot reorder results.
    slots: list[MaterializationEntry | None] = [None] * len(items)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        futures = {
            executor.submit(_materialize_one, root, path, content): index
            for index, (path, content) in enumerate(items)
        }
        for future, index in futures.items():
            slots[index] = future.result()

    entries = [entry for entry in slots if entry is not None]
    for entry in entries:
        _report(entry, emitter)
    return MaterializationResult(entries=entries)


# Host-facing name
write = write_files
