"""Per-path outcome of writing a file set to disk."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Outcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(str, Enum):
    PATH_REJECTED = "path_rejected"
    DIRECTORY_CREATION_FAILED = "directory_creation_failed"
    WRITE_FAILED = "write_failed"


class MaterializationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    outcome: Outcome
    error: FailureKind | None = None
    reason: str | None = None

    @classmethod
    def success(cls, path: str) -> "MaterializationEntry":
        return cls(path=path, outcome=Outcome.SUCCESS)

    @classmethod
    def failure(cls, path: str, error: FailureKind, reason: str) -> "MaterializationEntry":
        return cls(path=path, outcome=Outcome.FAILURE, error=error, reason=reason)

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS


class MaterializationResult(BaseModel):
    """Ordered results, one entry per input key, preserving input order."""

    model_config = ConfigDict(frozen=True)

    entries: list[MaterializationEntry] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[MaterializationEntry]:
        return [e for e in self.entries if e.ok]

    @property
    def failed(self) -> list[MaterializationEntry]:
        return [e for e in self.entries if not e.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def __len__(self) -> int:
        return len(self.entries)

    def summary(self) -> str:
        """User-facing one-paragraph summary of the batch."""
        if not self.entries:
            return "No files to create."
        if self.ok:
            return "Files created successfully."
        lines = [f"Created {len(self.succeeded)} of {len(self.entries)} files."]
        for entry in self.failed:
            lines.append(f"Failed to create file: {entry.path}. Error: {entry.reason}")
        return "\n".join(lines)
