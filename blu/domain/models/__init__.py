"""Domain models for blu."""

from .classified_response import (
    ClassifiedResponse,
    FileSetResponse,
    TextResponse,
)
from .json_diagnostic import JsonDiagnostic
from .materialization_result import (
    FailureKind,
    MaterializationEntry,
    MaterializationResult,
    Outcome,
)


__all__ = [
    "ClassifiedResponse",
    "FileSetResponse",
    "TextResponse",
    "JsonDiagnostic",
    "FailureKind",
    "MaterializationEntry",
    "MaterializationResult",
    "Outcome",
]
