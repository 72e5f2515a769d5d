from typing import Literal

from pydantic import BaseModel, Field

from blu.domain.models.json_diagnostic import JsonDiagnostic
from blu.domain.models.materialization_result import MaterializationEntry


class BaseOutput(BaseModel):
    schema_version: int = 1
    command: Literal["classify", "apply", "diagnose"]
    exit_code: int
    error: str | None = None


class ClassifyOutput(BaseOutput):
    command: Literal["classify"] = "classify"
    kind: str | None = None
    # Text responses carry the cleaned text; file sets list their paths only.
    text: str | None = None
    paths: list[str] | None = None


class ApplyOutput(BaseOutput):
    command: Literal["apply"] = "apply"
    kind: str | None = None
    text: str | None = None
    results: list[MaterializationEntry] = Field(default_factory=list)
    message: str | None = None


class DiagnoseOutput(BaseOutput):
    command: Literal["diagnose"] = "diagnose"
    valid: bool = False
    diagnostic: JsonDiagnostic | None = None
