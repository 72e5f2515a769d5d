"""Classified model response: a tagged union of inline text or a file set."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TextResponse(BaseModel):
    """Content to substitute verbatim for the editor selection."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str


class FileSetResponse(BaseModel):
    """Workspace-relative path -> file content, in the order the model gave them.

    Keys are validated RelativePaths; the classifier never builds one otherwise.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["files"] = "files"
    value: dict[str, str] = Field(default_factory=dict)


ClassifiedResponse = Annotated[
    Union[TextResponse, FileSetResponse],
    Field(discriminator="kind"),
]
