from pydantic import BaseModel, ConfigDict


class JsonDiagnostic(BaseModel):
    """Location of the first JSON syntax error in a response, for debugging."""

    model_config = ConfigDict(frozen=True)

    message: str
    position: int
    line: int
    column: int
    snippet: str
    bad_character: str | None = None

    def format(self) -> str:
        bad = repr(self.bad_character) if self.bad_character is not None else "<end of input>"
        return (
            f"Error at position {self.position} (line {self.line}, column {self.column}): "
            f"{self.message}; snippet: {self.snippet!r}; bad character: {bad}"
        )
