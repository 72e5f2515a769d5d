"""Domain-level exceptions for blu."""


class BluError(Exception):
    """Base class for errors raised by blu."""

    pass


class ClassificationError(BluError, ValueError):
    """Raised when a model response cannot be classified safely."""

    pass


class InvalidFileSetKey(ClassificationError):
    """Raised when a file-set response names a path that is absolute, empty, or escapes the root.

    The whole response is rejected; no partial file set is ever produced.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid file path in response: '{key}' ({reason})")
        self.key = key
        self.reason = reason


class UnexpectedEnvelopeError(BluError, ValueError):
    """Raised when a completion envelope does not carry a message payload."""

    pass
