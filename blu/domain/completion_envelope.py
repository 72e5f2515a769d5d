"""Extract the textual payload from a chat-completion response body."""

import json
from typing import Any

from blu.domain.errors import UnexpectedEnvelopeError


def extract_completion_text(envelope: Any) -> str:
    """
    Return the first choice's message content, trimmed.

    Args:
        envelope: Decoded chat-completion body, e.g.
            {"choices": [{"message": {"role": "assistant", "content": "..."}}]}

    Raises:
        UnexpectedEnvelopeError: If the body carries no choice with a string message content.
    """
    if not isinstance(envelope, dict):
        raise UnexpectedEnvelopeError("Unexpected response: body is not a JSON object")

    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        error = envelope.get("error")
        if isinstance(error, dict) and error.get("message"):
            raise UnexpectedEnvelopeError(f"Unexpected response: {error['message']}")
        raise UnexpectedEnvelopeError("Unexpected response: no choices")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise UnexpectedEnvelopeError("Unexpected response: first choice has no message")

    content = message.get("content")
    if not isinstance(content, str):
        raise UnexpectedEnvelopeError("Unexpected response: message content is not text")

    return content.strip()


def extract_completion_text_from_json(body: str) -> str:
    """Decode a raw response body and extract its message content."""
    try:
        envelope = json.loads(body)
    except json.JSONDecodeError as e:
        raise UnexpectedEnvelopeError(f"Unexpected response: body is not JSON ({e.msg})") from e
    return extract_completion_text(envelope)
