"""
Classify raw model output as inline text or a multi-file JSON payload.

Contract:
- Input: the raw model text, possibly wrapped in a fenced block.
- Output: TextResponse or FileSetResponse.
- A JSON object whose keys are all safe relative paths and whose values are
  all strings becomes a FileSetResponse, in the object's key order.
- Any key that is absolute, empty or escapes the root rejects the whole
  response with InvalidFileSetKey.
- Anything else, malformed JSON included, degrades to TextResponse.
"""

import json
import logging
import re
from typing import Any

from blu.domain.constants import DIAGNOSTIC_SNIPPET_RADIUS, FENCE_DELIMITER
from blu.domain.errors import InvalidFileSetKey
from blu.domain.models.classified_response import (
    ClassifiedResponse,
    FileSetResponse,
    TextResponse,
)
from blu.domain.models.json_diagnostic import JsonDiagnostic
from blu.domain.validation.path_validator import PathValidationError, PathValidator

logger = logging.getLogger(__name__)

# Language tag allowed after the opening fence: "python", "c++", "objective-c", "c#", "json5"
_LANGUAGE_TAG_PATTERN = re.compile(r"^[\w.+#-]*$")


def strip_outer_fence(raw: str) -> str:
    """
    Remove a single fenced block wrapping the whole text, then trim.

    Only a fence that opens at the very start and closes at the very end is
    removed. The remainder of the opening line is dropped when it looks like
    a language tag and kept as content otherwise.

    Examples:
        >>> strip_outer_fence("```python\\nprint(1)\\n```")
        'print(1)'
        >>> strip_outer_fence("  plain text \\n")
        'plain text'
    """
    text = raw.strip()
    if not text.startswith(FENCE_DELIMITER):
        return text

    if "\n" not in text:
        # Single line: "```" alone, or "```code```"
        if text == FENCE_DELIMITER:
            return ""
        if len(text) >= 2 * len(FENCE_DELIMITER) and text.endswith(FENCE_DELIMITER):
            return text[len(FENCE_DELIMITER):-len(FENCE_DELIMITER)].strip()
        return text

    if not text.endswith(FENCE_DELIMITER):
        return text

    opening, _, rest = text.partition("\n")
    tag = opening[len(FENCE_DELIMITER):].strip()
    body = rest[:-len(FENCE_DELIMITER)]

    # Inline close ("```hello\nworld```"): the opening line is content, not a tag.
    closes_on_own_line = body.rstrip(" \t") == "" or body.rstrip(" \t").endswith("\n")
    if tag and not (closes_on_own_line and _LANGUAGE_TAG_PATTERN.match(tag)):
        body = f"{tag}\n{body}"

    return body.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_json_object(text: str) -> Any:
    # NaN / Infinity are not JSON; Python accepts them unless told otherwise.
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nesting too deep") from e


def diagnose_json(text: str) -> JsonDiagnostic | None:
    """
    Locate the first JSON syntax error in text.

    Returns:
        None if text parses, otherwise the error position with a snippet of
        the surrounding characters and the offending character.
    """
    try:
        _parse_json_object(text)
    except json.JSONDecodeError as e:
        position = e.pos
        start = max(0, position - DIAGNOSTIC_SNIPPET_RADIUS)
        end = min(len(text), position + DIAGNOSTIC_SNIPPET_RADIUS)
        return JsonDiagnostic(
            message=e.msg,
            position=position,
            line=e.lineno,
            column=e.colno,
            snippet=text[start:end],
            bad_character=text[position] if position < len(text) else None,
        )
    except ValueError as e:
        return JsonDiagnostic(
            message=str(e),
            position=0,
            line=1,
            column=1,
            snippet=text[:2 * DIAGNOSTIC_SNIPPET_RADIUS],
            bad_character=None,
        )
    return None


def _validate_keys(files: dict[str, Any]) -> None:
    for key in files:
        try:
            PathValidator.validate_relative_path(key)
        except PathValidationError as e:
            raise InvalidFileSetKey(key, str(e)) from e


def classify(raw: str) -> ClassifiedResponse:
    """
    Classify raw model output.

    Args:
        raw: Unparsed model output

    Returns:
        FileSetResponse for a JSON object of relative path -> content,
        TextResponse with the fence-stripped, trimmed text otherwise.

    Raises:
        InvalidFileSetKey: If a JSON object response names an unsafe path.
    """
    cleaned = strip_outer_fence(raw)

    if not cleaned.startswith("{"):
        return TextResponse(value=cleaned)

    try:
        parsed = _parse_json_object(cleaned)
    except ValueError:
        diagnostic = diagnose_json(cleaned)
        if diagnostic is not None:
            logger.debug(f"Response is not valid JSON, treating as text. {diagnostic.format()}")
        return TextResponse(value=cleaned)

    if not isinstance(parsed, dict):
        return TextResponse(value=cleaned)

    _validate_keys(parsed)

    non_text = [key for key, value in parsed.items() if not isinstance(value, str)]
    if non_text:
        logger.debug(f"JSON object has non-string contents for {non_text}, treating as text")
        return TextResponse(value=cleaned)

    logger.debug(f"Response classified as file set with {len(parsed)} file(s)")
    return FileSetResponse(value=parsed)
