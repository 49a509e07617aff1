"""Fast JSON encoding/decoding for persisted project documents."""

from typing import Any

import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def dumps_document(obj: dict[str, Any], indent: bool = True) -> bytes:
    """
    Encode a document to UTF-8 JSON bytes.

    Args:
        obj: JSON-compatible dictionary
        indent: Pretty-print with two-space indentation

    Returns:
        Encoded JSON, newline terminated
    """
    option = orjson.OPT_APPEND_NEWLINE
    if indent:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=option)


def loads_document(data: bytes | str) -> dict[str, Any] | None:
    """
    Decode a persisted document.

    Args:
        data: Raw file content

    Returns:
        Parsed dictionary, or None when the content is empty or the literal ``null``

    Raises:
        JSONParseError: If the content is not valid JSON or not a JSON object
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data.strip():
        return None

    try:
        result = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if result is None:
        return None
    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result
