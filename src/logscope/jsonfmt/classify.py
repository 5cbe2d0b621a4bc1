"""Decide whether a log line is a structured (JSON object) line."""
from __future__ import annotations

from ..errors import DecodeError
from .decode import JSON_WHITESPACE, JsonObject, decode


def classify(line: str) -> JsonObject | None:
    """Return the decoded object for a structured line, else None.

    The line is decoded exactly as given, so the classification and the
    node a caller goes on to highlight always come from the same parse.
    """
    # Cheap reject before paying for a full parse. Only JSON whitespace is
    # skipped here; str.strip() would also drop characters json rejects.
    if not line.lstrip(JSON_WHITESPACE).startswith("{"):
        return None
    try:
        node = decode(line)
    except DecodeError:
        return None
    return node if isinstance(node, JsonObject) else None


def is_structured(line: str) -> bool:
    """Return True only for lines whose top-level JSON value is an object.

    Valid JSON with any other top-level shape (array, string, number,
    boolean, null) is deliberately *not* structured: structured logs are
    objects, and a bare ``[1,2,3]`` stays plain text.
    """
    return classify(line) is not None
