"""Decode a log line into an order-preserving JSON node tree.

Objects decode to :class:`JsonObject`, a tuple of ``(key, value)`` pairs, so
key order (and duplicate keys) survive exactly as they appear in the line.
Arrays decode to ``list``, which keeps the two shapes distinguishable.
"""
from __future__ import annotations

import json
from typing import Any, Union

from ..errors import DecodeError

# The only characters json.loads skips between tokens
JSON_WHITESPACE = " \t\r\n"


class JsonObject(tuple):
    """A decoded JSON object: ordered ``(key, value)`` pairs."""

    __slots__ = ()

    def keys(self) -> list[str]:
        return [k for k, _ in self]

    def get(self, key: str, default: Any = None) -> Any:
        # Last occurrence wins, like json.loads into a dict
        for k, v in reversed(self):
            if k == key:
                return v
        return default


JsonNode = Union[JsonObject, list, str, int, float, bool, None]


def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"non-standard JSON constant {name!r}")


def decode(text: str) -> JsonNode:
    """Decode ``text`` as a single JSON document.

    Raises :class:`DecodeError` for anything that is not strict JSON.
    """
    try:
        return json.loads(
            text,
            object_pairs_hook=JsonObject,
            parse_constant=_reject_constant,
        )
    except (ValueError, RecursionError) as exc:
        raise DecodeError(str(exc)) from exc
