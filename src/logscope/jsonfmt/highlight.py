"""Render a decoded JSON node as color-class markup.

Output stays on one line and mirrors the compact JSON form::

    {"level": "info"}  ->  [wrapper]{[/wrapper][key]"level"[/key][plain]: [/plain]...

Numbers are printed from their decoded value, so a literal such as ``1.50``
comes out as ``1.5`` and ``1e3`` as ``1000.0``. Use :func:`..pretty.pretty`
when the exact source literals matter.
"""
from __future__ import annotations

import json
from typing import Any

from ..render.markup import MarkupClass, tag
from .decode import JsonObject

_COMMA = tag(MarkupClass.WRAPPER, ",")
_COLON = tag(MarkupClass.PLAIN, ": ")


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def highlight(node: Any) -> str:
    """Return markup text for ``node``. Never raises for decoded JSON."""
    # bool before number: bool is an int subclass
    if isinstance(node, JsonObject):
        return _highlight_object(node)
    if isinstance(node, (list, tuple)):
        return _highlight_array(node)
    if isinstance(node, str):
        return tag(MarkupClass.STRING, _quote(node))
    if isinstance(node, bool):
        return tag(MarkupClass.BOOLEAN, "true" if node else "false")
    if isinstance(node, (int, float)):
        return tag(MarkupClass.NUMBER, str(node))
    if node is None:
        return tag(MarkupClass.NULL, "null")
    return tag(MarkupClass.PLAIN, str(node))


def _highlight_object(obj: JsonObject) -> str:
    parts = [tag(MarkupClass.WRAPPER, "{")]
    for i, (key, value) in enumerate(obj):
        if i:
            parts.append(_COMMA)
        parts.append(tag(MarkupClass.KEY, _quote(key)))
        parts.append(_COLON)
        parts.append(highlight(value))
    parts.append(tag(MarkupClass.WRAPPER, "}"))
    return "".join(parts)


def _highlight_array(items: list[Any] | tuple[Any, ...]) -> str:
    parts = [tag(MarkupClass.WRAPPER, "[")]
    for i, item in enumerate(items):
        if i:
            parts.append(_COMMA)
        parts.append(highlight(item))
    parts.append(tag(MarkupClass.WRAPPER, "]"))
    return "".join(parts)
