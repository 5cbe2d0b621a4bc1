"""Re-indent JSON text without decoding it.

The formatter works on the token stream of the original text: whitespace
between tokens is dropped and rebuilt, everything else (key order, string
escapes, numeric literals such as ``1.50`` or ``1e3``) is copied verbatim.
A decode/re-encode round trip would lose both.
"""
from __future__ import annotations

from typing import Iterator

from ..errors import DecodeError, FormatError
from ..render.markup import MarkupClass, tag
from .decode import JSON_WHITESPACE, decode

_LITERAL_END = frozenset(JSON_WHITESPACE + ",:]}")

Token = tuple[MarkupClass, str]


def _validate(src: str) -> None:
    try:
        decode(src)
    except DecodeError as exc:
        raise FormatError(f"invalid JSON: {exc}") from exc


def _string_end(src: str, start: int) -> int:
    """Index just past the string literal opening at ``start``."""
    i = start + 1
    while src[i] != '"':
        i += 2 if src[i] == "\\" else 1
    return i + 1


def _tokens(src: str, prefix: str, indent: str) -> Iterator[Token]:
    """Yield the re-indented token stream of already validated JSON."""
    src = src.strip(JSON_WHITESPACE)
    depth = 0
    need_indent = False
    containers: list[str] = []
    expect_key = False
    i = 0

    def newline(level: int) -> Token:
        return MarkupClass.PLAIN, "\n" + prefix + indent * level

    while i < len(src):
        ch = src[i]
        if ch in JSON_WHITESPACE:
            i += 1
            continue

        # Open the pending level unless the container is empty
        if need_indent and ch not in "]}":
            need_indent = False
            depth += 1
            yield newline(depth)

        if ch == '"':
            end = _string_end(src, i)
            yield (MarkupClass.KEY if expect_key else MarkupClass.STRING), src[i:end]
            expect_key = False
            i = end
            continue

        if ch in "{[":
            containers.append(ch)
            expect_key = ch == "{"
            need_indent = True
            yield MarkupClass.WRAPPER, ch
        elif ch == ",":
            expect_key = containers[-1] == "{"
            yield MarkupClass.WRAPPER, ch
            yield newline(depth)
        elif ch == ":":
            yield MarkupClass.PLAIN, ": "
        elif ch in "}]":
            containers.pop()
            if need_indent:
                need_indent = False
            else:
                depth -= 1
                yield newline(depth)
            yield MarkupClass.WRAPPER, ch
        else:
            end = i
            while end < len(src) and src[end] not in _LITERAL_END:
                end += 1
            literal = src[i:end]
            if literal in ("true", "false"):
                yield MarkupClass.BOOLEAN, literal
            elif literal == "null":
                yield MarkupClass.NULL, literal
            else:
                yield MarkupClass.NUMBER, literal
            i = end
            continue
        i += 1


def indent(src: str, prefix: str = "", indent: str = "  ") -> str:
    """Return ``src`` re-indented, one nesting level per ``indent``.

    Each new line starts with ``prefix``. Empty objects and arrays stay
    compact (``{}`` / ``[]``).

    Raises:
        FormatError: ``src`` is not a single valid JSON document.
    """
    _validate(src)
    return "".join(text for _, text in _tokens(src, prefix, indent))


def pretty(line: str) -> tuple[str, bool]:
    """Two-space indent ``line``.

    Returns ``(formatted, True)`` on success and ``(line, False)`` when the
    line is not valid JSON, so callers can show the raw line unchanged.
    """
    try:
        return indent(line), True
    except FormatError:
        return line, False


def pretty_markup(line: str) -> tuple[str, bool]:
    """Like :func:`pretty`, but tagged with color classes.

    The plain text of the markup is exactly ``pretty(line)[0]``; literals
    are highlighted as written, not as decoded. On failure returns the raw
    line escaped as a single ``plain`` token.
    """
    try:
        _validate(line)
    except FormatError:
        return tag(MarkupClass.PLAIN, line), False
    return "".join(tag(cls, text) for cls, text in _tokens(line, "", "  ")), True
