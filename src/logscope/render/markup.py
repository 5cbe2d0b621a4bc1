"""Color-class markup shared by the renderer and the presentation layer.

Display text is rich console markup restricted to a closed set of tag
names (:class:`MarkupClass`). The tags name *roles*, not colors; a palette
maps each role to a concrete rich style only when text is drawn.
"""
from __future__ import annotations

from enum import Enum
from typing import Mapping

from rich.markup import escape
from rich.text import Span, Text


class MarkupClass(str, Enum):
    KEY = "key"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    WRAPPER = "wrapper"
    PLAIN = "plain"


DEFAULT_PALETTE: dict[str, str] = {
    MarkupClass.KEY.value: "yellow",
    MarkupClass.STRING.value: "green",
    MarkupClass.NUMBER.value: "blue",
    MarkupClass.BOOLEAN.value: "cyan",
    MarkupClass.NULL.value: "magenta",
    MarkupClass.WRAPPER.value: "white",
    MarkupClass.PLAIN.value: "white",
}


def tag(cls: MarkupClass, literal: str) -> str:
    """Wrap ``literal`` (escaped) in the markup tag for ``cls``."""
    return f"[{cls.value}]{escape(literal)}[/{cls.value}]"


def to_text(markup: str, palette: Mapping[str, str] | None = None) -> Text:
    """Parse display markup into a :class:`rich.text.Text` using ``palette``."""
    colors = DEFAULT_PALETTE if palette is None else palette
    text = Text.from_markup(markup)
    text.spans = [
        Span(span.start, span.end, colors.get(str(span.style), span.style))
        for span in text.spans
    ]
    return text


def line_text(
    display_text: str,
    is_structured: bool,
    palette: Mapping[str, str] | None = None,
) -> Text:
    """Return drawable text for a rendered line.

    Plain lines are never parsed as markup: a raw ``[bold]`` in a log line
    is shown literally.
    """
    if is_structured:
        return to_text(display_text, palette)
    colors = DEFAULT_PALETTE if palette is None else palette
    return Text(display_text, style=colors.get(MarkupClass.PLAIN.value, ""))
