"""Turn raw log lines into cached, display-ready rendered lines."""
from __future__ import annotations

import threading
from dataclasses import dataclass

from ..jsonfmt.classify import classify
from ..jsonfmt.highlight import highlight
from ..store.line_store import LogLine


@dataclass(frozen=True, slots=True)
class RenderedLine:
    """Render result for one LogLine.

    ``text`` is the raw line (used for filtering); ``display_text`` is what
    gets drawn. For plain lines the two are identical. For structured lines
    ``display_text`` is color-class markup (see :mod:`.markup`).
    """

    index: int
    text: str
    is_structured: bool
    display_text: str


def render_line(line: LogLine) -> RenderedLine:
    """Render ``line`` without caching. Never raises.

    Structured lines are highlighted from their compact decoded form; the
    list and detail views both show this same text. The line is decoded
    once, by the classifier, and that node is what gets highlighted.
    """
    node = classify(line.text)
    if node is None:
        return RenderedLine(line.index, line.text, False, line.text)
    return RenderedLine(line.index, line.text, True, highlight(node))


class LineRenderer:
    """Memoizing front end for :func:`render_line`.

    Results are keyed by arrival index and rendered exactly once, even when
    the ingestion thread and the presentation thread ask for the same line
    at the same time.
    """

    def __init__(self) -> None:
        self._cache: dict[int, RenderedLine] = {}
        self._lock = threading.Lock()

    def render(self, line: LogLine) -> RenderedLine:
        cached = self._cache.get(line.index)
        if cached is not None:
            return cached
        # Held while rendering a miss so each line is rendered exactly once.
        # A long rescan on the UI thread can make the producer wait here.
        with self._lock:
            cached = self._cache.get(line.index)
            if cached is None:
                cached = render_line(line)
                self._cache[line.index] = cached
            return cached

    def __len__(self) -> int:
        return len(self._cache)
