"""Live literal-substring filter over the line store.

Two paths keep the visible set current:

* :meth:`FilterEngine.set_filter` rescans every stored line (filter changed).
* :meth:`FilterEngine.on_new_line` tests a single new arrival against the
  current filter and appends it when it matches.

A line that arrives while the filter is being changed is matched against
whichever filter was current when it arrived; the next ``set_filter`` call
makes the visible set globally consistent again.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable

from ..render.renderer import LineRenderer, RenderedLine
from ..store.line_store import LineStore, LogLine

logger = logging.getLogger(__name__)

# listener(rendered_line, filter_generation)
Listener = Callable[[RenderedLine, int], None]


class FilterEngine:
    """Maintain the ordered subsequence of lines matching the filter text.

    Matching is case-sensitive and literal, on the raw line text (never on
    markup). The empty filter matches everything.

    Usage::

        engine = FilterEngine(store, renderer)
        engine.subscribe(lambda line, gen: print(line.display_text))
        engine.set_filter("error")
    """

    def __init__(self, store: LineStore, renderer: LineRenderer) -> None:
        self._store = store
        self._renderer = renderer
        self._lock = threading.Lock()
        self._filter = ""
        self._visible: list[LogLine] = []
        # Lines with index below this were covered by the last full rescan
        self._scanned_upto = 0
        self._generation = 0
        self._listeners: list[Listener] = []

    @property
    def filter_text(self) -> str:
        return self._filter

    @property
    def generation(self) -> int:
        """Incremented by every :meth:`set_filter` call."""
        return self._generation

    def matches(self, text: str) -> bool:
        return self._filter in text

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` whenever a new arrival becomes visible."""
        self._listeners.append(listener)

    def set_filter(self, text: str) -> list[RenderedLine]:
        """Replace the filter and recompute the visible set from scratch."""
        with self._lock:
            lines = self._store.snapshot()
            self._filter = text
            self._visible = [line for line in lines if text in line.text]
            self._scanned_upto = len(lines)
            self._generation += 1
            visible = list(self._visible)
        logger.debug(
            "Filter %r matched %d of %d lines", text, len(visible), len(lines)
        )
        return [self._renderer.render(line) for line in visible]

    def on_new_line(self, rendered: RenderedLine) -> bool:
        """Match a newly stored line against the current filter.

        Returns True (and notifies subscribers) when the line became
        visible. Lines already seen by the last full rescan are ignored.
        """
        with self._lock:
            if rendered.index < self._scanned_upto:
                return False
            if self._filter not in rendered.text:
                return False
            self._visible.append(LogLine(rendered.index, rendered.text))
            generation = self._generation
        for listener in self._listeners:
            listener(rendered, generation)
        return True

    def visible_lines(self) -> list[RenderedLine]:
        """Return the currently visible lines in arrival order."""
        with self._lock:
            visible = list(self._visible)
        return [self._renderer.render(line) for line in visible]

    def __len__(self) -> int:
        with self._lock:
            return len(self._visible)
