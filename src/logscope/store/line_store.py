"""Append-only, thread-safe store of raw log lines."""
from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LogLine:
    """One raw input line and its 0-based arrival index."""

    index: int
    text: str


class LineStore:
    """Ordered collection of every line read so far.

    One producer appends while the presentation thread takes snapshots.
    Both go through the same lock; entries are never removed or replaced,
    so the store only grows until the input ends.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: list[LogLine] = []

    def append(self, text: str) -> int:
        """Store ``text`` and return its arrival index."""
        with self._lock:
            index = len(self._lines)
            self._lines.append(LogLine(index=index, text=text))
        return index

    def snapshot(self) -> tuple[LogLine, ...]:
        """Return a point-in-time copy of all lines in arrival order."""
        with self._lock:
            return tuple(self._lines)

    def get(self, index: int) -> LogLine:
        with self._lock:
            return self._lines[index]

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def __repr__(self) -> str:
        return f"LineStore({len(self)} lines)"
