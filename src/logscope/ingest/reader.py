"""Background reader that feeds the line store from an input stream.

Usage::

    loop = IngestionLoop(sys.stdin.buffer, store, renderer, engine,
                         on_status=print)
    loop.start()          # daemon thread, runs until EOF or a read error
"""
from __future__ import annotations

import logging
import threading
from typing import IO, Callable, Iterator

from ..errors import StreamError
from ..render.renderer import LineRenderer
from ..search.filter_engine import FilterEngine
from ..store.line_store import LineStore

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


def _clean(raw: bytes | str) -> str:
    """Decode one raw line and drop its line terminator."""
    line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def iter_lines(stream: IO[bytes] | IO[str]) -> Iterator[str]:
    """Yield lines from ``stream`` one at a time, without terminators.

    Empty lines are kept; a final line with no newline is yielded too.
    Read failures are re-raised as :class:`StreamError`.
    """
    while True:
        try:
            raw = stream.readline()
        except (OSError, ValueError) as exc:
            raise StreamError(str(exc) or exc.__class__.__name__) from exc
        if not raw:
            return
        yield _clean(raw)


class IngestionLoop:
    """Single producer: read → store → render → filter → notify.

    The loop has no timeouts. It ends on EOF, on a read error, or when
    :meth:`stop` is called (checked between reads, so a blocked read still
    has to return first). Read errors never propagate: they end ingestion,
    are kept in :attr:`error` and reported through ``on_status``.
    """

    def __init__(
        self,
        stream: IO[bytes] | IO[str],
        store: LineStore,
        renderer: LineRenderer,
        engine: FilterEngine,
        on_status: StatusCallback | None = None,
    ) -> None:
        self._stream = stream
        self._store = store
        self._renderer = renderer
        self._engine = engine
        self._on_status = on_status
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.error: StreamError | None = None
        self.status = "Reading…"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> threading.Thread:
        """Run :meth:`run` on a daemon thread and return the thread."""
        # Daemon: an unfinished read must not keep the process alive on quit
        self._thread = threading.Thread(
            target=self.run, name="logscope-ingest", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self) -> int:
        """Ingest until the stream ends. Returns the number of lines read."""
        count = 0
        try:
            for text in iter_lines(self._stream):
                index = self._store.append(text)
                line = self._store.get(index)
                self._engine.on_new_line(self._renderer.render(line))
                count += 1
                if self._stop.is_set():
                    self._report(f"Stopped ({count} lines)")
                    return count
        except StreamError as exc:
            self.error = exc
            logger.warning("Error reading logs after %d lines: %s", count, exc)
            self._report(f"Error reading logs: {exc}")
            return count
        logger.debug("Input ended after %d lines", count)
        self._report(f"End of input ({count} lines)")
        return count

    def _report(self, status: str) -> None:
        self.status = status
        if self._on_status is not None:
            self._on_status(status)
