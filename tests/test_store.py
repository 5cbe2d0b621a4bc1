"""Tests for the append-only line store."""
from __future__ import annotations

import threading

import pytest

from logscope.store.line_store import LineStore, LogLine


class TestLineStore:
    def test_append_returns_arrival_index(self) -> None:
        store = LineStore()
        assert store.append("a") == 0
        assert store.append("b") == 1
        assert len(store) == 2

    def test_snapshot_in_arrival_order(self) -> None:
        store = LineStore()
        for text in ["x", "y", "z"]:
            store.append(text)
        assert store.snapshot() == (LogLine(0, "x"), LogLine(1, "y"), LogLine(2, "z"))

    def test_snapshot_is_a_copy(self) -> None:
        store = LineStore()
        store.append("first")
        snap = store.snapshot()
        store.append("second")
        assert len(snap) == 1
        assert len(store.snapshot()) == 2

    def test_get(self) -> None:
        store = LineStore()
        store.append("only")
        assert store.get(0).text == "only"
        with pytest.raises(IndexError):
            store.get(1)

    def test_log_line_is_immutable(self) -> None:
        line = LogLine(0, "raw")
        with pytest.raises(AttributeError):
            line.text = "changed"  # type: ignore[misc]

    def test_empty_lines_are_stored(self) -> None:
        store = LineStore()
        store.append("")
        assert store.snapshot()[0].text == ""

    def test_repr(self) -> None:
        store = LineStore()
        store.append("a")
        assert "1 lines" in repr(store)

    def test_concurrent_append_and_snapshot(self) -> None:
        store = LineStore()
        done = threading.Event()
        snapshots: list[tuple[LogLine, ...]] = []

        def produce() -> None:
            for i in range(2000):
                store.append(f"line {i}")
            done.set()

        producer = threading.Thread(target=produce)
        producer.start()
        while not done.is_set():
            snapshots.append(store.snapshot())
        producer.join()

        for snap in snapshots + [store.snapshot()]:
            assert [line.index for line in snap] == list(range(len(snap)))
        assert len(store) == 2000
