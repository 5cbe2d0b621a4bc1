"""Shared pytest fixtures for logscope tests."""
from __future__ import annotations

import io
import json
from dataclasses import dataclass

import pytest

from logscope.ingest.reader import IngestionLoop
from logscope.render.renderer import LineRenderer
from logscope.search.filter_engine import FilterEngine
from logscope.store.line_store import LineStore


@dataclass
class Pipeline:
    store: LineStore
    renderer: LineRenderer
    engine: FilterEngine

    def feed(self, lines: list[str]) -> IngestionLoop:
        """Ingest ``lines`` synchronously, as the background reader would."""
        data = "".join(line + "\n" for line in lines).encode("utf-8")
        loop = IngestionLoop(io.BytesIO(data), self.store, self.renderer, self.engine)
        loop.run()
        return loop


@pytest.fixture()
def pipeline() -> Pipeline:
    store = LineStore()
    renderer = LineRenderer()
    return Pipeline(store, renderer, FilterEngine(store, renderer))


@pytest.fixture()
def mixed_lines() -> list[str]:
    return ["hello", '{"level":"info","msg":"ok"}', "[1,2,3]"]


@pytest.fixture()
def json_log_lines() -> list[str]:
    return [
        json.dumps({"timestamp": "2025-08-01T10:00:00", "level": "INFO", "message": "startup"}),
        json.dumps({"timestamp": "2025-08-01T10:00:01", "level": "ERROR", "message": "disk full"}),
        "plain text: retrying in 5s",
        json.dumps({"timestamp": "2025-08-01T10:00:03", "level": "INFO", "message": "done"}),
    ]


@pytest.fixture()
def tmp_log_file(tmp_path):
    """Return a factory that creates temporary log files."""

    def _make(lines: list[str], name: str = "test.log"):
        p = tmp_path / name
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p

    return _make
