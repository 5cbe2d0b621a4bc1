"""Tests for the memoizing line renderer and display markup."""
from __future__ import annotations

import logging
import threading

import pytest

from logscope.jsonfmt import classify as classify_module
from logscope.jsonfmt import decode as decode_module
from logscope.jsonfmt.classify import is_structured
from logscope.render import renderer as renderer_module
from logscope.render.markup import DEFAULT_PALETTE, MarkupClass, line_text, tag, to_text
from logscope.render.renderer import LineRenderer, RenderedLine, render_line
from logscope.store.line_store import LogLine


# ---------------------------------------------------------------------------
# render_line
# ---------------------------------------------------------------------------

class TestRenderLine:
    def test_plain_line_unchanged(self) -> None:
        result = render_line(LogLine(0, "hello [world]"))
        assert result == RenderedLine(0, "hello [world]", False, "hello [world]")

    def test_top_level_array_is_plain(self) -> None:
        result = render_line(LogLine(2, "[1,2,3]"))
        assert not result.is_structured
        assert result.display_text == "[1,2,3]"

    def test_object_is_highlighted(self) -> None:
        result = render_line(LogLine(1, '{"level":"info","msg":"ok"}'))
        assert result.is_structured
        assert result.text == '{"level":"info","msg":"ok"}'
        for token in ('[key]"level"[/key]', '[string]"info"[/string]',
                      '[key]"msg"[/key]', '[string]"ok"[/string]'):
            assert token in result.display_text

    @pytest.mark.parametrize("lead", [" ", "\t", "\r\n", "\x0b", "\x0c", "\x1c", "\xa0", "\u2028"])
    def test_agrees_with_classifier(self, lead: str) -> None:
        text = lead + '{"a":1}'
        assert render_line(LogLine(0, text)).is_structured is is_structured(text)

    def test_non_json_whitespace_is_plain(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="logscope"):
            result = render_line(LogLine(0, '\x0c{"a":1}'))
        assert not result.is_structured
        assert result.display_text == '\x0c{"a":1}'
        assert caplog.records == []

    def test_decodes_once(self, monkeypatch) -> None:
        calls: list[str] = []
        real = decode_module.decode

        def counting(text: str):
            calls.append(text)
            return real(text)

        monkeypatch.setattr(classify_module, "decode", counting)
        render_line(LogLine(0, '{"a":1}'))
        assert calls == ['{"a":1}']


# ---------------------------------------------------------------------------
# LineRenderer
# ---------------------------------------------------------------------------

class TestLineRenderer:
    def test_memoized_by_index(self) -> None:
        r = LineRenderer()
        line = LogLine(0, '{"a":1}')
        first = r.render(line)
        assert r.render(line) is first
        assert r.render(LogLine(0, '{"a":1}')) is first
        assert len(r) == 1

    def test_renders_once(self, monkeypatch) -> None:
        calls: list[int] = []
        real = renderer_module.render_line

        def counting(line: LogLine) -> RenderedLine:
            calls.append(line.index)
            return real(line)

        monkeypatch.setattr(renderer_module, "render_line", counting)
        r = LineRenderer()
        line = LogLine(3, "x")
        threads = [threading.Thread(target=r.render, args=(line,)) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert calls == [3]


# ---------------------------------------------------------------------------
# markup
# ---------------------------------------------------------------------------

class TestMarkup:
    def test_tag_escapes_literal(self) -> None:
        assert tag(MarkupClass.STRING, "[b]") == "[string]\\[b][/string]"

    def test_palette_applied(self) -> None:
        text = to_text('[key]"a"[/key]', {"key": "bold red"})
        assert text.plain == '"a"'
        assert [str(span.style) for span in text.spans] == ["bold red"]

    def test_default_palette_covers_every_class(self) -> None:
        assert set(DEFAULT_PALETTE) == {cls.value for cls in MarkupClass}

    def test_plain_lines_not_parsed_as_markup(self) -> None:
        assert line_text("[bold]not bold", False).plain == "[bold]not bold"

    def test_structured_lines_parsed(self) -> None:
        text = line_text('[wrapper]{[/wrapper][wrapper]}[/wrapper]', True)
        assert text.plain == "{}"
