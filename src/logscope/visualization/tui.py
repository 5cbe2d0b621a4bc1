"""Textual TUI for browsing a live log stream.

Launch with:
    some-service | logscope view
    logscope view app.log

Layout: search box on top, the filtered line list below, a status bar at the
bottom. Selecting a line opens it in a modal; ``q`` quits.
"""
from __future__ import annotations

from typing import IO, ClassVar

from rich.markup import escape
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Input, OptionList, Static
from textual.widgets.option_list import Option

from ..ingest.reader import IngestionLoop
from ..render.markup import DEFAULT_PALETTE, line_text
from ..render.renderer import LineRenderer, RenderedLine
from ..search.filter_engine import FilterEngine
from ..store.line_store import LineStore


class LineArrived(Message):
    """Posted from the ingestion thread when a new line becomes visible."""

    def __init__(self, line: RenderedLine, generation: int) -> None:
        self.line = line
        self.generation = generation
        super().__init__()


class IngestStatus(Message):
    """Posted from the ingestion thread when reading stops."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__()


class StatsBar(Static):
    """Status bar showing line counts and ingestion state."""

    total: reactive[int] = reactive(0)
    shown: reactive[int] = reactive(0)
    status: reactive[str] = reactive("Reading…")

    def render(self) -> str:
        return (
            f"[bold cyan]Lines:[/bold cyan] {self.total}  "
            f"[bold cyan]Shown:[/bold cyan] {self.shown}  "
            f"[dim]{escape(self.status)}[/dim]"
        )


class LineDetailScreen(ModalScreen[None]):
    """Full view of one line, drawn from the same cached render as the list."""

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "close", "Close"),
    ]

    DEFAULT_CSS = """
    LineDetailScreen {
        align: center middle;
    }
    LineDetailScreen > Vertical {
        width: 90%;
        height: auto;
        max-height: 90%;
        border: round $primary;
        background: $surface;
        padding: 1 2;
    }
    LineDetailScreen VerticalScroll {
        height: auto;
        max-height: 30;
    }
    LineDetailScreen Button {
        margin-top: 1;
    }
    """

    def __init__(self, line: RenderedLine, palette: dict[str, str]) -> None:
        super().__init__()
        self._rendered = line
        self._palette = palette

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(f"[bold]Line {self._rendered.index + 1}[/bold]")
            with VerticalScroll():
                yield Static(
                    line_text(
                        self._rendered.display_text,
                        self._rendered.is_structured,
                        self._palette,
                    )
                )
            yield Button("Close", variant="primary", id="close")

    @on(Button.Pressed, "#close")
    def _close_pressed(self) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


class LogViewerApp(App[None]):
    """Search box + filtered line list over a growing line store.

    Keybindings:
        q       quit (when the search box is not focused)
        /       focus the search box
        escape  back to the line list
        enter   open the selected line
    """

    TITLE = "logscope"

    CSS = """
    Screen {
        layout: vertical;
    }
    #search {
        height: 3;
    }
    #lines {
        border: round $primary;
        height: 1fr;
    }
    StatsBar {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("q", "quit", "Quit"),
        Binding("slash", "focus_search", "Search"),
        Binding("escape", "focus_lines", "Lines", show=False),
    ]

    def __init__(
        self,
        stream: IO[bytes] | IO[str],
        *,
        source_name: str = "stdin",
        initial_filter: str = "",
        palette: dict[str, str] | None = None,
    ) -> None:
        super().__init__()
        self._line_store = LineStore()
        self._line_renderer = LineRenderer()
        self._filter_engine = FilterEngine(self._line_store, self._line_renderer)
        self._ingest = IngestionLoop(
            stream,
            self._line_store,
            self._line_renderer,
            self._filter_engine,
            on_status=lambda status: self.post_message(IngestStatus(status)),
        )
        self._initial_filter = initial_filter
        self._palette = dict(palette) if palette is not None else dict(DEFAULT_PALETTE)
        self._shown: list[RenderedLine] = []
        self.sub_title = source_name

    @property
    def ingestion(self) -> IngestionLoop:
        return self._ingest

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(
            value=self._initial_filter,
            placeholder="Search (literal, case-sensitive)",
            id="search",
        )
        option_list = OptionList(id="lines")
        option_list.border_title = "Logs (enter to expand, q to quit)"
        yield option_list
        yield StatsBar(id="stats_bar")
        yield Footer()

    def on_mount(self) -> None:
        self._filter_engine.subscribe(
            lambda line, generation: self.post_message(LineArrived(line, generation))
        )
        self._rebuild(self._filter_engine.set_filter(self._initial_filter))
        self._ingest.start()
        self.set_interval(0.25, self._refresh_stats)
        self.query_one("#lines", OptionList).focus()

    def _option(self, line: RenderedLine) -> Option:
        return Option(line_text(line.display_text, line.is_structured, self._palette))

    def _rebuild(self, lines: list[RenderedLine]) -> None:
        option_list = self.query_one("#lines", OptionList)
        option_list.clear_options()
        option_list.add_options([self._option(line) for line in lines])
        self._shown = list(lines)

    def _refresh_stats(self) -> None:
        stats = self.query_one("#stats_bar", StatsBar)
        stats.total = len(self._line_store)
        stats.shown = len(self._shown)

    @on(Input.Changed, "#search")
    def _filter_changed(self, event: Input.Changed) -> None:
        self._rebuild(self._filter_engine.set_filter(event.value))
        self._refresh_stats()

    @on(Input.Submitted, "#search")
    def _search_submitted(self) -> None:
        self.action_focus_lines()

    @on(LineArrived)
    def _line_arrived(self, message: LineArrived) -> None:
        # Older generations are already part of the last rebuild
        if message.generation != self._filter_engine.generation:
            return
        self.query_one("#lines", OptionList).add_option(self._option(message.line))
        self._shown.append(message.line)

    @on(IngestStatus)
    def _status_changed(self, message: IngestStatus) -> None:
        self.query_one("#stats_bar", StatsBar).status = message.status
        self._refresh_stats()

    @on(OptionList.OptionSelected, "#lines")
    def _line_selected(self, event: OptionList.OptionSelected) -> None:
        self.push_screen(LineDetailScreen(self._shown[event.option_index], self._palette))

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_focus_lines(self) -> None:
        self.query_one("#lines", OptionList).focus()


def run_viewer(
    stream: IO[bytes] | IO[str],
    *,
    source_name: str = "stdin",
    initial_filter: str = "",
    palette: dict[str, str] | None = None,
    mouse: bool = True,
) -> IngestionLoop:
    """Run the viewer until the user quits; return the ingestion loop."""
    app = LogViewerApp(
        stream,
        source_name=source_name,
        initial_filter=initial_filter,
        palette=palette,
    )
    app.run(mouse=mouse)
    return app.ingestion
