"""Logscope CLI — entry point.

Commands:
    logscope view  [FILE]   Interactive viewer (reads stdin by default)
    logscope print [FILE]   Filter / highlight lines to stdout
"""
from __future__ import annotations

import logging
import os
import sys
from typing import IO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import Settings
from .ingest.reader import IngestionLoop
from .jsonfmt.pretty import pretty_markup
from .render.markup import line_text, to_text
from .render.renderer import LineRenderer, RenderedLine
from .search.filter_engine import FilterEngine
from .store.line_store import LineStore

err_console = Console(stderr=True)

# ── Helpers ─────────────────────────────────────────────────────────────────


def _configure_logging(settings: Settings, interactive: bool) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    root = logging.getLogger()
    if settings.log_file:
        logging.basicConfig(
            filename=settings.log_file,
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    elif interactive:
        # Anything written to the terminal would land on top of the TUI
        root.addHandler(logging.NullHandler())
        root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


def _terminal_device() -> str:
    return "CONIN$" if sys.platform == "win32" else "/dev/tty"


def _acquire_terminal() -> IO[bytes]:
    """Move piped stdin aside and put the controlling terminal on fd 0.

    Returns a binary stream over the original stdin (the log pipe); the TUI
    then reads keyboard input from the terminal as usual.
    """
    stdin_fd = sys.stdin.fileno()
    log_fd = os.dup(stdin_fd)
    try:
        tty_fd = os.open(_terminal_device(), os.O_RDWR)
    except OSError as exc:
        os.close(log_fd)
        raise click.ClickException(f"Error opening terminal device: {exc}") from exc
    os.dup2(tty_fd, stdin_fd)
    os.close(tty_fd)
    return os.fdopen(log_fd, "rb")


def _open_input(file: str) -> IO[bytes]:
    if file == "-":
        return sys.stdin.buffer
    try:
        return open(file, "rb")
    except OSError as exc:
        raise click.ClickException(f"Cannot open {file}: {exc}") from exc


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version="1.0.0", prog_name="logscope")
def main() -> None:
    """logscope — live filtering and JSON highlighting for log streams."""


# ── view ─────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--filter", "-F", "filter_text", default="", help="Initial search text (literal, case-sensitive).")
@click.option("--log-file", default="", help="Write diagnostics to this file.")
def view(file: str, filter_text: str, log_file: str) -> None:
    """Browse a log stream interactively.

    Lines that are JSON objects are shown highlighted; everything else is
    shown as-is. Select a line to expand it.

    \b
    Examples:
      kubectl logs -f my-pod | logscope view
      logscope view app.log --filter error
    """
    settings = Settings()
    if log_file:
        settings = settings.model_copy(update={"log_file": log_file})
    _configure_logging(settings, interactive=True)

    if file == "-":
        if sys.stdin.isatty():
            raise click.UsageError("Pipe log lines into logscope or pass a FILE.")
        stream = _acquire_terminal()
        source_name = "stdin"
    else:
        stream = _open_input(file)
        source_name = file

    from .visualization.tui import run_viewer

    loop = run_viewer(
        stream,
        source_name=source_name,
        initial_filter=filter_text,
        palette=settings.palette(),
        mouse=settings.mouse,
    )
    if loop.error is not None:
        err_console.print(f"[yellow]{escape(loop.status)}[/yellow]", highlight=False)


# ── print ────────────────────────────────────────────────────────────────────


@main.command(name="print")
@click.argument("file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--filter", "-F", "filter_text", default="", help="Only print lines containing this text.")
@click.option("--pretty", "pretty_json", is_flag=True, help="Indent JSON lines, keeping key order and literals.")
@click.option("--no-color", is_flag=True, help="Disable colour output.")
def print_lines(file: str, filter_text: str, pretty_json: bool, no_color: bool) -> None:
    """Stream lines to stdout, highlighting JSON objects.

    With --pretty, JSON objects are indented and highlighted with their
    original key order and literals. Exits with status 1 if the input
    could not be read to the end; every line read before the error is
    still printed.

    \b
    Examples:
      my-service | logscope print --filter '"level":"error"'
      logscope print app.log --pretty
    """
    settings = Settings()
    _configure_logging(settings, interactive=False)
    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    palette = settings.palette()

    def emit(line: RenderedLine, generation: int) -> None:
        if pretty_json and line.is_structured:
            markup, _ = pretty_markup(line.text)
            console.print(to_text(markup, palette))
        else:
            console.print(line_text(line.display_text, line.is_structured, palette))

    store = LineStore()
    renderer = LineRenderer()
    engine = FilterEngine(store, renderer)
    engine.set_filter(filter_text)
    engine.subscribe(emit)

    stream = _open_input(file)
    loop = IngestionLoop(stream, store, renderer, engine)
    try:
        loop.run()
    finally:
        if stream is not sys.stdin.buffer:
            stream.close()

    err_console.print(
        f"[dim]{len(engine)} of {len(store)} lines shown · {escape(loop.status)}[/dim]",
        highlight=False,
    )
    if loop.error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
