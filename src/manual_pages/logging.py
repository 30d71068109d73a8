"""Shared Rich progress reporting."""

from __future__ import annotations

import os
import pathlib
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

MESSAGES = {
    "processing": "Processing '[cyan]{path}[/]'...",
    "finished": "Finished writing '[cyan]{path}[/]'",
    "removed": "Removed directory: '[cyan]{path}[/]'",
    "rebuild-failed": "[red]Failed to rebuild[/] '[cyan]{path}[/]'",
    "watch-failed": "[red]Stopped watching[/] '[cyan]{path}[/]'",
}


def display_path(path: Union[str, os.PathLike], kind: str = "") -> str:
    """Format a path for progress output.

    Output paths are shown relative to the working directory with a ``./``
    prefix, including paths outside it (``./../site/page.html``).
    """
    text = pathlib.Path(path).as_posix()
    if kind != "finished":
        return text
    try:
        rel = os.path.relpath(pathlib.Path(path).resolve(), pathlib.Path.cwd().resolve())
    except ValueError:
        # different drive on Windows
        return text
    return f"./{pathlib.Path(rel).as_posix()}"


def format_duration_ms(ms: float) -> str:
    return f"{ms:.1f} ms"


class ConsoleReporter:
    """Prints progress lines through a Rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def report(self, kind: str, path: Union[str, os.PathLike]) -> None:
        template = MESSAGES.get(kind, kind + " '[cyan]{path}[/]'")
        message = template.format(path=escape(display_path(path, kind)))
        self.console.print(message, soft_wrap=True)


class NullReporter:
    """Reporter that drops every message."""

    def report(self, kind: str, path: Union[str, os.PathLike]) -> None:
        pass
