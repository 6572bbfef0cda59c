"""Rich terminal sink: the batch as a styled table with board previews."""

from __future__ import annotations

from typing import Any

import rich.box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from slidescramble.backend.models.board import Board
from slidescramble.backend.models.errors import RenderError, SinkError


# -- board rendering ----------------------------------------------------------


class RichBoardRenderer:
    """Renders a board as a Rich Table, for terminal output."""

    def render(self, board: Board) -> Table:
        if not board.is_valid():
            raise RenderError(
                f"Cannot render a malformed {board.size}×{board.size} board."
            )
        width = len(str(board.size * board.size - 1))
        table = Table(
            show_header=False,
            show_edge=True,
            pad_edge=True,
            box=rich.box.HEAVY,
            border_style="bright_blue",
            padding=(0, 1),
        )
        for _ in range(board.size):
            table.add_column(width=width + 1, justify="center")

        for r, row in enumerate(board.tiles):
            cells: list[str] = []
            for c, val in enumerate(row):
                if val == 0:
                    cells.append("[dim]·[/dim]")
                elif board.is_tile_correct(r, c):
                    cells.append(f"[bold green]{val:>{width}}[/bold green]")
                else:
                    cells.append(f"[bold white]{val:>{width}}[/bold white]")
            table.add_row(*cells)

        return table


# -- sink -----------------------------------------------------------------------


class RichTableSink:
    """Collects rows into a Rich Table; ``show()`` prints it in a panel."""

    def __init__(self, console: Console | None = None, title: str = "Scrambles") -> None:
        self.console = console or Console()
        self.title = title
        self.table = Table(
            box=rich.box.ROUNDED,
            border_style="dim",
            show_lines=True,
        )
        self.table.add_column("#", justify="right", style="bold cyan")
        self.table.add_column("Scramble", style="yellow", no_wrap=True)
        self.table.add_column("Puzzle", justify="center")

    def append_row(self, label: str, text: str, graphic: Any) -> None:
        if isinstance(graphic, str):
            # Markup graphics cannot be drawn in a terminal.
            preview: Any = Text(f"<svg, {len(graphic)} bytes>", style="dim")
        elif graphic is None:
            raise SinkError(f"Row {label} has no graphic.")
        else:
            preview = graphic
        self.table.add_row(label, Text(text), preview)

    def show(self) -> None:
        panel = Panel(
            Align.center(self.table),
            title=f"[bold]{self.title}[/bold]",
            border_style="bright_blue",
            padding=(1, 2),
        )
        self.console.print()
        self.console.print(Align.center(panel))
