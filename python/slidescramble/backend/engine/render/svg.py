"""SVG rendering of sliding puzzle boards.

Tiles are grouped by where they belong in the solved puzzle and each
group gets its own colour, so a solver can see at a glance which tiles
still have to travel together.
"""

from __future__ import annotations

import colorsys
from typing import Any, Protocol

from slidescramble.backend.models.board import Board
from slidescramble.backend.models.errors import RenderError


class Renderer(Protocol):
    def render(self, board: Board) -> Any: ...


class SplitSquareFringe:
    """Groups tiles by solving order: row part, then column part, per layer.

    Layer ``k`` is the L-shaped fringe ``min(row, col) == k`` of the solved
    position.  Its row part is group ``2k`` and its column part ``2k + 1``.
    """

    def group(self, size: int, value: int) -> int:
        row, col = divmod(value - 1, size)
        k = min(row, col)
        return 2 * k if row == k else 2 * k + 1

    def num_groups(self, size: int) -> int:
        return max(self.group(size, v) for v in range(1, size * size)) + 1


class Rainbow:
    """Evenly spaced hues, one per group."""

    def __init__(self, lightness: float = 0.62, saturation: float = 0.85) -> None:
        self.lightness = lightness
        self.saturation = saturation

    def color(self, index: int, count: int) -> str:
        hue = index / max(count, 1)
        r, g, b = colorsys.hls_to_rgb(hue, self.lightness, self.saturation)
        return f"#{round(r * 255):02x}{round(g * 255):02x}{round(b * 255):02x}"


class SvgRenderer:
    """Renders a board as standalone SVG markup."""

    def __init__(
        self,
        tile_size: float = 30.0,
        font_size: float = 15.0,
        labels: SplitSquareFringe | None = None,
        colors: Rainbow | None = None,
        text_color: str = "#000000",
        border_color: str = "#000000",
        padding: float = 2.0,
    ) -> None:
        self.tile_size = tile_size
        self.font_size = font_size
        self.labels = labels or SplitSquareFringe()
        self.colors = colors or Rainbow()
        self.text_color = text_color
        self.border_color = border_color
        self.padding = padding

    def render(self, board: Board) -> str:
        if not board.is_valid():
            raise RenderError(
                f"Cannot render a malformed {board.size}×{board.size} board."
            )

        size = board.size
        ts = self.tile_size
        pad = self.padding
        extent = size * ts + 2 * pad
        groups = self.labels.num_groups(size)

        parts: list[str] = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{extent:g}" height="{extent:g}" '
            f'viewBox="0 0 {extent:g} {extent:g}">'
        ]
        for r, row in enumerate(board.tiles):
            for c, val in enumerate(row):
                if val == 0:
                    continue
                x = pad + c * ts
                y = pad + r * ts
                fill = self.colors.color(self.labels.group(size, val), groups)
                parts.append(
                    f'<rect x="{x:g}" y="{y:g}" width="{ts:g}" height="{ts:g}" '
                    f'fill="{fill}" stroke="{self.border_color}" stroke-width="1"/>'
                )
                parts.append(
                    f'<text x="{x + ts / 2:g}" y="{y + ts / 2:g}" '
                    f'font-size="{self.font_size:g}" font-family="sans-serif" '
                    f'text-anchor="middle" dominant-baseline="central" '
                    f'fill="{self.text_color}">{val}</text>'
                )
        parts.append("</svg>")
        return "".join(parts)
