"""HTML sink: a printable scramble sheet with inline SVG boards."""

from __future__ import annotations

import html
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from slidescramble.backend.models.errors import SinkError

_STYLE = [
    "body { font-family: -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;",
    "       margin: 0 auto; padding: 20px; max-width: 900px; }",
    "h1 { font-size: 20px; border-bottom: 2px solid #333; padding-bottom: 6px; }",
    "table { border-collapse: collapse; width: 100%; }",
    "td { border: 1px solid #999; padding: 8px; vertical-align: middle; }",
    ".col-num { width: 3em; text-align: center; font-weight: bold; }",
    ".col-scramble { font-family: monospace; font-size: 15px; white-space: pre; }",
    ".col-puzzle { width: 1%; text-align: center; }",
]


@dataclass(frozen=True)
class _Row:
    label: str
    text: str
    svg: str


class HtmlTableSink:
    """Collects rows into ``<table id="main-table">``.

    ``render()`` returns the page, ``write(path)`` saves it.
    """

    def __init__(self, title: str = "Scrambles") -> None:
        self.title = title
        self._rows: list[_Row] = []

    def append_row(self, label: str, text: str, graphic: Any) -> None:
        if not isinstance(graphic, str) or not graphic.lstrip().startswith("<svg"):
            raise SinkError(f"Row {label}: expected SVG markup, got {type(graphic).__name__}.")
        self._rows.append(_Row(label=label, text=text, svg=graphic))

    def __len__(self) -> int:
        return len(self._rows)

    def render(self) -> str:
        title = html.escape(self.title)
        page = [
            "<!DOCTYPE html>",
            '<html><head><meta charset="utf-8">',
            f"<title>{title}</title>",
            "<style>",
            *_STYLE,
            "</style></head><body>",
            f"<h1>{title}</h1>",
            '<table id="main-table">',
        ]
        for row in self._rows:
            page.append("<tr>")
            page.append(f'<td class="col-num">{html.escape(row.label)}</td>')
            page.append(f'<td class="col-scramble">{html.escape(row.text)}</td>')
            page.append(f'<td class="col-puzzle">{row.svg}</td>')
            page.append("</tr>")
        page.append("</table>")
        page.append("</body></html>")
        return "\n".join(page) + "\n"

    def write(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.render(), encoding="utf-8")
        except OSError as e:
            raise SinkError(f"Could not write {path}: {e}") from e
