"""Plain-text sink: one numbered block per scramble, no colours."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from slidescramble.backend.models.errors import SinkError


class PlainTextSink:
    """Writes rows to a text stream as they arrive.

    The graphic is not printable here and is skipped.
    """

    def __init__(self, stream: TextIO | None = None, label_width: int = 4) -> None:
        self.stream = stream or sys.stdout
        self.label_width = label_width
        self.rows_written = 0

    def append_row(self, label: str, text: str, graphic: Any) -> None:
        indent = " " * (self.label_width + 2)
        lines = text.split("\n") if text else [""]
        block = [f"  {label + '.':<{self.label_width}}{lines[0]}"]
        block.extend(f"{indent}{line}" for line in lines[1:])
        try:
            self.stream.write("\n".join(block) + "\n\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkError(f"Could not write row {label}: {e}") from e
        self.rows_written += 1
