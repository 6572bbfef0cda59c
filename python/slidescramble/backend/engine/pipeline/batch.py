"""Runs the row builder over a list of labels and feeds an output sink."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from slidescramble.backend.engine.pipeline.row_builder import (
    ScrambleRow,
    ScrambleRowBuilder,
)
from slidescramble.backend.models.errors import RowError, ScrambleError, SinkError

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    def append_row(self, label: str, text: str, graphic: Any) -> None: ...


@dataclass
class BatchResult:
    rows: list[ScrambleRow] = field(default_factory=list)
    failures: list[RowError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_labels(self) -> list[str]:
        return [f.label for f in self.failures]


class BatchAborted(ScrambleError):
    """The batch stopped early; ``result`` holds the rows already emitted."""

    def __init__(self, result: BatchResult, cause: Exception) -> None:
        self.result = result
        self.cause = cause
        super().__init__(
            f"batch aborted after {len(result.rows)} row(s): {cause}"
        )


class BatchAssembler:
    """Builds rows in request order and forwards each one to the sink.

    Unsolvable, timed-out and unrenderable rows are recorded and skipped.
    A verification failure or a sink failure stops the batch.  With
    ``stop_on_failure`` every row failure stops it.
    """

    def __init__(
        self,
        builder: ScrambleRowBuilder,
        sink: OutputSink,
        stop_on_failure: bool = False,
    ) -> None:
        self.builder = builder
        self.sink = sink
        self.stop_on_failure = stop_on_failure

    def run(self, labels: Iterable[str]) -> BatchResult:
        result = BatchResult()
        for label in labels:
            try:
                row = self.builder.build(label)
            except RowError as exc:
                result.failures.append(exc)
                if exc.is_integrity_violation:
                    logger.critical("Scramble integrity check failed: %s", exc)
                    raise BatchAborted(result, exc) from exc
                logger.error("%s", exc)
                if self.stop_on_failure:
                    raise BatchAborted(result, exc) from exc
                continue

            try:
                self.sink.append_row(row.label, row.scramble_text, row.graphic)
            except SinkError as exc:
                logger.critical("Output sink rejected row %s: %s", label, exc)
                raise BatchAborted(result, exc) from exc
            except Exception as exc:
                logger.critical("Output sink failed on row %s: %r", label, exc)
                error = SinkError(f"sink failed on row {label!r}: {exc}")
                raise BatchAborted(result, error) from exc
            result.rows.append(row)

        logger.info(
            "Batch finished: %d row(s), %d failure(s)",
            len(result.rows),
            len(result.failures),
        )
        return result
