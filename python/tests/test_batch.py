"""Batch assembly: ordering, per-row failures, aborts."""

from __future__ import annotations

import random

import pytest

from fakes import (
    CrashingSolver,
    FlakyRenderer,
    FlakySolver,
    RecordingSink,
    SlowSolver,
    WrongSolver,
)
from slidescramble.backend.engine.pipeline import (
    BatchAborted,
    BatchAssembler,
    ScrambleRowBuilder,
)
from slidescramble.backend.engine.render import SvgRenderer
from slidescramble.backend.engine.scrambler import RandomStateScrambler
from slidescramble.backend.engine.solver import Solver
from slidescramble.backend.models import (
    Algorithm,
    Board,
    RenderError,
    SinkError,
    SolveTimeout,
    VerificationMismatch,
)


def _builder(seed: int = 5, solver=None, renderer=None) -> ScrambleRowBuilder:
    return ScrambleRowBuilder(
        size=4,
        scrambler=RandomStateScrambler(random.Random(seed)),
        solver=solver or Solver(),
        renderer=renderer or SvgRenderer(),
        chunk_width=10,
    )


class _RejectingSink(RecordingSink):
    def __init__(self, reject_after: int) -> None:
        super().__init__()
        self.reject_after = reject_after

    def append_row(self, label, text, graphic) -> None:
        if len(self.rows) >= self.reject_after:
            raise SinkError("table is gone")
        super().append_row(label, text, graphic)


def test_rows_arrive_in_request_order(sink: RecordingSink) -> None:
    result = BatchAssembler(_builder(), sink).run(["1", "2", "E1"])

    assert result.ok
    assert sink.labels == ["1", "2", "E1"]
    assert [r.label for r in result.rows] == ["1", "2", "E1"]
    for row, (_, text, graphic) in zip(result.rows, sink.rows):
        assert text == row.scramble_text
        assert Board.solved(4).apply(Algorithm.parse(text)) == row.state
        assert graphic


def test_empty_request_produces_nothing(sink: RecordingSink) -> None:
    result = BatchAssembler(_builder(), sink).run([])
    assert result.ok and result.rows == [] and sink.rows == []


def test_unsolvable_row_is_skipped_and_recorded(sink: RecordingSink) -> None:
    result = BatchAssembler(_builder(solver=FlakySolver({2})), sink).run(["1", "2", "3"])

    assert not result.ok
    assert result.failed_labels == ["2"]
    assert sink.labels == ["1", "3"]


def test_failure_does_not_change_other_rows() -> None:
    clean_sink = RecordingSink()
    BatchAssembler(_builder(seed=11), clean_sink).run(["1", "2", "3"])

    flaky_sink = RecordingSink()
    BatchAssembler(_builder(seed=11, solver=FlakySolver({2})), flaky_sink).run(
        ["1", "2", "3"]
    )

    assert flaky_sink.rows == [clean_sink.rows[0], clean_sink.rows[2]]


def test_stop_on_failure_aborts_with_partial_result(sink: RecordingSink) -> None:
    assembler = BatchAssembler(
        _builder(solver=FlakySolver({2})), sink, stop_on_failure=True
    )
    with pytest.raises(BatchAborted) as info:
        assembler.run(["1", "2", "3"])

    assert [r.label for r in info.value.result.rows] == ["1"]
    assert info.value.result.failed_labels == ["2"]
    assert sink.labels == ["1"]


def test_verification_mismatch_always_aborts(sink: RecordingSink) -> None:
    with pytest.raises(BatchAborted) as info:
        BatchAssembler(_builder(solver=WrongSolver()), sink).run(["1", "2"])

    assert info.value.result.rows == []
    assert isinstance(info.value.cause.cause, VerificationMismatch)
    assert sink.rows == []


def test_sink_error_aborts_batch() -> None:
    sink = _RejectingSink(reject_after=1)
    with pytest.raises(BatchAborted) as info:
        BatchAssembler(_builder(), sink).run(["1", "2", "3"])

    assert isinstance(info.value.cause, SinkError)
    assert [r.label for r in info.value.result.rows] == ["1"]
    assert sink.labels == ["1"]


def test_labels_are_opaque(sink: RecordingSink) -> None:
    labels = ["warm-up", "", "1", "1"]
    result = BatchAssembler(_builder(), sink).run(labels)
    assert sink.labels == labels
    assert len(result.rows) == 4


class _CrashingSink(RecordingSink):
    def append_row(self, label, text, graphic) -> None:
        if self.rows:
            raise RuntimeError("host gone")
        super().append_row(label, text, graphic)


def test_timed_out_row_is_skipped_and_recorded(sink: RecordingSink) -> None:
    result = BatchAssembler(_builder(solver=SlowSolver({1})), sink).run(["1", "2"])

    assert result.failed_labels == ["1"]
    assert isinstance(result.failures[0].cause, SolveTimeout)
    assert sink.labels == ["2"]


def test_unrenderable_row_is_skipped_and_recorded(sink: RecordingSink) -> None:
    builder = _builder(renderer=FlakyRenderer({2}))
    result = BatchAssembler(builder, sink).run(["1", "2", "3"])

    assert result.failed_labels == ["2"]
    assert isinstance(result.failures[0].cause, RenderError)
    assert sink.labels == ["1", "3"]


def test_foreign_row_error_is_recorded_with_label(sink: RecordingSink) -> None:
    result = BatchAssembler(_builder(solver=CrashingSolver()), sink).run(["1", "E1"])

    assert result.rows == []
    assert result.failed_labels == ["1", "E1"]
    assert all(isinstance(f.cause, ValueError) for f in result.failures)


def test_foreign_sink_error_aborts_with_partial_result() -> None:
    sink = _CrashingSink()
    with pytest.raises(BatchAborted) as info:
        BatchAssembler(_builder(), sink).run(["1", "2", "3"])

    assert isinstance(info.value.cause, SinkError)
    assert isinstance(info.value.__cause__, RuntimeError)
    assert [r.label for r in info.value.result.rows] == ["1"]
