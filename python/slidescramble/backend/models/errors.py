"""Exception hierarchy shared by the backend and the frontends."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slidescramble.backend.models.board import Board


class ScrambleError(Exception):
    """Base class for every failure raised while producing scrambles."""


class ParseError(ScrambleError):
    """Move text could not be parsed into an algorithm."""

    def __init__(self, text: str, position: int, reason: str) -> None:
        self.text = text
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at position {position} in {text!r}")


class IllegalMoveError(ScrambleError):
    """A move would slide a tile from outside the board."""


class UnsolvableError(ScrambleError):
    """The solver found no path back to the solved state."""


class SolveTimeout(ScrambleError):
    """The solver ran past its time limit."""

    def __init__(self, limit: float) -> None:
        self.limit = limit
        super().__init__(f"solver exceeded its {limit:.2f}s time limit")


class VerificationMismatch(ScrambleError):
    """Replaying the formatted scramble did not reproduce the scrambled state."""

    def __init__(self, text: str, expected: Board, actual: Board | None) -> None:
        self.text = text
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"scramble text {text!r} does not reproduce the scrambled state"
        )


class RenderError(ScrambleError):
    """The renderer could not produce a graphic for a board."""


class SinkError(ScrambleError):
    """The output sink rejected a row."""


class RowError(ScrambleError):
    """A failure while building one labelled row.

    The original failure is chained as ``__cause__``.
    """

    def __init__(
        self,
        label: str,
        stage: str,
        state: Board | None,
        cause: Exception,
    ) -> None:
        self.label = label
        self.stage = stage
        self.state = state
        self.cause = cause
        super().__init__(f"row {label!r} failed while {stage}: {cause}")

    @property
    def is_integrity_violation(self) -> bool:
        """True when the pipeline disagreed with its own output."""
        return isinstance(self.cause, (VerificationMismatch, ParseError))
