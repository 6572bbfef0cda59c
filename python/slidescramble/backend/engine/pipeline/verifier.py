"""Replays formatted scramble text to prove it reproduces its state."""

from __future__ import annotations

from slidescramble.backend.models.algorithm import Algorithm
from slidescramble.backend.models.board import Board
from slidescramble.backend.models.errors import IllegalMoveError, VerificationMismatch


def verify_scramble(
    text: str, expected: Board, default: Board | None = None
) -> Algorithm:
    """Parse *text*, apply it to the solved board and compare with *expected*.

    Returns the parsed algorithm.  Raises ``ParseError`` if the text does
    not parse and ``VerificationMismatch`` if replaying it lands anywhere
    but *expected*.
    """
    if default is None:
        default = Board.solved(expected.size)
    replayed = Algorithm.parse(text)
    try:
        actual = default.apply(replayed)
    except IllegalMoveError as exc:
        raise VerificationMismatch(text, expected, None) from exc
    if actual != expected:
        raise VerificationMismatch(text, expected, actual)
    return replayed
