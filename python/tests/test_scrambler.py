"""Scramblers produce reachable, non-solved boards."""

from __future__ import annotations

import random

import pytest

from slidescramble.backend.engine.scrambler import (
    RandomMovesScrambler,
    RandomStateScrambler,
    ScramblerKind,
    make_scrambler,
)
from slidescramble.backend.engine.solver import Solver
from slidescramble.backend.models import Board


@pytest.mark.parametrize("size", [2, 3, 4, 6])
def test_random_state_boards_are_solvable(size: int) -> None:
    scrambler = RandomStateScrambler(random.Random(size))
    for _ in range(25):
        board = scrambler.scramble(size)
        assert board.is_valid()
        assert not board.is_solved()
        assert Solver.is_solvable(board)


@pytest.mark.parametrize("size", [2, 3, 4])
def test_random_moves_boards_are_solvable(size: int) -> None:
    scrambler = RandomMovesScrambler(random.Random(size), moves_per_tile=5)
    for _ in range(10):
        board = scrambler.scramble(size)
        assert board.is_valid()
        assert not board.is_solved()
        assert Solver.is_solvable(board)


def test_seeded_scramblers_repeat() -> None:
    first = [RandomStateScrambler(random.Random(7)).scramble(4) for _ in range(3)]
    second = [RandomStateScrambler(random.Random(7)).scramble(4) for _ in range(3)]
    assert first == second


def test_random_state_covers_every_3x3_blank_position() -> None:
    scrambler = RandomStateScrambler(random.Random(0))
    seen = {scrambler.scramble(3).blank_pos for _ in range(400)}
    assert len(seen) == 9


def test_make_scrambler() -> None:
    assert isinstance(make_scrambler("random-state"), RandomStateScrambler)
    assert isinstance(make_scrambler(ScramblerKind.random_moves), RandomMovesScrambler)
    with pytest.raises(ValueError):
        make_scrambler("shuffle")


def test_random_moves_never_undo_the_previous_slide(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    slides = []
    original = Board.slide

    def recording_slide(board, direction, amount=1):
        slides.append(direction)
        return original(board, direction, amount)

    monkeypatch.setattr(Board, "slide", recording_slide)
    RandomMovesScrambler(random.Random(3), moves_per_tile=10).scramble(3)

    assert len(slides) >= 90
    assert all(b is not a.inverse for a, b in zip(slides, slides[1:]))
