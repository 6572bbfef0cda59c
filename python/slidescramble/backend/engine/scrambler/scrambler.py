"""Generates solvable, non-solved sliding puzzle boards."""

from __future__ import annotations

import random
from enum import StrEnum
from typing import Protocol

from slidescramble.backend.engine.solver import Solver
from slidescramble.backend.models.board import Board, Direction


class Scrambler(Protocol):
    def scramble(self, size: int) -> Board: ...


class ScramblerKind(StrEnum):
    random_state = "random-state"
    random_moves = "random-moves"


class RandomStateScrambler:
    """Draws uniformly from every solvable position except the solved one.

    A random permutation is drawn and, when its parity makes it
    unreachable, the first two numbered tiles are swapped.  That swap is a
    bijection between unreachable and reachable positions, so the result
    stays uniform.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def scramble(self, size: int) -> Board:
        while True:
            flat = list(range(size * size))
            self._rng.shuffle(flat)
            board = Board.from_flat(size, flat)
            if not Solver.is_solvable(board):
                i, j = [k for k, v in enumerate(flat) if v != 0][:2]
                flat[i], flat[j] = flat[j], flat[i]
                board = Board.from_flat(size, flat)
            if not board.is_solved():
                return board


class RandomMovesScrambler:
    """Scrambles by random single-tile slides from the solved state.

    Never immediately undoes the previous slide.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        moves_per_tile: int = 100,
    ) -> None:
        self._rng = rng or random.Random()
        self.moves_per_tile = moves_per_tile

    def scramble(self, size: int) -> Board:
        while True:
            board = Board.solved(size)
            num_shuffles = size * size * self.moves_per_tile
            prev: Direction | None = None

            for _ in range(num_shuffles):
                choices = [d for d in Direction if board.can_slide(d)]
                if prev is not None and prev.inverse in choices and len(choices) > 1:
                    choices.remove(prev.inverse)
                prev = self._rng.choice(choices)
                board = board.slide(prev)

            # Ensure the board is not already solved
            if not board.is_solved():
                return board


def make_scrambler(
    kind: ScramblerKind | str, rng: random.Random | None = None
) -> Scrambler:
    kind = ScramblerKind(kind)
    if kind is ScramblerKind.random_moves:
        return RandomMovesScrambler(rng)
    return RandomStateScrambler(rng)
