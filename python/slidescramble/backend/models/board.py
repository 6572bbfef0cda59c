"""Board model for sliding puzzle scrambles."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from slidescramble.backend.models.errors import IllegalMoveError

if TYPE_CHECKING:
    from slidescramble.backend.models.algorithm import Algorithm, Move


class Direction(StrEnum):
    """Direction the *tile* slides into the blank."""

    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def inverse(self) -> Direction:
        return _INVERSE[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @property
    def offset(self) -> tuple[int, int]:
        """Offset from the blank to the tile that slides into it.

        UP   → tile at (br+1, bc) moves up   → blank shifts down
        DOWN → tile at (br-1, bc) moves down → blank shifts up
        LEFT → tile at (br, bc+1) moves left → blank shifts right
        RIGHT→ tile at (br, bc-1) moves right→ blank shifts left
        """
        return _OFFSETS[self]


_INVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_OFFSETS = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


@dataclass
class Board:
    """Represents a sliding puzzle position.

    Tiles are stored as a 2D list of ints. 0 represents the blank space.
    Boards handed around the pipeline are treated as values: every
    move-applying method returns a new board.
    """

    size: int
    tiles: list[list[int]]
    blank_pos: tuple[int, int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}.")
        flat = list(range(1, size * size)) + [0]
        return cls.from_flat(size, flat)

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        tiles: list[list[int]] = []
        blank_pos: tuple[int, int] = (0, 0)
        for r in range(size):
            row = list(flat[r * size : (r + 1) * size])
            for c, v in enumerate(row):
                if v == 0:
                    blank_pos = (r, c)
            tiles.append(row)
        return cls(size=size, tiles=tiles, blank_pos=blank_pos)

    # -- queries --------------------------------------------------------------

    def flat(self) -> list[int]:
        return [v for row in self.tiles for v in row]

    def is_valid(self) -> bool:
        """Check the grid is square, a permutation, and the blank is tracked."""
        if len(self.tiles) != self.size or any(
            len(row) != self.size for row in self.tiles
        ):
            return False
        if sorted(self.flat()) != list(range(self.size * self.size)):
            return False
        br, bc = self.blank_pos
        return 0 <= br < self.size and 0 <= bc < self.size and self.tiles[br][bc] == 0

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        expected = 1
        for r in range(self.size):
            for c in range(self.size):
                if r == self.size - 1 and c == self.size - 1:
                    return self.tiles[r][c] == 0
                if self.tiles[r][c] != expected:
                    return False
                expected += 1
        return True

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific tile is in its goal position."""
        val = self.tiles[row][col]
        if val == 0:
            return row == self.size - 1 and col == self.size - 1
        expected_row = (val - 1) // self.size
        expected_col = (val - 1) % self.size
        return row == expected_row and col == expected_col

    def copy(self) -> Board:
        return Board(
            size=self.size,
            tiles=[row[:] for row in self.tiles],
            blank_pos=self.blank_pos,
        )

    # -- moves ----------------------------------------------------------------

    def can_slide(self, direction: Direction) -> bool:
        br, bc = self.blank_pos
        dr, dc = direction.offset
        return 0 <= br + dr < self.size and 0 <= bc + dc < self.size

    def slide(self, direction: Direction, amount: int = 1) -> Board:
        """Return a new board with *amount* tiles slid in *direction*.

        Raises ``IllegalMoveError`` if the blank runs off the board.
        """
        board = self.copy()
        board._slide_in_place(direction, amount)
        return board

    def apply(self, moves: Algorithm | Iterable[Move]) -> Board:
        """Return a new board with every move of *moves* applied in order."""
        board = self.copy()
        for move in moves:
            board._slide_in_place(move.direction, move.amount)
        return board

    # -- helpers --------------------------------------------------------------

    def _slide_in_place(self, direction: Direction, amount: int) -> None:
        dr, dc = direction.offset
        for _ in range(amount):
            br, bc = self.blank_pos
            tr, tc = br + dr, bc + dc
            if not (0 <= tr < self.size and 0 <= tc < self.size):
                raise IllegalMoveError(
                    f"Cannot slide {direction.name.lower()}: blank at "
                    f"{self.blank_pos} on a {self.size}×{self.size} board."
                )
            self.tiles[br][bc], self.tiles[tr][tc] = (
                self.tiles[tr][tc],
                self.tiles[br][bc],
            )
            self.blank_pos = (tr, tc)
