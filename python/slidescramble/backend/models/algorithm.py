"""Moves and move sequences, with their text notation.

A move is written as a direction letter followed by the number of tiles
slid, with the count omitted when it is 1::

    U  L3  D2  R

Whitespace between moves is optional when parsing, so ``"UL3D2R"`` and
``"U L3\\nD2 R"`` describe the same algorithm.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from slidescramble.backend.models.board import Direction
from slidescramble.backend.models.errors import ParseError

_TOKEN = re.compile(r"([UDLR])(\d*)")
_SPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Move:
    """Slide ``amount`` tiles in ``direction``.

    A negative amount is normalised to the opposite direction, so
    ``Move(Direction.UP, -2) == Move(Direction.DOWN, 2)``.
    """

    direction: Direction
    amount: int = 1

    def __post_init__(self) -> None:
        if self.amount == 0:
            raise ValueError("Move amount must be non-zero.")
        if self.amount < 0:
            object.__setattr__(self, "direction", self.direction.inverse)
            object.__setattr__(self, "amount", -self.amount)

    def __str__(self) -> str:
        if self.amount == 1:
            return self.direction.value
        return f"{self.direction.value}{self.amount}"

    def __neg__(self) -> Move:
        return self.inverse()

    def inverse(self) -> Move:
        return Move(self.direction.inverse, self.amount)

    def signed_amount(self, axis: Direction) -> int:
        """Amount along *axis*: positive when moving that way, negative opposite."""
        return self.amount if self.direction is axis else -self.amount


@dataclass(frozen=True)
class Algorithm:
    """An ordered, immutable sequence of moves."""

    moves: tuple[Move, ...] = ()

    # -- construction ---------------------------------------------------------

    @classmethod
    def of(cls, moves: Iterable[Move]) -> Algorithm:
        return cls(tuple(moves))

    @classmethod
    def from_directions(cls, directions: Iterable[Direction]) -> Algorithm:
        """Collapse single-tile steps into multi-tile moves."""
        return cls.of(Move(d) for d in directions).simplified()

    @classmethod
    def parse(cls, text: str) -> Algorithm:
        """Parse move notation. Raises ``ParseError`` on anything unexpected."""
        moves: list[Move] = []
        pos = 0
        while pos < len(text):
            space = _SPACE.match(text, pos)
            if space:
                pos = space.end()
                continue
            token = _TOKEN.match(text, pos)
            if token is None:
                raise ParseError(text, pos, f"unexpected character {text[pos]!r}")
            letter, digits = token.groups()
            amount = int(digits) if digits else 1
            if amount == 0:
                raise ParseError(text, pos, "move amount must be non-zero")
            moves.append(Move(Direction(letter), amount))
            pos = token.end()
        return cls(tuple(moves))

    # -- queries --------------------------------------------------------------

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __len__(self) -> int:
        return len(self.moves)

    def __bool__(self) -> bool:
        return bool(self.moves)

    def __str__(self) -> str:
        return "".join(str(m) for m in self.moves)

    @property
    def len_moves(self) -> int:
        """Number of single-tile slides."""
        return sum(m.amount for m in self.moves)

    # -- transforms -----------------------------------------------------------

    def inverse(self) -> Algorithm:
        """Reverse the order and invert every move."""
        return Algorithm(tuple(m.inverse() for m in reversed(self.moves)))

    def simplified(self) -> Algorithm:
        """Merge neighbouring moves on the same axis, dropping ones that cancel."""
        out: list[Move] = []
        for move in self.moves:
            if out and out[-1].direction.is_vertical == move.direction.is_vertical:
                prev = out.pop()
                net = prev.amount + move.signed_amount(prev.direction)
                if net != 0:
                    out.append(Move(prev.direction, net))
            else:
                out.append(move)
        return Algorithm(tuple(out))
