"""Scramble text layout."""

from __future__ import annotations

import math
import re

import pytest

from slidescramble.backend.engine.pipeline import format_move, format_scramble
from slidescramble.backend.models import Algorithm, Direction, Move

_CYCLE = [Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT]


def _algorithm(amounts: list[int]) -> Algorithm:
    return Algorithm.of(
        Move(_CYCLE[i % len(_CYCLE)], amount) for i, amount in enumerate(amounts)
    )


# -- single moves -------------------------------------------------------------


def test_single_tile_move_gets_trailing_space() -> None:
    assert format_move(Move(Direction.UP)) == "U "
    assert format_move(Move(Direction.UP, -1)) == "D "


def test_multi_tile_move_has_no_trailing_space() -> None:
    assert format_move(Move(Direction.LEFT, 2)) == "L2"
    assert format_move(Move(Direction.RIGHT, 11)) == "R11"


# -- layout -------------------------------------------------------------------


def test_empty_algorithm_formats_to_empty_string() -> None:
    assert format_scramble(Algorithm()) == ""


def test_short_algorithm_is_one_line() -> None:
    assert format_scramble(_algorithm([2, 1, 3])) == "U2 L  D3"


def test_twelve_move_example() -> None:
    alg = _algorithm([1, 2, 1, 1, 3, 2, 1, 1, 4, 2, 1, 1])
    assert format_scramble(alg, 10) == "U  L2 D  R  U3 L2 D  R  U4 L2\nD  R "


@pytest.mark.parametrize("length", [0, 1, 9, 10, 11, 20, 23])
@pytest.mark.parametrize("width", [1, 3, 10])
def test_line_count_and_width(length: int, width: int) -> None:
    amounts = [1 + i % 3 for i in range(length)]
    text = format_scramble(_algorithm(amounts), width)

    lines = text.split("\n") if text else []
    assert len(lines) == math.ceil(length / width)
    assert all(line.strip() for line in lines)
    assert all(len(Algorithm.parse(line)) <= width for line in lines)
    assert Algorithm.parse(text) == _algorithm(amounts)


def test_trailing_space_only_on_single_tile_moves() -> None:
    amounts = [1, 2, 1, 1, 3, 1, 4, 2, 1, 1, 5, 1, 1]
    text = format_scramble(_algorithm(amounts), 4)

    for token in re.finditer(r"[UDLR](\d*)", text):
        rest = text[token.end() :]
        if token.group(1):
            assert not rest.startswith("  ")
        else:
            assert rest.startswith(" ")
            assert rest[1:2] in ("", " ", "\n")


def test_formatting_is_deterministic() -> None:
    alg = _algorithm([3, 1, 1, 2, 2, 1, 3, 1, 1, 1, 2])
    assert format_scramble(alg) == format_scramble(alg)


def test_width_must_be_positive() -> None:
    with pytest.raises(ValueError):
        format_scramble(_algorithm([1]), 0)
