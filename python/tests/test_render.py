"""SVG rendering and tile grouping."""

from __future__ import annotations

import re

import pytest

from slidescramble.backend.engine.render import Rainbow, SplitSquareFringe, SvgRenderer
from slidescramble.backend.models import Board, RenderError


def test_svg_has_one_tile_per_number() -> None:
    svg = SvgRenderer().render(Board.solved(4))
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert svg.endswith("</svg>")
    assert svg.count("<rect ") == 15
    labels = re.findall(r">(\d+)</text>", svg)
    assert sorted(int(v) for v in labels) == list(range(1, 16))


def test_svg_size_follows_tile_size() -> None:
    svg = SvgRenderer(tile_size=30, padding=0).render(Board.solved(4))
    assert 'width="120" height="120"' in svg
    assert 'font-size="15"' in svg


def test_blank_is_left_empty() -> None:
    board = Board.from_flat(2, [0, 1, 2, 3])
    svg = SvgRenderer(tile_size=10, padding=0).render(board)
    assert '<rect x="0" y="0"' not in svg
    assert '<rect x="10" y="0"' in svg


def test_malformed_board_raises() -> None:
    with pytest.raises(RenderError):
        SvgRenderer().render(Board.from_flat(2, [1, 1, 2, 0]))


@pytest.mark.parametrize(
    ("value", "group"),
    [(1, 0), (4, 0), (5, 1), (13, 1), (6, 2), (8, 2), (10, 3), (14, 3), (11, 4), (12, 4), (15, 5)],
)
def test_split_square_fringe_groups_4x4(value: int, group: int) -> None:
    assert SplitSquareFringe().group(4, value) == group


def test_split_square_fringe_group_count() -> None:
    fringe = SplitSquareFringe()
    assert fringe.num_groups(2) == 2
    assert fringe.num_groups(4) == 6


def test_rainbow_colours_are_distinct_hex() -> None:
    rainbow = Rainbow()
    colors = [rainbow.color(i, 6) for i in range(6)]
    assert all(re.fullmatch(r"#[0-9a-f]{6}", c) for c in colors)
    assert len(set(colors)) == 6


def test_tiles_in_one_group_share_a_colour() -> None:
    svg = SvgRenderer().render(Board.solved(4))
    fills = re.findall(r'<rect [^>]*fill="(#[0-9a-f]{6})"', svg)
    # Row-major order: tiles 1-4 are the first fringe row.
    assert len(set(fills[:4])) == 1
    assert fills[4] != fills[0]
