"""Sliding puzzle solver: constructive and deterministic.

Solves the outer row, then the outer column, and repeats on the
remaining square until a 2×2 block is left:

  - Blank routing follows straight-segment paths around frozen cells
    (two-leg L paths first, then three-leg detours, then a one- or
    two-step escape from the blank's neighbourhood).
  - Single tiles are pushed one cell at a time toward their goal.
  - The last two tiles of each strip are parked, staged next to their
    goals and dropped in with a three-slide rotation.
  - The final 2×2 needs at most two rotations.

Columns reuse the row code on a transposed view of the grid.  The result
is short enough for a scramble sheet but not optimal.
"""

from __future__ import annotations

import logging
import time
from bisect import bisect_left, insort
from collections.abc import Callable, Iterator

from slidescramble.backend.models.algorithm import Algorithm
from slidescramble.backend.models.board import Board, Direction
from slidescramble.backend.models.errors import SolveTimeout, UnsolvableError

logger = logging.getLogger(__name__)

_ROW = 0
_COL = 1


# -- working grid ---------------------------------------------------------------


class _Grid:
    """Flat, mutable copy of a board with precomputed adjacency."""

    __slots__ = ("n", "cells", "where", "blank", "adj", "_steps", "_deadline", "_limit")

    def __init__(
        self, board: Board, deadline: float | None, limit: float | None
    ) -> None:
        n = board.size
        self.n = n
        self.cells = board.flat()
        self.where = [0] * (n * n)
        for i, v in enumerate(self.cells):
            self.where[v] = i
        self.blank = board.blank_pos[0] * n + board.blank_pos[1]

        adj: list[tuple[int, ...]] = []
        for i in range(n * n):
            r, c = divmod(i, n)
            nb: list[int] = []
            if r > 0:
                nb.append(i - n)
            if r < n - 1:
                nb.append(i + n)
            if c > 0:
                nb.append(i - 1)
            if c < n - 1:
                nb.append(i + 1)
            adj.append(tuple(nb))
        self.adj = adj

        # Keyed by (cell the blank moves to) - (current blank cell).
        self._steps = {
            n: Direction.UP,
            -n: Direction.DOWN,
            1: Direction.LEFT,
            -1: Direction.RIGHT,
        }
        self._deadline = deadline
        self._limit = limit

    def slide_from(self, cell: int, out: list[Direction]) -> None:
        """Slide the tile at *cell* into the blank."""
        out.append(self._steps[cell - self.blank])
        value = self.cells[cell]
        self.cells[self.blank] = value
        self.cells[cell] = 0
        self.where[value] = self.blank
        self.where[0] = cell
        self.blank = cell

    def snapshot(self) -> tuple[list[int], list[int], int]:
        return self.cells[:], self.where[:], self.blank

    def restore(self, snap: tuple[list[int], list[int], int]) -> None:
        self.cells[:] = snap[0]
        self.where[:] = snap[1]
        self.blank = snap[2]

    def check_deadline(self) -> None:
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SolveTimeout(self._limit or 0.0)

    def is_solved(self) -> bool:
        last = len(self.cells) - 1
        return self.cells[last] == 0 and all(
            v == i + 1 for i, v in enumerate(self.cells[:last])
        )


# -- blank routing --------------------------------------------------------------


def _walk(
    start: int, legs: tuple[tuple[int, int], ...], n: int, frozen: bytearray
) -> list[int] | None:
    """Follow straight legs from *start*; ``None`` if a frozen cell is hit.

    Each leg is ``(axis, coordinate)``: keep moving along *axis* until the
    row (or column) index equals *coordinate*.
    """
    r, c = divmod(start, n)
    path: list[int] = []
    for axis, goal in legs:
        if axis == _ROW:
            step = (r < goal) - (r > goal)
            while r != goal:
                r += step
                cell = r * n + c
                if frozen[cell]:
                    return None
                path.append(cell)
        else:
            step = (c < goal) - (c > goal)
            while c != goal:
                c += step
                cell = r * n + c
                if frozen[cell]:
                    return None
                path.append(cell)
    return path


def _plans(start: int, goal: int, n: int) -> Iterator[tuple[tuple[int, int], ...]]:
    sr, sc = divmod(start, n)
    gr, gc = divmod(goal, n)

    # L paths: horizontal first, then vertical first.
    yield (_COL, gc), (_ROW, gr)
    yield (_ROW, gr), (_COL, gc)

    # Detours through a parallel row or column: below, right, above, left.
    for via in range(max(sr, gr) + 1, n):
        yield (_ROW, via), (_COL, gc), (_ROW, gr)
    for via in range(max(sc, gc) + 1, n):
        yield (_COL, via), (_ROW, gr), (_COL, gc)
    for via in range(min(sr, gr) - 1, -1, -1):
        yield (_ROW, via), (_COL, gc), (_ROW, gr)
    for via in range(min(sc, gc) - 1, -1, -1):
        yield (_COL, via), (_ROW, gr), (_COL, gc)


def _route(start: int, goal: int, n: int, frozen: bytearray) -> list[int] | None:
    for legs in _plans(start, goal, n):
        path = _walk(start, legs, n, frozen)
        if path is not None:
            return path
    return None


def _escapes(g: _Grid, frozen: bytearray) -> Iterator[tuple[int, ...]]:
    start = g.blank
    yield ()
    for first in g.adj[start]:
        if not frozen[first]:
            yield (first,)
    for first in g.adj[start]:
        if frozen[first]:
            continue
        for second in g.adj[first]:
            if not frozen[second] and second != start:
                yield first, second


def _route_blank(
    g: _Grid, out: list[Direction], goal: int, frozen: bytearray
) -> None:
    """Move the blank to *goal* without touching frozen cells."""
    start = g.blank
    if start == goal:
        return
    for detour in _escapes(g, frozen):
        path = _route(detour[-1] if detour else start, goal, g.n, frozen)
        if path is not None:
            for cell in (*detour, *path):
                g.slide_from(cell, out)
            return
    raise RuntimeError(f"no blank route from {start} to {goal}")


# -- single tiles ---------------------------------------------------------------


def _step_around(
    g: _Grid,
    out: list[Direction],
    at: int,
    target: int,
    delta: int,
    frozen: bytearray,
) -> bool:
    """Four-slide loop used when the blank sits right behind the pushed tile."""
    n = g.n
    nn = n * n
    behind = g.blank
    if behind != at - delta:
        return False
    if delta in (1, -1):
        if behind // n != at // n:
            return False
        sides: tuple[int, int] = (n, -n)
    else:
        if behind % n != at % n:
            return False
        sides = (1, -1)

    for side in sides:
        first = behind + side
        middle = at + side
        last = target + side
        if not (0 <= first < nn and 0 <= last < nn):
            continue
        if side in (1, -1) and first // n != behind // n:
            continue
        if frozen[first] or frozen[middle] or frozen[last]:
            continue
        for cell in (first, middle, last, target):
            g.slide_from(cell, out)
        return True
    return False


def _move_tile(
    g: _Grid, out: list[Direction], value: int, goal: int, frozen: bytearray
) -> None:
    """Push tile *value* to cell *goal*, one cell at a time."""
    n = g.n
    for _ in range(4 * n * n):
        g.check_deadline()
        at = g.where[value]
        if at == goal:
            return

        ar, ac = divmod(at, n)
        gr, gc = divmod(goal, n)

        # Column first, then row, then any free neighbour.
        delta = 0
        if ac != gc:
            d = 1 if ac < gc else -1
            if not frozen[at + d]:
                delta = d
        if delta == 0 and ar != gr:
            d = n if ar < gr else -n
            if not frozen[at + d]:
                delta = d
        if delta == 0:
            for ne in g.adj[at]:
                if not frozen[ne]:
                    delta = ne - at
                    break
        if delta == 0:
            raise RuntimeError(f"tile {value} stuck at {at} (goal {goal})")

        target = at + delta
        frozen[at] = 1
        if not _step_around(g, out, at, target, delta, frozen):
            _route_blank(g, out, target, frozen)
        frozen[at] = 0
        g.slide_from(at, out)

    raise RuntimeError(f"tile {value} never reached {goal}")


# -- strips ---------------------------------------------------------------------


def _frame(n: int, rows: bool) -> Callable[[int, int], int]:
    """Cell index for (strip, position) in row strips or transposed column strips."""
    if rows:
        return lambda major, minor: major * n + minor
    return lambda major, minor: minor * n + major


def _last_two(
    g: _Grid, out: list[Direction], strip: int, frozen: bytearray, rows: bool
) -> None:
    """Place the last two tiles of a strip.

      1. Park the second tile at the far end of the last position's line,
         away from the staging area.
      2. Stage the first tile at the strip's corner.
      3. Stage the second tile just past the corner with the notch frozen.
      4. Rotate both in with three slides.
    """
    n = g.n
    last = n - 1
    at = _frame(n, rows)

    goal_a = at(strip, last - 1)
    goal_b = at(strip, last)
    va, vb = goal_a + 1, goal_b + 1
    if g.where[va] == goal_a and g.where[vb] == goal_b:
        return

    stage_a = goal_b
    stage_b = at(strip + 1, last)
    pivot = at(strip + 1, last - 1)
    notch = goal_a
    park = at(n - 1, last)

    for attempt in range(4):
        snap = g.snapshot()
        saved = bytes(frozen)
        trial: list[Direction] = []

        try:
            if g.where[vb] not in (stage_b, park):
                _move_tile(g, trial, vb, park, frozen)

            _move_tile(g, trial, va, stage_a, frozen)
            frozen[stage_a] = 1
            if g.where[vb] == notch:
                raise RuntimeError("second tile pushed into the notch")

            frozen[notch] = 1
            _move_tile(g, trial, vb, stage_b, frozen)
            frozen[notch] = 0

            frozen[stage_b] = 1
            _route_blank(g, trial, pivot, frozen)
            for cell in (notch, stage_a, stage_b):
                g.slide_from(cell, trial)

            frozen[:] = saved
            if g.where[va] == goal_a and g.where[vb] == goal_b:
                out.extend(trial)
                return
            g.restore(snap)
        except (RuntimeError, KeyError):
            g.restore(snap)
            frozen[:] = saved

        # Push the second tile further away before retrying.
        major = min(n - 1, strip + 2 + attempt)
        minor = last - attempt % 2 if rows else last
        _move_tile(g, out, vb, at(major, minor), frozen)

    raise RuntimeError(f"could not place the last two tiles of strip {strip}")


def _strip(
    g: _Grid, out: list[Direction], off: int, frozen: bytearray, rows: bool
) -> None:
    n = g.n
    last = n - 1
    at = _frame(n, rows)
    # The corner cell belongs to the row strip.
    first = off if rows else off + 1
    for pos in range(first, last - 1):
        goal = at(off, pos)
        _move_tile(g, out, goal + 1, goal, frozen)
        frozen[goal] = 1
    _last_two(g, out, off, frozen, rows)
    frozen[at(off, last - 1)] = 1
    frozen[at(off, last)] = 1


def _finish_2x2(g: _Grid, out: list[Direction], off: int, frozen: bytearray) -> None:
    n = g.n
    tl = off * n + off
    tr = tl + 1
    bl = tl + n
    br = bl + 1

    def placed() -> bool:
        return g.cells[tl] == tl + 1 and g.cells[tr] == tr + 1 and g.cells[bl] == bl + 1

    if placed():
        return
    _route_blank(g, out, br, frozen)
    for _ in range(2):
        if placed():
            return
        for cell in (bl, tl, tr, br):
            g.slide_from(cell, out)
    if not placed():
        raise RuntimeError("2×2 block did not settle after two rotations")


def _solve(g: _Grid, out: list[Direction]) -> None:
    n = g.n
    frozen = bytearray(n * n)
    off = 0
    while n - off > 2:
        g.check_deadline()
        _strip(g, out, off, frozen, rows=True)
        _strip(g, out, off, frozen, rows=False)
        off += 1
    if n - off == 2:
        _finish_2x2(g, out, off, frozen)


# -- public API -----------------------------------------------------------------


class Solver:
    """Finds a move sequence taking a board to the solved state.

    Instances hold no per-solve state and can be shared between rows.
    """

    def __init__(self, time_limit: float | None = None) -> None:
        self.time_limit = time_limit

    def solve(self, board: Board) -> Algorithm:
        """Return an algorithm that solves *board*.

        Raises ``UnsolvableError`` for malformed or unreachable boards and
        ``SolveTimeout`` when ``time_limit`` runs out.
        """
        if not board.is_valid():
            raise UnsolvableError(f"Malformed {board.size}×{board.size} board.")
        if board.is_solved():
            return Algorithm()
        if not Solver.is_solvable(board):
            raise UnsolvableError("Board has odd parity and cannot be solved.")

        deadline = None
        if self.time_limit is not None:
            deadline = time.monotonic() + self.time_limit
        grid = _Grid(board, deadline, self.time_limit)
        steps: list[Direction] = []
        started = time.perf_counter()
        try:
            _solve(grid, steps)
        except RuntimeError as exc:
            raise UnsolvableError(str(exc)) from exc
        if not grid.is_solved():
            raise UnsolvableError("Solver finished without reaching the goal.")

        solution = Algorithm.from_directions(steps)
        logger.debug(
            "Solved %d×%d board in %.1f ms: %d slides, %d moves",
            board.size,
            board.size,
            (time.perf_counter() - started) * 1000,
            solution.len_moves,
            len(solution),
        )
        return solution

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state."""
        n = board.size
        flat = [v for v in board.flat() if v != 0]
        inv = 0
        seen: list[int] = []
        for v in flat:
            inv += len(seen) - bisect_left(seen, v)
            insort(seen, v)
        if n % 2 == 1:
            return inv % 2 == 0
        blank_from_bottom = n - 1 - board.blank_pos[0]
        return (inv + blank_from_bottom) % 2 == 0
