"""Builds one verified, rendered scramble row."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from slidescramble.backend.engine.pipeline.formatter import (
    DEFAULT_CHUNK_WIDTH,
    format_scramble,
)
from slidescramble.backend.engine.pipeline.verifier import verify_scramble
from slidescramble.backend.engine.render import Renderer
from slidescramble.backend.engine.scrambler import Scrambler
from slidescramble.backend.engine.solver import Solver
from slidescramble.backend.models.algorithm import Algorithm
from slidescramble.backend.models.board import Board
from slidescramble.backend.models.errors import RenderError, RowError

logger = logging.getLogger(__name__)


class Stage(StrEnum):
    SCRAMBLING = "scrambling"
    SOLVING = "solving"
    INVERTING = "inverting"
    FORMATTING = "formatting"
    VERIFYING = "verifying"
    RENDERING = "rendering"
    DONE = "done"


@dataclass(frozen=True)
class ScrambleRow:
    label: str
    scramble_text: str
    graphic: Any
    state: Board
    algorithm: Algorithm


class ScrambleRowBuilder:
    """Runs scramble → solve → invert → format → verify → render for a label.

    The scrambler, solver and renderer are shared between rows and only
    ever read from.  Verification cannot be switched off.
    """

    def __init__(
        self,
        size: int,
        scrambler: Scrambler,
        solver: Solver,
        renderer: Renderer,
        chunk_width: int = DEFAULT_CHUNK_WIDTH,
    ) -> None:
        if chunk_width < 1:
            raise ValueError(f"Chunk width must be at least 1, got {chunk_width}.")
        self.size = size
        self.scrambler = scrambler
        self.solver = solver
        self.renderer = renderer
        self.chunk_width = chunk_width

    def build(self, label: str) -> ScrambleRow:
        """Produce the row for *label*, or raise ``RowError``."""
        stage = self._enter(label, Stage.SCRAMBLING)
        state: Board | None = None
        try:
            state = self.scrambler.scramble(self.size)

            stage = self._enter(label, Stage.SOLVING)
            solution = self.solver.solve(state)

            stage = self._enter(label, Stage.INVERTING)
            scramble = solution.inverse()

            stage = self._enter(label, Stage.FORMATTING)
            text = format_scramble(scramble, self.chunk_width)

            stage = self._enter(label, Stage.VERIFYING)
            verify_scramble(text, state, Board.solved(self.size))

            stage = self._enter(label, Stage.RENDERING)
            graphic = self.renderer.render(state)
            if graphic is None or graphic == "":
                raise RenderError("Renderer produced an empty graphic.")
        except Exception as exc:
            # Any collaborator failure is reported against this row.
            raise RowError(label, stage, state, exc) from exc

        self._enter(label, Stage.DONE)
        logger.info(
            "Row %s: %d moves (%d slides)", label, len(scramble), scramble.len_moves
        )
        return ScrambleRow(
            label=label,
            scramble_text=text,
            graphic=graphic,
            state=state,
            algorithm=scramble,
        )

    @staticmethod
    def _enter(label: str, stage: Stage) -> Stage:
        logger.debug("[%s] %s", label, stage)
        return stage
