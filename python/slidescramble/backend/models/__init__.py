from slidescramble.backend.models.algorithm import Algorithm, Move
from slidescramble.backend.models.board import Board, Direction
from slidescramble.backend.models.errors import (
    IllegalMoveError,
    ParseError,
    RenderError,
    RowError,
    ScrambleError,
    SinkError,
    SolveTimeout,
    UnsolvableError,
    VerificationMismatch,
)

__all__ = [
    "Algorithm",
    "Board",
    "Direction",
    "IllegalMoveError",
    "Move",
    "ParseError",
    "RenderError",
    "RowError",
    "ScrambleError",
    "SinkError",
    "SolveTimeout",
    "UnsolvableError",
    "VerificationMismatch",
]
