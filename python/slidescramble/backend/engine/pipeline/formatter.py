"""Turns move sequences into wrapped, human-readable scramble text."""

from __future__ import annotations

from slidescramble.backend.models.algorithm import Algorithm, Move

DEFAULT_CHUNK_WIDTH = 10


def format_move(move: Move) -> str:
    """Move text, with one trailing space when a single tile is slid."""
    token = str(move)
    if abs(move.amount) == 1:
        token += " "
    return token


def format_scramble(algorithm: Algorithm, width: int = DEFAULT_CHUNK_WIDTH) -> str:
    """Lay out *algorithm* as lines of at most *width* moves.

    Moves on a line are joined with a single space and lines with a
    newline.  An empty algorithm gives an empty string.
    """
    if width < 1:
        raise ValueError(f"Chunk width must be at least 1, got {width}.")
    tokens = [format_move(m) for m in algorithm]
    return "\n".join(
        " ".join(tokens[i : i + width]) for i in range(0, len(tokens), width)
    )
