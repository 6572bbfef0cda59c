from slidescramble.backend.engine.scrambler.scrambler import (
    RandomMovesScrambler,
    RandomStateScrambler,
    Scrambler,
    ScramblerKind,
    make_scrambler,
)

__all__ = [
    "RandomMovesScrambler",
    "RandomStateScrambler",
    "Scrambler",
    "ScramblerKind",
    "make_scrambler",
]
