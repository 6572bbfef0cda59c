"""Shared fixtures."""

from __future__ import annotations

import random

import pytest

from fakes import RecordingSink
from slidescramble.backend.engine.pipeline import ScrambleRowBuilder
from slidescramble.backend.engine.render import SvgRenderer
from slidescramble.backend.engine.scrambler import RandomStateScrambler
from slidescramble.backend.engine.solver import Solver


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def builder(rng: random.Random) -> ScrambleRowBuilder:
    return ScrambleRowBuilder(
        size=4,
        scrambler=RandomStateScrambler(rng),
        solver=Solver(time_limit=5.0),
        renderer=SvgRenderer(),
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
