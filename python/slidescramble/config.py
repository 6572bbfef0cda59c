"""Batch settings, with optional JSON overrides.

Example ``scramble.json``::

    {"size": 4, "count": 5, "extra": 2, "chunk_width": 10}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from slidescramble.backend.engine.scrambler import ScramblerKind

logger = logging.getLogger(__name__)

MIN_SIZE = 2
MAX_SIZE = 8


@dataclass(frozen=True)
class ScrambleConfig:
    size: int = 4
    count: int = 5
    extra: int = 2
    chunk_width: int = 10
    solve_timeout: float | None = 5.0
    scrambler: str = ScramblerKind.random_state.value
    seed: int | None = None
    tile_size: float = 30.0
    font_size: float = 15.0

    def labels(self) -> list[str]:
        """Main rows ``1..count`` followed by extras ``E1..E<extra>``."""
        return [str(i) for i in range(1, self.count + 1)] + [
            f"E{i}" for i in range(1, self.extra + 1)
        ]

    def validate(self) -> ScrambleConfig:
        if not MIN_SIZE <= self.size <= MAX_SIZE:
            raise ValueError(
                f"size must be between {MIN_SIZE} and {MAX_SIZE}, got {self.size}"
            )
        if self.count < 0 or self.extra < 0:
            raise ValueError("count and extra must not be negative")
        if self.chunk_width < 1:
            raise ValueError(f"chunk_width must be at least 1, got {self.chunk_width}")
        if self.solve_timeout is not None and self.solve_timeout <= 0:
            raise ValueError("solve_timeout must be positive")
        if self.tile_size <= 0 or self.font_size <= 0:
            raise ValueError("tile_size and font_size must be positive")
        ScramblerKind(self.scrambler)
        return self

    def merged(self, **overrides: Any) -> ScrambleConfig:
        """Copy with every override that is not ``None`` applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Path | None) -> ScrambleConfig:
    """Load settings from *path* over the defaults.

    Unreadable or malformed files fall back to the defaults with a
    warning.  Unknown keys are an error.
    """
    defaults = ScrambleConfig()
    if path is None:
        return defaults
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return defaults

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to load config %s: %s, using defaults", path, e)
        return defaults
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object, using defaults", path)
        return defaults

    known = {f.name for f in fields(ScrambleConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")

    config = replace(defaults, **data)
    logger.debug("Config loaded from %s: %s", path, config)
    return config
