from slidescramble.backend.engine.pipeline.batch import (
    BatchAborted,
    BatchAssembler,
    BatchResult,
    OutputSink,
)
from slidescramble.backend.engine.pipeline.formatter import (
    DEFAULT_CHUNK_WIDTH,
    format_move,
    format_scramble,
)
from slidescramble.backend.engine.pipeline.row_builder import (
    ScrambleRow,
    ScrambleRowBuilder,
    Stage,
)
from slidescramble.backend.engine.pipeline.verifier import verify_scramble

__all__ = [
    "DEFAULT_CHUNK_WIDTH",
    "BatchAborted",
    "BatchAssembler",
    "BatchResult",
    "OutputSink",
    "ScrambleRow",
    "ScrambleRowBuilder",
    "Stage",
    "format_move",
    "format_scramble",
    "verify_scramble",
]
