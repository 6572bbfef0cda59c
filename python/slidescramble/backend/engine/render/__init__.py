from slidescramble.backend.engine.render.svg import (
    Rainbow,
    Renderer,
    SplitSquareFringe,
    SvgRenderer,
)

__all__ = ["Rainbow", "Renderer", "SplitSquareFringe", "SvgRenderer"]
