from slidescramble.backend.engine.solver.solver import Solver

__all__ = ["Solver"]
