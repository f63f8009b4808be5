from backend.engine.gamesolver.config import SolverConfig
from backend.engine.gamesolver.search import (
    ProgressSnapshot,
    SearchEngine,
    SearchResult,
    SearchStatus,
)
from backend.engine.gamesolver.solution import Step, build_steps, format_steps
from backend.engine.gamesolver.solver import Solver

__all__ = [
    "ProgressSnapshot",
    "SearchEngine",
    "SearchResult",
    "SearchStatus",
    "Solver",
    "SolverConfig",
    "Step",
    "build_steps",
    "format_steps",
]
