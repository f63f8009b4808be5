"""Sliding puzzle solver — public entry points for frontends."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from backend.engine.gamesolver import solvability
from backend.engine.gamesolver.config import SolverConfig
from backend.engine.gamesolver.search import (
    ProgressSnapshot,
    SearchEngine,
    SearchResult,
    SearchRun,
)
from backend.engine.gamesolver.solution import Step, build_steps
from backend.models.board import DEFAULT_SIZE, Board, Move

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressSnapshot], None]


class Solver:
    """Solves from any board to any other board of the same parity.

    Only one search is active per instance: starting a new one cancels the
    search in flight.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()
        self._engine: SearchEngine | None = None

    # -- validation -----------------------------------------------------------

    @staticmethod
    def is_board_individually_valid(values: Iterable[int], size: int = DEFAULT_SIZE) -> bool:
        return solvability.is_board_individually_valid(values, size)

    @staticmethod
    def check_solvable(board: Board) -> bool:
        """Return True if *board* can reach the canonical solved layout."""
        return solvability.check_solvable(board)

    # -- search ---------------------------------------------------------------

    @property
    def busy(self) -> bool:
        """True from :meth:`iter_solve` until that run reaches a terminal status."""
        return self._engine is not None and not self._engine.status.is_terminal

    @property
    def last_result(self) -> SearchResult | None:
        """Result of the most recent run, once it has finished."""
        return self._engine.result if self._engine is not None else None

    def cancel(self) -> None:
        """Cancel the search in flight; takes effect at its next snapshot."""
        if self._engine is not None:
            self._engine.cancel()

    def iter_solve(self, start: Board, goal: Board) -> SearchRun:
        """Start a search and return its generator of progress snapshots.

        Raises :class:`Unreachable` immediately if the boards differ in
        parity.  The generator's return value is the :class:`SearchResult`.
        """
        solvability.ensure_reachable(start, goal)
        if self.busy:
            logger.info("Cancelling the search in flight for a new request")
            self.cancel()
        self._engine = SearchEngine(start, goal, self.config)
        return self._engine.run()

    def solve(
        self,
        start: Board,
        goal: Board | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult:
        """Search from *start* to *goal* (canonical layout by default).

        *on_progress* is called with every snapshot; it may call
        :meth:`cancel`, which ends the run with ``CANCELLED``.
        If *on_progress* raises, the run is closed as ``CANCELLED`` and the
        exception propagates; :attr:`last_result` then holds that result.
        """
        if goal is None:
            goal = Board.solved(start.size)
        run = self.iter_solve(start, goal)
        engine = self._engine
        try:
            snapshot = next(run)
            while True:
                if on_progress is not None:
                    on_progress(snapshot)
                snapshot = run.send(engine.cancel_requested if engine else False)
        except StopIteration as stop:
            return stop.value
        finally:
            # No-op once finished; otherwise the run ends as CANCELLED.
            run.close()

    def hint(self, board: Board, goal: Board | None = None) -> Move | None:
        """Return the first move of an optimal solution, or ``None``."""
        if goal is None:
            goal = Board.solved(board.size)
        if board == goal or not solvability.is_reachable(board, goal):
            return None
        result = self.solve(board, goal)
        return result.path[0] if result.path else None

    # -- presentation ---------------------------------------------------------

    @staticmethod
    def build_steps(start: Board, path: Sequence[Move]) -> tuple[list[Step], list[Board]]:
        return build_steps(start, path)
