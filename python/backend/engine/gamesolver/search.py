"""Iterative-deepening A* over elementary moves.

:meth:`SearchEngine.run` is a generator.  It yields a
:class:`ProgressSnapshot` every ``progress_interval`` node expansions and
resumes exactly where it stopped; a truthy value sent back into the
generator (or a call to :meth:`SearchEngine.cancel`) ends the run as
``CANCELLED`` at that point.  The generator's return value is the
:class:`SearchResult`, which is also kept on ``engine.result``.

Typical use::

    engine = SearchEngine(start, goal)
    for snapshot in engine.run():
        print(snapshot.percentage)
    print(engine.result.path)
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Generator

from backend.engine.gamesolver.config import SolverConfig
from backend.engine.gamesolver.heuristic import GoalPositions, HeuristicState
from backend.engine.gamesolver.solvability import is_reachable
from backend.models.board import Board, Direction, Move

logger = logging.getLogger(__name__)


class SearchStatus(StrEnum):
    IDLE = "idle"
    SEARCHING = "searching"
    SOLVED = "solved"
    UNREACHABLE = "unreachable"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (SearchStatus.IDLE, SearchStatus.SEARCHING)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Read-only progress report.

    ``percentage`` is an estimate: it never decreases and only reaches 100
    when the goal has been found.
    """

    percentage: float
    nodes_explored: int
    current_depth: int
    phase: str


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    path: tuple[Move, ...] = ()
    nodes_explored: int = 0
    depth: int = 0
    elapsed: float = 0.0

    @property
    def solved(self) -> bool:
        return self.status is SearchStatus.SOLVED


SearchRun = Generator[ProgressSnapshot, "bool | None", SearchResult]

# Outcomes of one bounded depth-first pass.
_FOUND = "found"
_CUTOFF = "cutoff"
_CANCELLED = "cancelled"
_OUT_OF_NODES = "out-of-nodes"


def _adjacency(n: int) -> list[tuple[int, ...]]:
    """Cells orthogonally adjacent to each cell of an n×n board."""
    adj: list[tuple[int, ...]] = []
    for i in range(n * n):
        r, c = divmod(i, n)
        nb: list[int] = []
        if r > 0:
            nb.append(i - n)
        if r < n - 1:
            nb.append(i + n)
        if c > 0:
            nb.append(i - 1)
        if c < n - 1:
            nb.append(i + 1)
        adj.append(tuple(nb))
    return adj


def _direction(tile_index: int, blank_index: int, n: int) -> Direction:
    delta = tile_index - blank_index
    if delta == n:
        return Direction.UP
    if delta == -n:
        return Direction.DOWN
    if delta == 1:
        return Direction.LEFT
    return Direction.RIGHT


class SearchEngine:
    """One IDA* run from *start* to *goal*.

    States: ``IDLE → SEARCHING → SOLVED | UNREACHABLE | EXHAUSTED | CANCELLED``.
    Closing the run early, or an exception escaping it, ends it as
    ``CANCELLED``.
    An engine runs once; create a new one for another search.
    """

    def __init__(self, start: Board, goal: Board, config: SolverConfig | None = None) -> None:
        self.start = start
        self.goal = goal
        self.config = config or SolverConfig()
        self.status = SearchStatus.IDLE
        self.result: SearchResult | None = None
        self.nodes_explored = 0
        self.bound = 0

        self._cancel_requested = False
        self._started = False
        self._h0 = 0
        self._t0 = 0.0
        self._last_yield = 0.0
        self._percentage = 0.0

    # -- control --------------------------------------------------------------

    def cancel(self) -> None:
        """Request cancellation; honoured at the next suspension point.

        An engine whose run has not started yet is cancelled at once.
        """
        self._cancel_requested = True
        if not self._started and not self.status.is_terminal:
            self._finish(SearchStatus.CANCELLED)

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    # -- main loop ------------------------------------------------------------

    def run(self) -> SearchRun:
        if self._started:
            raise RuntimeError("SearchEngine.run() may only be called once")
        self._started = True
        if self.status.is_terminal:
            return self.result
        try:
            return (yield from self._search())
        finally:
            # Closed early or interrupted by an exception.
            if not self.status.is_terminal:
                self._cancel_requested = True
                self._finish(SearchStatus.CANCELLED)

    def _search(self) -> SearchRun:
        self._t0 = time.perf_counter()
        self._last_yield = self._t0

        if not is_reachable(self.start, self.goal):
            logger.info("Goal is not reachable from start; search not started")
            return self._finish(SearchStatus.UNREACHABLE)

        if self.start == self.goal:
            return self._finish(SearchStatus.SOLVED, ())

        goal_positions = GoalPositions.from_board(self.goal)
        hs = HeuristicState(self.start, goal_positions, self.config.use_linear_conflict)
        self._h0 = self.bound = hs.h
        self.status = SearchStatus.SEARCHING
        logger.debug(f"IDA* start: h0={self._h0}, size={self.start.size}")

        cancel = yield self._snapshot("Initializing solver...")
        if cancel:
            self._cancel_requested = True
        if self._cancel_requested:
            return self._finish(SearchStatus.CANCELLED)

        trail: list[tuple[int, int]] = []
        while True:
            outcome, next_bound = yield from self._bounded_pass(hs, trail)
            if outcome == _FOUND:
                path = self._build_path(trail)
                yield ProgressSnapshot(
                    percentage=100.0,
                    nodes_explored=self.nodes_explored,
                    current_depth=len(path),
                    phase="Solved",
                )
                return self._finish(SearchStatus.SOLVED, path)
            if outcome == _CANCELLED:
                return self._finish(SearchStatus.CANCELLED)
            if outcome == _OUT_OF_NODES or next_bound == math.inf:
                return self._finish(SearchStatus.EXHAUSTED)
            logger.debug(
                f"IDA* bound {self.bound} exhausted after {self.nodes_explored} nodes; "
                f"next bound {next_bound}"
            )
            self.bound = int(next_bound)

    def _bounded_pass(
        self, hs: HeuristicState, trail: list[tuple[int, int]]
    ) -> Generator[ProgressSnapshot, "bool | None", tuple[str, float]]:
        """Depth-first pass pruning every node with ``g + h > bound``.

        Uses an explicit stack so the pass can suspend between expansions.
        *trail* holds ``(blank_index, tile_index)`` per move on the current
        path; on success it describes the solution, otherwise it is empty.
        """
        adj = _adjacency(hs.n)
        bound = self.bound
        interval = self.config.progress_interval
        max_nodes = self.config.max_nodes
        seconds = self.config.progress_seconds
        min_exceeded = math.inf

        self.nodes_explored += 1
        frames: list[list[int]] = [list(adj[hs.blank])]

        while frames:
            children = frames[-1]
            if not children:
                frames.pop()
                if trail:
                    hs.swap(trail.pop()[0])
                continue

            ti = children.pop()
            bi = hs.blank
            hs.swap(ti)
            trail.append((bi, ti))

            f = len(trail) + hs.h
            if f > bound:
                if f < min_exceeded:
                    min_exceeded = f
                hs.swap(trail.pop()[0])
                continue
            if hs.md == 0:
                return _FOUND, bound

            self.nodes_explored += 1
            # The tile just moved now sits on the old blank; never move it back.
            frames.append([i for i in adj[ti] if i != bi])

            nodes = self.nodes_explored
            if max_nodes is not None and nodes >= max_nodes:
                self._unwind(hs, trail)
                return _OUT_OF_NODES, min_exceeded
            due = nodes % interval == 0
            if not due and seconds is not None and nodes & 255 == 0:
                due = time.perf_counter() - self._last_yield >= seconds
            if due:
                cancel = yield self._snapshot(f"Searching depth {bound}")
                self._last_yield = time.perf_counter()
                if cancel:
                    self._cancel_requested = True
                if self._cancel_requested:
                    self._unwind(hs, trail)
                    return _CANCELLED, min_exceeded

        return _CUTOFF, min_exceeded

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _unwind(hs: HeuristicState, trail: list[tuple[int, int]]) -> None:
        while trail:
            hs.swap(trail.pop()[0])

    def _build_path(self, trail: list[tuple[int, int]]) -> tuple[Move, ...]:
        n = self.start.size
        cells = list(self.start.cells)
        path: list[Move] = []
        for bi, ti in trail:
            tile = cells[ti]
            path.append(Move(tile=tile, from_index=ti, to_index=bi, direction=_direction(ti, bi, n)))
            cells[bi], cells[ti] = tile, 0
        return tuple(path)

    def _progress(self) -> float:
        # Grows with every raised bound and with nodes explored; stays below 99.
        x = (self.bound - self._h0) / 2 + self.nodes_explored / 100_000
        pct = round(99.0 * x / (x + 10.0), 1)
        self._percentage = max(self._percentage, pct)
        return self._percentage

    def _snapshot(self, phase: str) -> ProgressSnapshot:
        return ProgressSnapshot(
            percentage=self._progress(),
            nodes_explored=self.nodes_explored,
            current_depth=self.bound,
            phase=phase,
        )

    def _finish(self, status: SearchStatus, path: tuple[Move, ...] = ()) -> SearchResult:
        self.status = status
        self.result = SearchResult(
            status=status,
            path=path,
            nodes_explored=self.nodes_explored,
            depth=len(path) if status is SearchStatus.SOLVED else self.bound,
            elapsed=time.perf_counter() - self._t0 if self._t0 else 0.0,
        )
        logger.info(
            f"Search {status.value}: {len(path)} moves, "
            f"{self.nodes_explored} nodes, {self.result.elapsed:.2f}s"
        )
        return self.result
