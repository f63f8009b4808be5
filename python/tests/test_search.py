"""IDA* engine: optimality, progress snapshots, cancellation, and budgets."""

from __future__ import annotations

import itertools

import pytest

from backend.engine.gamesolver.config import SolverConfig
from backend.engine.gamesolver.search import SearchEngine, SearchStatus
from backend.models.board import Board, Direction
from backend.models.moves import apply_move, apply_moves, legal_moves, move_for_direction


def _walk(board: Board, directions: list[Direction]) -> Board:
    for direction in directions:
        move = move_for_direction(board, direction)
        assert move is not None
        board = apply_move(board, move)
    return board


# The blank spirals through 11 distinct cells, moving 11 distinct tiles one
# cell each: Manhattan distance and optimal length are both exactly 11.
SPIRAL = _walk(
    Board.solved(),
    [Direction.RIGHT] * 3 + [Direction.DOWN] * 3 + [Direction.LEFT] * 3 + [Direction.UP] * 2,
)


def _run(engine: SearchEngine, cancel_after: int | None = None) -> list:
    snapshots = []
    for snapshot in engine.run():
        snapshots.append(snapshot)
        if cancel_after is not None and len(snapshots) >= cancel_after:
            engine.cancel()
    return snapshots


def _all_boards(size: int) -> list[Board]:
    """Every board reachable from the solved layout (feasible for 2×2 only)."""
    seen = {Board.solved(size)}
    frontier = [Board.solved(size)]
    while frontier:
        board = frontier.pop()
        for move in legal_moves(board):
            nxt = apply_move(board, move)
            if nxt not in seen:
                seen.add(nxt)
                frontier.append(nxt)
    return sorted(seen, key=lambda b: b.cells)


# -- trivial cases ------------------------------------------------------------


def test_start_equals_goal_gives_empty_path() -> None:
    engine = SearchEngine(SPIRAL, SPIRAL)
    assert _run(engine) == []
    assert engine.result.status is SearchStatus.SOLVED
    assert engine.result.path == ()


def test_one_move_away() -> None:
    start = Board.solved()
    goal = apply_move(start, legal_moves(start)[0])
    engine = SearchEngine(start, goal)
    _run(engine)
    assert engine.result.solved
    assert len(engine.result.path) == 1
    assert apply_move(start, engine.result.path[0]) == goal


def test_unreachable_fails_fast() -> None:
    start = Board.solved().with_swap(13, 14)
    engine = SearchEngine(start, Board.solved())
    assert _run(engine) == []
    assert engine.status is SearchStatus.UNREACHABLE
    assert engine.result.path == ()
    assert engine.result.nodes_explored == 0


def test_engine_runs_once() -> None:
    engine = SearchEngine(SPIRAL, Board.solved())
    _run(engine)
    with pytest.raises(RuntimeError):
        next(engine.run())


# -- optimality ---------------------------------------------------------------


def test_spiral_is_solved_optimally() -> None:
    engine = SearchEngine(SPIRAL, Board.solved())
    _run(engine)
    assert engine.result.solved
    assert len(engine.result.path) == 11
    assert engine.result.depth == 11
    assert apply_moves(SPIRAL, engine.result.path)[-1] == Board.solved()


def test_spiral_as_goal() -> None:
    engine = SearchEngine(Board.solved(), SPIRAL)
    _run(engine)
    assert len(engine.result.path) == 11
    assert apply_moves(Board.solved(), engine.result.path)[-1] == SPIRAL


@pytest.mark.parametrize("use_lc", [True, False])
def test_every_2x2_pair_matches_bfs(bfs, use_lc: bool) -> None:
    config = SolverConfig(use_linear_conflict=use_lc)
    boards = _all_boards(2)
    assert len(boards) == 12
    for start, goal in itertools.product(boards, repeat=2):
        engine = SearchEngine(start, goal, config)
        _run(engine)
        path = engine.result.path
        assert len(path) == bfs(start, goal)
        assert apply_moves(start, path)[-1] == goal


def test_3x3_pairs_match_bfs(scrambled, bfs) -> None:
    for _ in range(6):
        start = scrambled(size=3, moves=40)
        goal = scrambled(moves=14, start=start)
        engine = SearchEngine(start, goal)
        _run(engine)
        assert len(engine.result.path) == bfs(start, goal)
        assert apply_moves(start, engine.result.path)[-1] == goal


def test_4x4_arbitrary_goal(scrambled) -> None:
    goal = scrambled(moves=60)
    start = scrambled(moves=20, start=goal)
    engine = SearchEngine(start, goal)
    _run(engine)
    assert engine.result.solved
    assert len(engine.result.path) <= 20
    assert apply_moves(start, engine.result.path)[-1] == goal


def test_path_never_undoes_previous_move() -> None:
    engine = SearchEngine(SPIRAL, Board.solved())
    _run(engine)
    path = engine.result.path
    for a, b in zip(path, path[1:]):
        assert b != a.inverse()


# -- progress -----------------------------------------------------------------


def test_snapshots_are_monotonic_and_end_at_100() -> None:
    engine = SearchEngine(SPIRAL, Board.solved(), SolverConfig(progress_interval=1))
    snapshots = _run(engine)
    assert len(snapshots) > 2
    assert snapshots[0].phase == "Initializing solver..."
    assert snapshots[-1].phase == "Solved"
    assert snapshots[-1].percentage == 100.0
    percentages = [s.percentage for s in snapshots]
    assert percentages == sorted(percentages)
    assert all(p < 100 for p in percentages[:-1])
    nodes = [s.nodes_explored for s in snapshots]
    assert nodes == sorted(nodes)
    assert all(s.current_depth >= 11 for s in snapshots)


def test_wall_clock_slices() -> None:
    config = SolverConfig(progress_interval=10**9, progress_seconds=0.0)
    engine = SearchEngine(SPIRAL, Board.solved(), config)
    _run(engine)
    assert engine.result.solved


# -- cancellation and budget --------------------------------------------------


def test_cancel_via_send_at_first_snapshot() -> None:
    engine = SearchEngine(SPIRAL, Board.solved(), SolverConfig(progress_interval=1))
    run = engine.run()
    first = next(run)
    assert first.nodes_explored == 0
    assert engine.status is SearchStatus.SEARCHING
    with pytest.raises(StopIteration) as stop:
        run.send(True)
    assert stop.value.value.status is SearchStatus.CANCELLED
    assert stop.value.value.path == ()
    assert engine.status is SearchStatus.CANCELLED


def test_cancel_mid_search() -> None:
    engine = SearchEngine(SPIRAL, Board.solved(), SolverConfig(progress_interval=1))
    snapshots = _run(engine, cancel_after=4)
    assert len(snapshots) == 4
    assert engine.result.status is SearchStatus.CANCELLED
    assert engine.result.nodes_explored >= 3
    assert snapshots[-1].percentage < 100


def test_node_budget_exhausts() -> None:
    engine = SearchEngine(SPIRAL, Board.solved(), SolverConfig(max_nodes=5))
    _run(engine)
    assert engine.result.status is SearchStatus.EXHAUSTED
    assert engine.result.path == ()
    assert engine.result.nodes_explored == 5


def test_closing_the_run_cancels() -> None:
    engine = SearchEngine(SPIRAL, Board.solved(), SolverConfig(progress_interval=1))
    run = engine.run()
    next(run)
    next(run)
    assert engine.status is SearchStatus.SEARCHING
    run.close()
    assert engine.status is SearchStatus.CANCELLED
    assert engine.result.path == ()


def test_cancel_before_the_run_starts() -> None:
    engine = SearchEngine(SPIRAL, Board.solved())
    engine.cancel()
    assert engine.status is SearchStatus.CANCELLED
    assert _run(engine) == []
    assert engine.result.status is SearchStatus.CANCELLED
    assert engine.result.nodes_explored == 0
