"""Admissible distance estimates towards an arbitrary goal board.

Manhattan distance is the baseline.  Linear conflict adds two moves for
every tile that has to step out of its goal row (or column) and back so the
remaining tiles of that line can pass each other; per line that is the line
length minus the longest run already in goal order.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from functools import lru_cache

from backend.models.board import Board


@dataclass(frozen=True)
class GoalPositions:
    """Goal row and column of every tile id, indexed by tile."""

    size: int
    rows: tuple[int, ...]
    cols: tuple[int, ...]

    @staticmethod
    def from_board(goal: Board) -> GoalPositions:
        return _goal_positions(goal)


@lru_cache(maxsize=32)
def _goal_positions(goal: Board) -> GoalPositions:
    n = goal.size
    rows = [0] * (n * n)
    cols = [0] * (n * n)
    for i, tile in enumerate(goal.cells):
        rows[tile], cols[tile] = divmod(i, n)
    return GoalPositions(size=n, rows=tuple(rows), cols=tuple(cols))


def _lis(seq: list[int]) -> int:
    """Length of the longest strictly increasing subsequence."""
    tails: list[int] = []
    for v in seq:
        i = bisect_left(tails, v)
        if i == len(tails):
            tails.append(v)
        else:
            tails[i] = v
    return len(tails)


def _row_conflict(cells: list[int] | tuple[int, ...], r: int, goal: GoalPositions) -> int:
    n = goal.size
    seq = [
        goal.cols[t]
        for t in cells[r * n : r * n + n]
        if t and goal.rows[t] == r
    ]
    return 2 * (len(seq) - _lis(seq)) if len(seq) > 1 else 0


def _col_conflict(cells: list[int] | tuple[int, ...], c: int, goal: GoalPositions) -> int:
    n = goal.size
    seq = [
        goal.rows[t]
        for t in cells[c :: n]
        if t and goal.cols[t] == c
    ]
    return 2 * (len(seq) - _lis(seq)) if len(seq) > 1 else 0


def manhattan(board: Board, goal: GoalPositions) -> int:
    n = board.size
    total = 0
    for i, t in enumerate(board.cells):
        if t:
            r, c = divmod(i, n)
            total += abs(r - goal.rows[t]) + abs(c - goal.cols[t])
    return total


def linear_conflict(board: Board, goal: GoalPositions) -> int:
    """Extra moves forced by tiles in their goal line but in the wrong order."""
    return sum(
        _row_conflict(board.cells, k, goal) + _col_conflict(board.cells, k, goal)
        for k in range(board.size)
    )


def estimate(board: Board, goal: GoalPositions, use_linear_conflict: bool = True) -> int:
    """Lower bound on the number of moves from *board* to the goal."""
    h = manhattan(board, goal)
    if use_linear_conflict:
        h += linear_conflict(board, goal)
    return h


class HeuristicState:
    """Incrementally maintained estimate over a mutable working copy of a board.

    ``swap`` moves the tile at one index into the adjacent blank and only
    re-scores that tile and the two lines it left and entered.
    """

    __slots__ = ("cells", "goal", "n", "use_lc", "blank", "md", "row_lc", "col_lc")

    def __init__(self, board: Board, goal: GoalPositions, use_linear_conflict: bool = True) -> None:
        self.cells = list(board.cells)
        self.goal = goal
        self.n = board.size
        self.use_lc = use_linear_conflict
        self.blank = board.blank_index
        self.md = manhattan(board, goal)
        if use_linear_conflict:
            self.row_lc = [_row_conflict(self.cells, r, goal) for r in range(self.n)]
            self.col_lc = [_col_conflict(self.cells, c, goal) for c in range(self.n)]
        else:
            self.row_lc = [0] * self.n
            self.col_lc = [0] * self.n

    @property
    def h(self) -> int:
        return self.md + sum(self.row_lc) + sum(self.col_lc)

    def swap(self, ti: int) -> None:
        """Slide the tile at index *ti* into the blank."""
        n = self.n
        cells = self.cells
        goal = self.goal
        bi = self.blank
        tile = cells[ti]
        tr, tc = divmod(ti, n)
        br, bc = divmod(bi, n)
        gr = goal.rows[tile]
        gc = goal.cols[tile]

        self.md += (abs(br - gr) + abs(bc - gc)) - (abs(tr - gr) + abs(tc - gc))
        cells[bi] = tile
        cells[ti] = 0
        self.blank = ti

        if not self.use_lc:
            return
        if tr != br:
            self.row_lc[tr] = _row_conflict(cells, tr, goal)
            self.row_lc[br] = _row_conflict(cells, br, goal)
        else:
            self.col_lc[tc] = _col_conflict(cells, tc, goal)
            self.col_lc[bc] = _col_conflict(cells, bc, goal)
