"""Permutation parity: which boards can reach which.

Every elementary move preserves ``(inversions + blank row) mod 2`` on even
widths and ``inversions mod 2`` on odd widths, and the two parity classes
are each fully connected.  Two boards are therefore mutually reachable iff
their parities match, so a board can be judged on its own against the
canonical layout.
"""

from __future__ import annotations

from bisect import bisect_left, insort
from typing import Iterable

from backend.models.board import DEFAULT_SIZE, Board
from backend.models.errors import Unreachable


def is_board_individually_valid(values: Iterable[int], size: int = DEFAULT_SIZE) -> bool:
    """True if *values* uses every number ``0..size*size-1`` exactly once."""
    try:
        return sorted(values) == list(range(size * size))
    except TypeError:
        return False


def inversions(board: Board) -> int:
    """Count out-of-order tile pairs, ignoring the blank."""
    count = 0
    seen: list[int] = []
    for v in board.cells:
        if v == 0:
            continue
        count += len(seen) - bisect_left(seen, v)
        insort(seen, v)
    return count


def parity(board: Board) -> int:
    """Return the board's parity class, 0 or 1."""
    inv = inversions(board)
    if board.size % 2 == 1:
        return inv % 2
    blank_from_bottom = board.size - 1 - board.blank_pos[0]
    return (inv + blank_from_bottom) % 2


def check_solvable(board: Board) -> bool:
    """Return True if *board* can reach the canonical solved layout."""
    return parity(board) == parity(Board.solved(board.size))


def is_reachable(a: Board, b: Board) -> bool:
    """Return True if *b* can be reached from *a* (and vice versa)."""
    return a.size == b.size and parity(a) == parity(b)


def ensure_reachable(a: Board, b: Board) -> None:
    if not is_reachable(a, b):
        raise Unreachable(a, b)
