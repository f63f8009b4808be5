"""Shared fixtures: seeded scrambles and a breadth-first distance oracle."""

from __future__ import annotations

import random
from collections import deque
from typing import Callable

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.models.board import Board
from backend.models.moves import apply_move, legal_moves


def bfs_distance(start: Board, goal: Board) -> int | None:
    """Exact move count from *start* to *goal*, or ``None`` if unreachable."""
    if start == goal:
        return 0
    seen = {start}
    frontier: deque[tuple[Board, int]] = deque([(start, 0)])
    while frontier:
        board, depth = frontier.popleft()
        for move in legal_moves(board):
            nxt = apply_move(board, move)
            if nxt == goal:
                return depth + 1
            if nxt not in seen:
                seen.add(nxt)
                frontier.append((nxt, depth + 1))
    return None


@pytest.fixture
def bfs() -> Callable[[Board, Board], int | None]:
    return bfs_distance


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def scrambled(rng: random.Random) -> Callable[..., Board]:
    """Factory: ``scrambled(size, moves)`` walks randomly from the solved board."""

    def _make(size: int = 4, moves: int = 20, start: Board | None = None) -> Board:
        board = start if start is not None else GameGenerator.solved(size)
        return GameGenerator.scramble(board, moves=moves, rng=rng)

    return _make
