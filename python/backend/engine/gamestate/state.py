"""Tracks the state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import Board, Move


class GameState:
    """Holds the current board, the move history, and elapsed time.

    The board is immutable; every move replaces it.  ``moves`` counts
    elementary moves, so a three-tile slide counts as three.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.history: list[Move] = []
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    @property
    def moves(self) -> int:
        return len(self.history)

    def record(self, move: Move, board: Board) -> None:
        self.history.append(move)
        self.board = board

    def pop(self) -> Move | None:
        """Forget the last move, returning it (the caller restores the board)."""
        return self.history.pop() if self.history else None
