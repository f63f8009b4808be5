"""Core gameplay logic — processes moves and checks win condition."""

from __future__ import annotations

import logging

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState
from backend.models.board import DEFAULT_SIZE, Board, Direction, Move
from backend.models.moves import apply_move, legal_moves, move_for_direction, movable_run

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    The session is won when the board equals ``goal``, which defaults to the
    canonical solved layout but may be any board of the same size.
    """

    def __init__(self, size: int = DEFAULT_SIZE, goal: Board | None = None) -> None:
        self.size = size
        self.goal = goal if goal is not None else Board.solved(size)
        self.state = GameState(GameGenerator.generate(size))

    @classmethod
    def from_board(cls, board: Board, goal: Board | None = None) -> "GamePlay":
        """Create a game session from an existing board."""
        obj = object.__new__(cls)
        obj.size = board.size
        obj.goal = goal if goal is not None else Board.solved(board.size)
        obj.state = GameState(board)
        return obj

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        move = move_for_direction(self.state.board, direction)
        if move is None:
            return False
        self._apply(move)
        return True

    def apply(self, move: Move) -> bool:
        """Apply an elementary move produced elsewhere (e.g. by the solver)."""
        if move not in legal_moves(self.state.board):
            return False
        self._apply(move)
        return True

    def click(self, index: int) -> int:
        """Slide the run of tiles between *index* and the blank.

        Returns the number of elementary moves made (0 if the click was on
        the blank or off the blank's row and column).
        """
        moves = movable_run(self.state.board, index)
        for move in moves:
            self._apply(move)
        return len(moves)

    def undo(self) -> bool:
        move = self.state.pop()
        if move is None:
            return False
        self.state.board = apply_move(self.state.board, move.inverse())
        return True

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.board == self.goal

    # -- helpers --------------------------------------------------------------

    def _apply(self, move: Move) -> None:
        logger.debug(f"move {move}")
        self.state.record(move, apply_move(self.state.board, move))
