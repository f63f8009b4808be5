"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import random

from backend.models.board import DEFAULT_SIZE, Board
from backend.models.moves import apply_move, legal_moves

MIN_SCRAMBLE_MOVES = 50
MAX_SCRAMBLE_MOVES = 150


class GameGenerator:
    """Creates solvable puzzles by walking randomly from a known board."""

    @staticmethod
    def solved(size: int = DEFAULT_SIZE) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return Board.solved(size)

    @staticmethod
    def scramble(
        board: Board,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> Board:
        """Return *board* after *moves* random elementary moves.

        Defaults to 50-150 moves.  The walk never undoes the move it just
        made.
        """
        rng = rng or random.Random()
        if moves is None:
            moves = rng.randint(MIN_SCRAMBLE_MOVES, MAX_SCRAMBLE_MOVES)

        prev = None
        for _ in range(moves):
            options = legal_moves(board)
            if prev is not None:
                options = [m for m in options if m.tile != prev.tile] or options
            prev = rng.choice(options)
            board = apply_move(board, prev)
        return board

    @staticmethod
    def generate(size: int = DEFAULT_SIZE, rng: random.Random | None = None) -> Board:
        """Return a random *solvable* board of the given size."""
        solved = GameGenerator.solved(size)
        while True:
            board = GameGenerator.scramble(solved, rng=rng)
            # Ensure the board is not already solved
            if not board.is_solved():
                return board
