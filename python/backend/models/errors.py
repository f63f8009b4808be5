"""Errors raised by the puzzle core."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for puzzle errors."""


class MalformedBoard(PuzzleError, ValueError):
    """The cell values are not a permutation of ``0..size*size-1``."""


class Unreachable(PuzzleError):
    """The goal board lies in the other parity class than the start board."""

    def __init__(self, start: object, goal: object) -> None:
        super().__init__(
            "Goal board is not reachable from the start board "
            "(the two boards have different parity)."
        )
        self.start = start
        self.goal = goal
