"""Board model for the sliding puzzle."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Sequence

from backend.models.errors import MalformedBoard

DEFAULT_SIZE = 4


class Direction(StrEnum):
    """Direction a *tile* slides (the blank moves the opposite way)."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Move:
    """One elementary move: *tile* slides from *from_index* into the blank."""

    tile: int
    from_index: int
    to_index: int
    direction: Direction

    def inverse(self) -> Move:
        return Move(
            tile=self.tile,
            from_index=self.to_index,
            to_index=self.from_index,
            direction=self.direction.opposite,
        )

    def __str__(self) -> str:
        return f"{self.tile} {self.direction.value}"


def _validate(cells: Sequence[int], size: int) -> None:
    n = size * size
    if len(cells) != n:
        raise MalformedBoard(
            f"Expected {n} tiles for a {size}×{size} board, got {len(cells)}."
        )
    if sorted(cells) != list(range(n)):
        raise MalformedBoard(
            f"Board must use every number 0-{n - 1} exactly once, got {list(cells)}."
        )


@dataclass(frozen=True)
class Board:
    """Immutable sliding puzzle board.

    Cells are stored row-major (``index = row * size + col``) and 0 is the
    blank.  Boards compare and hash by content, so they can be shared freely
    and used as dictionary keys.
    """

    cells: tuple[int, ...]
    size: int = DEFAULT_SIZE
    blank_index: int = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        cells = tuple(self.cells)
        if self.size < 2:
            raise MalformedBoard(f"Board size must be at least 2, got {self.size}.")
        _validate(cells, self.size)
        object.__setattr__(self, "cells", cells)
        object.__setattr__(self, "blank_index", cells.index(0))

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, flat: Iterable[int], size: int = DEFAULT_SIZE) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat([1, 2, 3, 4, 5, 6, 7, 0, 8], size=3)
        """
        return cls(cells=tuple(flat), size=size)

    @classmethod
    def solved(cls, size: int = DEFAULT_SIZE) -> Board:
        """Return the canonical layout: ``1 .. n*n-1`` then the blank."""
        return cls(cells=tuple(range(1, size * size)) + (0,), size=size)

    @classmethod
    def parse(cls, text: str, size: int = DEFAULT_SIZE) -> Board:
        """Parse a board from comma and/or whitespace separated numbers."""
        parts = [p for p in re.split(r"[,\s]+", text.strip()) if p]
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise MalformedBoard(f"Board contains non-numeric values: {text!r}") from None
        return cls.from_flat(values, size=size)

    def serialize(self) -> str:
        """Canonical text form, accepted by :meth:`parse`."""
        return ",".join(str(v) for v in self.cells)

    # -- queries --------------------------------------------------------------

    @property
    def blank_pos(self) -> tuple[int, int]:
        return divmod(self.blank_index, self.size)

    @property
    def tiles(self) -> list[list[int]]:
        """Cells as a list of rows."""
        n = self.size
        return [list(self.cells[r * n : (r + 1) * n]) for r in range(n)]

    def get_tile(self, row: int, col: int) -> int:
        return self.cells[row * self.size + col]

    def is_solved(self) -> bool:
        """Check if all tiles are in the canonical goal positions."""
        return self == Board.solved(self.size)

    def is_tile_correct(self, row: int, col: int, goal: Board | None = None) -> bool:
        """Check if the tile at (row, col) matches *goal* (canonical by default)."""
        if goal is None:
            goal = Board.solved(self.size)
        return self.get_tile(row, col) == goal.get_tile(row, col)

    def with_swap(self, i: int, j: int) -> Board:
        """Return a copy with cells *i* and *j* exchanged."""
        cells = list(self.cells)
        cells[i], cells[j] = cells[j], cells[i]
        return Board(cells=tuple(cells), size=self.size)

    def __str__(self) -> str:
        width = len(str(self.size * self.size - 1))
        return "\n".join(
            " ".join(f"{v:>{width}}" if v else " " * (width - 1) + "." for v in row)
            for row in self.tiles
        )
