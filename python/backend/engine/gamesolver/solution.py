"""Turns an elementary move path into user-facing steps and replay boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from backend.models.board import Board, Direction, Move
from backend.models.moves import apply_moves


@dataclass(frozen=True)
class Step:
    """One user action: a run of tiles sliding together in one direction.

    ``tile`` is the tile the user drags, i.e. the one farthest from the
    blank, which is the last to move.  ``board_range`` indexes the
    elementary boards list: ``boards[first]`` is the board before the step
    and ``boards[last]`` the board after it.
    """

    number: int
    tile: int
    tiles: tuple[int, ...]
    direction: Direction
    from_index: int
    to_index: int
    board_range: tuple[int, int]
    description: str

    @property
    def count(self) -> int:
        return len(self.tiles)

    @property
    def moves(self) -> range:
        """Indices into the path of the elementary moves this step covers."""
        return range(self.board_range[0], self.board_range[1])


def describe(tiles: Sequence[int], direction: Direction) -> str:
    if len(tiles) == 1:
        return f"Slide tile {tiles[0]} {direction.value}"
    return f"Slide tiles {','.join(str(t) for t in tiles)} {direction.value}"


def _same_line(a: Move, b: Move, size: int) -> bool:
    if a.direction in (Direction.LEFT, Direction.RIGHT):
        return a.to_index // size == b.to_index // size
    return a.to_index % size == b.to_index % size


def merge_runs(path: Sequence[Move], size: int) -> list[tuple[int, int]]:
    """Split *path* into maximal ``[first, last)`` runs sharing direction and line."""
    runs: list[tuple[int, int]] = []
    first = 0
    for i in range(1, len(path) + 1):
        if (
            i == len(path)
            or path[i].direction != path[first].direction
            or not _same_line(path[first], path[i], size)
        ):
            runs.append((first, i))
            first = i
    return runs


def build_steps(start: Board, path: Sequence[Move]) -> tuple[list[Step], list[Board]]:
    """Return the merged steps and every elementary board (``len(path) + 1``)."""
    boards = apply_moves(start, list(path))
    steps: list[Step] = []
    for number, (first, last) in enumerate(merge_runs(path, start.size), 1):
        run = path[first:last]
        dragged = run[-1]
        tiles = tuple(m.tile for m in run)
        steps.append(
            Step(
                number=number,
                tile=dragged.tile,
                tiles=tiles,
                direction=dragged.direction,
                from_index=dragged.from_index,
                to_index=dragged.to_index,
                board_range=(first, last),
                description=describe(tiles, dragged.direction),
            )
        )
    return steps, boards


def step_boards(steps: Sequence[Step], boards: Sequence[Board]) -> list[Board]:
    """The start board followed by the board after each step."""
    if not boards:
        return []
    return [boards[0]] + [boards[step.board_range[1]] for step in steps]


def format_steps(steps: Sequence[Step]) -> str:
    """Numbered plain-text listing, one step per line."""
    return "\n".join(f"{step.number}. {step.description}" for step in steps)
