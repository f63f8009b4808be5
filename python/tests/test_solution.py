"""Merging elementary moves into user-facing steps."""

from __future__ import annotations

from backend.engine.gamesolver.solution import (
    build_steps,
    describe,
    format_steps,
    merge_runs,
    step_boards,
)
from backend.models.board import Board, Direction
from backend.models.moves import apply_moves, movable_run, move_for_direction


def _spiral_path() -> list:
    board = Board.solved()
    path = []
    for direction in [Direction.RIGHT] * 3 + [Direction.DOWN] * 3 + [Direction.LEFT] * 3 + [Direction.UP] * 2:
        move = move_for_direction(board, direction)
        path.append(move)
        board = apply_moves(board, [move])[-1]
    return path


def test_three_moves_along_a_row_merge_into_one_step() -> None:
    start = Board.solved()
    path = movable_run(start, 12)
    assert len(path) == 3

    steps, boards = build_steps(start, path)

    assert len(steps) == 1
    step = steps[0]
    assert step.number == 1
    assert step.count == 3
    assert step.tiles == (15, 14, 13)
    assert step.tile == 13
    assert step.direction is Direction.RIGHT
    assert step.board_range == (0, 3)
    assert list(step.moves) == [0, 1, 2]
    assert step.from_index == 12 and step.to_index == 13
    assert step.description == "Slide tiles 15,14,13 right"

    # Every elementary board is still there for animation.
    assert len(boards) == 4
    assert boards[0] == start
    assert boards[1].blank_index == 14
    assert boards[2].blank_index == 13
    assert boards[3].cells[12:] == (0, 13, 14, 15)


def test_direction_changes_split_steps() -> None:
    start = Board.solved()
    steps, boards = build_steps(start, _spiral_path())
    assert [s.direction for s in steps] == [
        Direction.RIGHT,
        Direction.DOWN,
        Direction.LEFT,
        Direction.UP,
    ]
    assert [s.count for s in steps] == [3, 3, 3, 2]
    assert [s.board_range for s in steps] == [(0, 3), (3, 6), (6, 9), (9, 11)]
    assert steps[1].tiles == (9, 5, 1)
    assert steps[1].description == "Slide tiles 9,5,1 down"
    assert len(boards) == 12


def test_same_direction_after_a_break_is_a_new_step() -> None:
    start = Board.solved()
    board = start
    path = []
    for direction in (Direction.RIGHT, Direction.DOWN, Direction.RIGHT):
        move = move_for_direction(board, direction)
        path.append(move)
        board = apply_moves(board, [move])[-1]
    steps, _ = build_steps(start, path)
    assert [s.count for s in steps] == [1, 1, 1]
    assert steps[0].description == "Slide tile 15 right"


def test_empty_path() -> None:
    start = Board.solved()
    steps, boards = build_steps(start, [])
    assert steps == []
    assert boards == [start]
    assert merge_runs([], 4) == []
    assert step_boards(steps, boards) == [start]
    assert format_steps(steps) == ""


def test_step_boards_and_text() -> None:
    start = Board.solved()
    steps, boards = build_steps(start, _spiral_path())
    after_each = step_boards(steps, boards)
    assert len(after_each) == len(steps) + 1
    assert after_each[0] == start
    assert after_each[-1] == boards[-1]
    assert after_each[1] == boards[3]

    text = format_steps(steps)
    assert text.splitlines()[0] == "1. Slide tiles 15,14,13 right"
    assert text.splitlines()[-1] == "4. Slide tiles 8,12 up"


def test_describe() -> None:
    assert describe([7], Direction.LEFT) == "Slide tile 7 left"
    assert describe([6, 7, 8], Direction.LEFT) == "Slide tiles 6,7,8 left"
