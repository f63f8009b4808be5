"""Board value type: validation, queries, and serialisation."""

from __future__ import annotations

import pytest

from backend.models.board import Board, Direction, Move
from backend.models.errors import MalformedBoard, PuzzleError

SOLVED = tuple(range(1, 16)) + (0,)


def test_solved_layout() -> None:
    board = Board.solved()
    assert board.cells == SOLVED
    assert board.size == 4
    assert board.blank_index == 15
    assert board.blank_pos == (3, 3)
    assert board.is_solved()


def test_from_flat_accepts_lists_and_stores_tuple() -> None:
    board = Board.from_flat([1, 2, 3, 4, 5, 6, 7, 0, 8], size=3)
    assert board.cells == (1, 2, 3, 4, 5, 6, 7, 0, 8)
    assert board.blank_pos == (2, 1)
    assert board.tiles == [[1, 2, 3], [4, 5, 6], [7, 0, 8]]
    assert not board.is_solved()


@pytest.mark.parametrize(
    "cells",
    [
        list(range(15)),                      # too short
        list(range(1, 16)) + [1],             # duplicate, no blank
        list(range(1, 16)) + [16],            # out of range
        [0] * 16,
    ],
    ids=["short", "duplicate", "out-of-range", "all-blank"],
)
def test_malformed_boards_are_rejected(cells: list[int]) -> None:
    with pytest.raises(MalformedBoard):
        Board.from_flat(cells)


def test_malformed_is_a_value_error() -> None:
    assert issubclass(MalformedBoard, ValueError)
    assert issubclass(MalformedBoard, PuzzleError)


def test_equality_and_hash_by_content() -> None:
    a = Board.from_flat(list(SOLVED))
    b = Board(cells=SOLVED)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != Board.solved(3)


def test_board_is_immutable() -> None:
    board = Board.solved()
    with pytest.raises(AttributeError):
        board.cells = SOLVED  # type: ignore[misc]


def test_parse_and_serialize() -> None:
    board = Board.parse("1 2 3 4\n5 6 7 8\n9 10 11 12\n13 14 0 15")
    assert board.blank_index == 14
    assert board.serialize() == "1,2,3,4,5,6,7,8,9,10,11,12,13,14,0,15"
    assert Board.parse(board.serialize()) == board
    assert Board.parse("1, 2, 3, 0", size=2).blank_pos == (1, 1)


def test_parse_rejects_text() -> None:
    with pytest.raises(MalformedBoard):
        Board.parse("1,2,three,0", size=2)


def test_queries() -> None:
    board = Board.from_flat([5, 1, 2, 3, 0, 6, 7, 4, 9, 10, 11, 8, 13, 14, 15, 12])
    assert board.get_tile(0, 0) == 5
    assert board.get_tile(1, 3) == 4
    assert board.is_tile_correct(1, 1)
    assert not board.is_tile_correct(0, 0)
    assert board.is_tile_correct(0, 0, goal=board)


def test_with_swap_returns_new_board() -> None:
    board = Board.solved()
    swapped = board.with_swap(13, 14)
    assert board.cells == SOLVED
    assert swapped.cells[13:15] == (15, 14)


def test_move_inverse() -> None:
    move = Move(tile=15, from_index=14, to_index=15, direction=Direction.RIGHT)
    back = move.inverse()
    assert back == Move(tile=15, from_index=15, to_index=14, direction=Direction.LEFT)
    assert back.inverse() == move
    assert str(move) == "15 right"


def test_direction_opposites() -> None:
    for d in Direction:
        assert d.opposite.opposite is d
        assert d.opposite is not d
