"""Elementary moves and multi-tile slides.

The elementary move (one tile into the adjacent blank) is the only edge of
the search graph.  Sliding a run of tiles at once, as the interactive board
allows, is expressed here as a sequence of elementary moves in the same
direction, so play and solver output share one definition of a move.
"""

from __future__ import annotations

from backend.models.board import Board, Direction, Move

# The offset points from the blank to the tile that slides into it, in
# (row, col) units.
# UP    → tile at (br+1, bc) moves up
# DOWN  → tile at (br-1, bc) moves down
# LEFT  → tile at (br, bc+1) moves left
# RIGHT → tile at (br, bc-1) moves right
OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


def move_for_direction(board: Board, direction: Direction) -> Move | None:
    """Return the move sliding a tile in *direction*, or ``None`` at an edge."""
    n = board.size
    br, bc = board.blank_pos
    dr, dc = OFFSETS[direction]
    tr, tc = br + dr, bc + dc
    if not (0 <= tr < n and 0 <= tc < n):
        return None
    ti = tr * n + tc
    return Move(
        tile=board.cells[ti],
        from_index=ti,
        to_index=board.blank_index,
        direction=direction,
    )


def legal_moves(board: Board) -> list[Move]:
    """All elementary moves available: 2 in a corner, 3 on an edge, 4 inside."""
    moves: list[Move] = []
    for direction in Direction:
        move = move_for_direction(board, direction)
        if move is not None:
            moves.append(move)
    return moves


def apply_move(board: Board, move: Move) -> Board:
    """Return a new board with *move* applied.  *board* is left untouched."""
    if move.to_index != board.blank_index or board.cells[move.from_index] != move.tile:
        raise ValueError(f"Move {move} does not apply to board {board.serialize()}")
    fr, fc = divmod(move.from_index, board.size)
    tr, tc = divmod(move.to_index, board.size)
    if abs(fr - tr) + abs(fc - tc) != 1:
        raise ValueError(f"Move {move} is not between adjacent cells")
    return board.with_swap(move.from_index, move.to_index)


def apply_moves(board: Board, moves: list[Move] | tuple[Move, ...]) -> list[Board]:
    """Replay *moves* from *board*, returning every board including the first."""
    boards = [board]
    for move in moves:
        board = apply_move(board, move)
        boards.append(board)
    return boards


def movable_run(board: Board, clicked_index: int) -> list[Move]:
    """Elementary moves that slide every tile between *clicked_index* and the blank.

    The tile next to the blank moves first and the clicked tile last.  A
    click on the blank, or on a tile outside the blank's row and column,
    yields no moves.
    """
    n = board.size
    if not 0 <= clicked_index < n * n or clicked_index == board.blank_index:
        return []

    br, bc = board.blank_pos
    cr, cc = divmod(clicked_index, n)
    if cr == br:
        direction = Direction.LEFT if cc > bc else Direction.RIGHT
        count = abs(cc - bc)
    elif cc == bc:
        direction = Direction.UP if cr > br else Direction.DOWN
        count = abs(cr - br)
    else:
        return []

    moves: list[Move] = []
    for _ in range(count):
        move = move_for_direction(board, direction)
        if move is None:
            break
        moves.append(move)
        board = apply_move(board, move)
    return moves


def slide(board: Board, clicked_index: int) -> Board:
    """Apply the multi-tile slide triggered by clicking *clicked_index*."""
    for move in movable_run(board, clicked_index):
        board = apply_move(board, move)
    return board
