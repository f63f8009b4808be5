from backend.models.board import Board, Direction, Move
from backend.models.errors import MalformedBoard, PuzzleError, Unreachable

__all__ = ["Board", "Direction", "MalformedBoard", "Move", "PuzzleError", "Unreachable"]
