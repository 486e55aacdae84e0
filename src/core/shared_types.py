"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class Difficulty(StrEnum):
    """A label only. The external move chooser decides what it means for its play strength."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionMode(StrEnum):
    CHOOSING_COLOR = "choosing color"
    CHOOSING_DIFFICULTY = "choosing difficulty"
    USER_TURN = "user turn"
    AI_TURN = "ai turn"
    GAME_OVER = "game over"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


def opponent_of(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK
