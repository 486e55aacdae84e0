"""
Defines the types of chess pieces, and how they are written down on the board.

A piece token is a single character (same letters as in FEN):
upper case for White, lower case for Black, and a blank for an empty square.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import Color, PieceType

EMPTY = " "

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @property
    def points(self) -> int:
        # NOTE: The King's worth is undefined (does not count towards total points)
        return PIECE_POINTS.get(self.type, 0)

    @classmethod
    def from_token(cls, token: str) -> Optional[Self]:
        """None for an empty square"""
        if is_empty(token):
            return None
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if token.isupper() else Color.BLACK
        return cls(FEN_TO_PIECE[token.lower()], color)

    def to_token(self) -> str:
        return make_token(self.type, self.color)


def make_token(piece_type: PieceType, color: Color) -> str:
    character = PIECE_TO_FEN[piece_type]
    return character.upper() if color == Color.WHITE else character


def is_empty(token: str) -> bool:
    return token == EMPTY


def token_color(token: str) -> Optional[Color]:
    if is_empty(token):
        return None
    return Color.WHITE if token.isupper() else Color.BLACK


def token_type(token: str) -> Optional[PieceType]:
    if is_empty(token):
        return None
    return FEN_TO_PIECE[token.lower()]
