"""
Helpers for keeping track of castling rights. Need to be imported by multiple sources.

Castling itself is not offered as a move (there is no spoken phrase for it), but the rights still
get revoked during the game so the FEN record stays accurate.
"""

from enum import Enum

from src.chess.square import Square
from src.core.shared_types import Color


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)

# Where the rook has to stand (unmoved) for the right to stay available
CASTLING_ROOK_HOME: dict[CastlingDirection, Square] = {
    CastlingDirection.WHITE_KING_SIDE: Square.from_algebraic("h1"),
    CastlingDirection.WHITE_QUEEN_SIDE: Square.from_algebraic("a1"),
    CastlingDirection.BLACK_KING_SIDE: Square.from_algebraic("h8"),
    CastlingDirection.BLACK_QUEEN_SIDE: Square.from_algebraic("a8"),
}


def castling_directions(color: Color) -> tuple[CastlingDirection, CastlingDirection]:
    if color == Color.WHITE:
        return CastlingDirection.WHITE_KING_SIDE, CastlingDirection.WHITE_QUEEN_SIDE
    return CastlingDirection.BLACK_KING_SIDE, CastlingDirection.BLACK_QUEEN_SIDE


def castling_from_fen(castle_fen: str) -> dict[CastlingDirection, bool]:
    """parse the part of the FEN string that encodes castling rights"""
    return {
        direction: (direction.value in castle_fen) for direction in CastlingDirection
    }


def castling_to_fen(castling_rights: dict[CastlingDirection, bool]) -> str:
    """create the part of the FEN string that encodes castling rights"""
    castling_chars = "".join(
        [direction.value for direction in CASTLING_ORDER if castling_rights[direction]]
    )
    return castling_chars or "-"


def revoke_castling_rights(castle_fen: str, *directions: CastlingDirection) -> str:
    """FEN castling field with the given rights removed (stays in canonical KQkq order)"""
    rights = castling_from_fen(castle_fen)
    for direction in directions:
        rights[direction] = False
    return castling_to_fen(rights)
