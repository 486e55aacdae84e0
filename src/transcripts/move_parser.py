"""
Spoken/typed move phrases -> (piece, target square).

    "rook to d4"  -> (r, d4)
    "Knight F3"   -> (k, f3)
    "king e2"     -> (K, e2)

NOTE: MoveToken is the parser's own alphabet, not the board's. Knight is a lowercase 'k' and King an uppercase 'K'
(both start with a k when spoken), and the case says nothing about the color of the piece.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

from src.core.result import NOT_FOUND, Found, Lookup
from src.core.shared_types import PieceType


class MoveToken(StrEnum):
    PAWN = "p"
    ROOK = "r"
    KNIGHT = "k"
    BISHOP = "b"
    QUEEN = "q"
    KING = "K"


SPOKEN_PIECE_NAMES: dict[str, MoveToken] = {
    "pawn": MoveToken.PAWN,
    "rook": MoveToken.ROOK,
    "knight": MoveToken.KNIGHT,
    "bishop": MoveToken.BISHOP,
    "queen": MoveToken.QUEEN,
    "king": MoveToken.KING,
}

MOVE_TOKEN_TO_PIECE: dict[MoveToken, PieceType] = {
    MoveToken.PAWN: PieceType.PAWN,
    MoveToken.ROOK: PieceType.ROOK,
    MoveToken.KNIGHT: PieceType.KNIGHT,
    MoveToken.BISHOP: PieceType.BISHOP,
    MoveToken.QUEEN: PieceType.QUEEN,
    MoveToken.KING: PieceType.KING,
}

# <piece name> [to] <square>, piece names as whole words so "kingside" or "knights" do not count
MOVE_PATTERN = re.compile(
    r"\b(?P<piece>" + "|".join(SPOKEN_PIECE_NAMES) + r")\s+(?:to\s+)?(?P<target>[a-h][1-8])\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedMove:
    piece: MoveToken
    target: str

    @property
    def piece_type(self) -> PieceType:
        return MOVE_TOKEN_TO_PIECE[self.piece]


def parse_move_transcript(text: str) -> Lookup[ParsedMove]:
    """Find '<piece> [to] <square>' anywhere in the utterance. NOT_FOUND if there is no such phrase."""
    if not text:
        return NOT_FOUND

    match = MOVE_PATTERN.search(text)
    if match is None:
        return NOT_FOUND

    piece = SPOKEN_PIECE_NAMES[match.group("piece").lower()]
    return Found(ParsedMove(piece=piece, target=match.group("target").lower()))
