"""The Game board: an immutable 8x8 grid of piece tokens. Every change produces a new Board."""

from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.chess.pieces import EMPTY, Piece, is_empty, make_token, token_color, token_type
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.shared_types import Color, PieceType

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass(frozen=True)
class Board:
    """
    rows[0] is Black's back rank (the 8th rank), rows[7] is White's back rank (the 1st rank).
    Each row is a string of 8 tokens, read from the a-file to the h-file.
    """

    rows: tuple[str, ...]

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first part of the FEN string that denotes the board position.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        rows: list[str] = []
        for fen_one_rank in fen_str.split("/"):
            row: list[str] = []
            for character in fen_one_rank:
                if character in "0123456789":
                    # A number denotes the amount of empty squares after each other
                    row.extend(EMPTY * int(character))
                else:
                    row.append(character)
            rows.append("".join(row))
        return cls(tuple(rows))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in self.rows)

    def _rank_to_fen(self, row: str) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for token in row:
            if not is_empty(token):
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(token)
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> str:
        return self.rows[square.row][square.col]

    def with_piece(self, square: Square, token: str) -> Self:
        """A copy of the board with `token` placed on `square`"""
        row = self.rows[square.row]
        new_row = row[: square.col] + token + row[square.col + 1 :]
        rows = self.rows[: square.row] + (new_row,) + self.rows[square.row + 1 :]
        return type(self)(rows)

    def squares(self) -> Iterator[Square]:
        """All squares in board scan order: row 0 to 7, and within a row col 0 to 7"""
        for row in range(BOARD_DIMENSIONS[0]):
            for col in range(BOARD_DIMENSIONS[1]):
                yield Square(row, col)

    def is_empty(self, square: Square) -> bool:
        return is_empty(self.piece(square))

    def color_on(self, square: Square) -> Optional[Color]:
        return token_color(self.piece(square))

    def locate(self, color: Color, piece_type: PieceType) -> list[Square]:
        token = make_token(piece_type, color)
        return [square for square in self.squares() if self.piece(square) == token]

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square in self.squares() if self.color_on(square) == color]

    def find_king(self, color: Color) -> Optional[Square]:
        kings = self.locate(color, PieceType.KING)
        return kings[0] if kings else None

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        totals = {color: 0 for color in Color}
        for square in self.squares():
            piece = Piece.from_token(self.piece(square))
            if piece is not None:
                totals[piece.color] += piece.points
        return totals

    def piece_type_on(self, square: Square) -> Optional[PieceType]:
        return token_type(self.piece(square))


def initialize_board() -> Board:
    """A fresh board in the standard starting position."""
    return Board.from_fen(STARTING_POSITION)
