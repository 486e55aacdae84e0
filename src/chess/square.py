"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Squares are stored as (row, col) grid indices: row 0 is the 8th rank (Black's back rank), col 0 is the a-file.
So 'a8' is (0, 0), 'h1' is (7, 7) and 'e4' is (4, 4).
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from src.core.exceptions import InvalidSquareError
from src.core.result import NOT_FOUND, Found, Lookup

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[1]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[0] + 1))


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Strict version of `algebraic_to_square`, for squares we know are fine (constants, validated input)."""
        match algebraic_to_square(sq):
            case Found(square):
                return square
            case _:
                raise InvalidSquareError(f"Not a square in algebraic notation: {sq!r}")

    def to_algebraic(self) -> str:
        return square_to_algebraic(self)

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square shifted by a vector. May fall off the board, check with `is_within_bounds()`"""
        return Square(self.row + d_row, self.col + d_col)


def algebraic_to_square(sq: str) -> Lookup[Square]:
    """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7). Anything else is NOT_FOUND."""
    if not isinstance(sq, str) or len(sq) != 2:
        return NOT_FOUND

    file_char, rank_char = sq[0], sq[1]
    if file_char not in FILE_NAMES or rank_char not in RANK_NAMES:
        return NOT_FOUND

    row = BOARD_DIMENSIONS[0] - int(rank_char)
    col = FILE_NAMES.index(file_char)
    return Found(Square(row, col))


def square_to_algebraic(square: Square) -> str:
    """Inverse of `algebraic_to_square`. Caller makes sure the square is on the board."""
    return f"{FILE_NAMES[square.col]}{BOARD_DIMENSIONS[0] - square.row}"
