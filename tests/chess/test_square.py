"""Unit tests for src/chess/square.py"""

from itertools import product

import pytest

from src.chess.square import (
    BOARD_DIMENSIONS,
    Square,
    algebraic_to_square,
    square_to_algebraic,
)
from src.core.exceptions import InvalidSquareError
from src.core.result import NOT_FOUND, Found

ALL_ALGEBRAIC = [f"{file}{rank}" for file, rank in product("abcdefgh", "12345678")]


@pytest.mark.parametrize(
    "algebraic, expected",
    [
        ("a1", Square(7, 0)),
        ("h8", Square(0, 7)),
        ("e4", Square(4, 4)),
        ("d5", Square(3, 3)),
        ("e2", Square(6, 4)),
    ],
)
def test_algebraic_to_square(algebraic: str, expected: Square) -> None:
    """rank 8 is row 0, file a is col 0"""
    assert algebraic_to_square(algebraic) == Found(expected)


@pytest.mark.parametrize(
    "square, expected",
    [
        (Square(7, 0), "a1"),
        (Square(0, 7), "h8"),
        (Square(4, 4), "e4"),
        (Square(3, 3), "d5"),
    ],
)
def test_square_to_algebraic(square: Square, expected: str) -> None:
    assert square_to_algebraic(square) == expected
    assert square.to_algebraic() == expected


@pytest.mark.parametrize("invalid", ["", "a", "a9", "i1", "a0", "e44", "E4", "4e"])
def test_invalid_algebraic_is_not_found(invalid: str) -> None:
    """Never raises: bad input just is not a square"""
    assert algebraic_to_square(invalid) == NOT_FOUND


def test_round_trip_every_square() -> None:
    """Every one of the 64 names survives the round trip, and so does every coordinate."""
    for name in ALL_ALGEBRAIC:
        result = algebraic_to_square(name)
        assert isinstance(result, Found)
        assert square_to_algebraic(result.value) == name

    num_rows, num_cols = BOARD_DIMENSIONS
    for row, col in product(range(num_rows), range(num_cols)):
        square = Square(row, col)
        assert algebraic_to_square(square_to_algebraic(square)) == Found(square)


def test_strict_constructor_raises() -> None:
    assert Square.from_algebraic("c7") == Square(1, 2)
    with pytest.raises(InvalidSquareError):
        Square.from_algebraic("z9")


@pytest.mark.parametrize(
    "square, in_bounds",
    [
        (Square(0, 0), True),
        (Square(7, 7), True),
        (Square(-1, 3), False),
        (Square(3, 8), False),
        (Square(8, 0), False),
    ],
)
def test_within_bounds(square: Square, in_bounds: bool) -> None:
    assert square.is_within_bounds() == in_bounds


def test_offset() -> None:
    assert Square(4, 4).offset(-2, 1) == Square(2, 5)
