"""
Representation of a single position. The part that can be encoded in a FEN string.
"""

from dataclasses import dataclass, replace
from typing import Self

from src.chess.board import STARTING_POSITION, Board
from src.chess.castling import CASTLING_ORDER
from src.chess.pieces import FEN_TO_PIECE
from src.chess.square import BOARD_DIMENSIONS, algebraic_to_square
from src.core.exceptions import InvalidFENError
from src.core.result import NOT_FOUND, Found, Lookup
from src.core.shared_types import Color

STARTING_FEN = f"{STARTING_POSITION} w KQkq - 0 1"
DIGITS = "0123456789"

# the square a pawn skipped over is on the 6th rank when White is to move, the 3rd when Black is
EN_PASSANT_RANK = {"w": "6", "b": "3"}


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """

    # there should be 6 parts to the string
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_move_counter, full_move_counter = parts
    return (
        is_valid_position(position)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant, color)
        and is_valid_move_counter(half_move_counter)
        and is_valid_move_counter(full_move_counter)
        and int(full_move_counter) >= 1
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_ranks, num_files = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character in DIGITS:
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """A valid castling encoding has either KQkq, KQk, etc. (in that order) or a '-' if all rights have been revoked."""
    if castling == "-":
        return True
    canonical = "".join(
        direction.value for direction in CASTLING_ORDER if direction.value in castling
    )
    return castling != "" and castling == canonical


def is_valid_en_passant(en_passant: str, color: str) -> bool:
    """Either a '-' or the square behind a pawn that just made a double step, as seen by the side to move"""
    if en_passant == "-":
        return True
    square = algebraic_to_square(en_passant)
    return isinstance(square, Found) and en_passant[1] == EN_PASSANT_RANK.get(color)


def is_valid_move_counter(counter: str) -> bool:
    return counter != "" and all(character in DIGITS for character in counter)


@dataclass(frozen=True)
class PositionState:
    """
    Data that can be encoded in a FEN string.
    ----

    FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
    The purpose of FEN is to provide all the necessary information to restart a game from a particular position.

    <board position string><active color><castling rights><en passant square><# half move clock><number turns played>

    * The string to describe the board position is described in the Board class
    * The active color is either "w" or "b"
    * Castling rights are denoted as "k" for king-side or "q" for queen-side. Capital letters for the white pieces, small letters for the black pieces.
        In the starting position: KQkq (all rights available), and when all rights are revoked a "-" is used.
    * The en passant square indicates the square a pawn can take on. If not available a "-" is used.
    * The half move clock counts the number of moves made since the last pawn move or capture.
    * The number of turns starts at 1 and increments after every move black makes.

    ex) The standard starting position has a FEN
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1
    """

    board: Board
    color_to_move: Color = Color.WHITE
    castling_rights: str = "KQkq"
    en_passant_target: str = "-"
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the FEN into data. Raises InvalidFENError."""
        if not is_valid_fen(fen):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen}")

        # extract the different components. FEN is space separated
        (
            position,
            active_color,
            castling_str,
            en_passant,
            half_move_clock,
            num_turns,
        ) = fen.split(" ")

        return cls(
            board=Board.from_fen(position),
            color_to_move=Color.WHITE if active_color == "w" else Color.BLACK,
            castling_rights=castling_str,
            en_passant_target=en_passant,
            halfmove_clock=int(half_move_clock),
            fullmove_number=int(num_turns),
        )

    def to_fen(self) -> str:
        return board_to_fen(self)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN)

    def evolve(self, **changes) -> Self:
        """A copy with some of the fields changed"""
        return replace(self, **changes)


def board_to_fen(state: PositionState) -> str:
    """write a FEN from the given position data"""
    active_color = "w" if state.color_to_move == Color.WHITE else "b"
    castling_str = state.castling_rights or "-"
    en_passant = state.en_passant_target or "-"
    return f"{state.board.to_fen()} {active_color} {castling_str} {en_passant} {state.halfmove_clock} {state.fullmove_number}"


def parse_fen(fen: str) -> Lookup[PositionState]:
    """Soft version of `PositionState.from_fen`: NOT_FOUND instead of an exception."""
    if not isinstance(fen, str) or not is_valid_fen(fen):
        return NOT_FOUND
    return Found(PositionState.from_fen(fen))
