"""
Legality on top of the candidate moves: a move is only legal if it does not put (or leave) your own king in check.

Also home to the end-of-game checks, as those are nothing more than "is there any legal move left?"
"""

from typing import Optional

from src.chess.board import Board
from src.chess.moves import (
    ATTACK_RULES,
    Move,
    candidate_moves_from,
    en_passant_moves,
    en_passant_victim,
    execute_move,
    find_possible_moves,
)
from src.chess.pieces import EMPTY, make_token, token_type
from src.chess.square import Square
from src.core.shared_types import Color, PieceType, opponent_of


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Could any piece of `by_color` take on the square?"""
    return any(
        is_attacked(square, by_color, board) for is_attacked in ATTACK_RULES.values()
    )


def is_in_check(board: Board, color: Color) -> bool:
    king_square = board.find_king(color)
    if king_square is None:
        # positions without a king (puzzles, tests) can never be in check
        return False
    return is_square_attacked(board, king_square, opponent_of(color))


def apply_candidate(board: Board, move: Move) -> Board:
    """Board after the move, including removal of the pawn taken en passant."""
    board = execute_move(board, move.from_square, move.to_square).board
    if move.is_en_passant:
        board = board.with_piece(en_passant_victim(move), EMPTY)
    return board


def leaves_king_safe(board: Board, move: Move, color: Color) -> bool:
    """
    plan:
    1. make the candidate move on a new board
    2. determine if own king is in check on the new board
    """
    return not is_in_check(apply_candidate(board, move), color)


def find_legal_moves(
    board: Board,
    color: Color,
    piece_token: str,
    target: Square,
    en_passant: Optional[Square] = None,
) -> list[Move]:
    """
    Same as `find_possible_moves`, but including en passant captures onto `target` and without moves that leave the king in check.
    """
    candidates = find_possible_moves(board, color, piece_token, target)
    if en_passant == target and token_type(piece_token) == PieceType.PAWN:
        candidates.extend(en_passant_moves(en_passant, color, board))
    return [move for move in candidates if leaves_king_safe(board, move, color)]


def all_legal_moves(
    board: Board, color: Color, en_passant: Optional[Square] = None
) -> list[Move]:
    """Every legal move of the player with the 'color' pieces, in board scan order of the moving piece."""
    candidates: list[Move] = []
    for square in board.locate_color(color):
        candidates.extend(candidate_moves_from(square, board))
    if en_passant is not None:
        candidates.extend(en_passant_moves(en_passant, color, board))
    return [move for move in candidates if leaves_king_safe(board, move, color)]


def has_legal_move(
    board: Board, color: Color, en_passant: Optional[Square] = None
) -> bool:
    return len(all_legal_moves(board, color, en_passant)) > 0


def is_checkmate(
    board: Board, color: Color, en_passant: Optional[Square] = None
) -> bool:
    return is_in_check(board, color) and not has_legal_move(board, color, en_passant)


def is_stalemate(
    board: Board, color: Color, en_passant: Optional[Square] = None
) -> bool:
    return not is_in_check(board, color) and not has_legal_move(
        board, color, en_passant
    )


def is_capture(board: Board, move: Move) -> bool:
    return move.is_en_passant or not board.is_empty(move.to_square)


def is_pawn_move(board: Board, move: Move) -> bool:
    return board.piece(move.from_square) in (
        make_token(PieceType.PAWN, Color.WHITE),
        make_token(PieceType.PAWN, Color.BLACK),
    )
