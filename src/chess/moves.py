"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define candidate move sets for each piece type.

Candidates only follow the movement rules of the pieces. Whether a move leaves your own king in check is
decided one level up, in rules.py.
"""

from dataclasses import dataclass
from typing import Callable, Self

from src.chess.board import Board
from src.chess.pieces import EMPTY, is_empty, make_token, token_color, token_type
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.shared_types import Color, PieceType, opponent_of

Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    is_en_passant: bool = False

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q). Pawns always promote to a queen here,
          so the suffix is accepted but carries no extra information.

        NOTE: En passant will be set later by the Game class
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


@dataclass(frozen=True)
class MoveResult:
    """What `execute_move` hands back: the new board, and the token that stood on the target square (blank if none)."""

    board: Board
    captured: str


# Directions in (d_row, d_col). Row 0 is the 8th rank, so White moves UP the board by DEcreasing the row.
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def pawn_direction(color: Color) -> int:
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return BOARD_DIMENSIONS[0] - 2 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The opponent's back rank"""
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. The occupied square itself is only included if it holds an opponent's piece.
    """
    player_color = board.color_on(square)

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_within_bounds():
                break

            if not board.is_empty(target_square):
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if board.color_on(target_square) != player_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = board.color_on(square)
    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        if board.color_on(target_square) != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally

    NOTE: En passant will be taken care of in rules.py / the Game class
    """
    player_color = board.color_on(square)
    assert player_color is not None
    forward = pawn_direction(player_color)

    moves: list[Move] = []
    one_step = square.offset(forward, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(2 * forward, 0)
        if square.row == pawn_start_row(player_color) and board.is_empty(two_steps):
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    opponent_color = opponent_of(player_color)
    for d_col in (-1, 1):
        target_square = square.offset(forward, d_col)
        if not target_square.is_within_bounds():
            continue
        if board.color_on(target_square) == opponent_color:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_bishop_moves(square, board) + candidate_rook_moves(square, board)


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """The king can move by a single square at the time."""
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves_from(square: Square, board: Board) -> list[Move]:
    """Candidate moves of whatever piece stands on the square (none for an empty square)"""
    piece_type = board.piece_type_on(square)
    if piece_type is None:
        return []
    return MOVEMENT_RULES[piece_type](square, board)


def find_possible_moves(
    board: Board, color: Color, piece_token: str, target: Square
) -> list[Move]:
    """
    Which pieces of the given color and type could move to the target square?
    ----

    The type is read from `piece_token` (its case does not matter: the color comes from `color`).
    Sources are scanned in board order (row 0 to 7, col 0 to 7), so the result is ordered the same way.

    NOTE: This is a candidate generator. It does NOT check whether the move leaves your own king in check,
    use `rules.find_legal_moves` for that.
    """
    piece_type = token_type(piece_token)
    if piece_type is None:
        return []

    return [
        move
        for source in board.locate(color, piece_type)
        for move in MOVEMENT_RULES[piece_type](source, board)
        if move.to_square == target
    ]


def execute_move(board: Board, source: Square, target: Square) -> MoveResult:
    """
    Move whatever stands on `source` to `target`. Legality is the caller's business.
    ----

    * The source square is cleared.
    * Whatever stood on the target is reported back as captured (blank if the square was empty).
    * A pawn reaching the opponent's back rank is replaced by a queen of the same color.

    The board passed in is left untouched: a new Board is returned.
    """
    moving = board.piece(source)
    captured = board.piece(target)

    color = token_color(moving)
    if (
        color is not None
        and token_type(moving) == PieceType.PAWN
        and target.row == promotion_row(color)
    ):
        moving = make_token(PieceType.QUEEN, color)

    updated = board.with_piece(source, EMPTY).with_piece(target, moving)
    return MoveResult(board=updated, captured=captured)


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color and type,
    that is allowed to move along the given directions?"_
    """
    attacker = make_token(by_piece_type, by_color)
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_within_bounds():
                break

            token = board.piece(target_square)
            if not is_empty(token):
                # only the first occupied square found can be an attacker: everything behind it is blocked.
                if token == attacker:
                    return True
                break
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """Equivalent of raycasting for pawns, kings, and knights: they can only attack a single step along a direction."""
    attacker = make_token(by_piece_type, by_color)
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if target_square.is_within_bounds() and board.piece(target_square) == attacker:
            return True
    return False


def is_attacked_by_pawn(square: Square, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a white pawn could take on your square -->
    Must look one rank DOWN the board (one row higher). The vectors are exactly opposite to the ones
    used in `candidate_pawn_moves()`
    """
    backwards = -pawn_direction(by_color)
    return single_step_attack(
        square, by_color, PieceType.PAWN, board, [(backwards, -1), (backwards, 1)]
    )


def is_attacked_by_knight(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_bishop(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.BISHOP, board, DIAGONALS)


def is_attacked_by_rook(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.ROOK, board, STRAIGHTS)


def is_attacked_by_queen(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.QUEEN, board, KING_DELTAS)


def is_attacked_by_king(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KING, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: dict[PieceType, IsAttackedFn] = {
    PieceType.PAWN: is_attacked_by_pawn,
    PieceType.KNIGHT: is_attacked_by_knight,
    PieceType.BISHOP: is_attacked_by_bishop,
    PieceType.ROOK: is_attacked_by_rook,
    PieceType.QUEEN: is_attacked_by_queen,
    PieceType.KING: is_attacked_by_king,
}


# -- EN PASSANT MOVES ---
def en_passant_moves(
    en_passant_square: Square, color: Color, board: Board
) -> list[Move]:
    """Given a target en passant square, check the adjacent files (one rank behind the en passant square) for pawns of the correct color."""

    # NOTE: the capturing pawn stands one step behind the en passant square, seen from its own direction of travel
    behind = -pawn_direction(color)
    own_pawn = make_token(PieceType.PAWN, color)

    moves: list[Move] = []
    for d_col in (-1, 1):
        maybe_pawn_square = en_passant_square.offset(behind, d_col)
        if not maybe_pawn_square.is_within_bounds():
            continue
        if board.piece(maybe_pawn_square) == own_pawn:
            moves.append(
                Move(
                    from_square=maybe_pawn_square,
                    to_square=en_passant_square,
                    is_en_passant=True,
                )
            )
    return moves


def en_passant_victim(move: Move) -> Square:
    """The pawn taken en passant stands next to the capturing pawn: same file as the target, same rank as the start."""
    return Square(move.from_square.row, move.to_square.col)
