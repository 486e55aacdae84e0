"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of a voice chess session -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.castling import CASTLING_ROOK_HOME, castling_directions, revoke_castling_rights
from src.chess.fen import PositionState
from src.chess.moves import Move, en_passant_victim, pawn_direction, promotion_row
from src.chess.pieces import make_token, token_type
from src.chess.rules import (
    all_legal_moves,
    apply_candidate,
    find_legal_moves,
    is_capture,
    is_checkmate,
    is_in_check,
    is_pawn_move,
    is_stalemate,
)
from src.chess.square import Square, algebraic_to_square
from src.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from src.core.models import SessionModel
from src.core.result import Found
from src.core.shared_types import Color, Difficulty, PieceType, SessionMode, opponent_of
from src.transcripts.move_parser import ParsedMove

PLAYING_MODES = (SessionMode.USER_TURN, SessionMode.AI_TURN)


@dataclass(frozen=True)
class PlayedMove:
    """Snapshot of what happened on the board, for the conversational layer to talk about."""

    uci: str
    piece: str
    captured: Optional[str]
    promoted: bool
    gives_check: bool


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    state: PositionState
    mode: SessionMode
    user_color: Optional[Color] = None
    difficulty: Optional[Difficulty] = None
    moves: list[str] = field(default_factory=list)  # UCI notation
    history: list[str] = field(default_factory=list)  # list of FEN strings, before every move
    captured_by_white: list[str] = field(default_factory=list)
    captured_by_black: list[str] = field(default_factory=list)

    @classmethod
    def new_game(cls, starting_fen: Optional[str] = None) -> Self:
        """A fresh session: the first thing to ask the user is which color they want to play."""
        state = (
            PositionState.from_fen(starting_fen)
            if starting_fen
            else PositionState.starting_position()
        )
        return cls(state=state, mode=SessionMode.CHOOSING_COLOR)

    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.mode not in SessionMode.__members__.values():
            raise GameStateError(
                f"Invalid session mode: {model.mode!r}. \nPick one from {', '.join(SessionMode)}"
            )

        return cls(
            state=PositionState.from_fen(model.current_fen),
            mode=SessionMode(model.mode),
            user_color=Color(model.user_color) if model.user_color else None,
            difficulty=Difficulty(model.difficulty) if model.difficulty else None,
            moves=list(model.moves_uci),
            history=list(model.history_fen),
            captured_by_white=list(model.captured_by_white),
            captured_by_black=list(model.captured_by_black),
        )

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""
        return SessionModel(
            current_fen=self.state.to_fen(),
            mode=self.mode.value,
            user_color=self.user_color.value if self.user_color else None,
            difficulty=self.difficulty.value if self.difficulty else None,
            history_fen=list(self.history),
            moves_uci=list(self.moves),
            captured_by_white=list(self.captured_by_white),
            captured_by_black=list(self.captured_by_black),
        )

    # --- SESSION SETUP ---
    def choose_color(self, color: Color) -> None:
        self._assert_mode(SessionMode.CHOOSING_COLOR)
        self.user_color = color
        self.mode = SessionMode.CHOOSING_DIFFICULTY

    def choose_difficulty(self, difficulty: Difficulty) -> None:
        self._assert_mode(SessionMode.CHOOSING_DIFFICULTY)
        self.difficulty = difficulty
        self._update_mode()

    # --- STATUS ---
    @property
    def color_to_move(self) -> Color:
        return self.state.color_to_move

    @property
    def is_check(self) -> bool:
        return is_in_check(self.state.board, self.color_to_move)

    @property
    def is_checkmate(self) -> bool:
        return is_checkmate(self.state.board, self.color_to_move, self._en_passant_square())

    @property
    def is_stalemate(self) -> bool:
        return is_stalemate(self.state.board, self.color_to_move, self._en_passant_square())

    @property
    def winner(self) -> Optional[Color]:
        """Given we know it is checkmate, the player to move just got mated and the opponent must be the winner"""
        if not self.is_checkmate:
            return None
        return opponent_of(self.color_to_move)

    # --- MOVES ---
    def candidates_for(self, parsed: ParsedMove) -> list[Move]:
        """
        Legal moves of the side to move matching a parsed utterance.
        ----
        More than one result means the utterance was ambiguous ("knight f3" with knights on g1 and e1).
        """
        target = algebraic_to_square(parsed.target)
        if not isinstance(target, Found):
            return []
        piece_token = make_token(parsed.piece_type, self.color_to_move)
        return find_legal_moves(
            self.state.board,
            self.color_to_move,
            piece_token,
            target.value,
            self._en_passant_square(),
        )

    def legal_moves(self) -> list[Move]:
        return all_legal_moves(self.state.board, self.color_to_move, self._en_passant_square())

    def play(self, move: Move, color: Color) -> PlayedMove:
        """
        Attempt to make a move
        -----

        1. make sure the game is in progress and it is your turn
        2. make sure the move is legal
        3. update the board, captures, FEN state, history and session mode
        """
        if self.mode not in PLAYING_MODES:
            raise GameStateError(f"Game is not in progress. mode: {self.mode}")

        if color != self.color_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.color_to_move} to make a move first."
            )

        legal_move = self._match_legal_move(move)
        if legal_move is None:
            raise IllegalMoveError(f"Move not allowed: {move.to_uci()}")

        board = self.state.board
        piece = board.piece(legal_move.from_square)
        captured = self._captured_token(legal_move)
        promoted = token_type(piece) == PieceType.PAWN and (
            legal_move.to_square.row == promotion_row(color)
        )

        # update the FEN history (with the FEN before the move)
        self.history.append(self.state.to_fen())

        self.state = self.state.evolve(
            board=apply_candidate(board, legal_move),
            color_to_move=opponent_of(color),
            castling_rights=self._castling_after(legal_move, captured),
            en_passant_target=self._en_passant_after(legal_move),
            halfmove_clock=(
                0
                if is_pawn_move(board, legal_move) or is_capture(board, legal_move)
                else self.state.halfmove_clock + 1
            ),
            fullmove_number=self.state.fullmove_number + (1 if color == Color.BLACK else 0),
        )

        uci = legal_move.to_uci() + ("q" if promoted else "")
        self.moves.append(uci)
        if captured is not None:
            captures = self.captured_by_white if color == Color.WHITE else self.captured_by_black
            captures.append(captured)

        self._update_mode()
        return PlayedMove(
            uci=uci,
            piece=piece,
            captured=captured,
            promoted=promoted,
            gives_check=self.is_check,
        )

    # -- PRIVATE HELPERS ---
    def _assert_mode(self, expected: SessionMode) -> None:
        if self.mode != expected:
            raise GameStateError(f"Expected session mode {expected!r}, but it is {self.mode!r}")

    def _update_mode(self) -> None:
        """Game over, or whose turn it is (the user's or the external opponent's)"""
        if self.is_checkmate or self.is_stalemate:
            self.mode = SessionMode.GAME_OVER
        elif self.color_to_move == self.user_color:
            self.mode = SessionMode.USER_TURN
        else:
            self.mode = SessionMode.AI_TURN

    def _en_passant_square(self) -> Optional[Square]:
        target = algebraic_to_square(self.state.en_passant_target)
        return target.value if isinstance(target, Found) else None

    def _match_legal_move(self, move: Move) -> Optional[Move]:
        """Incoming moves (UCI) do not know if they are en passant. Take the flags from the legal move instead."""
        return next(
            (
                legal
                for legal in self.legal_moves()
                if (legal.from_square, legal.to_square) == (move.from_square, move.to_square)
            ),
            None,
        )

    def _captured_token(self, move: Move) -> Optional[str]:
        board = self.state.board
        square = en_passant_victim(move) if move.is_en_passant else move.to_square
        return None if board.is_empty(square) else board.piece(square)

    def _castling_after(self, move: Move, captured: Optional[str]) -> str:
        """
        Checks which rights should get revoked
        ----

        1. If you are moving your king --> revoke both
        2. If you are moving your rook from its starting square --> revoke the right in that direction
        3. If you are taking your opponent's rook on its starting square --> revoke your opponent's right in that direction
        """
        rights = self.state.castling_rights
        if rights == "-":
            return rights

        color = self.color_to_move
        moving_type = self.state.board.piece_type_on(move.from_square)

        if moving_type == PieceType.KING:
            rights = revoke_castling_rights(rights, *castling_directions(color))

        if moving_type == PieceType.ROOK:
            for direction in castling_directions(color):
                if move.from_square == CASTLING_ROOK_HOME[direction]:
                    rights = revoke_castling_rights(rights, direction)

        opponent_rook = make_token(PieceType.ROOK, opponent_of(color))
        if captured == opponent_rook:
            for direction in castling_directions(opponent_of(color)):
                if move.to_square == CASTLING_ROOK_HOME[direction]:
                    rights = revoke_castling_rights(rights, direction)

        return rights

    def _en_passant_after(self, move: Move) -> str:
        """The possible en passant square for the next turn: the square a pawn skipped with its double step."""
        board = self.state.board
        rows_moved = abs(move.from_square.row - move.to_square.row)
        if not (is_pawn_move(board, move) and rows_moved == 2):
            return "-"
        skipped = move.from_square.offset(pawn_direction(self.color_to_move), 0)
        return skipped.to_algebraic()
