"""Orchestration of communication from the conversational front end to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    DeleteSessionRequest,
    GetSessionRequest,
    MoveResponse,
    OpponentMoveRequest,
    SessionResponse,
    StartSessionRequest,
    UtteranceRequest,
)
from src.chess.game import Game, PlayedMove
from src.chess.moves import Move
from src.core.exceptions import (
    AmbiguousMoveError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    RepositoryError,
    TranscriptNotUnderstoodError,
)
from src.core.models import SessionModel
from src.core.result import Found
from src.core.shared_types import SessionMode
from src.db.repository import SessionRepository
from src.transcripts.color_parser import parse_color_transcript
from src.transcripts.difficulty_parser import PhraseResolver, parse_difficulty_transcript
from src.transcripts.move_parser import parse_move_transcript

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a voice chess session."""

    def __init__(
        self, repository: SessionRepository, resolver: Optional[PhraseResolver] = None
    ) -> None:
        self.repo = repository
        self.resolver = resolver

    # -- Session setup ---
    def start_session(self, request: StartSessionRequest) -> SessionResponse:
        """New session. Next the user will be asked which color they want to play."""
        game = Game.new_game(starting_fen=request.starting_fen)
        stored, session_id = self.repo.create_session(game.to_model())
        logger.info("Started session %s", session_id)
        return self._create_session_response(session_id, stored)

    def choose_color(self, request: UtteranceRequest) -> SessionResponse:
        game = self._fetch_game(request.session_id)

        color = parse_color_transcript(request.transcript)
        if not isinstance(color, Found):
            raise TranscriptNotUnderstoodError(
                f"Could not hear a color in {request.transcript!r}. Say white or black."
            )

        game.choose_color(color.value)
        return self._store(request.session_id, game)

    async def choose_difficulty(self, request: UtteranceRequest) -> SessionResponse:
        game = self._fetch_game(request.session_id)

        difficulty = await parse_difficulty_transcript(request.transcript, self.resolver)
        if not isinstance(difficulty, Found):
            raise TranscriptNotUnderstoodError(
                f"Could not hear a difficulty in {request.transcript!r}. Say easy, medium or hard."
            )

        game.choose_difficulty(difficulty.value)
        return self._store(request.session_id, game)

    # -- Playing ---
    def make_move(self, request: UtteranceRequest) -> MoveResponse:
        """
        The user said a move
        ----
        1. parse "<piece> [to] <square>"
        2. find the user's pieces of that type that can legally go there
        3. exactly one? play it. None or several? Let the user try again.
        """
        game = self._fetch_game(request.session_id)
        if game.mode != SessionMode.USER_TURN:
            self._reject_out_of_turn(game)

        parsed = parse_move_transcript(request.transcript)
        if not isinstance(parsed, Found):
            raise TranscriptNotUnderstoodError(
                f"Could not hear a move in {request.transcript!r}. Say something like 'knight to f3'."
            )

        candidates = game.candidates_for(parsed.value)
        if not candidates:
            raise IllegalMoveError(
                f"No {parsed.value.piece_type} can move to {parsed.value.target}."
            )
        if len(candidates) > 1:
            sources = [move.from_square.to_algebraic() for move in candidates]
            raise AmbiguousMoveError(
                f"More than one {parsed.value.piece_type} can move to {parsed.value.target}: {', '.join(sources)}.",
                sources=sources,
            )

        assert game.user_color is not None
        played = game.play(candidates[0], game.user_color)
        logger.info("Session %s: user played %s", request.session_id, played.uci)
        return self._create_move_response(request.session_id, game, played)

    def apply_opponent_move(self, request: OpponentMoveRequest) -> MoveResponse:
        """The external move chooser (at the chosen difficulty) answered with a move."""
        game = self._fetch_game(request.session_id)
        if game.mode != SessionMode.AI_TURN:
            raise NotYourTurnError(f"Opponent cannot move now. mode: {game.mode}")

        played = game.play(Move.from_uci(request.move_uci), game.color_to_move)
        logger.info("Session %s: opponent played %s", request.session_id, played.uci)
        return self._create_move_response(request.session_id, game, played)

    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        model = self._fetch_model(request.session_id)
        return self._create_session_response(request.session_id, model)

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Handle a request to delete a session record."""
        self.repo.delete_session(request.session_id)

    # -- Internal helpers --
    def _reject_out_of_turn(self, game: Game) -> None:
        if game.mode == SessionMode.AI_TURN:
            raise NotYourTurnError("Waiting for the opponent to make a move first.")
        raise GameStateError(f"Cannot make a move now. mode: {game.mode}")

    def _store(self, session_id: UUID, game: Game) -> SessionResponse:
        model = game.to_model()
        if self.repo.update_session(session_id, model) is None:
            raise RepositoryError(f"Session with {session_id=} no longer exists.")
        return self._create_session_response(session_id, model, game)

    def _create_move_response(
        self, session_id: UUID, game: Game, played: PlayedMove
    ) -> MoveResponse:
        return MoveResponse(
            session=self._store(session_id, game),
            move_uci=played.uci,
            captured=played.captured,
            promoted=played.promoted,
        )

    def _create_session_response(
        self, session_id: UUID, model: SessionModel, game: Optional[Game] = None
    ) -> SessionResponse:
        """Convert info in SessionModel to a SessionResponse (for session with given ID.)"""
        game = game or Game.from_model(model)
        return SessionResponse(
            session_id=session_id,
            mode=model.mode,
            user_color=model.user_color,
            difficulty=model.difficulty,
            fen_state=model.current_fen,
            move_history=model.moves_uci,
            captured_by_white=model.captured_by_white,
            captured_by_black=model.captured_by_black,
            is_check=game.is_check,
            is_checkmate=game.is_checkmate,
            is_stalemate=game.is_stalemate,
        )

    def _fetch_model(self, session_id: UUID) -> SessionModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        model = self.repo.get_session(session_id)
        if model is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return model

    def _fetch_game(self, session_id: UUID) -> Game:
        return Game.from_model(self._fetch_model(session_id))
