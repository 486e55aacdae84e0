"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.fen import is_valid_fen
from src.chess.square import algebraic_to_square
from src.core.exceptions import InvalidRequestError
from src.core.result import NotFound
from src.core.shared_types import Color, Difficulty, SessionMode


# --- REQUEST MODELS ---
class StartSessionRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        if not is_valid_fen(value.strip()):
            raise InvalidRequestError(f"Cannot interpret starting_fen: {value!r} as FEN.")
        return value.strip()


class UtteranceRequest(BaseModel):
    """Whatever the user said (or typed), as handed over by the conversational front end."""

    session_id: UUID
    transcript: str


class OpponentMoveRequest(BaseModel):
    """The external move chooser's answer, in UCI notation (e.g. 'g8f6', 'e2e1q')."""

    session_id: UUID
    move_uci: str

    @field_validator("move_uci")
    @classmethod
    def validate_uci(cls, value: str) -> str:
        value = value.strip().lower()
        squares_ok = len(value) in (4, 5) and not any(
            isinstance(algebraic_to_square(part), NotFound)
            for part in (value[:2], value[2:4])
        )
        promotion_ok = len(value) == 4 or (len(value) == 5 and value[4] == "q")
        if not (squares_ok and promotion_ok):
            raise InvalidRequestError(
                f"Cannot interpret move_uci: {value!r} as a move in UCI notation."
            )
        return value


class GetSessionRequest(BaseModel):
    session_id: UUID


class DeleteSessionRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: UUID
    mode: SessionMode
    user_color: Optional[Color]
    difficulty: Optional[Difficulty]
    fen_state: str
    move_history: list[str]
    captured_by_white: list[str]
    captured_by_black: list[str]
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool


class MoveResponse(BaseModel):
    session: SessionResponse
    move_uci: str
    captured: Optional[str]
    promoted: bool
