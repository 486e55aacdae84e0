"""
Exceptions shared by all layers.

None of these are fatal: every one of them is a "try again with different input" signal for the conversational layer.
"""


class VoiceChessError(Exception):
    """Base class of all application errors."""


# --- DOMAIN ---
class InvalidSquareError(VoiceChessError):
    """String could not be read as a square in algebraic notation."""


class InvalidFENError(VoiceChessError):
    """String could not be read as a FEN record."""


class GameError(VoiceChessError):
    """Base class for errors raised while playing a game."""


class GameStateError(GameError):
    """Requested action does not fit the current mode of the session."""


class IllegalMoveError(GameError):
    """No legal move matches what the player asked for."""


class AmbiguousMoveError(GameError):
    """More than one piece of the requested type can reach the target square."""

    def __init__(self, message: str, sources: list[str]) -> None:
        super().__init__(message)
        self.sources = sources


class NotYourTurnError(GameError):
    """The move was sent for the side that is not to move."""


class TranscriptNotUnderstoodError(GameError):
    """The utterance could not be parsed into a move, color or difficulty."""


# --- BOUNDARIES ---
class InvalidRequestError(VoiceChessError):
    """Request model failed validation."""


class RepositoryError(VoiceChessError):
    """Persistence layer could not find or store a session."""


class ResolverError(VoiceChessError):
    """The external phrase resolver failed to answer."""
