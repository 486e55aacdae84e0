"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SessionModel:
    """Transport-safe representation of a voice chess session used between API, Service, DB, and Game layers."""

    current_fen: str
    mode: str
    user_color: Optional[str] = None
    difficulty: Optional[str] = None
    history_fen: list[str] = field(default_factory=list)
    moves_uci: list[str] = field(default_factory=list)
    captured_by_white: list[str] = field(default_factory=list)
    captured_by_black: list[str] = field(default_factory=list)
