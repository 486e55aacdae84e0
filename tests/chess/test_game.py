"""Unit tests for src/chess/game.py"""

import pytest

from src.chess.fen import STARTING_FEN
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.square import Square
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidFENError,
    NotYourTurnError,
)
from src.core.models import SessionModel
from src.core.shared_types import Color, Difficulty, SessionMode
from src.transcripts.move_parser import MoveToken, ParsedMove


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def uci(move: str) -> Move:
    return Move.from_uci(move)


def playing_game(
    user_color: Color = Color.WHITE, starting_fen: str | None = None
) -> Game:
    game = Game.new_game(starting_fen=starting_fen)
    game.choose_color(user_color)
    game.choose_difficulty(Difficulty.MEDIUM)
    return game


# --- SESSION SETUP ---
def test_new_game_asks_for_color() -> None:
    game = Game.new_game()
    assert game.mode == SessionMode.CHOOSING_COLOR
    assert game.state.to_fen() == STARTING_FEN
    assert game.user_color is None
    assert game.difficulty is None


def test_setup_flow_user_white() -> None:
    game = Game.new_game()
    game.choose_color(Color.WHITE)
    assert game.mode == SessionMode.CHOOSING_DIFFICULTY
    game.choose_difficulty(Difficulty.HARD)
    assert game.difficulty == Difficulty.HARD
    assert game.mode == SessionMode.USER_TURN


def test_setup_flow_user_black_waits_for_opponent() -> None:
    game = playing_game(Color.BLACK)
    assert game.mode == SessionMode.AI_TURN


def test_setup_out_of_order() -> None:
    game = Game.new_game()
    with pytest.raises(GameStateError):
        game.choose_difficulty(Difficulty.EASY)
    game.choose_color(Color.BLACK)
    with pytest.raises(GameStateError):
        game.choose_color(Color.WHITE)


# --- MODEL CONVERSION ---
def test_model_round_trip() -> None:
    game = playing_game()
    game.play(uci("e2e4"), Color.WHITE)
    model = game.to_model()
    assert isinstance(model, SessionModel)
    assert model.mode == "ai turn"
    assert model.user_color == "white"
    assert model.difficulty == "medium"
    assert model.moves_uci == ["e2e4"]
    assert model.history_fen == [STARTING_FEN]
    assert Game.from_model(model) == game


def test_from_model_invalid_mode() -> None:
    model = SessionModel(current_fen=STARTING_FEN, mode="napping")
    with pytest.raises(GameStateError):
        Game.from_model(model)


# --- CANDIDATES FROM PARSED UTTERANCES ---
def test_candidates_for_knight() -> None:
    """'knight f3' is a lowercase k token, which means knight and not king"""
    game = playing_game()
    moves = game.candidates_for(ParsedMove(MoveToken.KNIGHT, "f3"))
    assert moves == [Move(sq("g1"), sq("f3"))]
    assert game.candidates_for(ParsedMove(MoveToken.KING, "f3")) == []


def test_candidates_for_black_uses_side_to_move() -> None:
    game = playing_game(Color.BLACK)
    game.play(uci("e2e4"), Color.WHITE)
    assert game.candidates_for(ParsedMove(MoveToken.PAWN, "e5")) == [
        Move(sq("e7"), sq("e5"))
    ]


def test_candidates_ambiguous() -> None:
    """With the king out of the way, both rooks can reach d1"""
    game = playing_game(starting_fen="4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
    moves = game.candidates_for(ParsedMove(MoveToken.ROOK, "f1"))
    assert moves == [Move(sq("h1"), sq("f1"))]
    game = playing_game(starting_fen="4k3/8/8/8/8/8/4K3/R6R w - - 0 1")
    moves = game.candidates_for(ParsedMove(MoveToken.ROOK, "d1"))
    assert [move.from_square for move in moves] == [sq("a1"), sq("h1")]


# --- PLAYING ---
def test_play_updates_state() -> None:
    game = playing_game()
    played = game.play(uci("e2e4"), Color.WHITE)
    assert played.uci == "e2e4"
    assert played.piece == "P"
    assert played.captured is None
    assert not played.promoted
    assert game.state.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
    assert game.mode == SessionMode.AI_TURN


def test_clocks() -> None:
    """halfmove clock counts quiet moves, fullmove number goes up after black's move"""
    game = playing_game()
    game.play(uci("g1f3"), Color.WHITE)
    assert (game.state.halfmove_clock, game.state.fullmove_number) == (1, 1)
    game.play(uci("g8f6"), Color.BLACK)
    assert (game.state.halfmove_clock, game.state.fullmove_number) == (2, 2)
    game.play(uci("e2e4"), Color.WHITE)
    assert (game.state.halfmove_clock, game.state.fullmove_number) == (0, 2)


def test_capture_is_recorded() -> None:
    game = playing_game()
    for move, color in [("e2e4", Color.WHITE), ("d7d5", Color.BLACK)]:
        game.play(uci(move), color)
    played = game.play(uci("e4d5"), Color.WHITE)
    assert played.captured == "p"
    assert game.captured_by_white == ["p"]
    assert game.captured_by_black == []
    assert game.state.halfmove_clock == 0


def test_en_passant() -> None:
    game = playing_game(starting_fen="4k3/3p4/8/4P3/8/8/8/4K3 b - - 0 1")
    game.play(uci("d7d5"), Color.BLACK)
    assert game.state.en_passant_target == "d6"
    moves = game.candidates_for(ParsedMove(MoveToken.PAWN, "d6"))
    assert moves == [Move(sq("e5"), sq("d6"), is_en_passant=True)]

    played = game.play(uci("e5d6"), Color.WHITE)
    assert played.captured == "p"
    assert game.state.board.is_empty(sq("d5"))
    assert game.state.board.piece(sq("d6")) == "P"
    assert game.state.en_passant_target == "-"


def test_promotion() -> None:
    game = playing_game(starting_fen="8/4P3/8/8/8/8/8/k3K3 w - - 0 1")
    played = game.play(uci("e7e8"), Color.WHITE)
    assert played.promoted
    assert played.uci == "e7e8q"
    assert game.state.board.piece(sq("e8")) == "Q"


def test_castling_rights_revoked() -> None:
    game = playing_game(starting_fen="r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    game.play(uci("h1h8"), Color.WHITE)
    # the rook left h1 and took the rook on h8
    assert game.state.castling_rights == "Qq"
    game.play(uci("e8e7"), Color.BLACK)
    assert game.state.castling_rights == "Q"


def test_not_your_turn() -> None:
    game = playing_game()
    with pytest.raises(NotYourTurnError):
        game.play(uci("e7e5"), Color.BLACK)


def test_illegal_move() -> None:
    game = playing_game()
    with pytest.raises(IllegalMoveError):
        game.play(uci("e2e5"), Color.WHITE)


def test_play_before_setup() -> None:
    with pytest.raises(GameStateError):
        Game.new_game().play(uci("e2e4"), Color.WHITE)


def test_checkmate_ends_the_game() -> None:
    game = playing_game()
    for move, color in [
        ("f2f3", Color.WHITE),
        ("e7e5", Color.BLACK),
        ("g2g4", Color.WHITE),
    ]:
        game.play(uci(move), color)
    played = game.play(uci("d8h4"), Color.BLACK)
    assert played.gives_check
    assert game.is_check
    assert game.is_checkmate
    assert not game.is_stalemate
    assert game.winner == Color.BLACK
    assert game.mode == SessionMode.GAME_OVER
    with pytest.raises(GameStateError):
        game.play(uci("a2a3"), Color.WHITE)


def test_stalemate_ends_the_game() -> None:
    game = playing_game(starting_fen="k7/8/1K6/8/8/8/8/2Q5 w - - 0 1")
    game.play(uci("c1c7"), Color.WHITE)
    assert game.is_stalemate
    assert game.winner is None
    assert game.mode == SessionMode.GAME_OVER


def test_new_game_rejects_en_passant_square_without_double_step() -> None:
    """e4 cannot be an en passant square with white to move: no capture onto it is offered"""
    with pytest.raises(InvalidFENError):
        Game.new_game(starting_fen="4k3/8/8/8/8/3P4/8/4K3 w - e4 0 1")
