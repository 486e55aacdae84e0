"""Unit tests for src/db/database.py"""

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from src.core.config import Settings
from src.core.models import SessionModel
from src.db.database import create_session_factory, get_db
from src.db.sql_repository import SQLSessionRepository


def test_session_factory_creates_tables() -> None:
    factory = create_session_factory(Settings(_env_file=None, database_url="sqlite:///:memory:"))
    db = next(get_db(factory))
    assert isinstance(db, Session)
    assert "sessions" in inspect(db.get_bind()).get_table_names()


def test_repository_on_configured_database() -> None:
    factory = create_session_factory(Settings(_env_file=None, database_url="sqlite:///:memory:"))
    for db in get_db(factory):
        repo = SQLSessionRepository(db)
        model = SessionModel(
            current_fen="rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            mode="choosing color",
        )
        _, session_id = repo.create_session(model)
        assert repo.get_session(session_id) == model
