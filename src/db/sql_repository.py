"""Implementation of (Session)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import SessionModel
from src.db.schema import DBSession

logger = logging.getLogger(__name__)


class SQLSessionRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        session_db = self._fetch_session(session_id)
        if session_db:
            return self._to_model(session_db)
        return None

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""
        new_id = uuid4()
        session_db = DBSession(id=new_id)
        self._copy_into(session_db, session)
        self.db.add(session_db)
        self.db.commit()
        self.db.refresh(session_db)
        logger.info("Created session %s", new_id)
        return self._to_model(session_db), new_id

    def update_session(self, session_id: UUID, session: SessionModel) -> SessionModel | None:
        """Add new info to existing record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            logger.warning("Cannot update unknown session %s", session_id)
            return None
        self._copy_into(session_db, session)
        self.db.commit()
        self.db.refresh(session_db)
        return self._to_model(session_db)

    def delete_session(self, session_id: UUID) -> SessionModel | None:
        """Remove a session's record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        session_model = self._to_model(session_db)
        self.db.delete(session_db)
        self.db.commit()
        logger.info("Deleted session %s", session_id)
        return session_model

    def _fetch_session(self, session_id: UUID) -> DBSession | None:
        query = select(DBSession).where(DBSession.id == session_id)
        return self.db.scalar(query)

    def _copy_into(self, session_db: DBSession, session: SessionModel) -> None:
        # JSON columns only notice re-assignment, hence the fresh lists
        session_db.current_fen = session.current_fen
        session_db.mode = session.mode
        session_db.user_color = session.user_color
        session_db.difficulty = session.difficulty
        session_db.history_fen = list(session.history_fen)
        session_db.moves_uci = list(session.moves_uci)
        session_db.captured_by_white = list(session.captured_by_white)
        session_db.captured_by_black = list(session.captured_by_black)

    def _to_model(self, session_db: DBSession) -> SessionModel:
        """Convert SQLAlchemy model to data transfer model."""
        return SessionModel(
            current_fen=session_db.current_fen,
            mode=session_db.mode,
            user_color=session_db.user_color,
            difficulty=session_db.difficulty,
            history_fen=list(session_db.history_fen),
            moves_uci=list(session_db.moves_uci),
            captured_by_white=list(session_db.captured_by_white),
            captured_by_black=list(session_db.captured_by_black),
        )
