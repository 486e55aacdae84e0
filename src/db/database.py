"""Generate database session"""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings, get_settings
from src.db.schema import Base


def create_session_factory(settings: Optional[Settings] = None) -> sessionmaker[Session]:
    """Engine from the configured URL, with all tables created"""
    settings = settings or get_settings()
    engine = create_engine(settings.database_url, echo=settings.database_echo)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
