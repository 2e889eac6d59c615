"""Generate database session"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import load_settings
from src.db.schema import Base


def create_db_engine(database_url: str | None = None) -> Engine:
    """Engine for the configured database, with all tables created."""
    engine = create_engine(database_url or load_settings().database_url)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def get_db(engine: Engine | None = None) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(bind=engine or create_db_engine())
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
