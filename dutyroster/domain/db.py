"""Database initialization and utilities for the rotation history."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base


DEFAULT_DB_URL = "sqlite:///dutyroster.db"


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False):
    """Create SQLAlchemy engine."""
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Initialize database and create all tables."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    print(f"[INFO] Database initialized: {db_url}")


def get_session_factory(db_url: str = DEFAULT_DB_URL):
    """Get a session factory for the database, creating missing tables."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    """Get a new database session."""
    SessionFactory = get_session_factory(db_url)
    return SessionFactory()
