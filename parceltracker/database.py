"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for parcel storage.
"""

from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import create_engine, Column, Integer, String
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .env import get_db_path
from .models import Parcel

Base = declarative_base()

# One engine (and connection pool) per database file
_engines: Dict[str, Engine] = {}


class ParcelRow(Base):
    """Parcel table model."""

    __tablename__ = "parcel"
    # Numbers of deleted parcels are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Integer, nullable=False, index=True)
    status = Column(String, nullable=False)  # registered, sent, delivered
    address = Column(String, nullable=False)
    created_at = Column(String, nullable=False)  # RFC 3339, never updated

    def to_parcel(self) -> Parcel:
        return Parcel(
            number=self.number,
            client=self.client,
            status=self.status,
            address=self.address,
            created_at=self.created_at,
        )

    def __repr__(self):
        return f"<ParcelRow(number={self.number}, client={self.client}, status='{self.status}')>"


def init_database(db_path: Optional[Path] = None) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file (default: PARCEL_DB_PATH or tracker.db)
    """
    db_path = get_db_path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(get_engine(db_path))


def get_session(db_path: Optional[Path] = None):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file (default: PARCEL_DB_PATH or tracker.db)

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=get_engine(db_path))
    return Session()


def get_engine(db_path: Optional[Path] = None) -> Engine:
    """Return the cached engine for a database file, creating it on first use."""
    db_path = get_db_path(db_path)
    key = str(db_path.resolve())
    engine = _engines.get(key)
    if engine is None:
        engine = create_engine(f"sqlite:///{key}")
        _engines[key] = engine
    return engine


def dispose_engines() -> None:
    """Close every cached engine's connection pool."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
