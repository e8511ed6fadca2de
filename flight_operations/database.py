"""SQLAlchemy tables and session helpers for the key/value flight store."""
from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Tuple

from sqlalchemy import String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

DATA_DIR = Path(os.environ.get("FLIGHT_OPS_DATA", "./.flight-ops-data"))
DEFAULT_DB_URL = os.environ.get(
    "FLIGHT_OPS_DB_URL", f"sqlite+pysqlite:///{DATA_DIR / 'flightmanagement.db'}"
)


class Base(DeclarativeBase):
    pass


class FlightRecord(Base):
    __tablename__ = "flights"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)


class PassengerRecord(Base):
    __tablename__ = "passengers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)


def create_session_factory(
    db_url: str = DEFAULT_DB_URL, *, echo: bool = False
) -> Tuple[Engine, sessionmaker[Session]]:
    """Return an engine and session factory for the flight store."""

    options: Dict[str, object] = {"echo": echo}
    if db_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if db_url == DEFAULT_DB_URL:
            DATA_DIR.mkdir(parents=True, exist_ok=True)
        if db_url.endswith(":memory:"):
            # Every session must see the same in-memory database.
            options["poolclass"] = StaticPool
    engine = create_engine(db_url, **options)
    return engine, sessionmaker(bind=engine, expire_on_commit=False)


def init_db(db_url: str = DEFAULT_DB_URL, *, echo: bool = False) -> sessionmaker[Session]:
    """Create all tables and return a session factory."""

    engine, session_factory = create_session_factory(db_url, echo=echo)
    Base.metadata.create_all(engine)
    return session_factory


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
