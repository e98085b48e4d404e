"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are shared across threads so the same engine can serve
    the websocket handler and the request workers; in-memory databases are
    pinned to a single connection so every session sees the same tables.
    """

    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url, connect_args=connect_args, poolclass=StaticPool
        )
    return create_engine(database_url, connect_args=connect_args)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    target = bind or engine
    Base.metadata.create_all(bind=target, checkfirst=True)
    logger.info("Database schema ready on %s", target.url.render_as_string(hide_password=True))


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """Commit the writes staged inside the block, or roll all of them back.

    Repositories only flush, so a use case that writes several rows wraps
    them in one ``atomic`` block to keep the pair consistent.
    """

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
