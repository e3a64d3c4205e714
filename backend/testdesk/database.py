"""
Database engine and session management.

PostgreSQL is the production store; SQLite (file or in-memory) is used for
local development and the test suite. Routes receive a session per request
through the `get_db` dependency.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from testdesk.config import DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    kwargs = {"echo": False}
    if url.startswith("postgresql"):
        kwargs.update({
            "pool_size": 10,
            "max_overflow": 20,
            "pool_pre_ping": True,
        })
    elif url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # An in-memory database only lives as long as its connection
            kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

if DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""
    pass


def get_db():
    """
    FastAPI dependency yielding a session that is always closed afterwards.

    Uncommitted work is discarded on close, so a handler that raises midway
    leaves nothing behind.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """Create all tables directly. PostgreSQL deployments use Alembic instead."""
    Base.metadata.create_all(bind=engine)


def drop_tables():
    """Drop every table. Used to reset the schema between test runs."""
    Base.metadata.drop_all(bind=engine)
