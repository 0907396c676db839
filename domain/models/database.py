"""
Database configuration and session management.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("fooddelivery.database")

# Create SQLAlchemy Base
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    In-memory SQLite URLs share one connection so that every session sees
    the same database.
    """
    kwargs = {"echo": echo, "future": True}
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        # SQLite leaves foreign keys unenforced unless asked per connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory used by the ORM repositories"""
    return sessionmaker(bind=engine, future=True, expire_on_commit=False)


def init_database(engine: Engine):
    """Initialize database schema"""
    # Register the mapped tables on Base.metadata
    from domain.models import delivery  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def drop_database(engine: Engine):
    """Drop every mapped table"""
    from domain.models import delivery  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.drop_all(bind=conn)
    logger.info("Database tables dropped")


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Session for one logical operation: commit on success, rollback on error, always close"""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def connection_scope(engine: Engine) -> Iterator[Connection]:
    """Connection with a transaction for one logical operation"""
    with engine.begin() as conn:
        yield conn
