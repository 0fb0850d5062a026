"""Database configuration and session management."""
import re
import secrets
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.logging import setup_logging

logger = setup_logging('database')

OBJECT_ID_RE = re.compile(r"^[0-9a-f]{24}$")


class Base(DeclarativeBase):
    """Declarative base for all jobboard models."""


def new_object_id() -> str:
    """Generate a 24 character hexadecimal identifier."""
    return secrets.token_hex(12)


def is_valid_object_id(value) -> bool:
    """Check identifier syntax before it is used in a lookup."""
    return isinstance(value, str) and bool(OBJECT_ID_RE.match(value))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for a database URL.

    ``sqlite://`` (in-memory) URLs share one connection across threads so
    every session sees the same database.
    """
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    """Create missing tables in the database."""
    # Register the mapped classes on Base.metadata
    from jobboard.core import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Error creating tables: {str(e)}")
        raise


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Get a managed session that commits on success and rolls back on error."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
