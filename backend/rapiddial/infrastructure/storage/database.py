"""
Database Connection and Session Management
Connects to PostgreSQL (SQLite for local development and tests)
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
from typing import Iterator

from rapiddial.infrastructure.storage.models import Base


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine.

    SQLite connections are shared across the worker threads that run storage
    calls, so the same-thread check is disabled for them.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=echo,  # Set to True for debugging SQL queries
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create missing tables"""
    Base.metadata.create_all(engine)


def ping(engine: Engine) -> bool:
    """True if the database answers a trivial query"""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return True


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Database session with automatic commit/rollback and cleanup

    Usage:
        with session_scope(factory) as session:
            rows = session.execute(select(ProspectRow)).scalars().all()
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
