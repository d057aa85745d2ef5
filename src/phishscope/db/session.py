"""Database session management.

SQLite engines and session factories cached per database file, with
the thread-safety settings FastAPI's threadpool needs.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from phishscope.db.schema import Base

DEFAULT_DB_PATH = Path("data/phishscope.db")

# Keyed by resolved database path
_engine_cache: dict[str, Engine] = {}
_session_factory_cache: dict[str, sessionmaker] = {}


def resolve_db_path(db_path: Path | None = None) -> Path:
    """Resolve the database file location.

    Explicit argument first, then PHISHSCOPE_DB_PATH, then the default.
    """
    if db_path is not None:
        return Path(db_path)
    env_path = os.environ.get("PHISHSCOPE_DB_PATH")
    return Path(env_path) if env_path else DEFAULT_DB_PATH


def get_engine(db_path: Path | None = None) -> Engine:
    """Get the cached SQLAlchemy engine for a database file.

    check_same_thread=False and StaticPool let the single SQLite
    connection be shared by FastAPI worker threads.

    Args:
        db_path: Path to SQLite database file.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    path = resolve_db_path(db_path)
    cache_key = str(path.resolve())

    engine = _engine_cache.get(cache_key)
    if engine is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{path}",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _engine_cache[cache_key] = engine

    return engine


def get_session(db_path: Path | None = None) -> Session:
    """Open a database session.

    Caller is responsible for closing it; prefer get_db_session().
    """
    path = resolve_db_path(db_path)
    cache_key = str(path.resolve())

    factory = _session_factory_cache.get(cache_key)
    if factory is None:
        factory = sessionmaker(bind=get_engine(path))
        _session_factory_cache[cache_key] = factory

    return factory()


@contextmanager
def get_db_session(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Session scope that commits on success and rolls back on error.

    Example:
        with get_db_session() as session:
            repo.create_scan(session, record)
    """
    session = get_session(db_path)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | None = None) -> None:
    """Create all tables. Safe to call on every startup."""
    Base.metadata.create_all(get_engine(db_path))
