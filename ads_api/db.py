"""Database configuration and session management for the marketplace ads API.

Provides the SQLAlchemy engine cache, session factories, and the FastAPI
dependency for per-request database sessions.
"""

import logging
import os
import threading
from contextlib import contextmanager
from typing import Dict, Generator, Iterator, Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from .config import DATABASE_URL
from .models import Base

logger = logging.getLogger(__name__)

# URL-keyed engine cache and lock for thread-safe lazy initialization
_ENGINE_CACHE: Dict[str, Engine] = {}
_ENGINE_LOCK = threading.Lock()


def get_current_db_url() -> str:
    """DATABASE_URL from the environment, falling back to the config default."""
    return os.getenv("DATABASE_URL") or DATABASE_URL


def _create_single_engine_instance(url: str) -> Engine:
    if url.startswith("sqlite"):
        # StaticPool for in-memory, NullPool for file-based
        is_memory = (":memory:" in url) or url.endswith("?mode=memory")
        pool_cls = StaticPool if is_memory else NullPool
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=pool_cls,
            pool_pre_ping=True,
        )

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, _):
            cursor = dbapi_conn.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON;")
                cursor.execute("PRAGMA synchronous=NORMAL;")
                if not is_memory:
                    cursor.execute("PRAGMA journal_mode=WAL;")
            finally:
                cursor.close()

        return engine
    return create_engine(url, pool_pre_ping=True)


def get_engine(url: Optional[str] = None) -> Engine:
    """Get a SQLAlchemy engine, creating and caching it per unique URL."""
    resolved_url = url or get_current_db_url()
    with _ENGINE_LOCK:
        if resolved_url not in _ENGINE_CACHE:
            logger.info("Creating database engine for %s", resolved_url.split("@")[-1])
            _ENGINE_CACHE[resolved_url] = _create_single_engine_instance(resolved_url)
        return _ENGINE_CACHE[resolved_url]


def get_session_maker(url: Optional[str] = None) -> sessionmaker:
    """Sessionmaker bound to the engine for ``url`` (current DATABASE_URL by default)."""
    return sessionmaker(
        bind=get_engine(url), autocommit=False, autoflush=False, expire_on_commit=False
    )


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a database session per request.

    Only the session is closed here; the cached engine stays alive.
    """
    db = get_session_maker()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_session() -> Iterator[Session]:
    """Context manager variant of ``get_db`` for scripts and webhooks."""
    session = get_session_maker()()
    try:
        yield session
    finally:
        session.close()


def ensure_schema(bind=None) -> None:
    """Create any missing tables on ``bind`` (the current engine by default). Idempotent."""
    bind = bind or get_engine()
    existing = set(inspect(bind).get_table_names())
    if any(table.name not in existing for table in Base.metadata.sorted_tables):
        Base.metadata.create_all(bind=bind)


__all__ = ["Base", "get_engine", "get_session_maker", "get_db", "get_session", "ensure_schema"]
