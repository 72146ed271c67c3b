import asyncio
import logging
from contextlib import contextmanager
from typing import Any, List, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from utopia_hire.core.config import get_settings
from utopia_hire.db.tables import metadata

logger = logging.getLogger(__name__)

settings = get_settings()


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(url, connect_args={"check_same_thread": False}, echo=settings.debug)

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug  # Log SQL queries in debug mode
    )


engine = _build_engine(settings.sqlalchemy_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(select(job_offers))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    metadata.create_all(engine)


def test_postgres_connection() -> bool:
    """
    Test if the relational database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False


def fetch_all(statement) -> List[dict]:
    """Execute a select and return rows as list of dicts."""
    with get_db_session() as db:
        result = db.execute(statement)
        return [dict(row._mapping) for row in result.fetchall()]


def fetch_one(statement) -> Optional[dict]:
    """Execute a select and return the first row as a dict (or None)."""
    with get_db_session() as db:
        row = db.execute(statement).fetchone()
        return dict(row._mapping) if row else None


def execute_write(statement) -> Any:
    """
    Execute an insert/update/delete.
    Returns the first RETURNING row as a dict when the statement has one,
    otherwise the affected row count.
    """
    with get_db_session() as db:
        result = db.execute(statement)
        if result.returns_rows:
            row = result.fetchone()
            return dict(row._mapping) if row else None
        return result.rowcount


async def fetch_all_concurrently(*statements) -> List[List[dict]]:
    """
    Run independent selects in parallel worker threads and wait for all.
    Each statement gets its own session/connection from the pool.
    """
    return list(await asyncio.gather(*(run_in_threadpool(fetch_all, s) for s in statements)))
