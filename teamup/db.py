"""
Database engine and session management.

One module-level DatabaseManager (`db`) owns the engine for the process.
Server databases get a QueuePool sized from settings; SQLite gets a
StaticPool with foreign keys switched on, so `sqlite://` behaves as one
shared in-memory database.

Usage:
    from teamup.db import db

    db.initialize()
    with db.session() as session:
        ProjectRepository(session).list_projects()
"""

import time
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings
from .logging import get_logger

logger = get_logger("database")


class Base(DeclarativeBase):
    """Declarative base shared by every TeamUp model."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Lazily built engine plus a session factory bound to it."""

    def __init__(self):
        self.engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    def initialize(self, database_url: str | None = None) -> None:
        """Build the engine. A second call while initialized is a no-op."""
        if self.engine is not None:
            return

        settings = get_settings()
        url = database_url or settings.database_url

        if url.startswith("sqlite"):
            engine = create_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=settings.debug,
            )
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        else:
            engine = create_engine(
                url,
                poolclass=QueuePool,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                echo=settings.debug,
            )

        self.engine = engine
        self._sessions = sessionmaker(
            bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
        )
        logger.info("database_engine_created", dialect=engine.dialect.name)

    def create_all_tables(self) -> None:
        """Create missing tables. Migrations own the schema outside development and tests."""
        engine = self._require_engine()
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """A session that commits on success and rolls back on any exception."""
        self._require_engine()
        session = self._sessions()  # type: ignore[misc]
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Round-trip a trivial query.

        Returns:
            {"healthy": bool, "latency_ms": float, "error": str | None}
        """
        if self.engine is None:
            return {"healthy": False, "latency_ms": 0.0, "error": "Database not initialized"}

        start = time.perf_counter()
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("database_health_check_failed", error=str(exc))
            return {
                "healthy": False,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                "error": str(exc),
            }
        return {
            "healthy": True,
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            "error": None,
        }

    def dispose(self) -> None:
        """Close pooled connections. The next initialize() builds a fresh engine."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("database_engine_disposed")
        self.engine = None
        self._sessions = None

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")
        return self.engine


db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "db", "get_db"]
