"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from expense_tracker.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    options: dict = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # Route handlers run in a thread pool; SQLite connections are shared across it.
        options["connect_args"] = {"check_same_thread": False}
    return options


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
if engine.dialect.name == "sqlite":
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Create missing tables and seed the default roles, permissions and settings."""

    from expense_tracker.infrastructure import models  # noqa: F401  # ensure models are imported
    from expense_tracker.infrastructure.seed import seed_defaults

    Base.metadata.create_all(bind=engine, checkfirst=True)

    with SessionLocal() as session:
        seed_defaults(session)
    logger.info("Database initialised using dialect '%s'", engine.dialect.name)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
