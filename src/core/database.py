"""Database connection and session management.

This module handles the database connection using SQLAlchemy. The engine is
built from ``DATABASE_URL``; request handlers receive their own session
through the ``get_db`` dependency and never share one.
"""

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from config import DATABASE_ECHO, DATABASE_URL
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401


def build_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    """Create an engine for the given URL.

    SQLite engines are allowed to cross threads and get foreign key
    enforcement switched on for every new connection. Bound parameters
    (access codes, password hashes) are kept out of error messages.
    """
    kwargs.setdefault("hide_parameters", True)
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
        if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
            Path(url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)

    db_engine = create_engine(url, echo=DATABASE_ECHO, **kwargs)

    if db_engine.dialect.name == "sqlite":

        @event.listens_for(db_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return db_engine


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
