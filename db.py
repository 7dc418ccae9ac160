# db.py
# Role: Database bootstrap for the optional SQL-backed transaction store.
#       Builds the SQLAlchemy engine and session factory, exposes the declarative Base,
#       and provides a transactional session scope used by SqlTransactionStore.

"""
Database setup for the finance tracker.

- Default URL: SQLite database at <project_root>/database/finance.db
- Only used when FINANCE_TRACKER_STORAGE=sql (see app/config.py).
"""

import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Base directory of the project (where this module lives)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Folder for the default SQLite DB (created lazily, see ensure_sqlite_dir)
DB_DIR = os.path.join(BASE_DIR, "database")

# Full path to the default SQLite database file
DB_PATH = os.path.join(DB_DIR, "finance.db")

# Default SQLAlchemy connection URL
DEFAULT_DATABASE_URL = f"sqlite:///{DB_PATH}"

# Declarative base class for ORM models
Base = declarative_base()


def ensure_sqlite_dir(database_url: str) -> None:
    """Create the parent folder of a file-backed SQLite URL if missing."""
    prefix = "sqlite:///"
    if not database_url.startswith(prefix):
        return
    path = database_url[len(prefix):]
    if not path or path == ":memory:":
        return
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)


def make_engine(database_url: str = DEFAULT_DATABASE_URL) -> Engine:
    ensure_sqlite_dir(database_url)

    connect_args = {}
    if database_url.startswith("sqlite"):
        # For SQLite, we need check_same_thread=False for FastAPI (threaded request handling)
        connect_args["check_same_thread"] = False

    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Standard session factory bound to the given engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Yield a session wrapped in a single database transaction.

    Commits on success, rolls back on any exception (and re-raises it),
    always closes the session.
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
