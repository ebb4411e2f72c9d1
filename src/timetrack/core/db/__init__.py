"""Database utilities - engine, session, migrations."""

from src.timetrack.core.db.engine import dispose_engine, get_engine
from src.timetrack.core.db.migrations import run_migrations_async, run_migrations_sync
from src.timetrack.core.db.session import get_session, ping_database

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    "ping_database",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
