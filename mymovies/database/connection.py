"""
Database connection management using SQLAlchemy.

This module handles database engine creation, session management,
and provides utilities for database operations. SQLite is the default
backend; any SQLAlchemy URL may be supplied instead.
"""

import os
import sqlite3
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from mymovies.database.models import Base


# Default database path
DEFAULT_DB_PATH = "data/mymovies.db"

IN_MEMORY = ":memory:"


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Get database URL.
    
    Args:
        db_path: Path to SQLite database file, ``:memory:``, or a full
            SQLAlchemy URL (returned unchanged)
        
    Returns:
        SQLAlchemy database URL
    """
    if "://" in db_path:
        return db_path
    if db_path == IN_MEMORY:
        return "sqlite://"
    
    # Ensure directory exists
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    
    # SQLite URL format: sqlite:///path/to/database.db
    return f"sqlite:///{os.path.abspath(db_path)}"


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Let SQLite wait on locks instead of failing immediately.
    
    Eligibility reads and request-log writes run on separate threads,
    each with its own connection.
    """
    if not isinstance(dbapi_conn, sqlite3.Connection):
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


class DatabaseManager:
    """
    Owns the engine and session factory for one database.
    
    Sessions never expire loaded attributes on commit, so ORM rows can be
    serialized after the ``session_scope()`` that loaded them has closed.
    """
    
    def __init__(self, db_path: str = DEFAULT_DB_PATH, echo: bool = False):
        """
        Initialize database manager.
        
        Args:
            db_path: Path to SQLite database file (or SQLAlchemy URL)
            echo: If True, log all SQL statements (useful for debugging)
        """
        self.db_path = db_path
        self.database_url = get_database_url(db_path)
        
        engine_kwargs = {"echo": echo}
        if self.database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        if self.database_url == "sqlite://":
            # An in-memory database only exists on a single connection
            engine_kwargs["poolclass"] = StaticPool
        
        self.engine = create_engine(self.database_url, **engine_kwargs)
        
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
    
    def create_tables(self):
        """Create missing tables; existing tables and rows are left alone."""
        Base.metadata.create_all(bind=self.engine)
    
    def reset_database(self):
        """
        Drop and recreate every table.
        
        WARNING: ratings, lists, and the request log are all lost.
        """
        Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
    
    def get_session(self) -> Session:
        """Open a session the caller must close; prefer ``session_scope()``."""
        return self.SessionLocal()
    
    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Session that commits on success and rolls back on any exception.
        
        Usage:
            with db_manager.session_scope() as session:
                crud.log_recommendation_request(session, user_id)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
    
    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()


# Global database manager instance (singleton pattern)
_db_manager = None


def get_db_manager(db_path: str = DEFAULT_DB_PATH, echo: bool = False) -> DatabaseManager:
    """
    Return the process-wide DatabaseManager, creating it (and its tables)
    on first use. Later calls ignore their arguments.
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(db_path=db_path, echo=echo)
        _db_manager.create_tables()
    return _db_manager
