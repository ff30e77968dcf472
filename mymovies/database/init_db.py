"""
Database initialization and schema verification for the maintenance scripts.
"""

import logging

from sqlalchemy import inspect

from mymovies.database.connection import DatabaseManager, DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'ratings', 'ai_recommendation_requests', 'user_lists'}


def init_database(db_path: str = DEFAULT_DB_PATH, reset: bool = False) -> DatabaseManager:
    """
    Create the schema at ``db_path``.

    Args:
        db_path: SQLite file path, ``:memory:``, or SQLAlchemy URL
        reset: Drop every table first (all data is lost)

    Returns:
        DatabaseManager bound to the initialized database
    """
    db_manager = DatabaseManager(db_path=db_path)

    if reset:
        logger.warning("Resetting database at %s (dropping all tables)", db_manager.database_url)
        db_manager.reset_database()
    else:
        db_manager.create_tables()
    logger.info("Database tables ready at %s", db_manager.database_url)

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """Return True when every table the service uses exists."""
    existing_tables = set(inspect(db_manager.engine).get_table_names())
    missing_tables = EXPECTED_TABLES - existing_tables

    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False

    logger.info("Schema verified: %s", ", ".join(sorted(EXPECTED_TABLES)))
    return True
