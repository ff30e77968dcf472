"""
Database module for MyMovies.

This module provides database models, connection management, and CRUD operations
using SQLAlchemy ORM.
"""

from mymovies.database.models import Base, Rating, RecommendationRequest, UserListItem
from mymovies.database.connection import DatabaseManager, get_db_manager
from mymovies.database.init_db import init_database, verify_schema
from mymovies.database import crud

__all__ = [
    # Models
    'Base',
    'Rating',
    'RecommendationRequest',
    'UserListItem',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
