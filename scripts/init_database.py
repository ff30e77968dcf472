#!/usr/bin/env python
"""
Database initialization script.

Creates the ratings, request-log, and user-list tables and verifies the
schema.

Usage:
    # Create missing tables (keeps existing data)
    python scripts/init_database.py

    # Drop and recreate everything
    python scripts/init_database.py --reset

    # Use a different database
    python scripts/init_database.py --db-path data/dev.db
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mymovies.api.config import get_database_path
from mymovies.database import init_database, verify_schema
from mymovies.utils.logging_config import configure_script_logging


def main():
    parser = argparse.ArgumentParser(description="Initialize the MyMovies database")
    parser.add_argument('--reset', action='store_true', help='Drop existing tables first')
    parser.add_argument('--db-path', default=None, help='Database path (default: DATABASE_URL or data/mymovies.db)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()
    
    configure_script_logging(debug=args.debug)
    
    db_manager = init_database(db_path=args.db_path or get_database_path(), reset=args.reset)
    
    if verify_schema(db_manager):
        print("\n✅ Database initialization successful!")
        return 0
    print("\n❌ Database initialization failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
