#!/usr/bin/env python
"""
Print a user's stored data: ratings, lists, and today's AI requests.

Useful when checking why recommendations are locked or rate limited.

Usage:
    python scripts/check_user_data.py <user_id>
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mymovies.api.config import get_daily_recommendation_limit, get_database_path
from mymovies.core.recommendations import RatingStore, RequestLogStore
from mymovies.core.recommendations.orchestrator import MINIMUM_RATINGS
from mymovies.database import crud, get_db_manager
from mymovies.utils.logging_config import configure_script_logging


def print_section(title):
    """Print a formatted section header."""
    print(f"\n{'='*60}")
    print(f"{title}")
    print('='*60)


def main():
    parser = argparse.ArgumentParser(description="Check stored data for a user")
    parser.add_argument('user_id', help='User ID from the auth provider')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()
    
    configure_script_logging(debug=args.debug)
    
    db_manager = get_db_manager(db_path=get_database_path())
    rating_store = RatingStore(db_manager)
    request_store = RequestLogStore(db_manager)
    
    print_section(f"Data for user {args.user_id}")
    
    ratings_count = rating_store.count_ratings(args.user_id)
    print(f"\n📊 Ratings: {ratings_count} records (recommendations need {MINIMUM_RATINGS})")
    for tmdb_id, rating in rating_store.list_ratings(args.user_id)[:10]:
        print(f"  TMDb {tmdb_id}: {rating}/10")
    
    with db_manager.session_scope() as session:
        lists = crud.get_user_lists(session, args.user_id)
    print(f"\n📋 Watchlist: {len(lists['watchlist'])} movies")
    print(f"⭐ Favorites: {len(lists['favorite'])} movies")
    
    requests_today = request_store.count_requests_today(args.user_id)
    print(f"\n🤖 AI requests today: {requests_today}/{get_daily_recommendation_limit()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
