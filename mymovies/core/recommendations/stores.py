"""
Rating and request-log stores used by the recommendation flow.

Each call opens its own session, so the two eligibility reads can run
on separate threads. Database failures surface as ``DataAccessError``.

Concurrent calls for the same user can both read a count below the
daily limit before either appends its request; the limit is advisory.
"""

import logging
from datetime import datetime
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError

from mymovies.core.errors import DataAccessError
from mymovies.core.recommendations.schemas import UserRating
from mymovies.database import crud
from mymovies.database.connection import DatabaseManager
from mymovies.utils.dates import start_of_utc_day, utcnow

logger = logging.getLogger(__name__)


class RatingStore:
    """Read access to a user's ratings."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def count_ratings(self, user_id: str) -> int:
        try:
            with self.db_manager.session_scope() as session:
                return crud.count_user_ratings(session, user_id)
        except SQLAlchemyError as e:
            raise DataAccessError("count ratings", str(e)) from e

    def list_ratings(self, user_id: str) -> List[UserRating]:
        """Rating history as (tmdb_id, rating) pairs, newest first."""
        try:
            with self.db_manager.session_scope() as session:
                rows = crud.list_user_rating_history(session, user_id)
        except SQLAlchemyError as e:
            raise DataAccessError("list ratings", str(e)) from e
        return [UserRating(tmdb_id, rating) for tmdb_id, rating in rows]


class RequestLogStore:
    """
    Append-only log of recommendation requests.

    Args:
        db_manager: Database manager
        clock: Returns the current naive UTC time (overridable in tests)
    """

    def __init__(self, db_manager: DatabaseManager, clock: Callable[[], datetime] = utcnow):
        self.db_manager = db_manager
        self.clock = clock

    def count_requests_today(self, user_id: str) -> int:
        """Requests since 00:00 UTC of the current day."""
        since = start_of_utc_day(self.clock())
        try:
            with self.db_manager.session_scope() as session:
                return crud.count_recommendation_requests_since(session, user_id, since)
        except SQLAlchemyError as e:
            raise DataAccessError("count requests", str(e)) from e

    def append_request(self, user_id: str) -> None:
        try:
            with self.db_manager.session_scope() as session:
                crud.log_recommendation_request(session, user_id, created_at=self.clock())
        except SQLAlchemyError as e:
            raise DataAccessError("log request", str(e)) from e
