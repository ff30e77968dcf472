"""
SQLAlchemy ORM models for the MyMovies database.

This module defines the ratings, recommendation request log, and user
list tables. Users themselves live in the external auth provider, so
``user_id`` is an opaque string everywhere.
"""

from datetime import datetime
from sqlalchemy import (
    Integer, String,
    CheckConstraint, UniqueConstraint, Index, DateTime
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from mymovies.utils.dates import utcnow


LIST_TYPES = ('watchlist', 'favorite')


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Rating(Base):
    """
    Rating table storing user ratings for movies.
    
    Attributes:
        id: Primary key, auto-incremented
        user_id: Identifier of the user in the auth provider
        tmdb_id: TMDb movie ID
        rating: Rating value (integer 1 to 10)
        created_at: Timestamp when rating was created (UTC)
        updated_at: Timestamp when rating was last updated (UTC)
    """
    __tablename__ = 'ratings'
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow
    )
    
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 10", name='check_rating_range'),
        CheckConstraint("tmdb_id > 0", name='check_rating_tmdb_id'),
        UniqueConstraint('user_id', 'tmdb_id', name='unique_user_movie'),
        Index('idx_ratings_user', 'user_id'),
        Index('idx_ratings_created', 'created_at'),
    )
    
    def __repr__(self) -> str:
        return f"<Rating(id={self.id}, user_id='{self.user_id}', tmdb_id={self.tmdb_id}, rating={self.rating})>"


class RecommendationRequest(Base):
    """
    Append-only log of AI recommendation requests, one row per call.
    
    Only used in aggregate to count a user's requests for the current
    UTC day.
    """
    __tablename__ = 'ai_recommendation_requests'
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow
    )
    
    __table_args__ = (
        Index('idx_requests_user_created', 'user_id', 'created_at'),
    )
    
    def __repr__(self) -> str:
        return f"<RecommendationRequest(id={self.id}, user_id='{self.user_id}', created_at={self.created_at})>"


class UserListItem(Base):
    """
    Movie saved on one of a user's lists.
    
    Attributes:
        id: Primary key, auto-incremented
        user_id: Identifier of the user in the auth provider
        tmdb_id: TMDb movie ID
        list_type: 'watchlist' or 'favorite'
        created_at: Timestamp when the movie was added (UTC)
    """
    __tablename__ = 'user_lists'
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=False)
    list_type: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow
    )
    
    __table_args__ = (
        CheckConstraint("list_type IN ('watchlist', 'favorite')", name='check_list_type'),
        UniqueConstraint('user_id', 'tmdb_id', 'list_type', name='unique_user_list_movie'),
        Index('idx_user_lists_user', 'user_id'),
    )
    
    def __repr__(self) -> str:
        return f"<UserListItem(id={self.id}, user_id='{self.user_id}', tmdb_id={self.tmdb_id}, list_type='{self.list_type}')>"
