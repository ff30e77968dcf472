"""
API route handlers.
"""

from mymovies.api.routers import movies, ratings, lists, recommendations, system

__all__ = ["movies", "ratings", "lists", "recommendations", "system"]
