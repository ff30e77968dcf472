"""
MyMovies application package.

This package contains the web API, the TMDb and OpenRouter clients,
the AI recommendation flow, database operations, and utilities.
"""

__version__ = "1.0.0"
