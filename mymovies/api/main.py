"""
FastAPI application entry point for the MyMovies API.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mymovies.api.config import (
    get_api_host,
    get_api_port,
    get_cache_sweep_interval,
    get_log_file,
    get_log_level,
)
from mymovies.api.routers import movies, ratings, lists, recommendations, system
from mymovies.core.cache import TTLCache
from mymovies.utils.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(log_file=get_log_file(), level=get_log_level())
    yield
    app.state.metadata_cache.clear()


app = FastAPI(
    title="MyMovies API",
    description="Movie ratings, watchlists, and AI-generated recommendations",
    version="1.0.0",
    lifespan=lifespan,
)

# One cache per process, shared by every TMDb client through dependency injection
app.state.metadata_cache = TTLCache(sweep_interval=get_cache_sweep_interval())

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(movies.router)
app.include_router(ratings.router)
app.include_router(lists.router)
app.include_router(recommendations.router)
app.include_router(system.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "MyMovies API",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    uvicorn.run(app, host=get_api_host(), port=get_api_port())
