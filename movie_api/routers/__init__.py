"""API routers package."""

from movie_api.routers import auth, movies

__all__ = [
    "auth",
    "movies",
]
