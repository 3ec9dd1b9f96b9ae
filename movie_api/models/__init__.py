"""SQLAlchemy models package."""

from movie_api.models.movie import Movie
from movie_api.models.user import User

__all__ = [
    "Movie",
    "User",
]
