"""Service layer: credential and movie stores."""

from movie_api.services import credentials, movies
from movie_api.services.credentials import (
    CredentialError,
    DuplicateEmailError,
    InvalidCredentialsError,
)
from movie_api.services.movies import MovieNotFoundError, MovieServiceError

__all__ = [
    "CredentialError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "MovieNotFoundError",
    "MovieServiceError",
    "credentials",
    "movies",
]
