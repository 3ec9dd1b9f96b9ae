"""Pydantic schemas package."""

from movie_api.schemas.auth import AuthResponse, CurrentUserResponse, LoginRequest, RegisterRequest
from movie_api.schemas.base import BaseResponse, MessageResponse
from movie_api.schemas.movie import MovieCreate, MovieResponse, MovieUpdate

__all__ = [
    "AuthResponse",
    "BaseResponse",
    "CurrentUserResponse",
    "LoginRequest",
    "MessageResponse",
    "MovieCreate",
    "MovieResponse",
    "MovieUpdate",
    "RegisterRequest",
]
