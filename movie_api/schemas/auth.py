"""Pydantic schemas for authentication."""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, Field

from movie_api.schemas.base import BaseResponse, TimestampedResponse


class RegisterRequest(BaseModel):
    """Schema for user registration.

    Email format and password strength are not checked; name, email and
    password only have to be present and non-empty.
    """

    name: Annotated[str, Field(min_length=1)]
    email: Annotated[str, Field(min_length=1)]
    password: Annotated[str, Field(min_length=1)]
    is_admin: Any = Field(default=None, alias="isAdmin")

    @property
    def requested_admin(self) -> bool:
        # Only a literal JSON true grants the flag; "true", 1, etc. do not.
        return self.is_admin is True


class LoginRequest(BaseModel):
    """Schema for user login."""

    email: str
    password: str


class AuthResponse(BaseResponse):
    """Schema for auth response - returns user info and JWT token."""

    id: UUID
    name: str
    email: str
    is_admin: bool = Field(alias="isAdmin")
    token: str


class CurrentUserResponse(TimestampedResponse):
    """Profile of the authenticated user (no password hash)."""

    id: UUID
    name: str
    email: str
    is_admin: bool = Field(alias="isAdmin")
    created_at: datetime = Field(alias="createdAt")
