"""Pydantic schemas for movies."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from movie_api.schemas.base import TimestampedResponse


class MovieCreate(BaseModel):
    """Schema for creating a movie. Only the title is required."""

    title: Annotated[str, Field(min_length=1)]
    year: int | None = None
    genre: str | None = None
    description: str | None = None
    director: str | None = None
    rating: float = 0


class MovieUpdate(BaseModel):
    """Schema for a partial movie update; only fields sent are applied."""

    title: Annotated[str, Field(min_length=1)] | None = None
    year: int | None = None
    genre: str | None = None
    description: str | None = None
    director: str | None = None
    rating: float | None = None

    @field_validator("title", "rating")
    @classmethod
    def reject_null(cls, v: object) -> object:
        # Runs only for values actually sent; an explicit null would drop a required column.
        if v is None:
            raise ValueError("may not be null")
        return v


class MovieResponse(TimestampedResponse):
    """Schema for movie response."""

    id: UUID
    title: str
    year: int | None = None
    genre: str | None = None
    description: str | None = None
    director: str | None = None
    rating: float
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
