"""Movie store."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.models import Movie
from movie_api.schemas.movie import MovieCreate, MovieUpdate


class MovieServiceError(Exception):
    """Base exception for movie service errors."""


class MovieNotFoundError(MovieServiceError):
    """Movie not found error."""


def parse_movie_id(raw: str) -> UUID | None:
    """Path ids that are not UUIDs cannot name a stored movie."""
    try:
        return UUID(raw)
    except ValueError:
        return None


async def list_movies(db: AsyncSession) -> list[Movie]:
    result = await db.execute(select(Movie).order_by(Movie.created_at, Movie.id))
    return list(result.scalars().all())


async def get_movie(db: AsyncSession, movie_id: UUID | None) -> Movie:
    movie = await db.get(Movie, movie_id) if movie_id is not None else None
    if movie is None:
        raise MovieNotFoundError(f"Movie {movie_id} not found")
    return movie


async def create_movie(db: AsyncSession, movie_data: MovieCreate) -> Movie:
    movie = Movie(**movie_data.model_dump())
    db.add(movie)
    await db.commit()
    await db.refresh(movie)
    return movie


async def update_movie(db: AsyncSession, movie_id: UUID | None, movie_data: MovieUpdate) -> Movie:
    movie = await get_movie(db, movie_id)
    update_data = movie_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        if hasattr(movie, field):
            setattr(movie, field, value)

    await db.commit()
    await db.refresh(movie)
    return movie


async def delete_movie(db: AsyncSession, movie_id: UUID | None) -> bool:
    """Delete by id. Missing ids are not an error; returns whether a row was removed."""
    if movie_id is None:
        return False
    result = await db.execute(delete(Movie).where(Movie.id == movie_id))
    await db.commit()
    return bool(result.rowcount)
