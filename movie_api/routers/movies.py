"""Movie catalog API router.

Reads are public; create, update and delete require an admin bearer token.
"""

from fastapi import APIRouter, status

from movie_api.deps import AdminPrincipal, DbSession
from movie_api.logger import get_logger
from movie_api.schemas import MessageResponse, MovieCreate, MovieResponse, MovieUpdate
from movie_api.services import MovieNotFoundError, movies
from movie_api.services.movies import parse_movie_id
from movie_api.utils.exceptions import raise_not_found

router = APIRouter(prefix="/api/movies", tags=["movies"])
logger = get_logger(__name__)


@router.get("", response_model=list[MovieResponse])
async def list_movies(db: DbSession) -> list[MovieResponse]:
    """List every movie in the catalog."""
    items = await movies.list_movies(db)
    return [MovieResponse.model_validate(movie) for movie in items]


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(movie_id: str, db: DbSession) -> MovieResponse:
    try:
        movie = await movies.get_movie(db, parse_movie_id(movie_id))
    except MovieNotFoundError as exc:
        raise_not_found("Movie", cause=exc)
    return MovieResponse.model_validate(movie)


@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(
    principal: AdminPrincipal,
    db: DbSession,
    movie_data: MovieCreate,
) -> MovieResponse:
    movie = await movies.create_movie(db, movie_data)
    logger.info("Movie created", movie_id=str(movie.id), user_id=str(principal.user.id))
    return MovieResponse.model_validate(movie)


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(
    movie_id: str,
    principal: AdminPrincipal,
    db: DbSession,
    movie_data: MovieUpdate,
) -> MovieResponse:
    """Apply the fields present in the body; absent fields are left unchanged."""
    try:
        movie = await movies.update_movie(db, parse_movie_id(movie_id), movie_data)
    except MovieNotFoundError as exc:
        raise_not_found("Movie", cause=exc)
    logger.info("Movie updated", movie_id=str(movie.id), user_id=str(principal.user.id))
    return MovieResponse.model_validate(movie)


@router.delete("/{movie_id}", response_model=MessageResponse)
async def delete_movie(
    movie_id: str,
    principal: AdminPrincipal,
    db: DbSession,
) -> MessageResponse:
    """Delete a movie. Unknown ids succeed too; existence is not checked first."""
    deleted = await movies.delete_movie(db, parse_movie_id(movie_id))
    logger.info("Movie delete requested", movie_id=movie_id, deleted=deleted, user_id=str(principal.user.id))
    return MessageResponse(message="Movie deleted")
