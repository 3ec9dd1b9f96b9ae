"""Authentication API router."""

from fastapi import APIRouter, Request, status

from movie_api.deps import Context, CurrentPrincipal, DbSession
from movie_api.logger import get_logger
from movie_api.models import User
from movie_api.schemas.auth import AuthResponse, CurrentUserResponse, LoginRequest, RegisterRequest
from movie_api.services import credentials
from movie_api.services.credentials import DuplicateEmailError, InvalidCredentialsError
from movie_api.utils.exceptions import raise_bad_request, raise_not_found, raise_unauthorized

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = get_logger(__name__)


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        token=token,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: DbSession,
    context: Context,
) -> AuthResponse:
    """Register a new user and return a bearer token for it."""
    try:
        user = await credentials.register(
            db,
            name=data.name,
            email=data.email,
            password=data.password,
            is_admin=data.requested_admin,
        )
    except DuplicateEmailError as exc:
        raise_bad_request("User already exists", cause=exc)

    return _auth_response(user, context.tokens.issue(user.id))


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    data: LoginRequest,
    db: DbSession,
    context: Context,
) -> AuthResponse:
    """Login with email and password."""
    try:
        user = await credentials.verify_credentials(db, data.email, data.password)
    except InvalidCredentialsError as exc:
        logger.warning("Failed login attempt", client_ip=_client_ip(request))
        raise_unauthorized("Invalid email or password", cause=exc)

    logger.info("Successful login", user_id=str(user.id), client_ip=_client_ip(request))
    return _auth_response(user, context.tokens.issue(user.id))


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(principal: CurrentPrincipal) -> CurrentUserResponse:
    """Get current authenticated user."""
    if principal.user is None:
        raise_not_found("User")
    return CurrentUserResponse.model_validate(principal.user)
