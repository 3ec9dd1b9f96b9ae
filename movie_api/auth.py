"""Request preconditions: bearer-token authentication and the admin gate.

Each gate is an async check ``(request, db, principal) -> GateResult``. Routes
declare the ordered list of checks they need via ``require(...)``; the first
failing check ends the request with its status and reason.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.context import get_context
from movie_api.database import get_db
from movie_api.logger import get_logger
from movie_api.models import User
from movie_api.security import InvalidTokenError
from movie_api.services import credentials
from movie_api.utils.exceptions import raise_forbidden, raise_unauthorized

logger = get_logger(__name__)

NO_TOKEN = "No token, authorization denied"
TOKEN_FAILED = "Not authorized, token failed"
ADMIN_ONLY = "Admin only"


@dataclass(frozen=True)
class Principal:
    """Identity resolved so far for the current request."""

    user: User | None = None


@dataclass(frozen=True)
class GateResult:
    principal: Principal
    status_code: int | None = None
    reason: str | None = None

    @property
    def passed(self) -> bool:
        return self.status_code is None

    @classmethod
    def ok(cls, principal: Principal) -> "GateResult":
        return cls(principal=principal)

    @classmethod
    def fail(cls, principal: Principal, status_code: int, reason: str) -> "GateResult":
        return cls(principal=principal, status_code=status_code, reason=reason)


Precondition = Callable[[Request, AsyncSession, Principal], Awaitable[GateResult]]


async def auth_gate(request: Request, db: AsyncSession, principal: Principal) -> GateResult:
    """Resolve the bearer token to a user.

    A valid token whose user no longer exists still passes, with ``user=None``.
    """
    header = request.headers.get("Authorization")
    if not header or not header.startswith("Bearer"):
        return GateResult.fail(principal, status.HTTP_401_UNAUTHORIZED, NO_TOKEN)

    parts = header.split(" ")
    token = parts[1] if len(parts) > 1 else ""

    try:
        user_id = get_context(request).tokens.verify(token)
    except InvalidTokenError:
        return GateResult.fail(principal, status.HTTP_401_UNAUTHORIZED, TOKEN_FAILED)

    user = await credentials.find_by_id(db, user_id)
    return GateResult.ok(replace(principal, user=user))


async def admin_gate(request: Request, db: AsyncSession, principal: Principal) -> GateResult:
    if principal.user is None or principal.user.is_admin is not True:
        return GateResult.fail(principal, status.HTTP_403_FORBIDDEN, ADMIN_ONLY)
    return GateResult.ok(principal)


async def run_preconditions(
    checks: tuple[Precondition, ...],
    request: Request,
    db: AsyncSession,
) -> GateResult:
    """Run checks in order, stopping at the first failure."""
    result = GateResult.ok(Principal())
    for check in checks:
        result = await check(request, db, result.principal)
        if not result.passed:
            logger.info(
                "Precondition failed",
                check=check.__name__,
                status_code=result.status_code,
                reason=result.reason,
            )
            return result
    return result


def require(*checks: Precondition) -> Callable[..., Awaitable[Principal]]:
    """Build a FastAPI dependency enforcing ``checks`` in the given order."""

    async def dependency(request: Request, db: AsyncSession = Depends(get_db)) -> Principal:
        result = await run_preconditions(checks, request, db)
        if result.status_code == status.HTTP_401_UNAUTHORIZED:
            raise_unauthorized(result.reason)
        if result.status_code == status.HTTP_403_FORBIDDEN:
            raise_forbidden(result.reason)
        if not result.passed:
            raise HTTPException(status_code=result.status_code, detail=result.reason)
        return result.principal

    dependency.__name__ = "require_" + "_".join(check.__name__ for check in checks)
    return dependency


require_user = require(auth_gate)
require_admin = require(auth_gate, admin_gate)
