"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from movie_api.deps import AdminPrincipal, DbSession

    async def my_endpoint(db: DbSession, principal: AdminPrincipal):
        # db is AsyncSession with get_db dependency injected
        # principal has passed the auth and admin gates
        ...
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.auth import Principal, require_admin, require_user
from movie_api.context import AppContext, get_context
from movie_api.database import get_db

DbSession = Annotated[AsyncSession, Depends(get_db)]
Context = Annotated[AppContext, Depends(get_context)]
CurrentPrincipal = Annotated[Principal, Depends(require_user)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]

__all__ = ["AdminPrincipal", "Context", "CurrentPrincipal", "DbSession"]
