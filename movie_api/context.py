"""Process-wide application context.

Built once at startup from Settings and stored on ``app.state.context``.
Handlers and gates reach configuration, the database and the token service
through it instead of module globals.
"""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from movie_api.config import Settings
from movie_api.database import create_engine, create_session_maker
from movie_api.security import TokenService


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    tokens: TokenService

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = create_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_maker=create_session_maker(engine),
            tokens=TokenService.from_settings(settings),
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_context(request: Request) -> AppContext:
    return request.app.state.context
