"""Database configuration and session management."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from movie_api.config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the process-wide engine for the configured database."""
    if settings.database_url.startswith("sqlite"):
        # SQLite (local runs and tests): one shared connection so in-memory data survives sessions
        return create_async_engine(
            settings.database_url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=10,  # Max persistent connections
        max_overflow=20,  # Additional transient connections under load
        pool_recycle=3600,  # Recycle connections after 1 hour
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session bound to the application context."""
    maker = request.app.state.context.session_maker
    async with maker() as session:
        try:
            yield session
        finally:
            await session.close()
