"""
Startup bootstrap.

Runs before the server accepts traffic:
1. Bootloader.validate -> static config + database connectivity (fail fast)
2. init_db -> create tables when missing
3. ensure_default_admin -> guarantee the reserved admin account exists
"""

import asyncio
import sys
import time
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_api.config import DEV_SECRET_KEY, Settings, get_settings
from movie_api.context import AppContext
from movie_api.database import Base
from movie_api.logger import async_log_timing, configure_logging, get_logger
from movie_api.models import User
from movie_api.security import hash_password
from movie_api.services import credentials

logger = get_logger(__name__)


class BootMode(str, Enum):
    CRITICAL = "critical"  # Config + DB, exits the process on failure
    DRY_RUN = "dry-run"  # Static config check only


@dataclass
class ServiceStatus:
    service: str
    status: str  # 'ok', 'error', 'skipped'
    message: str
    duration_ms: float = 0.0


class Bootloader:
    """Handles environment validation and service connectivity checks."""

    @staticmethod
    async def validate(context: AppContext, mode: BootMode = BootMode.CRITICAL) -> bool:
        """Run validation checks. Returns True if passed, False if failed.

        If mode is CRITICAL, this calls sys.exit(1) on failure.
        """
        logger.info("Bootloader starting validation", mode=mode.value)

        if not Bootloader._check_static_config(context.settings):
            if mode == BootMode.CRITICAL:
                logger.critical("Static configuration check failed. Refusing to start.")
                sys.exit(1)
            return False

        if mode == BootMode.DRY_RUN:
            return True

        res = await Bootloader._check_database(context)
        if res.status == "error":
            logger.error(
                "Service check failed",
                service=res.service,
                error=res.message,
                duration_ms=res.duration_ms,
            )
            if mode == BootMode.CRITICAL:
                logger.critical("Database unreachable. Application cannot start.")
                sys.exit(1)
            return False

        logger.info("Service check passed", service=res.service, duration_ms=res.duration_ms)
        logger.info("Bootloader validation successful")
        return True

    @staticmethod
    def _check_static_config(settings: Settings) -> bool:
        """Verify settings are usable for the current environment.

        Blank values are already rejected when Settings is built.
        """
        if settings.is_production and settings.secret_key == DEV_SECRET_KEY:
            logger.error("Configuration load failed", error="JWT_SECRET must be set in production")
            return False
        return True

    @staticmethod
    async def _check_database(context: AppContext) -> ServiceStatus:
        """Verify database connectivity (SELECT 1)."""
        start = time.perf_counter()
        try:
            async with context.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "ok", "Connection successful", duration_ms)

        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "error", str(e), duration_ms)


async def init_db(context: AppContext) -> None:
    """Create missing tables."""
    async with async_log_timing("create_tables", logger=logger):
        async with context.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def ensure_default_admin(
    session_maker: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> User | None:
    """Create the reserved admin account if its email is not registered yet.

    Returns the created user, or None when it already existed.
    """
    email = settings.default_admin_email
    async with session_maker() as session:
        if await credentials.find_by_email(session, email) is not None:
            logger.info("Default admin already exists", email=email)
            return None

        admin = User(
            name=settings.default_admin_name,
            email=email,
            password_hash=hash_password(settings.default_admin_password),
            is_admin=True,
        )
        session.add(admin)
        try:
            await session.commit()
        except IntegrityError:
            # A concurrent bootstrap inserted it first
            await session.rollback()
            logger.info("Default admin already exists", email=email)
            return None
        await session.refresh(admin)

    logger.warning(
        "Default admin created with well-known credentials; change the password",
        email=email,
        user_id=str(admin.id),
    )
    return admin


async def bootstrap(context: AppContext, mode: BootMode = BootMode.CRITICAL) -> bool:
    """Full startup sequence used by the application lifespan and the CLI."""
    if not await Bootloader.validate(context, mode=mode):
        return False
    if mode == BootMode.DRY_RUN:
        return True
    await init_db(context)
    await ensure_default_admin(context.session_maker, context.settings)
    return True


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", type=str, default="critical", choices=["critical", "dry-run"])
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)
    print(f"Bootloader: Running startup bootstrap (mode={args.mode})")

    async def _run() -> bool:
        context = AppContext.from_settings(settings)
        try:
            return await bootstrap(context, BootMode(args.mode))
        finally:
            await context.dispose()

    try:
        success = asyncio.run(_run())
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(130)

    if success:
        print("✅ Bootstrap passed.")
        sys.exit(0)
    else:
        print("❌ Bootstrap failed.")
        sys.exit(1)
