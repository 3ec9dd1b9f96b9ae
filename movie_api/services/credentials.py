"""Credential store: user persistence, password hashing and verification."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from movie_api.logger import get_logger
from movie_api.models import User
from movie_api.security import hash_password, verify_password

logger = get_logger(__name__)


class CredentialError(Exception):
    """Base exception for credential store errors."""


class DuplicateEmailError(CredentialError):
    """A user with this email already exists."""


class InvalidCredentialsError(CredentialError):
    """Unknown email or wrong password; the two are never distinguished."""


async def find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def find_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    """Load a user without its password hash; touching the hash raises."""
    result = await db.execute(
        select(User).where(User.id == user_id).options(defer(User.password_hash, raiseload=True))
    )
    return result.scalar_one_or_none()


async def register(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    is_admin: bool = False,
) -> User:
    """Create a user, hashing the password first.

    Raises DuplicateEmailError without writing when the email is taken.
    """
    if await find_by_email(db, email) is not None:
        raise DuplicateEmailError(email)

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        is_admin=is_admin is True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Another request created the same email between the check and the insert
        await db.rollback()
        raise DuplicateEmailError(email) from exc
    await db.refresh(user)

    logger.info("User registered", user_id=str(user.id), is_admin=user.is_admin)
    return user


async def verify_credentials(db: AsyncSession, email: str, password: str) -> User:
    user = await find_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user


async def set_password(db: AsyncSession, user: User, password: str) -> User:
    """Replace the stored hash with one derived from the new password."""
    user.password_hash = hash_password(password)
    await db.commit()
    await db.refresh(user)
    return user
