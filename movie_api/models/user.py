"""User model."""

from sqlalchemy import Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column

from movie_api.database import Base
from movie_api.models.base import TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    """Catalog user. Only the password hash is stored, never the plaintext."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
