"""Movie model."""

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from movie_api.database import Base
from movie_api.models.base import TimestampMixin, UUIDMixin


class Movie(UUIDMixin, TimestampMixin, Base):
    """Catalog entry. Only the title is required."""

    __tablename__ = "movies"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    genre: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    director: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
