"""Per-movie engagement counters."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.movie import Movie


class MovieStats(Base, TimestampMixin):
    """
    Derived counters for a movie.

    Created on the first stat event and only ever incremented in place by an
    INSERT ... ON CONFLICT DO UPDATE, never recomputed.
    """

    __tablename__ = "movie_stats"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    favorite_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    share_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    last_viewed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    movie: Mapped["Movie"] = relationship(back_populates="stats")

    def __repr__(self) -> str:
        return (
            f"<MovieStats(movie_id={self.movie_id!r}, views={self.view_count}, "
            f"favorites={self.favorite_count}, shares={self.share_count})>"
        )
