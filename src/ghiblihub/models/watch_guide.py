"""Watch guide models: curated, ordered viewing lists."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.movie import Movie


class GuideType(str, enum.Enum):
    CHRONOLOGICAL = "CHRONOLOGICAL"
    BEGINNER = "BEGINNER"
    THEMATIC = "THEMATIC"
    FAMILY = "FAMILY"
    ADVANCED = "ADVANCED"
    SEASONAL = "SEASONAL"


class WatchGuide(Base, TimestampMixin):
    """A published (or draft) viewing guide."""

    __tablename__ = "watch_guides"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    guide_type: Mapped[GuideType] = mapped_column(
        Enum(GuideType, name="guide_type"),
        nullable=False,
        index=True,
    )
    content: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    language: Mapped[str] = mapped_column(String(10), default="en", nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    order: Mapped[int] = mapped_column("order", Integer, default=0, nullable=False)

    movies: Mapped[list["WatchGuideMovie"]] = relationship(
        back_populates="guide",
        cascade="all, delete-orphan",
        order_by="WatchGuideMovie.order",
    )

    def __repr__(self) -> str:
        return f"<WatchGuide(id={self.id!r}, title={self.title!r}, type={self.guide_type})>"


class WatchGuideMovie(Base):
    """Position of a film within a guide."""

    __tablename__ = "watch_guide_movies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    guide_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("watch_guides.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    movie_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order: Mapped[int] = mapped_column("order", Integer, default=0, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    guide: Mapped["WatchGuide"] = relationship(back_populates="movies")
    movie: Mapped["Movie"] = relationship(back_populates="guide_entries")
