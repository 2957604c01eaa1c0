"""Movie model for the Studio Ghibli catalog."""

from typing import TYPE_CHECKING

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.availability import Availability
    from ghiblihub.models.character import MovieCharacter
    from ghiblihub.models.movie_stats import MovieStats
    from ghiblihub.models.watch_guide import WatchGuideMovie


class Movie(Base, TimestampMixin):
    """
    Film model.

    Stores localized titles and TMDb-sourced metadata. Rows are written by the
    seeding scripts only; the API treats them as read-only.
    """

    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    tmdb_id: Mapped[int | None] = mapped_column(Integer, nullable=True, unique=True, index=True)

    # Localized titles
    title_en: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    title_ja: Mapped[str] = mapped_column(String(500), nullable=False)
    title_zh: Mapped[str | None] = mapped_column(String(500), nullable=True)

    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    director: Mapped[str | None] = mapped_column(String(200), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    synopsis: Mapped[str | None] = mapped_column(Text, nullable=True)
    poster_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    backdrop_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    vote_average: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    availabilities: Mapped[list["Availability"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )
    movie_characters: Mapped[list["MovieCharacter"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )
    stats: Mapped["MovieStats"] = relationship(
        back_populates="movie",
        uselist=False,
        cascade="all, delete-orphan",
    )
    guide_entries: Mapped[list["WatchGuideMovie"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id!r}, title_en={self.title_en!r}, year={self.year})>"
