"""Character models and the movie/character join table."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.movie import Movie


class Character(Base, TimestampMixin):
    """A character appearing in one or more films."""

    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    name_ja: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_zh: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_main_character: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    movie_characters: Mapped[list["MovieCharacter"]] = relationship(
        back_populates="character",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Character(id={self.id!r}, name={self.name!r})>"


class MovieCharacter(Base):
    """
    Appearance of a character in a film.

    Carries the per-film voice cast and an importance score used for ordering.
    """

    __tablename__ = "movie_characters"
    __table_args__ = (UniqueConstraint("movie_id", "character_id", name="uq_movie_character"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    character_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("characters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    voice_actor: Mapped[str | None] = mapped_column(String(200), nullable=True)
    voice_actor_ja: Mapped[str | None] = mapped_column(String(200), nullable=True)
    importance: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    movie: Mapped["Movie"] = relationship(back_populates="movie_characters")
    character: Mapped["Character"] = relationship(back_populates="movie_characters")

    def __repr__(self) -> str:
        return f"<MovieCharacter(movie_id={self.movie_id!r}, character_id={self.character_id!r})>"
