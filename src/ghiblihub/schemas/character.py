"""Pydantic schemas for characters."""

from ghiblihub.schemas.base import CamelModel
from ghiblihub.schemas.movie import MovieSummary
from ghiblihub.schemas.pagination import Pagination


class CharacterBase(CamelModel):
    id: str
    name: str
    name_ja: str | None = None
    name_zh: str | None = None
    description: str | None = None
    image_url: str | None = None
    is_main_character: bool


class CharacterAppearance(CamelModel):
    """A character's role in one film."""

    voice_actor: str | None = None
    voice_actor_ja: str | None = None
    importance: int = 0
    movie: MovieSummary


class CharacterResponse(CharacterBase):
    """
    Character list item.

    When listed for a single movie the appearance fields (voice actors,
    importance, movie) are filled in directly; otherwise ``movie_characters``
    lists every appearance.
    """

    voice_actor: str | None = None
    voice_actor_ja: str | None = None
    importance: int | None = None
    movie: MovieSummary | None = None
    movie_characters: list[CharacterAppearance] = []


class CharacterListResponse(CamelModel):
    characters: list[CharacterResponse]
    pagination: Pagination


class CharacterMovie(MovieSummary):
    voice_actor: str | None = None
    voice_actor_ja: str | None = None
    importance: int = 0


class CharacterDetailResponse(CharacterBase):
    movies: list[CharacterMovie]
    related_characters: list[CharacterResponse]
