"""Character API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from ghiblihub.database import get_db
from ghiblihub.exceptions import NotFoundError
from ghiblihub.models import Character, MovieCharacter
from ghiblihub.schemas import (
    CharacterAppearance,
    CharacterDetailResponse,
    CharacterListResponse,
    CharacterMovie,
    CharacterResponse,
    MovieSummary,
    Pagination,
)
from ghiblihub.schemas.character import CharacterBase

router = APIRouter()

RELATED_CHARACTER_LIMIT = 6


def character_filters(search: str | None, is_main_character: bool | None) -> list:
    conditions = []
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(
                Character.name.ilike(pattern),
                Character.name_ja.ilike(pattern),
                Character.name_zh.ilike(pattern),
                Character.description.ilike(pattern),
            )
        )
    if is_main_character is not None:
        conditions.append(Character.is_main_character == is_main_character)
    return conditions


def to_character_response(character: Character) -> CharacterResponse:
    """Character with every appearance, most important first."""
    appearances = sorted(character.movie_characters, key=lambda mc: mc.importance, reverse=True)
    return CharacterResponse(
        **CharacterBase.model_validate(character).model_dump(),
        movie_characters=[
            CharacterAppearance(
                voice_actor=mc.voice_actor,
                voice_actor_ja=mc.voice_actor_ja,
                importance=mc.importance,
                movie=MovieSummary.model_validate(mc.movie),
            )
            for mc in appearances
        ],
    )


@router.get("/characters", response_model=CharacterListResponse)
async def get_characters(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    movie_id: str | None = Query(None, alias="movieId"),
    is_main_character: bool | None = Query(None, alias="isMainCharacter"),
    search: str | None = Query(None, description="Match name, localized names or description"),
    db: AsyncSession = Depends(get_db),
) -> CharacterListResponse:
    """
    Paginated character list.

    With ``movieId`` the list comes from that film's cast, ordered by
    importance, and each item carries its voice actors for the film.
    """
    conditions = character_filters(search, is_main_character)
    skip = (page - 1) * limit

    if movie_id:
        base = (
            select(MovieCharacter)
            .join(MovieCharacter.character)
            .where(MovieCharacter.movie_id == movie_id, *conditions)
        )
        total = (await db.execute(select(func.count()).select_from(base.subquery()))).scalar_one()

        stmt = (
            base.options(
                contains_eager(MovieCharacter.character),
                selectinload(MovieCharacter.movie),
            )
            .order_by(
                MovieCharacter.importance.desc(),
                Character.is_main_character.desc(),
                Character.name,
            )
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        characters = [
            CharacterResponse(
                **CharacterBase.model_validate(mc.character).model_dump(),
                voice_actor=mc.voice_actor,
                voice_actor_ja=mc.voice_actor_ja,
                importance=mc.importance,
                movie=MovieSummary.model_validate(mc.movie),
            )
            for mc in result.scalars().all()
        ]
    else:
        base = select(Character).where(*conditions)
        total = (await db.execute(select(func.count()).select_from(base.subquery()))).scalar_one()

        stmt = (
            base.options(selectinload(Character.movie_characters).selectinload(MovieCharacter.movie))
            .order_by(Character.is_main_character.desc(), Character.name)
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        characters = [to_character_response(c) for c in result.scalars().all()]

    return CharacterListResponse(
        characters=characters,
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/characters/{character_id}", response_model=CharacterDetailResponse)
async def get_character(
    character_id: str,
    db: AsyncSession = Depends(get_db),
) -> CharacterDetailResponse:
    """Character with the films it appears in and up to six co-stars."""
    result = await db.execute(
        select(Character)
        .where(Character.id == character_id)
        .options(selectinload(Character.movie_characters).selectinload(MovieCharacter.movie))
    )
    character = result.scalar_one_or_none()
    if character is None:
        raise NotFoundError("Character not found")

    appearances = sorted(character.movie_characters, key=lambda mc: mc.importance, reverse=True)
    movie_ids = [mc.movie_id for mc in appearances]

    related: list[CharacterResponse] = []
    if movie_ids:
        related_result = await db.execute(
            select(Character)
            .where(
                Character.id != character.id,
                Character.movie_characters.any(MovieCharacter.movie_id.in_(movie_ids)),
            )
            .options(selectinload(Character.movie_characters).selectinload(MovieCharacter.movie))
            .order_by(Character.is_main_character.desc(), Character.name)
            .limit(RELATED_CHARACTER_LIMIT)
        )
        related = [to_character_response(c) for c in related_result.scalars().all()]

    return CharacterDetailResponse(
        **CharacterBase.model_validate(character).model_dump(),
        movies=[
            CharacterMovie(
                **MovieSummary.model_validate(mc.movie).model_dump(),
                voice_actor=mc.voice_actor,
                voice_actor_ja=mc.voice_actor_ja,
                importance=mc.importance,
            )
            for mc in appearances
        ],
        related_characters=related,
    )
