"""Watch guide API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ghiblihub.database import get_db
from ghiblihub.exceptions import NotFoundError
from ghiblihub.models import GuideType, WatchGuide, WatchGuideMovie
from ghiblihub.schemas import (
    GuideDetailResponse,
    GuideListResponse,
    GuideMovieEntry,
    GuideSummary,
    Pagination,
    RelatedGuide,
)
from ghiblihub.schemas.guide import GuideBase

router = APIRouter()

RELATED_GUIDE_LIMIT = 3


def parse_guide_type(value: str | None) -> GuideType | None:
    """Known guide type, or None so unknown values are ignored rather than rejected."""
    if value is None:
        return None
    try:
        return GuideType(value)
    except ValueError:
        return None


def guide_entries(guide: WatchGuide) -> list[GuideMovieEntry]:
    return [
        GuideMovieEntry.model_validate(entry)
        for entry in sorted(guide.movies, key=lambda e: e.order)
    ]


@router.get("/guides", response_model=GuideListResponse)
async def get_guides(
    guide_type: str | None = Query(None, alias="type", description="Guide type, e.g. BEGINNER"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> GuideListResponse:
    """Published guides with their ordered films."""
    conditions = [WatchGuide.is_published.is_(True)]
    parsed_type = parse_guide_type(guide_type)
    if parsed_type is not None:
        conditions.append(WatchGuide.guide_type == parsed_type)

    total = (
        await db.execute(select(func.count()).select_from(WatchGuide).where(*conditions))
    ).scalar_one()

    stmt = (
        select(WatchGuide)
        .where(*conditions)
        .options(selectinload(WatchGuide.movies).selectinload(WatchGuideMovie.movie))
        .order_by(WatchGuide.order.asc(), WatchGuide.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)

    guides = []
    for guide in result.scalars().all():
        entries = guide_entries(guide)
        guides.append(
            GuideSummary(
                **GuideBase.model_validate(guide).model_dump(),
                movie_count=len(entries),
                movies=entries,
            )
        )

    return GuideListResponse(guides=guides, pagination=Pagination.build(page, limit, total))


@router.get("/guides/{guide_id}", response_model=GuideDetailResponse)
async def get_guide(
    guide_id: str,
    db: AsyncSession = Depends(get_db),
) -> GuideDetailResponse:
    """
    A published guide with its films and up to three related guides.

    Related guides share the guide's type or are beginner guides, newest
    first. Drafts are reported as missing.
    """
    result = await db.execute(
        select(WatchGuide)
        .where(WatchGuide.id == guide_id, WatchGuide.is_published.is_(True))
        .options(selectinload(WatchGuide.movies).selectinload(WatchGuideMovie.movie))
    )
    guide = result.scalar_one_or_none()
    if guide is None:
        raise NotFoundError("Guide not found or not published")

    related_result = await db.execute(
        select(WatchGuide)
        .where(
            WatchGuide.is_published.is_(True),
            WatchGuide.id != guide.id,
            or_(
                WatchGuide.guide_type == guide.guide_type,
                WatchGuide.guide_type == GuideType.BEGINNER,
            ),
        )
        .options(selectinload(WatchGuide.movies).selectinload(WatchGuideMovie.movie))
        .order_by(WatchGuide.created_at.desc())
        .limit(RELATED_GUIDE_LIMIT)
    )

    related = []
    for other in related_result.scalars().all():
        entries = sorted(other.movies, key=lambda e: e.order)
        related.append(
            RelatedGuide(
                id=other.id,
                title=other.title,
                description=other.description,
                guide_type=other.guide_type,
                created_at=other.created_at,
                cover_image=entries[0].movie.poster_url if entries else None,
            )
        )

    return GuideDetailResponse(
        **GuideBase.model_validate(guide).model_dump(),
        movies=guide_entries(guide),
        related_guides=related,
    )
