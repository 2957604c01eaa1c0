"""Pydantic schemas for movie engagement stats."""

from datetime import datetime

from pydantic import Field

from ghiblihub.schemas.base import CamelModel


class MovieStatsResponse(CamelModel):
    view_count: int = 0
    favorite_count: int = 0
    share_count: int = 0
    last_viewed: datetime | None = None


class StatEventRequest(CamelModel):
    """POST body: ``{"movieId": ..., "action": "view" | "favorite" | "share"}``."""

    movie_id: str = Field(min_length=1)
    action: str = Field(min_length=1)


class StatEventResponse(CamelModel):
    success: bool
    stats: MovieStatsResponse
