"""Pydantic schemas for the quick search box."""

from typing import Literal

from ghiblihub.schemas.base import CamelModel


class QuickSearchResult(CamelModel):
    id: str
    type: Literal["movie", "character", "guide"]
    title: str
    subtitle: str
    image_url: str | None = None
    url: str
    relevance_score: float


class QuickSearchResponse(CamelModel):
    results: list[QuickSearchResult]
    suggestions: list[str]
    total: int
    query: str
