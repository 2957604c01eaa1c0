"""TMDb API client for fetching Studio Ghibli film metadata."""

import logging
from typing import Any

import httpx

from ghiblihub.config import settings

logger = logging.getLogger(__name__)

STUDIO_GHIBLI_COMPANY_ID = 10342


class TMDbClient:
    """Client for The Movie Database (TMDb) API."""

    BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

    def __init__(self, api_key: str | None = None) -> None:
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb API key (uses settings if not provided)
        """
        self.api_key = api_key or settings.tmdb_api_key
        if not self.api_key:
            logger.warning("TMDb API key not configured")

    async def discover_studio_films(
        self,
        company_id: int = STUDIO_GHIBLI_COMPANY_ID,
        page: int = 1,
    ) -> dict[str, Any] | None:
        """
        Fetch one page of films produced by a company, oldest first.

        Args:
            company_id: TMDb production company ID (Studio Ghibli by default)
            page: 1-based results page

        Returns:
            The raw discover payload (``results``, ``page``, ``total_pages``)
            or None on error
        """
        if not self.api_key:
            logger.warning("Cannot query TMDb without API key")
            return None

        params: dict[str, Any] = {
            "api_key": self.api_key,
            "language": "en-US",
            "with_companies": company_id,
            "sort_by": "primary_release_date.asc",
            "page": page,
        }

        try:
            async with httpx.AsyncClient(timeout=settings.tmdb_timeout) as client:
                response = await client.get(f"{self.BASE_URL}/discover/movie", params=params)
                response.raise_for_status()
                return response.json()

        except Exception as e:
            logger.error(f"TMDb discover error for company {company_id} page {page}: {e}")
            return None

    async def get_film_details(self, tmdb_id: int) -> dict[str, Any] | None:
        """
        Get detailed film information including credits and translations.

        Args:
            tmdb_id: TMDb film ID

        Returns:
            Film details or None if error
        """
        if not self.api_key:
            logger.warning("Cannot fetch TMDb details without API key")
            return None

        params = {
            "api_key": self.api_key,
            "language": "en-US",
            "append_to_response": "credits,translations",
        }

        try:
            async with httpx.AsyncClient(timeout=settings.tmdb_timeout) as client:
                response = await client.get(f"{self.BASE_URL}/movie/{tmdb_id}", params=params)
                response.raise_for_status()
                return response.json()

        except Exception as e:
            logger.error(f"TMDb details error for ID {tmdb_id}: {e}")
            return None

    def extract_director(self, credits: dict[str, Any]) -> str | None:
        """First crew member credited as Director, if any."""
        for person in credits.get("crew", []):
            if person.get("job") == "Director" and person.get("name"):
                return person["name"]
        return None

    def extract_translated_title(self, film_data: dict[str, Any], language: str = "zh") -> str | None:
        """
        Title from TMDb translations for an ISO 639-1 language code.

        Prefers the mainland Chinese (CN) translation when several exist.
        """
        translations = film_data.get("translations", {}).get("translations", [])
        matches = [
            t for t in translations
            if t.get("iso_639_1") == language and t.get("data", {}).get("title")
        ]
        if not matches:
            return None
        matches.sort(key=lambda t: t.get("iso_3166_1") != "CN")
        return matches[0]["data"]["title"]

    def image_url(self, path: str | None, size: str = "w500") -> str | None:
        if not path:
            return None
        return f"{self.IMAGE_BASE_URL}/{size}{path}"
