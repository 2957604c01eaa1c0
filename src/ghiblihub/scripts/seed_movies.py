"""Import Studio Ghibli films from TMDb into the movies table."""

import asyncio
import logging
from typing import Any

from sqlalchemy import select

from ghiblihub.database import AsyncSessionLocal
from ghiblihub.models import Movie
from ghiblihub.services.tmdb_client import STUDIO_GHIBLI_COMPANY_ID, TMDbClient
from ghiblihub.utils.text import movie_slug

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)

# Pause between TMDb calls
REQUEST_DELAY_SECONDS = 0.25


def _extract_year(release_date: str | None) -> int | None:
    if not release_date:
        return None
    try:
        return int(release_date[:4])
    except (ValueError, IndexError):
        return None


def movie_fields(tmdb: TMDbClient, details: dict[str, Any]) -> dict[str, Any] | None:
    """
    Map a TMDb details payload onto Movie columns.

    Returns None when the film has no release year, since ``year`` is
    required. Optional fields TMDb leaves empty are omitted so an update
    never blanks out a value that is already stored.
    """
    year = _extract_year(details.get("release_date"))
    if year is None:
        return None

    fields: dict[str, Any] = {
        "tmdb_id": details["id"],
        "title_en": details.get("title") or details.get("original_title"),
        "title_ja": details.get("original_title") or details.get("title"),
        "year": year,
    }
    optional = {
        "title_zh": tmdb.extract_translated_title(details, "zh"),
        "director": tmdb.extract_director(details.get("credits", {})),
        "duration": details.get("runtime") or None,
        "synopsis": details.get("overview") or None,
        "poster_url": tmdb.image_url(details.get("poster_path"), "w500"),
        "backdrop_url": tmdb.image_url(details.get("backdrop_path"), "w1280"),
        "vote_average": details.get("vote_average"),
    }
    fields.update({key: value for key, value in optional.items() if value is not None})
    return fields


async def discover_all(tmdb: TMDbClient) -> list[dict[str, Any]]:
    """Walk every discover page for the studio."""
    films: list[dict[str, Any]] = []
    page = 1
    total_pages = 1

    while page <= total_pages:
        payload = await tmdb.discover_studio_films(STUDIO_GHIBLI_COMPANY_ID, page)
        if payload is None:
            break
        films.extend(payload.get("results", []))
        total_pages = payload.get("total_pages", 1)
        logger.info(f"Fetched page {page} of {total_pages}, {len(films)} films so far")
        page += 1
        await asyncio.sleep(REQUEST_DELAY_SECONDS)

    return films


async def seed_movies() -> None:
    tmdb = TMDbClient()
    if not tmdb.api_key:
        logger.error("TMDB_API_KEY not set, cannot seed movies")
        return

    films = await discover_all(tmdb)
    logger.info(f"Found {len(films)} Studio Ghibli films on TMDb")

    created = 0
    updated = 0
    failed = 0

    for film in films:
        details = await tmdb.get_film_details(film["id"])
        await asyncio.sleep(REQUEST_DELAY_SECONDS)
        if not details:
            logger.warning(f"Skipping TMDb ID {film['id']}: no details")
            failed += 1
            continue

        fields = movie_fields(tmdb, details)
        if fields is None:
            logger.warning(f"Skipping {details.get('title')!r}: no release date")
            failed += 1
            continue

        try:
            async with AsyncSessionLocal() as db:
                result = await db.execute(select(Movie).where(Movie.tmdb_id == fields["tmdb_id"]))
                movie = result.scalar_one_or_none()

                if movie is None:
                    db.add(Movie(id=movie_slug(fields["title_en"], fields["year"]), **fields))
                    created += 1
                else:
                    for key, value in fields.items():
                        setattr(movie, key, value)
                    updated += 1

                await db.commit()
        except Exception as e:
            logger.warning(f"Could not save {fields['title_en']!r}: {e}")
            failed += 1
            continue

        logger.info(f"Saved {fields['title_en']!r} ({fields['year']})")

    logger.info(f"Done, created {created}, updated {updated}, failed {failed}")


if __name__ == "__main__":
    asyncio.run(seed_movies())
