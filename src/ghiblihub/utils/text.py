"""Text utilities for building catalog identifiers."""

import re
import unicodedata


def slugify(text: str) -> str:
    """
    Convert text to a URL-safe slug.

    Accented Latin characters are folded to ASCII first, so "Château"
    becomes "chateau"; other non-ASCII characters are dropped.

    Args:
        text: Text to slugify

    Returns:
        Lowercase slug with hyphens
    """
    # Fold accents: "é" -> "e"
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")

    # Convert to lowercase
    text = text.lower()

    # Replace spaces and underscores with hyphens
    text = re.sub(r"[\s_]+", "-", text)

    # Remove non-alphanumeric characters (except hyphens)
    text = re.sub(r"[^a-z0-9-]", "", text)

    # Remove multiple consecutive hyphens
    text = re.sub(r"-+", "-", text)

    # Strip leading/trailing hyphens
    text = text.strip("-")

    return text


def movie_slug(title: str, year: int | None) -> str:
    """Stable movie identifier, e.g. ("Spirited Away", 2001) -> "spirited-away-2001"."""
    slug = slugify(title)
    return f"{slug}-{year}" if year else slug


def relevance_score(query: str, texts: list[str | None]) -> float:
    """
    Score how well ``query`` matches a set of fields, summed over the fields.

    Per field: exact match 100, prefix 80, substring 60 plus up to 20 the
    earlier it occurs, otherwise up to 40 for the share of query words that
    overlap a word in the field. Matching ignores case; empty fields score 0.
    """
    query_lower = query.lower()
    query_words = query_lower.split()
    score = 0.0

    for text in texts:
        if not text:
            continue
        text_lower = text.lower()

        if text_lower == query_lower:
            score += 100
        elif text_lower.startswith(query_lower):
            score += 80
        elif query_lower in text_lower:
            index = text_lower.index(query_lower)
            score += 60 + (len(text_lower) - index) / len(text_lower) * 20
        elif query_words:
            text_words = text_lower.split()
            matches = [
                qw for qw in query_words
                if any(qw in tw or tw in qw for tw in text_words)
            ]
            score += len(matches) / len(query_words) * 40

    return score
