from collections.abc import Iterable
from typing import Any

from loguru import logger
from pydantic import ValidationError

from cinematch.core.constants import DISCOVER_PAGE, DISCOVER_SORT_BY, MAX_RECOMMENDATIONS
from cinematch.models.recommendation import RecommendationItem
from cinematch.services.tmdb.service import TMDBService


def to_recommendation_item(entry: dict[str, Any]) -> RecommendationItem | None:
    """Keep only the public fields of a discover entry.

    Vote counts, language, adult flag and the rest are dropped.
    """
    movie_id = entry.get("id")
    title = entry.get("title")
    if movie_id is None or not title:
        return None

    try:
        vote_average = float(entry.get("vote_average") or 0.0)
    except (TypeError, ValueError):
        vote_average = 0.0

    try:
        return RecommendationItem(
            id=movie_id,
            title=title,
            poster_path=entry.get("poster_path") or None,
            overview=entry.get("overview") or "",
            release_date=entry.get("release_date") or None,
            vote_average=min(max(vote_average, 0.0), 10.0),
        )
    except ValidationError as e:
        logger.warning(f"Skipping malformed discover entry {movie_id!r}: {e.error_count()} invalid field(s)")
        return None


def _is_excluded(entry: dict[str, Any], excluded: set[int]) -> bool:
    movie_id = entry.get("id")
    return isinstance(movie_id, int) and movie_id in excluded


class DiscoveryQuery:
    """Runs the popularity-sorted genre discovery and shapes the first page."""

    def __init__(self, tmdb_service: TMDBService, limit: int = MAX_RECOMMENDATIONS):
        self.tmdb_service = tmdb_service
        self.limit = limit

    async def discover(
        self, genre_ids: Iterable[int], exclude_ids: Iterable[int] | None = None
    ) -> list[RecommendationItem]:
        genre_param = ",".join(str(gid) for gid in genre_ids)
        logger.info(f"Discovering movies with genres: {genre_param}")

        data = await self.tmdb_service.discover_movies(
            with_genres=genre_param, sort_by=DISCOVER_SORT_BY, page=DISCOVER_PAGE
        )
        results = data.get("results") if isinstance(data, dict) else None
        results = results if isinstance(results, list) else []
        logger.info(f"Discover returned {len(results)} results")

        excluded = set(exclude_ids or ())
        candidates = [e for e in results if isinstance(e, dict) and not _is_excluded(e, excluded)]

        items: list[RecommendationItem] = []
        for entry in candidates[: self.limit]:
            item = to_recommendation_item(entry)
            if item is not None:
                items.append(item)
        return items
