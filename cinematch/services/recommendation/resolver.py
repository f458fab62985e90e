from typing import Any

from loguru import logger
from pydantic import ValidationError

from cinematch.core.base_client import CatalogClientError
from cinematch.models.recommendation import CatalogMatch
from cinematch.services.tmdb.genre import genre_names
from cinematch.services.tmdb.service import TMDBService


class TitleResolver:
    """
    Maps a free-text title to its first TMDB search result.

    Never raises for a missing title or an upstream failure; both return None so
    one bad title only contributes no genres to the batch.
    """

    def __init__(self, tmdb_service: TMDBService):
        self.tmdb_service = tmdb_service

    async def resolve(self, title: str) -> CatalogMatch | None:
        try:
            data = await self.tmdb_service.search_movie(title)
        except CatalogClientError as e:
            logger.error(f"Error fetching genres for '{title}': {e}")
            return None

        try:
            match = self._first_match(data)
        except ValidationError as e:
            logger.error(f"Malformed search result for '{title}': {e.error_count()} invalid field(s)")
            return None
        if match is None:
            logger.warning(f"No result found for '{title}'")
            return None

        logger.info(
            f"Genres for '{title}' -> '{match.title}' ({match.tmdb_id}): "
            f"{sorted(match.genre_ids)} {genre_names(match.genre_ids)}"
        )
        return match

    @staticmethod
    def _first_match(data: Any) -> CatalogMatch | None:
        if not isinstance(data, dict):
            return None
        results = data.get("results") or []
        if not isinstance(results, list) or not results:
            return None

        # TMDB ranks search results by relevance; the first one is taken as-is
        first = results[0]
        if not isinstance(first, dict) or first.get("id") is None:
            return None

        genre_ids = first.get("genre_ids")
        if not isinstance(genre_ids, list):
            genre_ids = []
        return CatalogMatch(
            tmdb_id=first["id"],
            title=first.get("title"),
            genre_ids=frozenset(g for g in genre_ids if isinstance(g, int)),
        )
