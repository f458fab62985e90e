import asyncio
from typing import Any

from loguru import logger

from cinematch.core.constants import INVALID_REQUEST_MESSAGE
from cinematch.models.recommendation import CatalogMatch, GenreSignal, RecommendationItem
from cinematch.services.recommendation.aggregator import aggregate
from cinematch.services.recommendation.discovery import DiscoveryQuery
from cinematch.services.recommendation.resolver import TitleResolver
from cinematch.services.tmdb.service import TMDBService


class InvalidRequestError(ValueError):
    """The request body cannot produce a single title to resolve."""

    def __init__(self, message: str = INVALID_REQUEST_MESSAGE):
        super().__init__(message)


def normalize_titles(movies: Any) -> list[str]:
    """Trim the submitted titles and drop blank or non-string entries.

    Raises InvalidRequestError when nothing usable is left.
    """
    if not movies or not isinstance(movies, list):
        raise InvalidRequestError()
    titles = [m.strip() for m in movies if isinstance(m, str) and m.strip()]
    if not titles:
        raise InvalidRequestError()
    return titles


class RecommendationEngine:
    """
    Turns a list of movie titles into genre-based recommendations.

    Titles are resolved concurrently and joined before aggregation. Per-title
    failures are absorbed by the resolver; a discovery failure propagates.
    """

    def __init__(
        self,
        tmdb_service: TMDBService,
        *,
        max_concurrency: int = 10,
        min_genre_occurrences: int = 1,
        exclude_input_titles: bool = False,
    ):
        self.resolver = TitleResolver(tmdb_service)
        self.discovery = DiscoveryQuery(tmdb_service)
        self.max_concurrency = max(max_concurrency, 1)
        self.min_genre_occurrences = min_genre_occurrences
        self.exclude_input_titles = exclude_input_titles

    async def resolve_all(self, titles: list[str]) -> list[CatalogMatch | None]:
        # Limit concurrent searches to stay under TMDB rate limits
        sem = asyncio.Semaphore(self.max_concurrency)

        async def _resolve(title: str) -> CatalogMatch | None:
            async with sem:
                return await self.resolver.resolve(title)

        # Every resolution settles before an unexpected error is re-raised
        results = await asyncio.gather(*(_resolve(t) for t in titles), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results

    async def build_signal(self, titles: list[str]) -> tuple[GenreSignal, list[CatalogMatch | None]]:
        matches = await self.resolve_all(titles)
        signal = aggregate(matches)
        logger.info(f"Genre signal: {signal.counts}")
        return signal, matches

    async def recommend(self, movies: Any) -> list[RecommendationItem]:
        titles = normalize_titles(movies)
        logger.info(f"Incoming movie titles: {titles}")

        signal, matches = await self.build_signal(titles)
        if signal.is_empty:
            logger.warning("No genres found for any title.")
            return []

        genre_ids = signal.qualifying(self.min_genre_occurrences)
        if not genre_ids:
            logger.warning(f"No genre shared by {self.min_genre_occurrences} or more titles.")
            return []

        exclude_ids = None
        if self.exclude_input_titles:
            exclude_ids = {m.tmdb_id for m in matches if m is not None}

        return await self.discovery.discover(genre_ids, exclude_ids=exclude_ids)
