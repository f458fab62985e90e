from typing import Any

from cinematch.core.base_client import PinnedResolver
from cinematch.core.config import Settings
from cinematch.core.constants import DISCOVER_PAGE, DISCOVER_SORT_BY
from cinematch.services.tmdb.client import TMDBClient


class TMDBService:
    """
    Service for interacting with The Movie Database (TMDB) API.

    Only the two endpoints the recommendation flow needs are exposed: title search
    and movie discovery. Responses are returned as raw dictionaries.
    """

    def __init__(self, client: TMDBClient):
        self.client = client

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()

    async def search_movie(self, query: str, page: int = 1) -> dict[str, Any]:
        """Search movies by free-text title. Results are ordered by relevance."""
        params = {"query": query, "page": page}
        return await self.client.get("/search/movie", params=params)

    async def discover_movies(
        self,
        with_genres: str | None = None,
        sort_by: str = DISCOVER_SORT_BY,
        page: int = DISCOVER_PAGE,
        **kwargs,
    ) -> dict[str, Any]:
        """Get discover content based on params."""
        params = {"page": page, "sort_by": sort_by}
        if with_genres:
            params["with_genres"] = with_genres
        params.update(kwargs)
        return await self.client.get("/discover/movie", params=params)


def build_tmdb_service(config: Settings) -> TMDBService:
    """Build the process-wide TMDB service from settings."""
    resolver = None
    if config.DNS_PINNING_ENABLED:
        resolver = PinnedResolver(config.DNS_NAMESERVERS, timeout=config.TMDB_TIMEOUT_SECONDS)
    client = TMDBClient(
        api_key=config.TMDB_API_KEY,
        language=config.TMDB_LANGUAGE,
        timeout=config.TMDB_TIMEOUT_SECONDS,
        base_url=config.TMDB_BASE_URL,
        resolver=resolver,
    )
    return TMDBService(client)
