from typing import Any

import httpx

from cinematch.core.base_client import BaseClient, PinnedResolver
from cinematch.core.version import __version__

TMDB_BASE_URL = "https://api.themoviedb.org/3"


class TMDBClient(BaseClient):
    """
    Client for interacting with the TMDB API.
    """

    def __init__(
        self,
        api_key: str | None,
        language: str = "en-US",
        timeout: float = 10.0,
        base_url: str = TMDB_BASE_URL,
        resolver: PinnedResolver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "User-Agent": f"CineMatch/{__version__}",
            "Accept": "application/json",
        }
        super().__init__(
            base_url=base_url, timeout=timeout, headers=headers, resolver=resolver, transport=transport
        )
        self.api_key = api_key
        self.language = language

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """Override request to always include API key and language."""
        params = kwargs.get("params", {})
        if params is None:
            params = {}
        params["api_key"] = self.api_key
        params["language"] = self.language
        kwargs["params"] = params
        return await super()._request(method, url, **kwargs)
