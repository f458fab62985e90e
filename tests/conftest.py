import asyncio

import pytest
from fastapi.testclient import TestClient

from cinematch.api.endpoints.movies import get_recommendation_engine
from cinematch.core.app import app
from cinematch.core.base_client import UpstreamRequestError
from cinematch.services.recommendation.engine import RecommendationEngine

CATALOG = {
    "Inception": {"id": 27205, "title": "Inception", "genre_ids": [28, 878], "vote_count": 36000},
    "The Notebook": {"id": 11036, "title": "The Notebook", "genre_ids": [10749, 18]},
    "Alien": {"id": 348, "title": "Alien", "genre_ids": [27, 878]},
    "Plan 9": {"id": 10513, "title": "Plan 9 from Outer Space", "genre_ids": []},
}


def make_discover_results(count: int = 20) -> list[dict]:
    return [
        {
            "id": 1000 + i,
            "title": f"Popular Movie {i}",
            "poster_path": f"/poster{i}.jpg",
            "overview": f"Overview {i}",
            "release_date": "2020-01-01",
            "vote_average": 7.5,
            "vote_count": 1200,
            "original_language": "en",
            "adult": False,
            "popularity": 500.0 - i,
        }
        for i in range(count)
    ]


class StubTMDBService:
    """Deterministic stand-in for TMDBService that records every call."""

    def __init__(
        self, catalog=None, discover_results=None, failing=(), crashing=(), discover_error=None, delay=0.0
    ):
        self.catalog = CATALOG if catalog is None else catalog
        self.discover_results = make_discover_results() if discover_results is None else discover_results
        self.failing = set(failing)
        self.crashing = set(crashing)
        self.discover_error = discover_error
        self.delay = delay
        self.search_calls: list[str] = []
        self.discover_calls: list[dict] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def call_count(self) -> int:
        return len(self.search_calls) + len(self.discover_calls)

    async def search_movie(self, query: str, page: int = 1) -> dict:
        self.search_calls.append(query)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        if query in self.crashing:
            self.in_flight -= 1
            raise RuntimeError(f"unexpected failure for {query}")
        try:
            await asyncio.sleep(self.delay)
            if query in self.failing:
                raise UpstreamRequestError("https://api.themoviedb.org/3/search/movie", "ReadTimeout")
            entry = self.catalog.get(query)
            return {"page": 1, "results": [entry] if entry else [], "total_results": 1 if entry else 0}
        finally:
            self.in_flight -= 1

    async def discover_movies(self, with_genres=None, sort_by="popularity.desc", page=1, **kwargs) -> dict:
        self.discover_calls.append({"with_genres": with_genres, "sort_by": sort_by, "page": page, **kwargs})
        if self.discover_error is not None:
            raise self.discover_error
        return {"page": page, "results": list(self.discover_results), "total_pages": 50}

    async def close(self):
        pass


@pytest.fixture
def stub_tmdb():
    return StubTMDBService()


@pytest.fixture
def client(stub_tmdb):
    app.dependency_overrides[get_recommendation_engine] = lambda: RecommendationEngine(stub_tmdb)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_stub():
    """Factory for stub catalogs with custom entries, failures or delays."""
    return StubTMDBService


@pytest.fixture
def discover_page():
    return make_discover_results
