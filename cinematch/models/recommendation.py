from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecommendRequest(BaseModel):
    """Inbound body. ``movies`` is validated by the engine so bad shapes map to a 400."""

    movies: Any = None


class CatalogMatch(BaseModel):
    """First TMDB search hit for a title."""

    model_config = ConfigDict(frozen=True)

    tmdb_id: int
    title: str | None = None
    genre_ids: frozenset[int] = Field(default_factory=frozenset)


class RecommendationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    poster_path: str | None = None
    overview: str = ""
    release_date: str | None = None
    vote_average: float = Field(default=0.0, ge=0.0, le=10.0)


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem] = Field(default_factory=list, max_length=10)


class ErrorResponse(BaseModel):
    error: str


class GenreSignal(BaseModel):
    """Occurrence count per genre id across all resolved titles. Every count is >= 1."""

    model_config = ConfigDict(frozen=True)

    counts: dict[int, int] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.counts

    def qualifying(self, min_count: int = 1) -> list[int]:
        """Genre ids carried by at least ``min_count`` titles, ascending."""
        return sorted(gid for gid, n in self.counts.items() if n >= max(min_count, 1))
