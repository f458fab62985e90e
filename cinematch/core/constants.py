"""
Core constants used across the application. Keep these simple and documented.
"""

# Discovery returns a single page; only this many entries are exposed
MAX_RECOMMENDATIONS: int = 10
DISCOVER_SORT_BY: str = "popularity.desc"
DISCOVER_PAGE: int = 1

INVALID_REQUEST_MESSAGE: str = "Please provide an array of movie titles"
RECOMMENDATION_FAILED_MESSAGE: str = "Failed to fetch recommendations"
