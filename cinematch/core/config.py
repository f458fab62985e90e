from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    TMDB_API_KEY: str | None = None
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_LANGUAGE: str = "en-US"
    TMDB_TIMEOUT_SECONDS: float = 10.0

    # Resolve the TMDB host through public resolvers instead of the local one
    DNS_PINNING_ENABLED: bool = True
    DNS_NAMESERVERS: list[str] = ["8.8.8.8", "1.1.1.1"]

    # Upper bound on concurrent title searches per request
    MAX_CONCURRENT_RESOLUTIONS: int = 10
    # A genre joins the discovery query once this many input titles carry it
    GENRE_MIN_OCCURRENCES: int = 1
    EXCLUDE_INPUT_TITLES: bool = False

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "https://cine-match-fjmq.vercel.app"]
    PORT: int = 5050
    APP_ENV: Literal["development", "production"] = "production"
    LOG_LEVEL: str = "INFO"


settings = Settings()
