from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from cinematch.api.main import api_router
from cinematch.services.tmdb.service import build_tmdb_service

from .config import settings
from .logging import setup_logging
from .version import __version__

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    if not settings.TMDB_API_KEY:
        logger.warning("TMDB_API_KEY is not set; catalog requests will be rejected upstream")
    app.state.tmdb_service = build_tmdb_service(settings)
    logger.info(
        f"TMDB client ready (dns pinning: {settings.DNS_PINNING_ENABLED}, "
        f"nameservers: {settings.DNS_NAMESERVERS}, timeout: {settings.TMDB_TIMEOUT_SECONDS}s)"
    )
    yield
    try:
        await app.state.tmdb_service.close()
        logger.info("TMDB client closed")
    except Exception as exc:
        logger.warning(f"Failed to close TMDB client: {exc}")


app = FastAPI(
    title="CineMatch",
    description="Genre-based movie recommendations from a handful of titles",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


app.include_router(api_router)
