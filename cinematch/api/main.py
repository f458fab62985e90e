from fastapi import APIRouter

from .endpoints.health import router as health_router
from .endpoints.movies import router as movies_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "CineMatch API is running"}


api_router.include_router(health_router)
api_router.include_router(movies_router)
