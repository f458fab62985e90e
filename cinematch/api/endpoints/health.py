from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness check")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/test", summary="Connectivity check used by the web client")
async def api_test() -> dict[str, str]:
    return {"message": "Server is working with CORS enabled!"}
