from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from cinematch.core.config import settings
from cinematch.core.constants import RECOMMENDATION_FAILED_MESSAGE
from cinematch.models.recommendation import ErrorResponse, RecommendationResponse, RecommendRequest
from cinematch.services.recommendation.engine import InvalidRequestError, RecommendationEngine

router = APIRouter(prefix="/api/movies", tags=["movies"])


def get_recommendation_engine(request: Request) -> RecommendationEngine:
    """Build an engine around the TMDB service created at startup."""
    return RecommendationEngine(
        request.app.state.tmdb_service,
        max_concurrency=settings.MAX_CONCURRENT_RESOLUTIONS,
        min_genre_occurrences=settings.GENRE_MIN_OCCURRENCES,
        exclude_input_titles=settings.EXCLUDE_INPUT_TITLES,
    )


@router.get("/test")
async def movies_test() -> dict[str, str]:
    return {"message": "Movies route is working!"}


@router.post(
    "/recommend",
    response_model=RecommendationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def recommend(request: Request, engine: RecommendationEngine = Depends(get_recommendation_engine)):
    """
    Recommend up to 10 movies sharing the genres of the submitted titles.

    The body is read by hand so a malformed ``movies`` field answers with the
    documented ``{"error": ...}`` 400 instead of a validation 422.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    payload = RecommendRequest.model_validate(body) if isinstance(body, dict) else RecommendRequest()

    try:
        recommendations = await engine.recommend(payload.movies)
    except InvalidRequestError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"Error recommending movies: {e}")
        return JSONResponse(status_code=500, content={"error": RECOMMENDATION_FAILED_MESSAGE})

    return RecommendationResponse(recommendations=recommendations)
