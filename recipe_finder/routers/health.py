"""Health check endpoint."""

from fastapi import APIRouter

from recipe_finder.config import get_settings
from recipe_finder.models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Reports whether the AI assistant is configured. TheMealDB is not
    probed, it has no health endpoint and browse calls report their own errors.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        aiConfigured=settings.ai_configured,
    )
