"""Location-based recommendations endpoint."""

from fastapi import APIRouter, Depends, Request

from recipe_finder.models.schemas import RecommendationsResponse
from recipe_finder.services.geolocation import GeolocationService, get_geolocation_service, get_client_ip
from recipe_finder.services.mealdb import MealDBClient, get_mealdb_client
from recipe_finder.services.recommendations import RecommendationService

router = APIRouter(prefix="/api", tags=["recommendations"])


@router.get("/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(
    request: Request,
    mealdb: MealDBClient = Depends(get_mealdb_client),
    geo: GeolocationService = Depends(get_geolocation_service),
):
    """
    Meals from cuisines near the visitor.

    The country comes from the client IP (proxy headers). Always returns 200;
    failures fall back to default cuisines.
    """
    service = RecommendationService(mealdb=mealdb, geo=geo)
    return await service.recommend(get_client_ip(request.headers))
