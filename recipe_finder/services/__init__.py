"""Services module for recipe search and recommendations."""

from .openai_client import OpenAIService, get_openai_service
from .mealdb import MealDBClient, get_mealdb_client
from .geolocation import GeolocationService, get_geolocation_service
from .ai_search import AISearchService, AIRequestError
from .recommendations import RecommendationService

__all__ = [
    "OpenAIService",
    "get_openai_service",
    "MealDBClient",
    "get_mealdb_client",
    "GeolocationService",
    "get_geolocation_service",
    "AISearchService",
    "AIRequestError",
    "RecommendationService",
]
