from .schemas import (
    MealResult,
    Category,
    Ingredient,
    MealDetail,
    GeneratedIngredient,
    GeneratedRecipe,
    AISearchResponse,
    RecommendationsResponse,
    HealthResponse,
)

__all__ = [
    "MealResult",
    "Category",
    "Ingredient",
    "MealDetail",
    "GeneratedIngredient",
    "GeneratedRecipe",
    "AISearchResponse",
    "RecommendationsResponse",
    "HealthResponse",
]
