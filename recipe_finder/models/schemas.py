"""Pydantic schemas for API request/response validation.

Field names follow TheMealDB's camelCase keys (idMeal, strMeal, ...) so
clients can use provider records and our responses interchangeably.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal


# ============================================================
# TheMealDB Types
# ============================================================

class MealResult(BaseModel):
    """Meal summary as returned by search and filter endpoints."""
    idMeal: str
    strMeal: str
    strMealThumb: str
    strMealTranslated: Optional[str] = None


class Category(BaseModel):
    """Meal category."""
    idCategory: str
    strCategory: str
    strCategoryThumb: str = ""
    strCategoryDescription: str = ""


class Ingredient(BaseModel):
    """Ingredient line from a meal detail record."""
    name: str
    measure: str = ""
    image: str


class MealDetail(BaseModel):
    """Full meal record with derived ingredients and steps."""
    idMeal: str
    strMeal: str
    strMealThumb: str = ""
    strCategory: Optional[str] = None
    strArea: Optional[str] = None
    strInstructions: str = ""
    strYoutube: Optional[str] = None
    strSource: Optional[str] = None
    ingredients: list[Ingredient] = []
    steps: list[str] = []
    youtubeId: Optional[str] = None


# ============================================================
# AI Search
# ============================================================

class GeneratedIngredient(BaseModel):
    """Ingredient of an AI-generated recipe."""
    name: str
    measure: str = ""


class GeneratedRecipe(BaseModel):
    """Recipe written by the AI when TheMealDB has no good match."""
    id: str
    name: str
    description: str = ""
    category: str = ""
    area: str = ""
    ingredients: list[GeneratedIngredient] = []
    instructions: list[str] = []
    prepTime: str = ""
    servings: str = ""
    isAiGenerated: Literal[True] = True


class AISearchResponse(BaseModel):
    """Response of POST /api/ai-search."""
    meals: list[MealResult] = []
    translations: dict[str, str] = {}
    message: str = ""
    searchTerms: list[str] = []
    aiGenerated: Optional[GeneratedRecipe] = None


# ============================================================
# Recommendations
# ============================================================

class RecommendationsResponse(BaseModel):
    """Location-based meal recommendations."""
    meals: list[MealResult] = []
    countryCode: Optional[str] = None
    areas: list[str] = []


# ============================================================
# Utility Schemas
# ============================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    environment: str
    aiConfigured: bool = Field(default=False)
