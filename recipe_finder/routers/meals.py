"""Browse endpoints - categories, name search and meal details from TheMealDB."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from recipe_finder.models.schemas import Category, MealResult, MealDetail
from recipe_finder.services.mealdb import MealDBClient, get_mealdb_client, to_meal_results, to_meal_detail

router = APIRouter(prefix="/api", tags=["meals"])

MAX_LIST_RESULTS = 10


def _provider_unavailable() -> HTTPException:
    return HTTPException(status_code=502, detail="Recipe provider unavailable")


@router.get("/categories", response_model=list[Category])
async def list_categories(mealdb: MealDBClient = Depends(get_mealdb_client)):
    """All meal categories."""
    result = await mealdb.list_categories()
    if not result.success:
        raise _provider_unavailable()

    categories = []
    for item in result.items:
        try:
            categories.append(Category.model_validate(item))
        except ValidationError:
            continue
    return categories


@router.get("/categories/{category}/meals", response_model=list[MealResult])
async def list_category_meals(category: str, mealdb: MealDBClient = Depends(get_mealdb_client)):
    result = await mealdb.filter_by_category(category)
    if not result.success:
        raise _provider_unavailable()
    return to_meal_results(result.items)[:MAX_LIST_RESULTS]


@router.get("/search", response_model=list[MealResult])
async def search_meals(
    q: str = Query("", description="Meal name to search for"),
    mealdb: MealDBClient = Depends(get_mealdb_client),
):
    """Plain name search (no AI)."""
    if not q.strip():
        return []

    result = await mealdb.search_by_name(q.strip())
    if not result.success:
        raise _provider_unavailable()
    return to_meal_results(result.items)[:MAX_LIST_RESULTS]


@router.get("/meals/{meal_id}", response_model=MealDetail)
async def get_meal(meal_id: str, mealdb: MealDBClient = Depends(get_mealdb_client)):
    """Full meal with ingredients, steps and video link."""
    result = await mealdb.lookup(meal_id)
    if not result.success:
        raise _provider_unavailable()

    meal = to_meal_detail(result.items[0]) if result.items else None
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal
