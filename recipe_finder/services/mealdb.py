"""TheMealDB client.

Every call returns a ProviderResult instead of raising, so callers can fan
out many requests and decide per source what a failure means.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional
from urllib.parse import quote

import httpx

from recipe_finder.config import get_settings
from recipe_finder.models.schemas import MealResult, MealDetail, Ingredient

INGREDIENT_IMAGE_URL = "https://www.themealdb.com/images/ingredients/{name}-Small.png"
MAX_INGREDIENT_FIELDS = 20

_YOUTUBE_ID_RE = re.compile(r"[?&]v=([^&]+)")
_SENTENCE_SPLIT_RE = re.compile(r"\.\s+(?=[A-Z])")


@dataclass
class ProviderResult:
    """Result of one TheMealDB request."""
    success: bool
    items: list[dict] = field(default_factory=list)
    error: Optional[str] = None


class MealDBClient:
    """Async client for the TheMealDB v1 JSON API."""

    def __init__(
        self,
        base_url: str = "https://www.themealdb.com/api/json/v1/1",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self):
        await self.client.aclose()

    async def _get(self, endpoint: str, params: dict, key: str) -> ProviderResult:
        """GET an endpoint and pull the list stored under `key` ("meals" or "categories")."""
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            print(f"⚠️ TheMealDB {endpoint} returned HTTP {e.response.status_code}")
            return ProviderResult(success=False, error=f"http_{e.response.status_code}")
        except httpx.TimeoutException:
            print(f"⚠️ TheMealDB {endpoint} timed out")
            return ProviderResult(success=False, error="timeout")
        except (httpx.HTTPError, ValueError) as e:
            print(f"⚠️ TheMealDB {endpoint} failed: {e}")
            return ProviderResult(success=False, error=str(e))

        if not isinstance(data, dict):
            return ProviderResult(success=False, error="unexpected_payload")

        # TheMealDB answers "no match" with {"meals": null}
        items = data.get(key) or []
        if not isinstance(items, list):
            return ProviderResult(success=False, error="unexpected_payload")

        return ProviderResult(success=True, items=[i for i in items if isinstance(i, dict)])

    async def list_categories(self) -> ProviderResult:
        return await self._get("categories.php", {}, "categories")

    async def filter_by_category(self, category: str) -> ProviderResult:
        return await self._get("filter.php", {"c": category}, "meals")

    async def filter_by_ingredient(self, ingredient: str) -> ProviderResult:
        return await self._get("filter.php", {"i": ingredient}, "meals")

    async def filter_by_area(self, area: str) -> ProviderResult:
        return await self._get("filter.php", {"a": area}, "meals")

    async def search_by_name(self, name: str) -> ProviderResult:
        return await self._get("search.php", {"s": name}, "meals")

    async def lookup(self, meal_id: str) -> ProviderResult:
        return await self._get("lookup.php", {"i": meal_id}, "meals")


# ============================================================
# Record helpers
# ============================================================

def to_meal_result(raw: dict) -> Optional[MealResult]:
    """Convert a provider row into a MealResult, or None if a field is missing."""
    meal_id = raw.get("idMeal")
    name = raw.get("strMeal")
    thumb = raw.get("strMealThumb")
    if not all(isinstance(v, str) and v.strip() for v in (meal_id, name, thumb)):
        return None
    return MealResult(idMeal=meal_id, strMeal=name, strMealThumb=thumb)


def to_meal_results(items: list[dict]) -> list[MealResult]:
    return [m for m in (to_meal_result(i) for i in items) if m is not None]


def extract_ingredients(raw: dict) -> list[Ingredient]:
    """Collect the numbered strIngredientN/strMeasureN pairs of a meal record."""
    ingredients = []
    for i in range(1, MAX_INGREDIENT_FIELDS + 1):
        name = raw.get(f"strIngredient{i}")
        measure = raw.get(f"strMeasure{i}")
        if not isinstance(name, str) or not name.strip():
            continue
        name = name.strip()
        ingredients.append(Ingredient(
            name=name,
            measure=(measure or "").strip() if isinstance(measure, str) else "",
            image=INGREDIENT_IMAGE_URL.format(name=quote(name)),
        ))
    return ingredients


def extract_steps(instructions: str) -> list[str]:
    """
    Split instructions into steps.

    Uses line breaks when the text has them, otherwise falls back to
    sentence boundaries.
    """
    if not instructions:
        return []

    steps = [s.strip() for s in re.split(r"\r?\n", instructions) if len(s.strip()) > 2]
    if len(steps) <= 1:
        steps = [
            s.strip().rstrip(".") + "."
            for s in _SENTENCE_SPLIT_RE.split(instructions)
            if len(s.strip()) > 2
        ]
    return steps


def get_youtube_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    match = _YOUTUBE_ID_RE.search(url)
    return match.group(1) if match else None


def _text(raw: dict, key: str) -> Optional[str]:
    """String field of a provider record; blanks and non-strings become None."""
    value = raw.get(key)
    return value if isinstance(value, str) and value.strip() else None


def to_meal_detail(raw: dict) -> Optional[MealDetail]:
    """Build a MealDetail with derived ingredients, steps and YouTube id.

    Returns None when the record has no usable id or name.
    """
    meal_id = _text(raw, "idMeal")
    name = _text(raw, "strMeal")
    if not meal_id or not name:
        return None

    instructions = _text(raw, "strInstructions") or ""
    youtube = _text(raw, "strYoutube")

    return MealDetail(
        idMeal=meal_id,
        strMeal=name,
        strMealThumb=_text(raw, "strMealThumb") or "",
        strCategory=_text(raw, "strCategory"),
        strArea=_text(raw, "strArea"),
        strInstructions=instructions,
        strYoutube=youtube,
        strSource=_text(raw, "strSource"),
        ingredients=extract_ingredients(raw),
        steps=extract_steps(instructions),
        youtubeId=get_youtube_id(youtube),
    )


@lru_cache
def get_mealdb_client() -> MealDBClient:
    """Get the shared TheMealDB client."""
    settings = get_settings()
    return MealDBClient(base_url=settings.mealdb_base_url, timeout=settings.mealdb_timeout)
