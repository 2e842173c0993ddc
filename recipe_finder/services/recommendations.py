"""Location-based meal recommendations."""

import random
from typing import Optional

import sentry_sdk

from recipe_finder.models.schemas import MealResult, RecommendationsResponse
from recipe_finder.services.cuisines import areas_for_country, FALLBACK_AREA
from recipe_finder.services.geolocation import GeolocationService, is_public_ip
from recipe_finder.services.mealdb import MealDBClient, to_meal_results

MAX_RECOMMENDATIONS = 6


class RecommendationService:
    """Pick a handful of meals from cuisines close to the visitor's country."""

    def __init__(
        self,
        mealdb: MealDBClient,
        geo: GeolocationService,
        rng: Optional[random.Random] = None,
    ):
        self.mealdb = mealdb
        self.geo = geo
        self.rng = rng or random.Random()

    async def recommend(self, ip: Optional[str]) -> RecommendationsResponse:
        """Recommendations for a client IP. Never raises."""
        try:
            country_code = None
            if is_public_ip(ip):
                country_code = await self.geo.get_country_code(ip)

            areas = areas_for_country(country_code)
            meals = await self.collect_meals(areas)

            print(f"🌍 Recommendations: country={country_code} areas={areas} meals={len(meals)}")
            return RecommendationsResponse(meals=meals, countryCode=country_code, areas=areas)

        except Exception as e:
            print(f"❌ Recommendations error: {e}")
            sentry_sdk.capture_exception(e)
            return await self._fallback()

    async def collect_meals(self, areas: list[str]) -> list[MealResult]:
        """Walk areas in priority order, taking shuffled meals until we have enough."""
        meals: dict[str, MealResult] = {}

        for area in areas:
            if len(meals) >= MAX_RECOMMENDATIONS:
                break

            result = await self.mealdb.filter_by_area(area)
            if not result.success:
                continue

            items = list(result.items)
            self.rng.shuffle(items)
            for meal in to_meal_results(items):
                if len(meals) >= MAX_RECOMMENDATIONS:
                    break
                meals.setdefault(meal.idMeal, meal)

        return list(meals.values())

    async def _fallback(self) -> RecommendationsResponse:
        """Popular Italian dishes, or nothing at all."""
        try:
            result = await self.mealdb.filter_by_area(FALLBACK_AREA)
            items = list(result.items)
            self.rng.shuffle(items)
            return RecommendationsResponse(
                meals=to_meal_results(items)[:MAX_RECOMMENDATIONS],
                countryCode=None,
                areas=[FALLBACK_AREA],
            )
        except Exception as e:
            print(f"❌ Fallback recommendations failed: {e}")
            return RecommendationsResponse(meals=[], countryCode=None, areas=[])
