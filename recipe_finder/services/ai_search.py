"""AI-assisted recipe search.

Pipeline for one request:
1. Ask the AI for English search terms (+ a friendly message)
2. Search TheMealDB by name, ingredient and cuisine area, deduplicated by idMeal
3. Translate meal names when the user isn't reading English
4. If the database has fewer than 3 matches, ask the AI to write a recipe
"""

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Optional, Any

from pydantic import BaseModel, field_validator

from recipe_finder.models.schemas import MealResult, GeneratedRecipe, GeneratedIngredient, AISearchResponse
from recipe_finder.services.cuisines import area_for_term
from recipe_finder.services.mealdb import MealDBClient, ProviderResult, to_meal_results
from recipe_finder.services.openai_client import OpenAIService, parse_json_response
from recipe_finder.services.prompts import (
    build_search_prompt,
    build_recipe_prompt,
    build_translation_prompt,
    normalize_lang,
    needs_translation,
)

MAX_AI_TERMS = 4
INGREDIENT_SEARCH_TERMS = 2
INGREDIENT_RESULTS_PER_TERM = 5
AREA_SEARCH_THRESHOLD = 8
AREA_RESULTS_PER_AREA = 4
MAX_RESULTS = 10
MIN_DATABASE_RESULTS = 3

MESSAGES = {
    "en": {
        "found": 'Found {count} recipes for "{query}". Here\'s what I recommend! 👨‍🍳',
        "generated": '"{query}" isn\'t in our database, but I generated a recipe for you! 🤖👨‍🍳',
        "not_found": 'No recipes found for "{query}". Try something else!',
    },
    "sr": {
        "found": 'Pronašao sam {count} recepata za "{query}". Evo šta preporučujem! 👨‍🍳',
        "generated": 'Nisam pronašao "{query}" u bazi, ali sam ti pripremio recept! 🤖👨‍🍳',
        "not_found": 'Nisam pronašao recepte za "{query}". Pokušaj nešto drugo!',
    },
}


class AIRequestError(Exception):
    """The search-term request to the AI provider failed."""


# ============================================================
# AI response schemas (untrusted input, validated per field)
# ============================================================

def _coerce_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


class SearchTermsPayload(BaseModel):
    """{"terms": [...], "message": "..."} from the term extraction prompt."""
    terms: list[str] = []
    message: str = ""

    @field_validator("terms", mode="before")
    @classmethod
    def _valid_terms(cls, v):
        if not isinstance(v, list):
            return []
        return [t.strip() for t in v if isinstance(t, str) and t.strip()]

    @field_validator("message", mode="before")
    @classmethod
    def _valid_message(cls, v):
        return v.strip() if isinstance(v, str) else ""


class RecipePayload(BaseModel):
    """Recipe JSON from the generation prompt. Missing fields become empty."""
    name: str = ""
    description: str = ""
    category: str = ""
    area: str = ""
    ingredients: list[GeneratedIngredient] = []
    instructions: list[str] = []
    prepTime: str = ""
    servings: str = ""

    @field_validator("name", "description", "category", "area", "prepTime", "servings", mode="before")
    @classmethod
    def _text(cls, v):
        return _coerce_str(v)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _valid_ingredients(cls, v):
        if not isinstance(v, list):
            return []
        ingredients = []
        for item in v:
            if isinstance(item, dict) and _coerce_str(item.get("name")):
                ingredients.append({
                    "name": _coerce_str(item.get("name")),
                    "measure": _coerce_str(item.get("measure")),
                })
            elif isinstance(item, str) and item.strip():
                ingredients.append({"name": item.strip(), "measure": ""})
        return ingredients

    @field_validator("instructions", mode="before")
    @classmethod
    def _valid_instructions(cls, v):
        if not isinstance(v, list):
            return []
        return [s.strip() for s in v if isinstance(s, str) and s.strip()]


# ============================================================
# Helpers
# ============================================================

@dataclass
class TermExtraction:
    """Terms and user-facing message suggested by the AI."""
    terms: list[str]
    message: str = ""


def merge_terms(query: str, ai_terms: list[str]) -> list[str]:
    """
    Original query first, then up to 4 AI terms.

    Terms matching the query (or an earlier term) case-insensitively are dropped.
    """
    merged = [query]
    seen = {query.lower()}
    for term in ai_terms:
        term = term.strip()
        if not term or term.lower() in seen:
            continue
        seen.add(term.lower())
        merged.append(term)
        if len(merged) > MAX_AI_TERMS:
            break
    return merged


def apply_translations(meals: list[MealResult], translations: dict[str, str]) -> None:
    """Set strMealTranslated on every meal, keeping the original name when untranslated."""
    if not translations:
        return
    for meal in meals:
        meal.strMealTranslated = translations.get(meal.strMeal, meal.strMeal)


class AISearchService:
    """Runs one AI search request against OpenAI and TheMealDB."""

    def __init__(
        self,
        ai: OpenAIService,
        mealdb: MealDBClient,
        rng: Optional[random.Random] = None,
    ):
        self.ai = ai
        self.mealdb = mealdb
        self.rng = rng or random.Random()

    async def extract_terms(self, query: str, lang: str) -> TermExtraction:
        """
        Ask the AI for search terms.

        Raises AIRequestError when the request itself fails. An unusable
        body falls back to searching for the raw query.
        """
        result = await self.ai.complete(
            build_search_prompt(lang),
            query,
            temperature=0.3,
            max_tokens=150,
        )
        if not result.success:
            raise AIRequestError(result.error or "AI request failed")

        parsed = parse_json_response(result.content)
        if not isinstance(parsed, dict):
            print(f"⚠️ Could not parse AI search terms for '{query}', using raw query")
            parsed = {}

        payload = SearchTermsPayload.model_validate(parsed)
        return TermExtraction(terms=payload.terms or [query], message=payload.message)

    async def aggregate(self, terms: list[str]) -> list[MealResult]:
        """
        Search TheMealDB with every strategy and merge results.

        terms[0] is the user's query, the rest are AI suggestions. The first
        source to return a meal owns its entry.
        """
        collected: dict[str, MealResult] = {}

        def merge(items: list[dict]):
            for meal in to_meal_results(items):
                if meal.idMeal not in collected:
                    collected[meal.idMeal] = meal

        # Name search for every term
        by_name: list[ProviderResult] = await asyncio.gather(
            *(self.mealdb.search_by_name(term) for term in terms)
        )
        for result in by_name:
            if result.success:
                merge(result.items)

        # Ingredient filter for the first AI terms
        ingredient_terms = terms[1:1 + INGREDIENT_SEARCH_TERMS]
        by_ingredient: list[ProviderResult] = await asyncio.gather(
            *(self.mealdb.filter_by_ingredient(term) for term in ingredient_terms)
        )
        for result in by_ingredient:
            if result.success:
                merge(result.items[:INGREDIENT_RESULTS_PER_TERM])

        # Cuisine area filter when a term names a cuisine
        areas = []
        for term in terms:
            area = area_for_term(term)
            if area and area not in areas:
                areas.append(area)

        if areas and len(collected) < AREA_SEARCH_THRESHOLD:
            by_area: list[ProviderResult] = await asyncio.gather(
                *(self.mealdb.filter_by_area(area) for area in areas)
            )
            for result in by_area:
                if not result.success:
                    continue
                items = list(result.items)
                self.rng.shuffle(items)
                merge(items[:AREA_RESULTS_PER_AREA])

        return list(collected.values())[:MAX_RESULTS]

    async def translate_names(self, meals: list[MealResult], lang: str, max_tokens: int = 500) -> dict[str, str]:
        """
        Batch-translate meal names. Returns {} on any failure.

        Only entries for names actually in `meals` are kept.
        """
        if not meals or not needs_translation(lang):
            return {}

        names = list(dict.fromkeys(meal.strMeal for meal in meals))
        result = await self.ai.complete(
            build_translation_prompt(names, lang),
            "Translate.",
            temperature=0.1,
            max_tokens=max_tokens,
        )
        if not result.success:
            print(f"⚠️ Translation failed, showing English names: {result.error}")
            return {}

        parsed = parse_json_response(result.content)
        if not isinstance(parsed, dict):
            print("⚠️ Could not parse translations, showing English names")
            return {}

        wanted = set(names)
        return {
            original: translated.strip()
            for original, translated in parsed.items()
            if original in wanted and isinstance(translated, str) and translated.strip()
        }

    async def generate_recipe(self, query: str, lang: str) -> Optional[GeneratedRecipe]:
        """
        Ask the AI to write a full recipe for the query.

        Returns None when the request fails or the reply isn't a usable
        recipe (no name, ingredients or steps).
        """
        result = await self.ai.complete(
            build_recipe_prompt(lang),
            f"Generate a recipe for: {query}",
            temperature=0.7,
            max_tokens=800,
        )
        if not result.success:
            print(f"⚠️ Recipe generation failed: {result.error}")
            return None

        parsed = parse_json_response(result.content)
        if not isinstance(parsed, dict):
            print(f"⚠️ Could not parse generated recipe for '{query}'")
            return None

        payload = RecipePayload.model_validate(parsed)
        if not payload.name or not payload.ingredients or not payload.instructions:
            print(f"⚠️ AI returned an incomplete recipe for '{query}' - rejecting")
            return None

        return GeneratedRecipe(
            id=f"ai-{int(time.time() * 1000)}",
            **payload.model_dump(),
        )

    async def search(self, query: str, lang: Optional[str] = None) -> AISearchResponse:
        """Run the full search pipeline for one request."""
        query = query.strip()
        lang = normalize_lang(lang)
        messages = MESSAGES[lang]

        print(f"🔍 AI search: {query!r} ({lang})")

        extraction = await self.extract_terms(query, lang)
        terms = merge_terms(query, extraction.terms)
        meals = await self.aggregate(terms)

        print(f"   Terms: {terms}")
        print(f"   TheMealDB results: {len(meals)}")

        if len(meals) >= MIN_DATABASE_RESULTS:
            translations = await self.translate_names(meals, lang, max_tokens=500)
            apply_translations(meals, translations)
            message = extraction.message or messages["found"].format(count=len(meals), query=query)
            return AISearchResponse(
                meals=meals,
                translations=translations,
                message=message,
                searchTerms=terms,
                aiGenerated=None,
            )

        # Too few database hits - have the AI write one
        generated = await self.generate_recipe(query, lang)
        translations = await self.translate_names(meals, lang, max_tokens=300)
        apply_translations(meals, translations)

        if generated:
            print(f"✅ Generated recipe: {generated.name}")
            message = messages["generated"].format(query=query)
        else:
            message = messages["not_found"].format(query=query)

        return AISearchResponse(
            meals=meals,
            translations=translations,
            message=message,
            searchTerms=terms,
            aiGenerated=generated,
        )
