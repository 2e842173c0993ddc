"""AI recipe search endpoint - natural language to TheMealDB results."""

from typing import Optional

import sentry_sdk
from fastapi import APIRouter, Depends, HTTPException, Request

from recipe_finder.models.schemas import AISearchResponse
from recipe_finder.services.ai_search import AISearchService, AIRequestError
from recipe_finder.services.mealdb import MealDBClient, get_mealdb_client
from recipe_finder.services.openai_client import OpenAIService, get_openai_service

router = APIRouter(prefix="/api", tags=["ai-search"])


@router.post("/ai-search", response_model=AISearchResponse)
async def ai_search(
    request: Request,
    ai: Optional[OpenAIService] = Depends(get_openai_service),
    mealdb: MealDBClient = Depends(get_mealdb_client),
):
    """
    Find recipes from a free-text craving.

    Body: {"query": "something with chicken", "lang": "en" | "sr"}

    Falls back to an AI-written recipe when TheMealDB has fewer than 3 matches.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None

    query = body.get("query") if isinstance(body, dict) else None
    if not isinstance(query, str) or not query.strip():
        raise HTTPException(status_code=400, detail="Missing query")

    if ai is None:
        raise HTTPException(status_code=500, detail="AI not configured")

    service = AISearchService(ai=ai, mealdb=mealdb)

    try:
        return await service.search(query, body.get("lang"))
    except AIRequestError as e:
        print(f"❌ OpenAI error: {e}")
        raise HTTPException(status_code=502, detail="AI request failed")
    except Exception as e:
        print(f"❌ AI search error: {e}")
        sentry_sdk.capture_exception(e)
        raise HTTPException(status_code=500, detail="Internal server error")
