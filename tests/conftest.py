# tests/conftest.py
import json
from types import SimpleNamespace

import httpx
import pytest

from recipe_finder.services.mealdb import MealDBClient
from recipe_finder.services.openai_client import OpenAIService
from recipe_finder.services.geolocation import GeolocationService


def make_meal(meal_id, name=None):
    """Provider row as returned by search.php / filter.php."""
    return {
        "idMeal": str(meal_id),
        "strMeal": name or f"Meal {meal_id}",
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
    }


# --- Fake OpenAI client object shape used by OpenAIService ---
def _prompt_kind(system_prompt):
    if "recipe search assistant" in system_prompt:
        return "terms"
    if "professional chef" in system_prompt:
        return "recipe"
    if system_prompt.startswith("Translate"):
        return "translate"
    return "other"


class FakeCompletions:

    def __init__(self):
        # kind -> str reply or Exception to raise
        self.replies = {}
        self.calls = []

    async def create(self, **kwargs):
        system_prompt = kwargs["messages"][0]["content"]
        kind = _prompt_kind(system_prompt)
        self.calls.append({"kind": kind, **kwargs})
        reply = self.replies.get(kind, "{}")
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=reply))]
        )

    def kinds(self):
        return [c["kind"] for c in self.calls]


class FakeOpenAI:

    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)

    def reply(self, kind, value):
        """Set the reply for a prompt kind. Dicts are JSON-encoded."""
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        self.completions.replies[kind] = value


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def ai_service(fake_openai):
    return OpenAIService(api_key="test-key", model="gpt-4.1-nano", client=fake_openai)


# --- Fake TheMealDB backed by httpx.MockTransport ---
class FakeMealDB:

    def __init__(self):
        self.by_name = {}
        self.by_ingredient = {}
        self.by_area = {}
        self.by_category = {}
        self.details = {}
        self.categories = []
        # (param, value) pairs that answer HTTP 500
        self.failing = set()
        self.requests = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)

        for key, value in params.items():
            if (key, value) in self.failing:
                return httpx.Response(500, text="boom")

        if endpoint == "categories.php":
            return httpx.Response(200, json={"categories": self.categories})
        if endpoint == "search.php":
            meals = self.by_name.get(params.get("s", "").lower())
        elif endpoint == "lookup.php":
            detail = self.details.get(params.get("i"))
            meals = [detail] if detail else None
        elif endpoint == "filter.php" and "i" in params:
            meals = self.by_ingredient.get(params["i"].lower())
        elif endpoint == "filter.php" and "a" in params:
            meals = self.by_area.get(params["a"])
        elif endpoint == "filter.php" and "c" in params:
            meals = self.by_category.get(params["c"])
        else:
            return httpx.Response(404)

        # TheMealDB returns null rather than an empty list
        return httpx.Response(200, json={"meals": meals or None})

    def endpoints(self):
        return [(r.url.path.rsplit("/", 1)[-1], dict(r.url.params)) for r in self.requests]

    def client(self) -> MealDBClient:
        transport = httpx.MockTransport(self.handle)
        return MealDBClient(
            base_url="https://www.themealdb.com/api/json/v1/1",
            client=httpx.AsyncClient(transport=transport),
        )


@pytest.fixture
def mealdb_backend():
    return FakeMealDB()


@pytest.fixture
def mealdb(mealdb_backend):
    return mealdb_backend.client()


# --- Fake geolocation providers ---
class FakeGeo:

    def __init__(self):
        self.primary = {}   # ip -> response json
        self.fallback = {}
        self.primary_status = 200
        self.fallback_status = 200
        self.requests = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        parts = [p for p in request.url.path.split("/") if p]
        if host == "ip-api.com":
            ip = parts[-1]
            if self.primary_status != 200:
                return httpx.Response(self.primary_status)
            return httpx.Response(200, json=self.primary.get(ip, {"status": "fail"}))
        if host == "ipapi.co":
            ip = parts[0]
            if self.fallback_status != 200:
                return httpx.Response(self.fallback_status)
            return httpx.Response(200, json=self.fallback.get(ip, {"error": True}))
        return httpx.Response(404)

    def service(self) -> GeolocationService:
        return GeolocationService(
            client=httpx.AsyncClient(transport=httpx.MockTransport(self.handle)),
        )


@pytest.fixture
def geo_backend():
    return FakeGeo()


@pytest.fixture
def meal():
    return make_meal
