# tests/test_ai_search.py
import random

import pytest

from recipe_finder.models.schemas import MealResult
from recipe_finder.services.ai_search import (
    AISearchService,
    AIRequestError,
    merge_terms,
    apply_translations,
)

RECIPE_JSON = {
    "name": "Burek sa mesom",
    "description": "Tradicionalna pita od jufke punjena mlevenim mesom.",
    "category": "Main Course",
    "area": "Balkanska",
    "ingredients": [
        {"name": "jufke", "measure": "500 g"},
        {"name": "mleveno meso", "measure": "400 g"},
        {"name": "luk", "measure": 2},
    ],
    "instructions": ["Propržiti luk.", "Dodati meso.", "Saviti jufke i peći."],
    "prepTime": "60 min",
    "servings": 6,
}


@pytest.fixture
def service(ai_service, mealdb):
    return AISearchService(ai=ai_service, mealdb=mealdb, rng=random.Random(7))


# ============================================================
# Term merging
# ============================================================

def test_merge_terms_keeps_query_first_and_dedupes():
    assert merge_terms("Burek", ["burek", "pastry", "Pastry", " ", "pie"]) == ["Burek", "pastry", "pie"]


def test_merge_terms_caps_ai_terms_at_four():
    terms = merge_terms("soup", ["a", "b", "c", "d", "e", "f"])
    assert terms == ["soup", "a", "b", "c", "d"]


# ============================================================
# Term extraction
# ============================================================

@pytest.mark.asyncio
async def test_extract_terms_parses_ai_json(service, fake_openai):
    fake_openai.reply("terms", {"terms": ["chicken", "curry"], "message": "Searching curries 🔍"})

    extraction = await service.extract_terms("spicy chicken", "en")

    assert extraction.terms == ["chicken", "curry"]
    assert extraction.message == "Searching curries 🔍"
    call = fake_openai.completions.calls[0]
    assert call["temperature"] == 0.3
    assert call["messages"][1]["content"] == "spicy chicken"


@pytest.mark.asyncio
async def test_extract_terms_falls_back_to_query_on_garbage(service, fake_openai, capsys):
    fake_openai.reply("terms", "I think you want soup!")

    extraction = await service.extract_terms("something warm", "en")

    assert extraction.terms == ["something warm"]
    assert extraction.message == ""
    assert "Could not parse AI search terms for 'something warm'" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_extract_terms_validates_each_field(service, fake_openai):
    fake_openai.reply("terms", {"terms": "soup", "message": "Tražim supe 🔍"})

    extraction = await service.extract_terms("supa", "sr")

    assert extraction.terms == ["supa"]
    assert extraction.message == "Tražim supe 🔍"


@pytest.mark.asyncio
async def test_extract_terms_raises_when_ai_request_fails(service, fake_openai):
    fake_openai.reply("terms", ConnectionError("down"))

    with pytest.raises(AIRequestError):
        await service.extract_terms("pasta", "en")


# ============================================================
# Aggregation
# ============================================================

@pytest.mark.asyncio
async def test_aggregate_first_source_wins_and_no_duplicates(service, mealdb_backend, meal):
    mealdb_backend.by_name["chicken"] = [meal(1, "Chicken Handi"), meal(2, "Chicken Karaage")]
    mealdb_backend.by_name["curry"] = [meal(2, "Renamed Karaage"), meal(3, "Lamb Curry")]

    meals = await service.aggregate(["chicken", "curry"])

    assert [m.idMeal for m in meals] == ["1", "2", "3"]
    assert meals[1].strMeal == "Chicken Karaage"


@pytest.mark.asyncio
async def test_ingredient_filter_only_for_first_two_ai_terms(service, mealdb_backend, meal):
    mealdb_backend.by_ingredient["salmon"] = [meal(i) for i in range(100, 110)]

    meals = await service.aggregate(["fish dinner", "salmon", "cod", "trout"])

    ingredient_calls = [p["i"] for e, p in mealdb_backend.endpoints() if e == "filter.php" and "i" in p]
    assert sorted(ingredient_calls) == ["cod", "salmon"]
    # at most 5 per ingredient
    assert [m.idMeal for m in meals] == ["100", "101", "102", "103", "104"]


@pytest.mark.asyncio
async def test_area_filter_when_term_names_a_cuisine(service, mealdb_backend, meal):
    mealdb_backend.by_area["Italian"] = [meal(i) for i in range(200, 220)]

    meals = await service.aggregate(["something italian", " Italian "])

    area_calls = [p["a"] for e, p in mealdb_backend.endpoints() if e == "filter.php" and "a" in p]
    assert area_calls == ["Italian"]
    assert len(meals) == 4
    assert all(200 <= int(m.idMeal) < 220 for m in meals)


@pytest.mark.asyncio
async def test_area_filter_skipped_when_enough_results(service, mealdb_backend, meal):
    mealdb_backend.by_name["mexican"] = [meal(i) for i in range(8)]
    mealdb_backend.by_area["Mexican"] = [meal(i) for i in range(300, 310)]

    meals = await service.aggregate(["mexican"])

    assert not any("a" in p for _, p in mealdb_backend.endpoints())
    assert len(meals) == 8


@pytest.mark.asyncio
async def test_aggregate_caps_at_ten(service, mealdb_backend, meal):
    mealdb_backend.by_name["chicken"] = [meal(i) for i in range(12)]

    meals = await service.aggregate(["chicken"])

    assert [m.idMeal for m in meals] == [str(i) for i in range(10)]


@pytest.mark.asyncio
async def test_failed_source_contributes_nothing(service, mealdb_backend, meal):
    mealdb_backend.failing.add(("s", "beef"))
    mealdb_backend.by_name["stew"] = [meal(1, "Beef Stew")]
    mealdb_backend.failing.add(("i", "stew"))

    meals = await service.aggregate(["beef", "stew"])

    assert [m.idMeal for m in meals] == ["1"]


@pytest.mark.asyncio
async def test_aggregate_with_everything_failing_returns_empty(service, mealdb_backend):
    mealdb_backend.failing.update({("s", "thai"), ("a", "Thai")})

    assert await service.aggregate(["thai"]) == []


@pytest.mark.asyncio
async def test_aggregate_is_stable_apart_from_shuffle(service, mealdb_backend, meal):
    mealdb_backend.by_name["pie"] = [meal(1), meal(2)]
    mealdb_backend.by_ingredient["apple"] = [meal(3)]

    first = await service.aggregate(["pie", "apple"])
    second = await service.aggregate(["pie", "apple"])

    assert {m.idMeal for m in first} == {m.idMeal for m in second}


# ============================================================
# Translation
# ============================================================

def _meals(*names):
    return [MealResult(idMeal=str(i), strMeal=n, strMealThumb=f"https://img/{i}.jpg") for i, n in enumerate(names)]


@pytest.mark.asyncio
async def test_translate_names_keeps_only_known_names(service, fake_openai):
    fake_openai.reply("translate", {
        "Chicken Handi": "Piletina Handi",
        "Unknown Dish": "Nepoznato",
        "Lamb Curry": "",
    })
    meals = _meals("Chicken Handi", "Lamb Curry")

    translations = await service.translate_names(meals, "sr")

    assert translations == {"Chicken Handi": "Piletina Handi"}


@pytest.mark.asyncio
async def test_translate_names_skipped_for_english(service, fake_openai):
    assert await service.translate_names(_meals("Chicken Handi"), "en") == {}
    assert fake_openai.completions.calls == []


@pytest.mark.asyncio
async def test_translate_names_failure_returns_empty(service, fake_openai):
    fake_openai.reply("translate", TimeoutError("slow"))

    assert await service.translate_names(_meals("Chicken Handi"), "sr") == {}


def test_apply_translations_falls_back_to_original_name():
    meals = _meals("Chicken Handi", "Lamb Curry")

    apply_translations(meals, {"Chicken Handi": "Piletina Handi"})

    assert [m.strMealTranslated for m in meals] == ["Piletina Handi", "Lamb Curry"]


def test_apply_translations_noop_without_translations():
    meals = _meals("Chicken Handi")
    apply_translations(meals, {})
    assert meals[0].strMealTranslated is None


# ============================================================
# Recipe generation
# ============================================================

@pytest.mark.asyncio
async def test_generate_recipe_builds_record(service, fake_openai):
    fake_openai.reply("recipe", RECIPE_JSON)

    recipe = await service.generate_recipe("burek", "sr")

    assert recipe.name == "Burek sa mesom"
    assert recipe.id.startswith("ai-")
    assert recipe.isAiGenerated is True
    assert recipe.servings == "6"
    assert recipe.ingredients[2].measure == "2"
    call = fake_openai.completions.calls[0]
    assert call["temperature"] == 0.7
    assert call["messages"][1]["content"] == "Generate a recipe for: burek"


@pytest.mark.asyncio
async def test_generate_recipe_defaults_optional_fields(service, fake_openai):
    fake_openai.reply("recipe", {
        "name": "Sarma",
        "ingredients": [{"name": "kiseli kupus"}, {"measure": "no name"}],
        "instructions": ["Uviti sarme."],
    })

    recipe = await service.generate_recipe("sarma", "sr")

    assert recipe.prepTime == ""
    assert recipe.servings == ""
    assert [i.name for i in recipe.ingredients] == ["kiseli kupus"]


@pytest.mark.asyncio
async def test_generate_recipe_rejects_incomplete_recipe(service, fake_openai, capsys):
    fake_openai.reply("recipe", {"name": "Mystery", "ingredients": [], "instructions": ["Cook."]})

    assert await service.generate_recipe("mystery", "en") is None
    assert "incomplete recipe for 'mystery'" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_generate_recipe_unparseable_returns_none(service, fake_openai, capsys):
    fake_openai.reply("recipe", "Sorry, I can't help with that.")

    assert await service.generate_recipe("mystery", "en") is None
    assert "Could not parse generated recipe for 'mystery'" in capsys.readouterr().out


# ============================================================
# Full pipeline
# ============================================================

@pytest.mark.asyncio
async def test_search_burek_in_serbian_generates_recipe(service, fake_openai, mealdb_backend, meal):
    fake_openai.reply("terms", {"terms": ["burek", "pastry"], "message": "Tražim burek... 🔍"})
    fake_openai.reply("recipe", RECIPE_JSON)
    fake_openai.reply("translate", {"Apple Frangipan Tart": "Tart od jabuke"})
    mealdb_backend.by_name["pastry"] = [meal(52768, "Apple Frangipan Tart")]

    response = await service.search("burek", "sr")

    assert response.searchTerms == ["burek", "pastry"]
    assert len(response.meals) == 1
    assert response.meals[0].strMealTranslated == "Tart od jabuke"
    assert response.translations == {"Apple Frangipan Tart": "Tart od jabuke"}
    assert response.aiGenerated is not None
    assert response.aiGenerated.name == "Burek sa mesom"
    assert "pripremio recept" in response.message
    assert fake_openai.completions.kinds() == ["terms", "recipe", "translate"]


@pytest.mark.asyncio
async def test_search_chicken_in_english_caps_results(service, fake_openai, mealdb_backend, meal):
    fake_openai.reply("terms", {"terms": ["chicken"], "message": ""})
    mealdb_backend.by_name["chicken"] = [meal(i) for i in range(12)]

    response = await service.search("chicken", "en")

    assert len(response.meals) == 10
    assert len({m.idMeal for m in response.meals}) == 10
    assert response.aiGenerated is None
    assert response.translations == {}
    assert response.searchTerms == ["chicken"]
    assert response.message == 'Found 10 recipes for "chicken". Here\'s what I recommend! 👨‍🍳'
    assert fake_openai.completions.kinds() == ["terms"]


@pytest.mark.asyncio
async def test_search_keeps_ai_message_when_enough_results(service, fake_openai, mealdb_backend, meal):
    fake_openai.reply("terms", {"terms": ["pasta"], "message": "Tražim paste 🔍"})
    fake_openai.reply("translate", "not json")
    mealdb_backend.by_name["pasta"] = [meal(1), meal(2), meal(3)]

    response = await service.search("pasta", "sr")

    assert response.message == "Tražim paste 🔍"
    assert response.translations == {}
    assert all(m.strMealTranslated is None for m in response.meals)


@pytest.mark.asyncio
async def test_search_nothing_found_and_generation_fails(service, fake_openai):
    fake_openai.reply("terms", "garbage")
    fake_openai.reply("recipe", RuntimeError("model overloaded"))

    response = await service.search("zzzz", "en")

    assert response.meals == []
    assert response.aiGenerated is None
    assert response.searchTerms == ["zzzz"]
    assert response.message == 'No recipes found for "zzzz". Try something else!'
    # nothing to translate for English
    assert fake_openai.completions.kinds() == ["terms", "recipe"]


@pytest.mark.asyncio
async def test_search_unknown_language_treated_as_english(service, fake_openai, mealdb_backend, meal):
    fake_openai.reply("terms", {"terms": ["soup"]})
    mealdb_backend.by_name["soup"] = [meal(1), meal(2), meal(3)]

    response = await service.search("soup", "de")

    assert response.translations == {}
    assert response.message.startswith("Found 3 recipes")
