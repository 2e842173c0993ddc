"""Prompts for the AI recipe search assistant."""

import json

# Supported UI languages; anything else is treated as English.
LANGUAGE_NAMES = {
    "en": "English",
    "sr": "Serbian",
}

DEFAULT_LANG = "en"


def normalize_lang(lang) -> str:
    """Return a supported language tag, defaulting to English."""
    if isinstance(lang, str) and lang.strip().lower() in LANGUAGE_NAMES:
        return lang.strip().lower()
    return DEFAULT_LANG


def needs_translation(lang) -> bool:
    """Meal names come from TheMealDB in English."""
    return normalize_lang(lang) != DEFAULT_LANG


def build_search_prompt(lang: str) -> str:
    """
    System prompt that turns a natural-language craving into search keywords.

    The keywords are always English (the database is English); only the
    user-facing message follows the requested language.
    """
    lang = normalize_lang(lang)

    if lang == "sr":
        lang_instruction = """
The user is speaking Serbian. Respond with a JSON object where:
- "terms" is an array of 2-4 English food search keywords
- "message" is a friendly Serbian message like "Tražim recepte za [dish]... 🔍\""""
    else:
        lang_instruction = """
Respond with a JSON object where:
- "terms" is an array of 2-4 English food search keywords
- "message" is a friendly English message about searching for the dish"""

    return f"""You are a recipe search assistant. The user will describe what they want to eat in natural language (possibly in Serbian or English).

Your job: extract 2-4 simple English food search keywords that would find matching recipes in a recipe database.

Rules:
- Keywords should be common English food terms (the database is in English)
- If the user mentions a specific dish name (e.g. "burek", "pad thai", "tiramisu"), include that EXACT name as a keyword too
- If the user mentions a cuisine (Italian, Mexican, etc.), include a typical dish name from that cuisine
- If vague ("something quick"), pick popular categories like "chicken", "salad", "soup"
- Maximum 4 terms. Each term should be 1-2 words.
- Return ONLY valid JSON, no markdown, no explanation.
{lang_instruction}

Return format: {{"terms": ["term1", "term2"], "message": "friendly message"}}"""


def build_recipe_prompt(lang: str) -> str:
    """System prompt for generating a full recipe when the database has nothing."""
    language = LANGUAGE_NAMES[normalize_lang(lang)]

    return f"""You are a professional chef and recipe writer. The user searched for a dish that isn't in our database. Generate a complete, authentic recipe.

RESPOND ENTIRELY IN {language.upper()}.

Return ONLY valid JSON (no markdown, no explanation) with this exact structure:
{{
  "name": "Recipe name in {language}",
  "description": "1-2 sentence description in {language}",
  "category": "Main Course|Side|Dessert|Starter|Soup",
  "area": "Region/cuisine origin in {language}",
  "ingredients": [
    {{"name": "ingredient in {language}", "measure": "amount"}}
  ],
  "instructions": [
    "Step 1 in {language}",
    "Step 2 in {language}"
  ],
  "prepTime": "45 min",
  "servings": "4"
}}

Be authentic. Use traditional ingredients and methods. 8-15 ingredients, 5-10 steps."""


def build_translation_prompt(meal_names: list[str], lang: str) -> str:
    """System prompt for translating a batch of English meal names."""
    language = LANGUAGE_NAMES[normalize_lang(lang)]

    return f"""Translate these English recipe names to {language}. Return ONLY a JSON object mapping English→{language}.
No explanation, no markdown. Example: {{"Chicken Alfredo": "Piletina Alfredo"}}

Names to translate:
{json.dumps(meal_names, ensure_ascii=False)}"""
