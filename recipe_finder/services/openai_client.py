"""OpenAI service for the recipe search assistant."""

import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Any

import sentry_sdk
from openai import AsyncOpenAI

from recipe_finder.config import get_settings


@dataclass
class CompletionResult:
    """Result of a single chat completion."""
    success: bool
    content: str = ""
    error: Optional[str] = None


class OpenAIService:
    """Service for OpenAI chat completions. Every call is attempted exactly once."""

    def __init__(self, api_key: str, model: str = "gpt-4.1-nano", client: Any = None):
        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
    ) -> CompletionResult:
        """
        Run one chat completion.

        Never raises: transport errors, HTTP errors and empty choices are all
        reported through CompletionResult.error.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            print(f"❌ OpenAI request failed: {e}")
            sentry_sdk.capture_message(
                "OpenAI request failed",
                level="warning",
                extras={"model": self.model, "error_detail": str(e)},
                tags={"feature": "ai_search"},
            )
            return CompletionResult(success=False, error=str(e))

        try:
            content = response.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            return CompletionResult(success=False, error=f"Malformed completion: {e}")

        return CompletionResult(success=True, content=content.strip())


def parse_json_response(raw_content: str) -> Optional[Any]:
    """Parse JSON from an LLM response, handling markdown code blocks."""
    if not raw_content:
        return None

    # Try direct parse first
    try:
        return json.loads(raw_content)
    except json.JSONDecodeError:
        pass

    # Try extracting from markdown code block
    for fence in ("```json", "```"):
        if fence in raw_content:
            try:
                json_str = raw_content.split(fence)[1].split("```")[0]
                return json.loads(json_str.strip())
            except (IndexError, json.JSONDecodeError):
                pass

    # Try finding JSON object in content
    start = raw_content.find("{")
    end = raw_content.rfind("}") + 1
    if start != -1 and end > start:
        try:
            return json.loads(raw_content[start:end])
        except json.JSONDecodeError:
            pass

    return None


@lru_cache
def get_openai_service() -> Optional[OpenAIService]:
    """Get the cached OpenAI service, or None when no API key is configured."""
    settings = get_settings()
    if not settings.ai_configured:
        return None
    return OpenAIService(api_key=settings.openai_api_key, model=settings.openai_model)
