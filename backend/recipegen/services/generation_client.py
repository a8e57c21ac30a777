"""
Client for the Gemini generateContent endpoint that produces raw recipe text.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, Sequence

import httpx

from ..core.config import Settings, get_settings
from ..core.exceptions import (
    GenerationError,
    PermanentGenerationError,
    RateLimitError,
    TransientGenerationError,
)
from ..models.recipe import Preferences

log = logging.getLogger(__name__)

RECIPE_PROMPT = """
You are a professional chef who creates recipes tailored to specific ingredients and preferences.
Create a recipe using the following ingredients: {ingredients}.
{preferences}Use the seed {seed} for uniqueness.
Format the response as a simple string where each field (field is title, ingredients, instructions, cookingTime, image, difficulty) is separated by a semicolon(;).:
- Ingredients are listed with quantities, separated by commas.
- Instructions are detailed in steps, with each step separated by a comma.
Include the following fields in the output:
- The name of the recipe.
- A list of ingredients with quantities.
- Step-by-step cooking instructions.
- Estimated cooking time in minutes.
- A valid URL of a free image from the internet that visually represents the recipe (e.g., from Unsplash, Pexels, or Pixabay).
- Difficulty level (easy, medium, hard).
Ensure:
1. The image URL corresponds specifically to the recipe.
2. The recipe is clear, concise, and easy to follow.
3. All fields are accurately formatted.
""".strip()


def build_prompt(ingredients: Sequence[str], preferences: Optional[Preferences] = None,
                 seed: Optional[int] = None) -> str:
    lines = []
    if preferences is not None:
        if preferences.dietary:
            lines.append(f"Dietary preference: {preferences.dietary}.")
        if preferences.difficulty:
            lines.append(f"Preferred difficulty: {preferences.difficulty}.")
        if preferences.cooking_time:
            lines.append(f"Maximum cooking time: {preferences.cooking_time} minutes.")
    return RECIPE_PROMPT.format(
        ingredients=", ".join(ingredients),
        preferences="".join(line + "\n" for line in lines),
        seed=seed if seed is not None else int(time.time() * 1000),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or f"Generation service returned HTTP {response.status_code}"


def _raise_for_status(response: httpx.Response) -> None:
    status = response.status_code
    if status < 400:
        return
    message = _error_message(response)
    if status == 429:
        raise RateLimitError(message, status)
    if status >= 500:
        raise TransientGenerationError(message, status)
    raise PermanentGenerationError(message, status)


def _extract_text(payload: dict) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        return ""
    return parts[0].get("text") or ""


class RecipeGenerationClient:
    """Calls the generation service, retrying transient failures with exponential backoff."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings()
        self._client = client
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        base = self.settings.gemini_base_url.rstrip("/")
        return f"{base}/{self.settings.gemini_model}:generateContent"

    async def generate(self, ingredients: Sequence[str], preferences: Optional[Preferences] = None) -> str:
        if not self.settings.google_api_key:
            raise PermanentGenerationError("Google API key is not configured")
        ingredients = [item.strip() for item in ingredients if item and item.strip()]
        if not ingredients:
            raise PermanentGenerationError("At least one ingredient is required")

        body = {"contents": [{"parts": [{"text": build_prompt(ingredients, preferences)}]}]}
        attempt = 0
        while True:
            try:
                text = await self._post(body)
                log.info(f"✅ Generated {len(text)} characters of recipe text")
                return text
            except GenerationError as e:
                if not e.retryable or attempt >= self.settings.generation_max_retries:
                    log.error(f"❌ Recipe generation failed after {attempt + 1} attempt(s): {e}")
                    raise
                delay = self.settings.generation_backoff_base * 2 ** attempt
                log.warning(f"⚠️ Transient generation error ({e}), retrying in {delay:.1f}s")
                await self._sleep(delay)
                attempt += 1

    async def _post(self, body: dict) -> str:
        params = {"key": self.settings.google_api_key}
        headers = {"Content-Type": "application/json"}
        try:
            if self._client is not None:
                response = await self._client.post(self.endpoint, params=params, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.settings.generation_timeout) as client:
                    response = await client.post(self.endpoint, params=params, json=body, headers=headers)
        except httpx.TimeoutException as e:
            raise TransientGenerationError(f"Generation service timed out: {e}") from e
        except httpx.TransportError as e:
            raise TransientGenerationError(f"Could not reach generation service: {e}") from e

        _raise_for_status(response)
        try:
            payload = response.json()
        except ValueError as e:
            raise TransientGenerationError("Generation service returned a non-JSON body") from e
        return _extract_text(payload)


def get_generation_client() -> RecipeGenerationClient:
    return RecipeGenerationClient()
