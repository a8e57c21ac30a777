import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..models.image_url import approved_image_url
from ..models.recipe import MAX_COOKING_TIME, MIN_INGREDIENT_LENGTH, Difficulty, PartialRecipe, Recipe
from .cleaners import clean_text
from .constants import (
    DEFAULT_COOKING_TIME,
    DEFAULT_INGREDIENT,
    DEFAULT_INSTRUCTION,
    DEFAULT_TITLE,
    FALLBACK_IMAGE_URL,
)

log = logging.getLogger(__name__)


def _non_empty(items: List[str], default: str, field: str, min_length: int = 0) -> List[str]:
    kept = [item for item in items if item and len(item.strip()) > min_length]
    if kept:
        return kept
    log.debug(f"No usable {field}, using default")
    return [default]


def _cooking_time(value: Optional[int]) -> int:
    if value is not None and 0 < value < MAX_COOKING_TIME:
        return value
    log.debug(f"Cooking time {value!r} out of range, using {DEFAULT_COOKING_TIME}")
    return DEFAULT_COOKING_TIME


def finalize(partial: Optional[PartialRecipe]) -> Recipe:
    """Apply every field default and build the immutable Recipe.

    This is the only place defaults are applied, so strategies may leave any
    field empty.
    """
    partial = partial or PartialRecipe()
    title = clean_text(partial.title)
    if not title:
        log.debug("No usable title, using default")

    return Recipe(
        id=uuid.uuid4().hex,
        title=title or DEFAULT_TITLE,
        ingredients=_non_empty(partial.ingredients, DEFAULT_INGREDIENT, "ingredients", MIN_INGREDIENT_LENGTH),
        instructions=_non_empty(partial.instructions, DEFAULT_INSTRUCTION, "instructions"),
        cooking_time=_cooking_time(partial.cooking_time),
        difficulty=partial.difficulty or Difficulty.MEDIUM,
        image_url=approved_image_url(partial.image_url) or FALLBACK_IMAGE_URL,
        created_at=datetime.now(timezone.utc),
    )


def format_semicolon(recipe: Recipe) -> str:
    """Render a recipe in the semicolon-delimited shape the generator is asked for."""
    return ";".join([
        recipe.title,
        ",".join(recipe.ingredients),
        ",".join(recipe.instructions),
        str(recipe.cooking_time),
        recipe.image_url,
        recipe.difficulty.value,
    ])
