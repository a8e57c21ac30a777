from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
import logging

from ..core.exceptions import (
    InvalidInput,
    PermanentGenerationError,
    RateLimitError,
    TransientGenerationError,
)
from ..models.recipe import Preferences, Recipe
from ..services.generation_client import RecipeGenerationClient, get_generation_client
from ..services.recipe_parser import RecipeParser

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


class ParseRequest(BaseModel):
    raw: str


class GenerateRequest(BaseModel):
    ingredients: List[str] = Field(min_length=1)
    preferences: Preferences = Preferences()


def _parse(raw: str) -> Recipe:
    try:
        return RecipeParser.parse(raw)
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/recipes/parse", response_model=Recipe)
async def parse_recipe_text(request: ParseRequest):
    """Normalize raw model output into a Recipe"""
    return _parse(request.raw)


@router.post("/recipes/generate", response_model=Recipe)
async def generate_recipe(
    request: GenerateRequest,
    client: RecipeGenerationClient = Depends(get_generation_client),
):
    """Ask the generation service for a recipe and normalize its answer"""
    log.info(f"📝 Generating recipe from {len(request.ingredients)} ingredients")
    try:
        raw = await client.generate(request.ingredients, request.preferences)
    except RateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e)) from e
    except TransientGenerationError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except PermanentGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    if not raw.strip():
        raise HTTPException(status_code=502, detail="Generation service returned no text")
    return _parse(raw)
