from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, conint, constr, field_validator

from .image_url import approved_image_url

MAX_COOKING_TIME = 300
# Ingredients must be strictly longer than this after cleaning.
MIN_INGREDIENT_LENGTH = 2


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Recipe(BaseModel):
    """Fully defaulted recipe handed to the caller. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: constr(min_length=1)
    title: constr(min_length=1)
    ingredients: List[str] = Field(min_length=1)
    instructions: List[str] = Field(min_length=1)
    cooking_time: conint(gt=0, lt=MAX_COOKING_TIME) = Field(alias="cookingTime")
    difficulty: Difficulty
    image_url: str = Field(alias="imageUrl")
    created_at: datetime = Field(alias="createdAt")

    @field_validator("ingredients")
    @classmethod
    def _ingredients_not_trivial(cls, value: List[str]) -> List[str]:
        for item in value:
            if len(item) <= MIN_INGREDIENT_LENGTH:
                raise ValueError(f"ingredient too short: {item!r}")
        return value

    @field_validator("instructions")
    @classmethod
    def _instructions_not_blank(cls, value: List[str]) -> List[str]:
        if any(not step.strip() for step in value):
            raise ValueError("instructions must not contain blank steps")
        return value

    @field_validator("image_url")
    @classmethod
    def _image_on_approved_host(cls, value: str) -> str:
        if approved_image_url(value) is None:
            raise ValueError(f"image host not approved: {value!r}")
        return value


class PartialRecipe(BaseModel):
    """Whatever a single format strategy managed to recover."""

    title: Optional[str] = None
    ingredients: List[str] = []
    instructions: List[str] = []
    cooking_time: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    image_url: Optional[str] = None


class Preferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dietary: Optional[str] = None
    difficulty: Optional[str] = None
    cooking_time: Optional[conint(gt=0)] = Field(default=None, alias="cookingTime")
