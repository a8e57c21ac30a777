from datetime import timedelta

import pytest
from pydantic import ValidationError

from backend.recipegen.core.exceptions import InvalidInput
from backend.recipegen.models.recipe import Difficulty, Recipe
from backend.recipegen.models.image_url import approved_image_url
from backend.recipegen.parsing.constants import (
    DEFAULT_INGREDIENT,
    DEFAULT_INSTRUCTION,
    DEFAULT_TITLE,
    FALLBACK_IMAGE_URL,
)
from backend.recipegen.parsing.defaults import format_semicolon
from backend.recipegen.parsing.strategies import semicolon_delimited
from backend.recipegen.services.recipe_parser import RecipeParser, parse_recipe

MINIMAL = "Soup;Water,Salt;Boil water,Add salt;20;https://images.unsplash.com/x;easy"

CHICKEN_MARKDOWN = """
# Lemon Garlic Chicken

**Ingredients:**
- 2 chicken breasts
- 3 cloves garlic
- 1 lemon

**Instructions:**
1. Season the chicken with salt and pepper.
2. Sear the chicken in a hot pan.
3. Add garlic and lemon juice, then simmer.

**Cooking Time:** 35 minutes
**Difficulty:** Easy
"""


def assert_well_formed(recipe: Recipe):
    assert recipe.id
    assert recipe.title
    assert recipe.ingredients and all(len(item) > 2 for item in recipe.ingredients)
    assert recipe.instructions and all(step.strip() for step in recipe.instructions)
    assert 0 < recipe.cooking_time <= 300
    assert recipe.difficulty in set(Difficulty)
    assert approved_image_url(recipe.image_url) == recipe.image_url


@pytest.mark.parametrize("raw", ["", "   ", "\n\t", None, 42, ["Soup"]])
def test_invalid_input_is_rejected(raw):
    with pytest.raises(InvalidInput):
        parse_recipe(raw)


def test_minimal_semicolon_input():
    recipe = parse_recipe(MINIMAL)

    assert recipe.title == "Soup"
    assert recipe.ingredients == ["Water", "Salt"]
    assert recipe.instructions == ["Boil water", "Add salt"]
    assert recipe.cooking_time == 20
    assert recipe.image_url == "https://images.unsplash.com/x"
    assert recipe.difficulty is Difficulty.EASY


def test_out_of_range_cooking_time_defaults():
    recipe = parse_recipe("Soup;Water,Salt;Boil water,Add salt;500;https://images.unsplash.com/x;easy")
    assert recipe.cooking_time == 30


def test_numbered_instructions_keep_label_order():
    recipe = parse_recipe(
        "Stew;Beef,Carrots;2. Simmer for an hour. 1. Brown the beef.;90;"
        "https://images.pexels.com/photos/1/stew.jpg;hard"
    )
    assert recipe.instructions == ["Brown the beef.", "Simmer for an hour."]


def test_numbered_sections_take_priority_over_semicolons():
    text = (
        '1: "Title: Pancakes"; 2: "Ingredients: flour, milk, eggs"; '
        '3: "Instructions: Whisk everything together. Fry in a hot pan."; '
        '4: "15 minutes"; 5: "https://images.unsplash.com/photo-pancakes"; 6: "easy"'
    )
    # the text is a valid semicolon recipe too, with a different title
    assert semicolon_delimited(text).title != "Pancakes"

    recipe = parse_recipe(text)
    assert recipe.title == "Pancakes"
    assert recipe.ingredients == ["flour", "milk", "eggs"]
    assert recipe.instructions == ["Whisk everything together.", "Fry in a hot pan."]
    assert recipe.cooking_time == 15
    assert recipe.difficulty is Difficulty.EASY


def test_unapproved_image_host_falls_back():
    recipe = parse_recipe("Toast;Bread,Butter;Toast the bread,Spread butter;5;https://evil.example.com/img.png;easy")
    assert "evil" not in recipe.image_url
    assert recipe.image_url == FALLBACK_IMAGE_URL


@pytest.mark.parametrize("image", [
    "https://evil.example.com\\@images.unsplash.com/x.png",
    "https://images.unsplash.com@evil.example.com/x.png",
])
def test_disguised_image_host_falls_back(image):
    recipe = parse_recipe(f"Toast;Bread,Butter;Toast the bread,Spread butter;5;{image};easy")
    assert "evil" not in recipe.image_url
    assert recipe.image_url == FALLBACK_IMAGE_URL


def test_recipe_model_rejects_disguised_image_host():
    fields = parse_recipe(MINIMAL).model_dump()
    fields["image_url"] = "https://evil.example.com\\@images.unsplash.com/x.png"
    with pytest.raises(ValidationError):
        Recipe(**fields)


def test_label_free_numbered_output_keeps_its_fields():
    recipe = parse_recipe(
        '0: "Pancakes" 1: "2 cups flour, 2 eggs, 1 cup milk" '
        '2: "Whisk everything together. Fry in a hot pan until golden." '
        '3: "20" 4: "https://images.unsplash.com/photo-pancakes" 5: "easy"'
    )
    assert recipe.ingredients == ["2 cups flour", "2 eggs", "1 cup milk"]
    assert recipe.instructions == ["Whisk everything together.", "Fry in a hot pan until golden."]
    assert recipe.cooking_time == 20


def test_defaults_fill_every_missing_field():
    recipe = parse_recipe("nothing useful here")

    assert recipe.title == "nothing useful here"
    assert recipe.ingredients == [DEFAULT_INGREDIENT]
    assert recipe.instructions == [DEFAULT_INSTRUCTION]
    assert recipe.cooking_time == 30
    assert recipe.difficulty is Difficulty.MEDIUM
    assert recipe.image_url == FALLBACK_IMAGE_URL


@pytest.mark.parametrize("raw", [
    "?",
    "!!!",
    "🍕🍕🍕",
    ";;;;;;",
    "a;b;c;d;e;f",
    '1: "a" 2: "b" 3: "c"',
    "```\n```",
    "Ingredients:\nInstructions:",
    "Image: http://[broken",
    CHICKEN_MARKDOWN,
])
def test_any_non_empty_text_gives_a_complete_recipe(raw):
    assert_well_formed(parse_recipe(raw))


def test_unrecoverable_title_uses_placeholder():
    assert parse_recipe(";;;;;;").title == DEFAULT_TITLE
    assert parse_recipe("🍕🍕🍕").title == DEFAULT_TITLE


def test_code_fenced_output_is_unwrapped():
    recipe = parse_recipe("```text\r\n" + MINIMAL + "\r\n```")
    assert recipe.title == "Soup"
    assert recipe.cooking_time == 20


def test_each_parse_gets_fresh_identity():
    first = RecipeParser.parse(MINIMAL)
    second = RecipeParser.parse(MINIMAL)

    assert first.id != second.id
    assert first.created_at.utcoffset() == timedelta(0)
    assert first.model_dump(exclude={"id", "created_at"}) == second.model_dump(exclude={"id", "created_at"})


def test_recipe_is_immutable():
    recipe = parse_recipe(MINIMAL)
    with pytest.raises(ValidationError):
        recipe.title = "Changed"


def test_recipe_serializes_with_camel_case_keys():
    payload = parse_recipe(MINIMAL).model_dump(mode="json", by_alias=True)
    assert payload["cookingTime"] == 20
    assert payload["imageUrl"] == "https://images.unsplash.com/x"
    assert payload["difficulty"] == "easy"
    assert "createdAt" in payload


@pytest.mark.parametrize("raw", [MINIMAL, CHICKEN_MARKDOWN])
def test_reparsing_canonical_output_is_stable(raw):
    first = parse_recipe(raw)
    second = parse_recipe(format_semicolon(first))

    assert second.title == first.title
    assert second.cooking_time == first.cooking_time
    assert second.difficulty == first.difficulty
    assert second.image_url == first.image_url
    assert second.ingredients == first.ingredients

    def words(steps):
        return set(" ".join(steps).replace(",", " ").split())

    assert words(second.instructions) == words(first.instructions)
