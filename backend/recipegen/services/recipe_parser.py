"""
Recipe text normalizer: numbered sections first, then the semicolon contract,
then a freeform heuristic. Always returns a complete Recipe for non-empty text.
"""

import logging
from typing import Optional, Sequence, Tuple

from ..core.exceptions import InvalidInput
from ..models.recipe import PartialRecipe, Recipe
from ..parsing.cleaners import normalize_newlines, strip_code_fences
from ..parsing.defaults import finalize
from ..parsing.strategies import STRATEGIES, FormatStrategy

log = logging.getLogger(__name__)


class RecipeParser:
    strategies: Sequence[Tuple[str, FormatStrategy]] = STRATEGIES

    @classmethod
    def detect(cls, text: str) -> Tuple[Optional[str], Optional[PartialRecipe]]:
        """Run strategies in order and return the first one that recognises the text."""
        for name, strategy in cls.strategies:
            partial = strategy(text)
            if partial is not None:
                return name, partial
        return None, None

    @classmethod
    def parse(cls, raw: str) -> Recipe:
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidInput(raw)

        text = strip_code_fences(normalize_newlines(raw))
        if not text:
            log.warning("Recipe text held only code fences, returning defaults")
            return finalize(None)

        name, partial = cls.detect(text)
        log.debug(f"Parsed {len(text)} characters with the {name} strategy")
        return finalize(partial)


def parse_recipe(raw: str) -> Recipe:
    return RecipeParser.parse(raw)
