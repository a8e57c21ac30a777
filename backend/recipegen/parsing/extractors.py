"""
Field extractors. Each one returns ``None`` or an empty list when it finds
nothing usable; defaults are applied later by ``defaults.finalize``.
"""

import logging
from typing import Dict, List, Optional, Pattern, Tuple

from ..models.image_url import approved_image_url
from ..models.recipe import MAX_COOKING_TIME, MIN_INGREDIENT_LENGTH, Difficulty
from .cleaners import (
    clean_item,
    keep_longer_than,
    split_items,
)
from .constants import (
    BARE_IMAGE_HOST_RE,
    BARE_NUMBER_RE,
    COMMA_SPLIT_RE,
    DIFFICULTY_KEYWORDS,
    HOURS_RE,
    INLINE_LIST_SPLIT_RE,
    MIN_STEP_LENGTH,
    MINUTES_RE,
    RELAXED_STEP_MIN_LENGTH,
    SENTENCE_SPLIT_RE,
    STEP_MARKER_RE,
    TIME_KIND_RE,
    URL_RE,
)

log = logging.getLogger(__name__)


def extract_ingredients(text: Optional[str], delimiter: Pattern[str] = INLINE_LIST_SPLIT_RE) -> List[str]:
    """Split an ingredient block into cleaned entries.

    Order is preserved and duplicates are kept; entries of
    ``MIN_INGREDIENT_LENGTH`` characters or fewer are dropped.
    """
    items = [clean_item(token) for token in split_items(text or "", delimiter)]
    return keep_longer_than(items, MIN_INGREDIENT_LENGTH)


def numbered_steps(text: str) -> List[Tuple[int, str]]:
    """Find ``<n>. step`` / ``<n>) step`` entries, sorted by their label.

    A marker only counts at the start of the text or right after a sentence
    boundary, so "bake at 180. Then..." is not read as step 180.
    """
    markers = list(STEP_MARKER_RE.finditer(text))
    steps: List[Tuple[int, str]] = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
        body = text[marker.end():end].strip().rstrip(",;").strip()
        steps.append((int(marker.group(1)), body))
    # sorted() is stable, so repeated labels keep their textual order
    return sorted(steps, key=lambda step: step[0])


def extract_instructions(
    text: Optional[str],
    delimiter: Pattern[str] = SENTENCE_SPLIT_RE,
    min_length: int = MIN_STEP_LENGTH,
) -> List[str]:
    """Turn an instruction block into an ordered list of steps.

    Explicit numbering wins and is re-ordered by label. Without numbering the
    block is split on ``delimiter`` and short fragments are dropped; if that
    leaves nothing, a comma split with a relaxed threshold is tried.
    """
    if not text or not text.strip():
        return []

    numbered = [clean_item(body) for _, body in numbered_steps(text)]
    numbered = keep_longer_than(numbered, RELAXED_STEP_MIN_LENGTH)
    if numbered:
        return numbered

    steps = keep_longer_than([clean_item(part) for part in split_items(text, delimiter)], min_length)
    if steps:
        return steps

    log.debug("No steps from primary split, falling back to comma split")
    steps = [clean_item(part) for part in split_items(text, COMMA_SPLIT_RE)]
    return keep_longer_than(steps, RELAXED_STEP_MIN_LENGTH)


def _duration(text: str) -> Optional[int]:
    hours = HOURS_RE.search(text)
    minutes = MINUTES_RE.search(text)
    if hours or minutes:
        total = 0.0
        if hours:
            total += float(hours.group(1)) * 60
        if minutes:
            total += int(minutes.group(1))
        return int(round(total))

    for match in BARE_NUMBER_RE.finditer(text):
        value = int(match.group(0))
        if 0 < value < MAX_COOKING_TIME:
            return value
        log.debug(f"Ignoring implausible cooking time {value}")
        break
    return None


def _labeled_durations(text: str) -> Dict[str, int]:
    """Durations keyed by ``total`` / ``cook`` / ``prep``; the first of each kind wins."""
    kinds = list(TIME_KIND_RE.finditer(text))
    durations: Dict[str, int] = {}
    for i, kind in enumerate(kinds):
        end = kinds[i + 1].start() if i + 1 < len(kinds) else len(text)
        value = _duration(text[kind.end():end])
        if value is not None:
            durations.setdefault(kind.lastgroup, value)
    return durations


def extract_cooking_time(text: Optional[str]) -> Optional[int]:
    """Cooking time in minutes.

    ``Total time`` wins when given; otherwise labeled prep and cook times
    are added up. Unlabeled text uses its first duration.
    """
    if not text:
        return None

    labeled = _labeled_durations(text)
    if "total" in labeled:
        return labeled["total"]
    if labeled:
        return sum(labeled.values())
    return _duration(text)


def extract_difficulty(text: Optional[str]) -> Optional[Difficulty]:
    if not text:
        return None
    lowered = text.lower()
    for level, keywords in DIFFICULTY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return Difficulty(level)
    return None


def extract_image_url(text: Optional[str]) -> Optional[str]:
    """Find an image URL on an approved host, or ``None``.

    Absolute URLs are checked first; bare ``images.unsplash.com/...`` style
    fragments are promoted to https. Anything else, including malformed
    URLs, is treated as absent.
    """
    if not text:
        return None

    for match in URL_RE.finditer(text):
        url = approved_image_url(match.group(0))
        if url:
            return url

    for match in BARE_IMAGE_HOST_RE.finditer(text):
        url = approved_image_url("https://" + match.group(1))
        if url:
            return url
    return None
