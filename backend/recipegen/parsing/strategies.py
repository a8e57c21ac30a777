"""
Format strategies, tried in order by the dispatcher.

Every strategy takes the raw text and returns a ``PartialRecipe`` when the
text has its shape, or ``None`` to let the next strategy try.
"""

import logging
from typing import List, Optional, Pattern, Protocol, Tuple

from ..models.recipe import PartialRecipe
from .cleaners import clean_text, collapse
from .constants import (
    COMMA_SPLIT_RE,
    INLINE_LIST_SPLIT_RE,
    LINE_LIST_SPLIT_RE,
    LIST_PREFIX_RE,
    MIN_NUMBERED_SECTIONS,
    MIN_SEMICOLON_SEGMENTS,
    NUMBERED_SECTION_RE,
    RELAXED_STEP_MIN_LENGTH,
    STEP_MARKER_RE,
)
from .extractors import (
    extract_cooking_time,
    extract_difficulty,
    extract_image_url,
    extract_ingredients,
    extract_instructions,
)
from .sections import Section, SectionAccumulator, classify_chunk, header_section

log = logging.getLogger(__name__)

# Field order shared by the semicolon format and label-free numbered output.
POSITIONAL_FIELDS: Tuple[Section, ...] = (
    Section.TITLE,
    Section.INGREDIENTS,
    Section.INSTRUCTIONS,
    Section.TIME,
    Section.IMAGE,
    Section.DIFFICULTY,
)


class FormatStrategy(Protocol):
    def __call__(self, text: str) -> Optional[PartialRecipe]:
        ...


def _from_sections(acc: SectionAccumulator, ingredient_text: Optional[str], instruction_text: Optional[str],
                   ingredient_delimiter: Pattern[str] = INLINE_LIST_SPLIT_RE) -> PartialRecipe:
    title = acc.text(Section.TITLE, separator=" ")
    return PartialRecipe(
        title=clean_text(collapse(title)) if title else None,
        ingredients=extract_ingredients(ingredient_text, ingredient_delimiter),
        instructions=extract_instructions(instruction_text),
        cooking_time=extract_cooking_time(acc.text(Section.TIME, separator=" ")),
        difficulty=extract_difficulty(acc.text(Section.DIFFICULTY, separator=" ")),
        image_url=extract_image_url(acc.text(Section.IMAGE, separator=" ")),
    )


def _time_chunk(section: Optional[Section], raw: str, content: str) -> str:
    # keep "Prep time" / "Cook time" qualifiers for extract_cooking_time
    if section is Section.TIME and content.strip():
        return raw
    return content


def numbered_sections(text: str) -> Optional[PartialRecipe]:
    """Parse ``<index>: "<content>"`` output.

    Entries are ordered by index, not by position in the text. Unlabeled
    entries continue the last labeled list section. Entries that end up
    outside any section fall back to their position in the semicolon field
    order, unless a labeled entry already filled that field.
    """
    matches: List[Tuple[int, str]] = [
        (int(m.group(1)), m.group(2)) for m in NUMBERED_SECTION_RE.finditer(text)
    ]
    if len(matches) < MIN_NUMBERED_SECTIONS:
        return None
    matches.sort(key=lambda item: item[0])

    acc = SectionAccumulator()
    unplaced: List[Tuple[int, str]] = []
    for position, (index, content) in enumerate(matches):
        section, rest = classify_chunk(content)
        stored = acc.feed(section, _time_chunk(section, content, rest))
        if stored is Section.NONE and rest.strip():
            unplaced.append((position, rest.strip()))
        log.debug(f"Numbered entry {index} -> {stored.value}")

    for position, chunk in unplaced:
        field = POSITIONAL_FIELDS[position] if position < len(POSITIONAL_FIELDS) else None
        if field is None or acc.buffers[field]:
            log.debug(f"Dropping unsectioned entry: {chunk[:40]!r}")
            continue
        acc.buffers[field].append(chunk)

    return _from_sections(
        acc,
        acc.text(Section.INGREDIENTS),
        acc.text(Section.INSTRUCTIONS),
    )


def semicolon_delimited(text: str) -> Optional[PartialRecipe]:
    """Parse ``title;ingredients;instructions;time;image;difficulty``."""
    segments = [segment.strip() for segment in text.split(";")]
    segments = [segment for segment in segments if segment]
    if len(segments) < MIN_SEMICOLON_SEGMENTS:
        return None
    if len(segments) > MIN_SEMICOLON_SEGMENTS:
        log.debug(f"Ignoring {len(segments) - MIN_SEMICOLON_SEGMENTS} extra semicolon segments")

    title, ingredients, instructions, cooking_time, image_url, difficulty = segments[:MIN_SEMICOLON_SEGMENTS]
    return PartialRecipe(
        title=clean_text(title) or None,
        ingredients=extract_ingredients(ingredients, COMMA_SPLIT_RE),
        instructions=extract_instructions(
            instructions, delimiter=COMMA_SPLIT_RE, min_length=RELAXED_STEP_MIN_LENGTH
        ),
        cooking_time=extract_cooking_time(cooking_time),
        image_url=extract_image_url(image_url),
        difficulty=extract_difficulty(difficulty),
    )


def freeform(text: str) -> PartialRecipe:
    """Heuristic line scan for markdown-ish or loosely labeled output."""
    acc = SectionAccumulator()
    for line in text.splitlines():
        if not line.strip():
            continue
        is_header, section, content = header_section(line)
        if is_header and section is None:
            # Unknown bold heading: a title if we have none, otherwise a sub-heading.
            if not acc.buffers[Section.TITLE]:
                acc.feed(Section.TITLE, content)
                acc.enter(Section.NONE)
            continue
        if section is Section.TITLE:
            acc.feed(Section.TITLE, content)
            acc.enter(Section.NONE)
            continue
        acc.feed(section, _time_chunk(section, line, content))

    ingredients = acc.buffers[Section.INGREDIENTS]
    instructions = acc.buffers[Section.INSTRUCTIONS]
    for orphan in acc.orphans:
        if STEP_MARKER_RE.match(orphan):
            instructions.append(orphan)
        elif LIST_PREFIX_RE.match(orphan):
            ingredients.append(orphan)
        else:
            log.debug(f"Dropping unsectioned line: {orphan[:40]!r}")

    delimiter = LINE_LIST_SPLIT_RE if len(ingredients) > 1 else INLINE_LIST_SPLIT_RE
    partial = _from_sections(
        acc,
        "\n".join(ingredients),
        "\n".join(instructions),
        ingredient_delimiter=delimiter,
    )
    if partial.image_url is None:
        partial.image_url = extract_image_url(text)
    return partial


STRATEGIES: Tuple[Tuple[str, FormatStrategy], ...] = (
    ("numbered-section", numbered_sections),
    ("semicolon-delimited", semicolon_delimited),
    ("freeform", freeform),
)
