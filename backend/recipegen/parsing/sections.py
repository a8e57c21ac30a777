import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .constants import (
    BARE_IMAGE_HOST_RE,
    BOLD_HEADER_RE,
    DIFFICULTY_ONLY_RE,
    SECTION_LABEL_RE,
    TIME_ONLY_RE,
    URL_RE,
)

log = logging.getLogger(__name__)


class Section(str, Enum):
    NONE = "none"
    TITLE = "title"
    INGREDIENTS = "ingredients"
    INSTRUCTIONS = "instructions"
    TIME = "time"
    DIFFICULTY = "difficulty"
    IMAGE = "image"


# Sections holding one value; an unlabeled chunk after that value closes them.
SINGLE_VALUE_SECTIONS = frozenset({Section.TITLE, Section.TIME, Section.DIFFICULTY, Section.IMAGE})


def match_label(text: str) -> Tuple[Optional[Section], str]:
    """Detect a leading section label such as ``Ingredients:`` or ``**Method**``.

    Returns the section and the text that follows the label, or
    ``(None, text)`` when there is no label.
    """
    match = SECTION_LABEL_RE.match(text)
    if not match or not match.lastgroup:
        return None, text
    return Section(match.lastgroup), text[match.end():].strip()


def sniff_shape(text: str) -> Optional[Section]:
    """Classify an unlabeled chunk that is obviously a single field value."""
    stripped = text.strip()
    if not stripped:
        return None
    if URL_RE.search(stripped) or BARE_IMAGE_HOST_RE.search(stripped):
        return Section.IMAGE
    if TIME_ONLY_RE.match(stripped):
        return Section.TIME
    if DIFFICULTY_ONLY_RE.match(stripped):
        return Section.DIFFICULTY
    return None


def classify_chunk(text: str) -> Tuple[Optional[Section], str]:
    section, rest = match_label(text)
    if section is not None:
        return section, rest
    return sniff_shape(text), text


def header_section(line: str) -> Tuple[bool, Optional[Section], str]:
    """Decide whether a freeform line is a header.

    Returns ``(is_header, section, inline_content)``. Bold or heading lines
    are headers even when they name no known section; in that case the
    section is ``None`` and the caller decides what the header means.
    """
    bold = BOLD_HEADER_RE.match(line)
    if bold:
        inner = next(group for group in bold.groups() if group is not None).strip()
        section, rest = match_label(inner)
        return True, section, rest if section is not None else inner
    section, rest = match_label(line)
    if section is not None:
        return True, section, rest
    return False, None, line


class SectionAccumulator:
    """
    Finite-state accumulator for section carry-over.

    The active section changes when a labeled chunk arrives. Unlabeled
    chunks extend an active list section (ingredients, instructions); a
    single-value section accepts one chunk and then closes. Unlabeled text
    seen outside any section becomes the title if no title is set yet,
    otherwise it is kept aside as an orphan for the caller to route.
    """

    def __init__(self) -> None:
        self.state = Section.NONE
        self.buffers: Dict[Section, List[str]] = {section: [] for section in Section if section is not Section.NONE}
        self.orphans: List[str] = []

    def enter(self, section: Section) -> None:
        if section is not self.state:
            log.debug(f"Section transition {self.state.value} -> {section.value}")
        self.state = section

    def feed(self, section: Optional[Section], content: str) -> Section:
        """Route ``content`` and return the section it was stored under."""
        if section is not None:
            self.enter(section)
        elif self.state in SINGLE_VALUE_SECTIONS and self.buffers[self.state]:
            self.enter(Section.NONE)
        content = content.strip()

        target = self.state
        if target is Section.NONE:
            if self.buffers[Section.TITLE]:
                if content:
                    self.orphans.append(content)
                return Section.NONE
            target = Section.TITLE

        if content:
            self.buffers[target].append(content)
        return target

    def text(self, section: Section, separator: str = "\n") -> Optional[str]:
        chunks = self.buffers.get(section) or []
        if not chunks:
            return None
        return separator.join(chunks)

    def has_content(self) -> bool:
        return any(self.buffers.values())
