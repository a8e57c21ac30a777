import re
from typing import Pattern, Tuple

DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_INGREDIENT = "No ingredients listed"
DEFAULT_INSTRUCTION = "No instructions provided"
DEFAULT_COOKING_TIME = 30
FALLBACK_IMAGE_URL = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c"

# Length thresholds, measured after cleaning (entries must be strictly longer).
MIN_STEP_LENGTH = 10
RELAXED_STEP_MIN_LENGTH = 5

MIN_NUMBERED_SECTIONS = 3
MIN_SEMICOLON_SEGMENTS = 6

DISALLOWED_CHARS_RE = re.compile(r"[^\w\s\-.,!?]")
WHITESPACE_RE = re.compile(r"\s+")
LIST_PREFIX_RE = re.compile(r"^\s*(?:[-*•]\s*|\d{1,3}[.)]\s+)")
CODE_FENCE_RE = re.compile(r"^```[\w-]*\s*|\s*```$")

NUMBERED_SECTION_RE = re.compile(r'(\d+)\s*:\s*"([^"]*)"')

COMMA_SPLIT_RE = re.compile(r"\s*,\s*")
INLINE_LIST_SPLIT_RE = re.compile(r"\s*[,;\n]\s*|\s+[•*]\s+|\s+-\s+")
LINE_LIST_SPLIT_RE = re.compile(r"\s*\n\s*|\s+[•*]\s+")
SENTENCE_SPLIT_RE = re.compile(r"(?<=\.)\s+|;\s*|\n+")

STEP_MARKER_RE = re.compile(r"(?:^|(?<=[\n.!?;,:]))\s*(\d{1,3})[.)]\s+")

HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?|h)\b", re.I)
MINUTES_RE = re.compile(r"(\d+)\s*(?:minutes?|mins?|m)\b", re.I)
TIME_KIND_RE = re.compile(
    r"\b(?:(?P<total>total)|(?P<cook>cook)(?:ing)?|(?P<prep>prep)(?:aration)?)\s+time\b", re.I
)
BARE_NUMBER_RE = re.compile(r"\d+")

DIFFICULTY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("easy", ("easy",)),
    ("medium", ("medium",)),
    ("hard", ("hard", "difficult")),
)

URL_RE = re.compile(r"https?://[^\s\"'<>;,)\]\\]+", re.I)
BARE_IMAGE_HOST_RE = re.compile(
    r"(?<![\w./\\@-])((?:[\w-]+\.)*(?:unsplash|pexels|pixabay)\.com/[^\s\"'<>;,)\]\\]*)",
    re.I,
)

# Label keywords that open a section, matched at the start of a chunk or line.
SECTION_LABELS: Tuple[Tuple[str, str], ...] = (
    ("title", r"title|recipe\s+name|recipe\s+title|recipe|name|dish"),
    ("ingredients", r"ingredients?|ingredient\s+list|you\s+will\s+need|shopping\s+list"),
    ("instructions", r"instructions?|directions?|steps?|method|preparation|procedure"),
    ("time", r"(?:total\s+|cooking\s+|cook\s+|prep(?:aration)?\s+)?time|duration"),
    ("difficulty", r"difficulty(?:\s+level)?|level"),
    ("image", r"image(?:\s+url)?|photo(?:\s+url)?|picture|img"),
)


def _label_pattern() -> Pattern[str]:
    alternatives = "|".join(f"(?P<{name}>{body})" for name, body in SECTION_LABELS)
    return re.compile(
        rf"^[#*_>\s-]*(?:{alternatives})\b[*_\s]*(?:[:\-–][*_\s]*|$)",
        re.I,
    )


SECTION_LABEL_RE = _label_pattern()

BOLD_HEADER_RE = re.compile(r"^\s*(?:\*\*(.+?)\*\*|__(.+?)__|#{1,6}\s+(.+?))\s*:?\s*$")

TIME_ONLY_RE = re.compile(
    r"^(?:about\s+|approx\.?\s+|~\s*)?\d+\s*(?:minutes?|mins?|hours?|hrs?)\.?$", re.I
)
DIFFICULTY_ONLY_RE = re.compile(r"^(?:easy|medium|hard|difficult)\.?$", re.I)
