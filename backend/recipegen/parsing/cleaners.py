"""
Shared text primitives used by every extraction path.
"""

from typing import List, Optional, Pattern

from .constants import (
    CODE_FENCE_RE,
    DISALLOWED_CHARS_RE,
    LIST_PREFIX_RE,
    WHITESPACE_RE,
)


def clean_text(text: Optional[str]) -> str:
    """Drop characters outside ``[\\w\\s\\-.,!?]``, collapse whitespace and trim."""
    if not text:
        return ""
    text = DISALLOWED_CHARS_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def strip_list_prefix(text: str) -> str:
    return LIST_PREFIX_RE.sub("", text, count=1).strip()


def clean_item(text: str) -> str:
    """Clean a single list entry, removing any bullet or ``1.`` marker first."""
    return clean_text(strip_list_prefix(text))


def split_items(text: str, delimiter: Pattern[str]) -> List[str]:
    if not text:
        return []
    return [part for part in delimiter.split(text) if part and part.strip()]


def keep_longer_than(items: List[str], min_length: int) -> List[str]:
    return [item for item in items if len(item) > min_length]


def strip_code_fences(text: str) -> str:
    return CODE_FENCE_RE.sub("", text.strip()).strip()


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def collapse(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()
