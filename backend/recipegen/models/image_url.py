"""
Image URL allow-list shared by the recipe model and the extractors.

A URL is accepted only when it is an absolute http(s) URL written entirely
in RFC 3986 characters, carries no userinfo, and its host is one of
``APPROVED_IMAGE_HOSTS`` or a subdomain of one.
"""

import re
from typing import Optional, Tuple
from urllib.parse import urlparse

APPROVED_IMAGE_HOSTS: Tuple[str, ...] = ("unsplash.com", "pexels.com", "pixabay.com")

# Unreserved, reserved and percent-encoding characters; a backslash is not
# among them and browsers read it as a path separator.
URL_CHARS_RE = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")


def is_approved_host(host: Optional[str]) -> bool:
    if not host:
        return False
    host = host.lower().rstrip(".")
    return any(host == approved or host.endswith("." + approved) for approved in APPROVED_IMAGE_HOSTS)


def approved_image_url(candidate: Optional[str]) -> Optional[str]:
    """Return ``candidate`` if it is an absolute http(s) URL on an approved host.

    Malformed URLs are treated as absent rather than raised.
    """
    if not candidate:
        return None
    candidate = candidate.strip().rstrip(".")
    if not URL_CHARS_RE.fullmatch(candidate):
        return None
    try:
        parsed = urlparse(candidate)
        host = parsed.hostname
    except ValueError:
        return None
    if parsed.scheme.lower() not in ("http", "https"):
        return None
    if "@" in parsed.netloc:
        return None
    if not is_approved_host(host):
        return None
    return candidate
