"""Validation predicates for link input. Pure functions, no I/O."""

import re
from urllib.parse import urlparse

from link_shortener.config import SHORT_CODE_MAX_LENGTH

URL_MAX_LENGTH = 2048

CUSTOM_CODE_PATTERN = re.compile(r"[A-Za-z0-9-]+")


def is_valid_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host.

    Other schemes (javascript:, data:, ftp:) are rejected so a short link can
    never be used to launch script or non-web content.
    """
    if not isinstance(url, str):
        return False
    if not url or len(url) > URL_MAX_LENGTH:
        return False
    if any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc) and bool(hostname)


def is_valid_custom_code(code: str, max_length: int = SHORT_CODE_MAX_LENGTH) -> bool:
    """True when `code` is 1..max_length characters of letters, digits and hyphens."""
    if not isinstance(code, str):
        return False
    return 0 < len(code) <= max_length and bool(CUSTOM_CODE_PATTERN.fullmatch(code))
