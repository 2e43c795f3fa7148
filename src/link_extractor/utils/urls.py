"""Helpers for validating URLs and resolving relative ones."""

from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit

# Schemes whose URLs are meaningless without a host
SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def split_url(url: str) -> Optional[SplitResult]:
    """Parse an absolute URL. Returns None for relative or malformed URLs."""
    if not url or any(ch.isspace() or ord(ch) < 0x20 or ch == '\x7f' for ch in url):
        return None

    try:
        parts = urlsplit(url)
        parts.port  # Raises on a non-numeric or out-of-range port
    except ValueError:
        return None

    if not parts.scheme:
        return None
    if parts.scheme in SPECIAL_SCHEMES and not parts.hostname:
        return None
    return parts


def resolve_url(url: str, base_url: str) -> Optional[SplitResult]:
    """Parse a URL, falling back to resolving it against ``base_url``."""
    parts = split_url(url)
    if parts is not None:
        return parts

    # Only relative URLs are resolved; a broken absolute URL stays broken
    try:
        if urlsplit(url).scheme:
            return None
    except ValueError:
        return None

    if split_url(base_url) is None:
        return None
    return split_url(urljoin(base_url, url))
