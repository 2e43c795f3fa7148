"""Cleaner that strips analytics tracking parameters from query strings."""

from typing import Iterable
from urllib.parse import parse_qsl, quote, urlunsplit

from .base import UrlCleaner
from ..models import Link
from ..utils.urls import split_url

TRACKER_PREFIXES = ("utm_",)
TRACKER_PARAMS = frozenset({"fbclid", "gclid", "msclkid", "ref", "source"})

# Characters left unencoded when the query string is rebuilt
_QUERY_SAFE = "/:@!$'()*,;?"


class TrackerParamCleaner(UrlCleaner):
    """Removes tracker parameters and sorts the remaining ones by key."""

    name = "tracker"

    def __init__(self, extra_params: Iterable[str] = ()):
        self.tracker_params = TRACKER_PARAMS | frozenset(extra_params)

    def is_tracker_param(self, key: str) -> bool:
        """Check if a query key is used for analytics/attribution."""
        return key.startswith(TRACKER_PREFIXES) or key in self.tracker_params

    def clean(self, link: Link) -> Link:
        parts = split_url(link.url)
        if parts is None or not parts.query:
            return link

        pairs = parse_qsl(parts.query, keep_blank_values=True)
        if not any(self.is_tracker_param(key) for key, _ in pairs):
            return link

        kept = sorted(
            (pair for pair in pairs if not self.is_tracker_param(pair[0])),
            key=lambda pair: pair[0],
        )
        query = "&".join(
            f"{quote(key, safe=_QUERY_SAFE)}={quote(value, safe=_QUERY_SAFE)}"
            for key, value in kept
        )
        return link.with_url(urlunsplit(parts._replace(query=query)))
