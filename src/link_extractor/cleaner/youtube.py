"""YouTube URL canonicalizer."""

from typing import Optional
from urllib.parse import parse_qsl, quote, unquote

from .base import UrlCleaner
from ..models import Link
from ..utils.urls import split_url

CANONICAL_URL = "https://www.youtube.com/watch?v={video_id}"


class YouTubeUrlCleaner(UrlCleaner):
    """Rewrites every form of a YouTube video link to the watch URL."""

    name = "youtube"

    def supports(self, url: str) -> bool:
        """Check if the URL points at a YouTube host."""
        parts = split_url(url)
        if parts is None or not parts.hostname:
            return False
        host = parts.hostname
        return host == "youtube.com" or host.endswith(".youtube.com") or host == "youtu.be"

    def extract_video_id(self, url: str) -> Optional[str]:
        """
        Extract the video ID from a YouTube URL.

        Handles youtube.com/watch?v=ID, youtube.com/embed/ID,
        youtube.com/v/ID and youtu.be/ID.
        """
        if not self.supports(url):
            return None

        parts = split_url(url)
        if parts.hostname == "youtu.be":
            if len(parts.path) > 1:
                return unquote(parts.path[1:])
            return None

        if parts.path == "/watch":
            for key, value in parse_qsl(parts.query, keep_blank_values=True):
                if key == "v":
                    return value or None
            return None

        if parts.path.startswith(("/embed/", "/v/")):
            return unquote(parts.path.split("/")[2]) or None

        return None

    def clean(self, link: Link) -> Link:
        video_id = self.extract_video_id(link.url)
        if video_id is None:
            return link
        return link.with_url(CANONICAL_URL.format(video_id=quote(video_id, safe="")))
