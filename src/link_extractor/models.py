"""Data model for links extracted from Markdown files."""

from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class Link:
    """A single hyperlink found in a Markdown document."""

    url: str
    source_file: Path
    link_text: str = ""

    def with_url(self, url: str) -> "Link":
        """Return a copy pointing at a different URL."""
        if url == self.url:
            return self
        return replace(self, url=url)
