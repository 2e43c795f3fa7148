"""URL processing: validation, filtering, cleaning and deduplication."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..cleaner import UrlCleaner, build_cleaner
from ..errors import ErrorKind, LinkExtractionError
from ..models import Link
from ..utils.urls import resolve_url, split_url

logger = logging.getLogger(__name__)

# Relative links are resolved against this to read their scheme and host
BASE_URL = "http://base.example.com/"


@dataclass(frozen=True)
class ProcessorConfig:
    """Filters applied to every link."""

    filter_domain: Optional[str] = None
    filter_protocols: frozenset[str] = field(default_factory=frozenset)  # Empty = allow all

    def __post_init__(self):
        object.__setattr__(self, "filter_protocols", frozenset(self.filter_protocols))


@dataclass
class ProcessingReport:
    """Result of processing a batch of links."""

    links: list[Link] = field(default_factory=list)
    issues: list[LinkExtractionError] = field(default_factory=list)

    # Counts of links dropped at each stage
    fragments: int = 0
    filtered: int = 0
    duplicates: int = 0

    @property
    def skipped(self) -> int:
        """Total number of links that did not make it into the output."""
        malformed = sum(1 for issue in self.issues if issue.kind == ErrorKind.MALFORMED_URL)
        return self.fragments + self.filtered + self.duplicates + malformed

    def __len__(self) -> int:
        return len(self.links)

    def __iter__(self):
        return iter(self.links)


class UrlProcessor:
    """Turns the raw links of a run into the final, deduplicated list."""

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        cleaner: Optional[UrlCleaner] = None,
        base_url: str = BASE_URL,
    ):
        """
        Initialize the processor.

        Args:
            config: Domain and protocol filters (default: no filtering)
            cleaner: Cleaner applied to surviving links (default: all registered)
            base_url: Base for resolving relative links
        """
        self.config = config or ProcessorConfig()
        self.cleaner = cleaner if cleaner is not None else build_cleaner()
        self.base_url = base_url

    def process(self, links: Iterable[Link]) -> ProcessingReport:
        """
        Validate, filter, clean and deduplicate links.

        The first link (in input order) that maps to a cleaned URL is kept.
        Per-link problems are logged and recorded, never raised.

        Args:
            links: Raw links from the scanner

        Returns:
            ProcessingReport with the surviving links

        Raises:
            LinkExtractionError: If the base URL itself is invalid
        """
        base = split_url(self.base_url)
        if base is None or not base.hostname:
            raise LinkExtractionError(
                ErrorKind.INVALID_CONFIGURATION,
                "Base URL for resolving relative links is invalid",
                url=self.base_url,
            )

        report = ProcessingReport()
        unique: dict[str, Link] = {}

        for link in links:
            # Pure in-page anchors
            if link.url.startswith("#"):
                report.fragments += 1
                continue

            parsed = resolve_url(link.url, self.base_url)
            if parsed is None:
                logger.warning("Skipping malformed URL %r from %s", link.url, link.source_file)
                report.issues.append(LinkExtractionError(
                    ErrorKind.MALFORMED_URL,
                    "Malformed URL",
                    url=link.url,
                    source_file=link.source_file,
                ))
                continue

            if not self._passes_filters(parsed.scheme, parsed.hostname):
                report.filtered += 1
                continue

            cleaned = self.cleaner.clean(link)
            if cleaned.url in unique:
                report.duplicates += 1
                continue
            unique[cleaned.url] = cleaned

        report.links = list(unique.values())
        return report

    def _passes_filters(self, scheme: str, host: Optional[str]) -> bool:
        domain = self.config.filter_domain
        if domain is not None:
            if not host or domain not in host:
                return False

        protocols = self.config.filter_protocols
        if protocols and scheme not in protocols:
            return False

        return True


def process_links(
    links: Iterable[Link],
    filter_domain: Optional[str] = None,
    filter_protocols: Iterable[str] = (),
) -> list[Link]:
    """Process links with the default cleaner chain."""
    config = ProcessorConfig(filter_domain=filter_domain, filter_protocols=frozenset(filter_protocols))
    return UrlProcessor(config).process(links).links
