"""Extract, clean and deduplicate hyperlinks from Markdown files."""

from .models import Link
from .errors import ErrorKind, LinkExtractionError
from .parser import scan_markdown, parse_md_file, find_markdown_files
from .cleaner import (
    UrlCleaner,
    TrackerParamCleaner,
    YouTubeUrlCleaner,
    CompositeUrlCleaner,
    build_cleaner,
)
from .processor import ProcessorConfig, ProcessingReport, UrlProcessor, process_links
from .extraction import LinkExtractor

__version__ = "0.1.0"

__all__ = [
    "Link",
    "ErrorKind",
    "LinkExtractionError",
    "scan_markdown",
    "parse_md_file",
    "find_markdown_files",
    "UrlCleaner",
    "TrackerParamCleaner",
    "YouTubeUrlCleaner",
    "CompositeUrlCleaner",
    "build_cleaner",
    "ProcessorConfig",
    "ProcessingReport",
    "UrlProcessor",
    "process_links",
    "LinkExtractor",
]
