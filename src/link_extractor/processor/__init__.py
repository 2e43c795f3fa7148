"""Processor module for filtering, cleaning and deduplicating links."""

from .url_processor import (
    BASE_URL,
    ProcessorConfig,
    ProcessingReport,
    UrlProcessor,
    process_links,
)

__all__ = [
    "BASE_URL",
    "ProcessorConfig",
    "ProcessingReport",
    "UrlProcessor",
    "process_links",
]
