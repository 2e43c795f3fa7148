"""Parser module for extracting links from Markdown files."""

from .md_parser import (
    scan_markdown,
    parse_md_file,
    find_markdown_files,
)

__all__ = [
    "scan_markdown",
    "parse_md_file",
    "find_markdown_files",
]
