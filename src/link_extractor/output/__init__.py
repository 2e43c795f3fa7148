"""Output module for writing the final links."""

from .base import OutputFormatter
from .stdout import StdoutFormatter
from .text import TextFormatter
from .csv_formatter import CsvFormatter
from .bookmarks import HtmlFormatter
from .factory import create_formatter, list_formats

__all__ = [
    "OutputFormatter",
    "StdoutFormatter",
    "TextFormatter",
    "CsvFormatter",
    "HtmlFormatter",
    "create_formatter",
    "list_formats",
]
