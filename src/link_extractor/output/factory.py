"""Formatter factory for selecting the output format."""

from .base import OutputFormatter
from .csv_formatter import CsvFormatter
from .bookmarks import HtmlFormatter
from .stdout import StdoutFormatter
from .text import TextFormatter
from ..errors import ErrorKind, LinkExtractionError


# Registry of available formatters
_FORMATTERS: dict[str, type[OutputFormatter]] = {
    formatter_class.name: formatter_class
    for formatter_class in (StdoutFormatter, TextFormatter, CsvFormatter, HtmlFormatter)
}


def create_formatter(name: str) -> OutputFormatter:
    """
    Get the formatter for an output format name.

    Args:
        name: One of list_formats()

    Returns:
        Formatter instance
    """
    formatter_class = _FORMATTERS.get(name)
    if formatter_class is None:
        raise LinkExtractionError(
            ErrorKind.INVALID_CONFIGURATION,
            f"Unknown output format {name!r} (available: {', '.join(list_formats())})",
        )
    return formatter_class()


def list_formats() -> list[str]:
    """List all supported output formats."""
    return list(_FORMATTERS)
