"""Plain text output, one URL per line."""

from typing import TextIO

from .base import OutputFormatter


class TextFormatter(OutputFormatter):
    """One URL per line."""

    name = "text"

    def format(self, links, output_path=None):
        def write(f: TextIO) -> None:
            for link in links:
                f.write(f"{link.url}\n")

        self._write(output_path, write)
