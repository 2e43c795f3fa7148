"""Print links to stdout, one URL per line."""

from typing import Optional

from rich.console import Console

from .base import OutputFormatter


class StdoutFormatter(OutputFormatter):
    """Prints one URL per line to standard output."""

    name = "stdout"
    requires_path = False

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False, soft_wrap=True)

    def format(self, links, output_path=None):
        for link in links:
            self.console.out(link.url)
