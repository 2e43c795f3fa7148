"""CSV output with URL, source file and link text columns."""

import csv
from typing import TextIO

from .base import OutputFormatter

HEADER = ["URL", "Source File", "Link Text"]


class CsvFormatter(OutputFormatter):
    """URL, source file and link text for each link."""

    name = "csv"

    def format(self, links, output_path=None):
        def write(f: TextIO) -> None:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            for link in links:
                writer.writerow([link.url, str(link.source_file), link.link_text])

        self._write(output_path, write, newline='')
