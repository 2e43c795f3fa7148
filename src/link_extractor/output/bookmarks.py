"""Netscape bookmark file output, importable by browsers."""

from html import escape
from typing import TextIO

from .base import OutputFormatter

HEADER = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file. -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
"""


class HtmlFormatter(OutputFormatter):
    """Bookmarks titled by link text (or the URL when there is none)."""

    name = "html"

    def format(self, links, output_path=None):
        def write(f: TextIO) -> None:
            f.write(HEADER)
            for link in links:
                title = link.link_text or link.url
                f.write(f'    <DT><A HREF="{escape(link.url)}">{escape(title, quote=False)}</A>\n')
                f.write(f"    <DD>Source: {escape(str(link.source_file), quote=False)}\n")
            f.write("</DL><p>\n")

        self._write(output_path, write)
