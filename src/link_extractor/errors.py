"""Error types shared by the extraction pipeline."""

from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of failure the pipeline distinguishes."""

    MALFORMED_URL = "malformed_url"                  # One link skipped
    UNREADABLE_FILE = "unreadable_file"              # One document skipped
    INVALID_CONFIGURATION = "invalid_configuration"  # Whole run aborted


class LinkExtractionError(Exception):
    """Raised (or collected as an issue) when part of an extraction fails."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        url: Optional[str] = None,
        source_file: Optional[Path] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.url = url
        self.source_file = source_file

    @property
    def recoverable(self) -> bool:
        """Per-link and per-file problems never stop a run."""
        return self.kind != ErrorKind.INVALID_CONFIGURATION

    def __str__(self) -> str:
        parts = [self.message]
        if self.url is not None:
            parts.append(f"url={self.url!r}")
        if self.source_file is not None:
            parts.append(f"file={self.source_file}")
        return " ".join(parts)
