"""Base output formatter interface."""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional, TextIO

from ..errors import ErrorKind, LinkExtractionError
from ..models import Link


class OutputFormatter(ABC):
    """Abstract base class for link output formats."""

    name: str = "unknown"
    requires_path: bool = True

    @abstractmethod
    def format(self, links: list[Link], output_path: Optional[Path] = None) -> None:
        """
        Write links in this format.

        Args:
            links: Final links to output
            output_path: Destination file, for formats that write one
        """
        pass

    def _require_path(self, output_path: Optional[Path]) -> Path:
        if output_path is None:
            raise LinkExtractionError(
                ErrorKind.INVALID_CONFIGURATION,
                f"Output path required for {self.name} format",
            )
        return Path(output_path)

    def _write(self, output_path: Optional[Path], write: Callable[[TextIO], None], newline: Optional[str] = None) -> None:
        """
        Write through a temporary file moved into place at the end.

        A failure part-way leaves any existing output untouched.
        """
        path = self._require_path(output_path)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline=newline) as f:
                write(f)
            os.replace(tmp_name, path)
        except BaseException:
            os.unlink(tmp_name)
            raise
