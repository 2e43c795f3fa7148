"""Extraction orchestrator: scan documents concurrently, then process the links."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Optional

from .cleaner import UrlCleaner
from .errors import ErrorKind, LinkExtractionError
from .models import Link
from .parser import find_markdown_files, scan_markdown
from .processor import ProcessingReport, ProcessorConfig, UrlProcessor

logger = logging.getLogger(__name__)


class _LinkAccumulator:
    """Collects links from concurrent scans; each document is appended atomically."""

    def __init__(self):
        self._lock = threading.Lock()
        self._links: list[Link] = []
        self._issues: list[LinkExtractionError] = []

    def extend(self, links: list[Link]) -> None:
        with self._lock:
            self._links.extend(links)

    def add_issue(self, issue: LinkExtractionError) -> None:
        with self._lock:
            self._issues.append(issue)

    @property
    def links(self) -> list[Link]:
        with self._lock:
            return list(self._links)

    @property
    def issues(self) -> list[LinkExtractionError]:
        with self._lock:
            return list(self._issues)


class LinkExtractor:
    """Extracts, cleans and deduplicates links from a set of Markdown documents."""

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        cleaner: Optional[UrlCleaner] = None,
        max_workers: Optional[int] = None,
        skip_front_matter: bool = True,
    ):
        """
        Initialize the extractor.

        Args:
            config: Domain and protocol filters
            cleaner: Cleaner chain (default: all registered cleaners)
            max_workers: Threads used for scanning (default: executor default)
            skip_front_matter: Ignore YAML front matter in documents
        """
        self.processor = UrlProcessor(config, cleaner)
        self.max_workers = max_workers
        self.skip_front_matter = skip_front_matter

    def scan_documents(self, documents: Iterable[tuple[Path, str]]) -> list[Link]:
        """
        Scan documents already loaded in memory.

        Args:
            documents: (path, text) pairs

        Returns:
            Raw links; per-document order is kept, documents may interleave
        """
        accumulator = _LinkAccumulator()

        def scan(document: tuple[Path, str]) -> None:
            path, text = document
            accumulator.extend(scan_markdown(text, path, skip_front_matter=self.skip_front_matter))

        self._run(scan, documents)
        return accumulator.links

    def scan_files(
        self,
        paths: Iterable[Path],
        progress_callback: Optional[Callable[[Path], None]] = None,
    ) -> list[Link]:
        """
        Read and scan files concurrently.

        Unreadable files are logged and contribute no links.

        Args:
            paths: Markdown files to scan
            progress_callback: Called with each path once it is done

        Returns:
            Raw links; per-file order is kept, files may interleave
        """
        return self._scan_files(paths, progress_callback).links

    def _scan_files(
        self,
        paths: Iterable[Path],
        progress_callback: Optional[Callable[[Path], None]],
    ) -> _LinkAccumulator:
        accumulator = _LinkAccumulator()

        def scan(path: Path) -> None:
            try:
                text = Path(path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Error reading file %s: %s", path, e)
                accumulator.add_issue(LinkExtractionError(
                    ErrorKind.UNREADABLE_FILE,
                    f"Unreadable file: {e}",
                    source_file=Path(path),
                ))
            else:
                accumulator.extend(scan_markdown(text, Path(path), skip_front_matter=self.skip_front_matter))
            finally:
                if progress_callback:
                    progress_callback(path)

        self._run(scan, paths)
        return accumulator

    def extract(
        self,
        paths: Iterable[Path],
        progress_callback: Optional[Callable[[Path], None]] = None,
    ) -> ProcessingReport:
        """
        Scan files and process the links they contain.

        Args:
            paths: Markdown files to scan
            progress_callback: Called with each path once it is scanned

        Returns:
            ProcessingReport; unreadable-file issues come first
        """
        scanned = self._scan_files(paths, progress_callback)
        report = self.processor.process(scanned.links)
        report.issues = scanned.issues + report.issues
        return report

    def extract_directory(
        self,
        directory: Path,
        pattern: str = "*.md",
        recursive: bool = True,
        progress_callback: Optional[Callable[[Path], None]] = None,
        files_callback: Optional[Callable[[list[Path]], None]] = None,
    ) -> ProcessingReport:
        """
        Find Markdown files under a directory and extract their links.

        ``files_callback`` receives the discovered files before scanning starts.
        A missing directory is a configuration error.
        """
        try:
            files = find_markdown_files(Path(directory), pattern=pattern, recursive=recursive)
        except NotADirectoryError as e:
            raise LinkExtractionError(ErrorKind.INVALID_CONFIGURATION, str(e)) from e
        logger.info("Found %d Markdown files in %s", len(files), directory)

        if files_callback is not None:
            files_callback(files)
        return self.extract(files, progress_callback=progress_callback)

    def _run(self, task: Callable, items: Iterable) -> None:
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            # list() surfaces exceptions raised in workers
            list(executor.map(task, items))
