"""Main CLI entry point for the Markdown link extractor."""

import logging
import sys
from pathlib import Path

import hydra
from omegaconf import DictConfig
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, MofNCompleteColumn

from .cleaner import build_cleaner
from .config import ExtractorSettings
from .errors import LinkExtractionError
from .extraction import LinkExtractor
from .output import create_formatter
from .processor import ProcessingReport

# Diagnostics go to stderr so stdout stays clean for the link list
console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=False, show_time=False, show_path=False)],
    )


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    configure_logging(cfg.logging.level)

    try:
        run(cfg)
    except LinkExtractionError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def run(cfg: DictConfig) -> ProcessingReport:
    """
    Run a full extraction: discover, scan, process and write links.

    The configuration and output format are checked before any file is read.
    """
    settings = ExtractorSettings.from_config(cfg)
    formatter = create_formatter(settings.output_format)
    cleaner = build_cleaner(settings.cleaners, settings.extra_tracker_params)

    extractor = LinkExtractor(
        config=settings.processor_config,
        cleaner=cleaner,
        max_workers=settings.max_workers,
        skip_front_matter=settings.skip_front_matter,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Extracting links...", total=None)
        files: list[Path] = []

        def on_files(found: list[Path]) -> None:
            files.extend(found)
            progress.update(task, total=len(found))

        report = extractor.extract_directory(
            settings.source_dir,
            pattern=settings.file_pattern,
            recursive=settings.recursive,
            progress_callback=lambda _: progress.advance(task),
            files_callback=on_files,
        )

    formatter.format(report.links, settings.output_path)

    show_summary(report, len(files))
    return report


def show_summary(report: ProcessingReport, file_count: int) -> None:
    """Print a one-line summary of the run."""
    issue_style = "yellow" if report.issues else "green"
    console.print(
        f"[cyan]Files:[/cyan] {file_count}  "
        f"[cyan]Links:[/cyan] [green]{len(report)}[/green]  "
        f"[cyan]Skipped:[/cyan] {report.skipped}  "
        f"[cyan]Issues:[/cyan] [{issue_style}]{len(report.issues)}[/{issue_style}]"
    )


if __name__ == "__main__":
    main()
