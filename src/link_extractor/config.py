"""Run settings, validated from the hydra configuration."""

from pathlib import Path
from typing import Optional

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ErrorKind, LinkExtractionError
from .output import create_formatter, list_formats
from .processor import ProcessorConfig

SUPPORTED_PROTOCOLS = ("http", "https", "ftp", "file", "mailto")


class ExtractorSettings(BaseModel):
    """Everything a run needs, checked before any file is read."""

    # Input
    source_dir: Path = Field(..., description="Directory containing Markdown files")
    file_pattern: str = Field("*.md", description="Glob pattern for Markdown files")
    recursive: bool = Field(True, description="Scan subdirectories")

    # Output
    output_format: str = Field("stdout", description="stdout, text, csv or html")
    output_path: Optional[Path] = Field(None, description="Output file for file formats")

    # Filters
    filter_domain: Optional[str] = Field(None, description="Substring the host must contain")
    filter_protocols: list[str] = Field(default_factory=lambda: ["http", "https"])

    # Cleaning
    cleaners: list[str] = Field(default_factory=lambda: ["tracker", "youtube"])
    extra_tracker_params: list[str] = Field(default_factory=list)

    # Scanning
    max_workers: Optional[int] = Field(None, ge=1)
    skip_front_matter: bool = True

    @field_validator("filter_protocols")
    @classmethod
    def _check_protocols(cls, value: list[str]) -> list[str]:
        protocols = [protocol.lower() for protocol in value]
        unknown = sorted(set(protocols) - set(SUPPORTED_PROTOCOLS))
        if unknown:
            raise ValueError(
                f"unsupported protocol(s) {', '.join(unknown)}; "
                f"choose from {', '.join(SUPPORTED_PROTOCOLS)}"
            )
        return protocols

    @field_validator("output_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        if value not in list_formats():
            raise ValueError(f"unknown output format {value!r}; choose from {', '.join(list_formats())}")
        return value

    @field_validator("filter_domain")
    @classmethod
    def _empty_domain_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @model_validator(mode="after")
    def _check_output_path(self) -> "ExtractorSettings":
        if self.output_path is None and create_formatter(self.output_format).requires_path:
            raise ValueError(f"output.path is required for the {self.output_format} format")
        return self

    @property
    def processor_config(self) -> ProcessorConfig:
        return ProcessorConfig(
            filter_domain=self.filter_domain,
            filter_protocols=frozenset(self.filter_protocols),
        )

    @classmethod
    def from_config(cls, cfg: DictConfig) -> "ExtractorSettings":
        """
        Build settings from the composed hydra config.

        Raises:
            LinkExtractionError: If a required value is missing or invalid
        """
        missing = OmegaConf.missing_keys(cfg)
        if missing:
            raise LinkExtractionError(
                ErrorKind.INVALID_CONFIGURATION,
                f"Missing required setting(s): {', '.join(sorted(missing))}",
            )

        data = OmegaConf.to_container(cfg, resolve=True)
        inputs = data.get("input", {})
        output = data.get("output", {})
        filters = data.get("filter", {})
        cleaning = data.get("cleaning", {})
        scanner = data.get("scanner", {})

        try:
            return cls(
                source_dir=inputs.get("source_dir"),
                file_pattern=inputs.get("file_pattern", "*.md"),
                recursive=inputs.get("recursive", True),
                output_format=output.get("format", "stdout"),
                output_path=output.get("path"),
                filter_domain=filters.get("domain"),
                filter_protocols=filters.get("protocols") or [],
                cleaners=cleaning.get("cleaners", ["tracker", "youtube"]),
                extra_tracker_params=cleaning.get("extra_tracker_params") or [],
                max_workers=scanner.get("max_workers"),
                skip_front_matter=scanner.get("skip_front_matter", True),
            )
        except ValidationError as e:
            raise LinkExtractionError(
                ErrorKind.INVALID_CONFIGURATION,
                f"Invalid configuration: {e}",
            ) from e
