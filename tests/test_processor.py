"""Tests for the processor module."""

import logging
from pathlib import Path
import pytest

from link_extractor.cleaner import CompositeUrlCleaner
from link_extractor.errors import ErrorKind, LinkExtractionError
from link_extractor.models import Link
from link_extractor.processor import (
    ProcessorConfig,
    ProcessingReport,
    UrlProcessor,
    process_links,
)


def make_link(url: str, text: str = "", source: str = "/notes/a.md") -> Link:
    return Link(url=url, source_file=Path(source), link_text=text)


class TestProcessorConfig:
    """Tests for ProcessorConfig."""

    def test_defaults(self):
        config = ProcessorConfig()
        assert config.filter_domain is None
        assert config.filter_protocols == frozenset()

    def test_protocols_frozen(self):
        config = ProcessorConfig(filter_protocols=["https", "http"])
        assert config.filter_protocols == frozenset({"http", "https"})


class TestUrlProcessor:
    """Tests for UrlProcessor.process."""

    def test_fragment_links_skipped(self):
        report = UrlProcessor().process([make_link("#section1")])
        assert report.links == []
        assert report.fragments == 1

    def test_fragment_skipped_with_any_filters(self):
        for config in [
            ProcessorConfig(),
            ProcessorConfig(filter_domain="base.example.com"),
            ProcessorConfig(filter_protocols={"http"}),
        ]:
            assert UrlProcessor(config).process([make_link("#section1")]).links == []

    def test_relative_links_kept_verbatim(self):
        report = UrlProcessor().process([make_link("docs/guide.md")])
        assert [link.url for link in report] == ["docs/guide.md"]

    def test_relative_links_resolve_against_base(self):
        config = ProcessorConfig(filter_domain="base.example.com", filter_protocols={"http"})
        report = UrlProcessor(config).process([
            make_link("docs/guide.md"),
            make_link("//cdn.example.org/lib.js"),
        ])
        assert [link.url for link in report] == ["docs/guide.md"]

    def test_malformed_url_skipped_with_warning(self, caplog):
        links = [
            make_link("not a url at all", source="/notes/bad.md"),
            make_link("https://good.example/page"),
        ]

        with caplog.at_level(logging.WARNING):
            report = UrlProcessor().process(links)

        assert [link.url for link in report] == ["https://good.example/page"]
        assert len(report.issues) == 1
        issue = report.issues[0]
        assert issue.kind == ErrorKind.MALFORMED_URL
        assert issue.recoverable
        assert issue.url == "not a url at all"
        assert issue.source_file == Path("/notes/bad.md")
        assert "not a url at all" in caplog.text

    def test_other_malformed_urls(self):
        report = UrlProcessor().process([
            make_link("http://"),
            make_link("http://example.com:port/"),
            make_link("http://[::1/"),
        ])
        assert report.links == []
        assert len(report.issues) == 3

    def test_domain_filter(self):
        config = ProcessorConfig(filter_domain="github.com")
        report = UrlProcessor(config).process([
            make_link("https://github.com/org/repo"),
            make_link("https://gist.github.com/abc"),
            make_link("https://gitlab.com/org/repo"),
            make_link("mailto:dev@github.com"),
        ])
        assert [link.url for link in report] == [
            "https://github.com/org/repo",
            "https://gist.github.com/abc",
        ]
        assert report.filtered == 2

    def test_domain_filter_is_case_sensitive(self):
        config = ProcessorConfig(filter_domain="GitHub")
        report = UrlProcessor(config).process([make_link("https://GitHub.com/org")])
        assert report.links == []

    def test_protocol_filter(self):
        config = ProcessorConfig(filter_protocols={"https"})
        report = UrlProcessor(config).process([
            make_link("ftp://host/file"),
            make_link("https://host/file?utm_source=x"),
        ])
        assert [link.url for link in report] == ["https://host/file"]

    def test_empty_protocol_filter_allows_all(self):
        report = UrlProcessor().process([
            make_link("ftp://host/file"),
            make_link("mailto:someone@example.com"),
        ])
        assert len(report) == 2

    def test_cleaning_applied(self):
        report = UrlProcessor().process([
            make_link("https://example.com/a?utm_source=x&b=2&fbclid=y"),
            make_link("https://youtu.be/abc123"),
        ])
        assert [link.url for link in report] == [
            "https://example.com/a?b=2",
            "https://www.youtube.com/watch?v=abc123",
        ]

    def test_dedup_first_wins(self):
        report = UrlProcessor().process([
            make_link("https://example.com/page", text="first", source="/notes/a.md"),
            make_link("https://example.com/page", text="second", source="/notes/b.md"),
        ])
        assert len(report) == 1
        assert report.links[0].link_text == "first"
        assert report.links[0].source_file == Path("/notes/a.md")
        assert report.duplicates == 1

    def test_dedup_on_cleaned_url(self):
        report = UrlProcessor().process([
            make_link("https://youtu.be/abc123", text="short"),
            make_link("https://www.youtube.com/embed/abc123", text="embed"),
            make_link("https://www.youtube.com/watch?v=abc123&t=30", text="watch"),
        ])
        assert len(report) == 1
        assert report.links[0].url == "https://www.youtube.com/watch?v=abc123"
        assert report.links[0].link_text == "short"

    def test_custom_cleaner(self):
        processor = UrlProcessor(cleaner=CompositeUrlCleaner())
        report = processor.process([make_link("https://example.com/?utm_source=x")])
        assert report.links[0].url == "https://example.com/?utm_source=x"

    def test_skipped_count(self):
        report = UrlProcessor(ProcessorConfig(filter_protocols={"https"})).process([
            make_link("#top"),
            make_link("not a url at all"),
            make_link("http://plain.example"),
            make_link("https://a.example"),
            make_link("https://a.example"),
        ])
        assert len(report) == 1
        assert report.skipped == 4

    def test_invalid_base_url(self):
        processor = UrlProcessor(base_url="not a base")
        with pytest.raises(LinkExtractionError) as exc_info:
            processor.process([make_link("https://example.com")])
        assert exc_info.value.kind == ErrorKind.INVALID_CONFIGURATION
        assert not exc_info.value.recoverable


class TestProcessingReport:
    """Tests for ProcessingReport."""

    def test_empty(self):
        report = ProcessingReport()
        assert len(report) == 0
        assert report.skipped == 0
        assert list(report) == []


class TestProcessLinks:
    """Tests for the process_links convenience function."""

    def test_process_links(self):
        links = process_links(
            [
                make_link("https://docs.example.com/a?ref=nav"),
                make_link("http://docs.example.com/b"),
                make_link("https://other.example/c"),
            ],
            filter_domain="docs.example.com",
            filter_protocols=["https"],
        )
        assert [link.url for link in links] == ["https://docs.example.com/a"]
