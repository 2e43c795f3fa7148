"""Tests for the extraction orchestrator."""

from pathlib import Path
import pytest

from link_extractor.errors import ErrorKind, LinkExtractionError
from link_extractor.extraction import LinkExtractor
from link_extractor.processor import ProcessorConfig


def write(path: Path, content) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


class TestScanDocuments:
    """Tests for scanning in-memory documents."""

    def test_per_document_order_preserved(self):
        documents = [
            (Path(f"/notes/{i}.md"), "\n".join(f"[{j}](https://example.com/{i}/{j})" for j in range(20)))
            for i in range(30)
        ]

        links = LinkExtractor(max_workers=8).scan_documents(documents)

        assert len(links) == 30 * 20
        for path, _ in documents:
            texts = [link.link_text for link in links if link.source_file == path]
            assert texts == [str(j) for j in range(20)]

    def test_no_documents(self):
        assert LinkExtractor().scan_documents([]) == []


class TestScanFiles:
    """Tests for reading and scanning files."""

    def test_unreadable_files_skipped(self, tmp_path):
        good = write(tmp_path / "good.md", "[ok](https://ok.example)")
        bad_encoding = write(tmp_path / "latin1.md", b"[caf\xe9](https://bad.example)")
        missing = tmp_path / "missing.md"
        directory = tmp_path / "dir.md"
        directory.mkdir()

        seen = []
        extractor = LinkExtractor()
        report = extractor.extract([good, bad_encoding, missing, directory], progress_callback=seen.append)

        assert [link.url for link in report] == ["https://ok.example"]
        assert sorted(seen) == sorted([good, bad_encoding, missing, directory])

        unreadable = [issue for issue in report.issues if issue.kind == ErrorKind.UNREADABLE_FILE]
        assert sorted(issue.source_file for issue in unreadable) == sorted([bad_encoding, missing, directory])
        assert all(issue.recoverable for issue in unreadable)

    def test_scan_files_returns_raw_links(self, tmp_path):
        path = write(tmp_path / "a.md", "[a](#top) [b](https://example.com/?utm_source=x)")
        links = LinkExtractor().scan_files([path])
        assert [link.url for link in links] == ["#top", "https://example.com/?utm_source=x"]


class TestExtract:
    """Tests for the full extraction."""

    @pytest.fixture
    def notes(self, tmp_path):
        write(tmp_path / "a.md", """---
tags: [links]
---
# Reading list

- [Python](https://www.python.org/?utm_source=newsletter)
- [Talk](https://youtu.be/abc123)
- [Same talk](https://www.youtube.com/watch?v=abc123&t=30)
- [Jump](#reading-list)
- [FTP mirror](ftp://mirror.example.org/pub)
""")
        write(tmp_path / "sub" / "b.md", """See [Python docs](https://docs.python.org/3/?ref=home).

```
[ignored](https://ignored.example)
```
""")
        write(tmp_path / "c.txt", "[not markdown](https://txt.example)")
        return tmp_path

    def test_extract_directory(self, notes):
        report = LinkExtractor().extract_directory(notes)

        by_url = {link.url: link for link in report}
        assert set(by_url) == {
            "https://www.python.org/",
            "https://www.youtube.com/watch?v=abc123",
            "ftp://mirror.example.org/pub",
            "https://docs.python.org/3/",
        }
        assert by_url["https://www.youtube.com/watch?v=abc123"].link_text == "Talk"
        assert by_url["https://docs.python.org/3/"].source_file == notes / "sub" / "b.md"
        assert report.fragments == 1
        assert report.duplicates == 1

    def test_files_callback_sees_discovered_files(self, notes):
        discovered = []
        scanned = []
        LinkExtractor().extract_directory(
            notes,
            progress_callback=scanned.append,
            files_callback=discovered.extend,
        )

        assert discovered == [notes / "a.md", notes / "sub" / "b.md"]
        assert sorted(scanned) == discovered

    def test_missing_directory(self, tmp_path):
        with pytest.raises(LinkExtractionError) as exc_info:
            LinkExtractor().extract_directory(tmp_path / "missing")
        assert exc_info.value.kind == ErrorKind.INVALID_CONFIGURATION

    def test_extract_with_filters(self, notes):
        extractor = LinkExtractor(
            config=ProcessorConfig(filter_domain="python.org", filter_protocols={"https"}),
        )
        report = extractor.extract_directory(notes, recursive=False)
        assert [link.url for link in report] == ["https://www.python.org/"]
