"""Tests for front-matter extraction."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from docsite.ingestion.frontmatter import (
    FrontMatterError,
    extract_metadata,
    parse_front_matter,
    split_front_matter,
)


class TestSplitFrontMatter:
    """Test split_front_matter."""

    def test_no_header(self) -> None:
        """Text without a leading delimiter has no header."""
        text = "= Title\n\nBody\n"

        assert split_front_matter(text) == ("", text)

    def test_header_and_body(self) -> None:
        """Header and body are separated at the closing delimiter."""
        text = "---\ntitle: Intro\ncategory: guide\n---\n= Intro\n\nHello\n"

        header, body = split_front_matter(text)

        assert header == "title: Intro\ncategory: guide\n"
        assert body == "= Intro\n\nHello\n"

    def test_crlf_line_endings(self) -> None:
        """Windows line endings are accepted."""
        header, body = split_front_matter("---\r\ntitle: Intro\r\n---\r\nBody\r\n")

        assert header == "title: Intro\r\n"
        assert body == "Body\r\n"

    def test_byte_order_mark(self) -> None:
        """A leading BOM does not hide the header."""
        header, _ = split_front_matter("\ufeff---\ntitle: Intro\n---\n")

        assert header == "title: Intro\n"

    def test_listing_block_is_not_a_header(self) -> None:
        """An AsciiDoc listing delimiter is not front matter."""
        text = "----\ncode\n----\n"

        assert split_front_matter(text) == ("", text)

    def test_empty_text(self) -> None:
        """Empty files have neither header nor body."""
        assert split_front_matter("") == ("", "")

    def test_unterminated_header(self) -> None:
        """A header without a closing delimiter is an error."""
        with pytest.raises(FrontMatterError, match="unterminated"):
            split_front_matter("---\ntitle: Intro\n\n= Intro\n", "intro.adoc")


class TestParseFrontMatter:
    """Test parse_front_matter."""

    def test_key_values(self) -> None:
        """Simple key/value lines become a mapping."""
        data = parse_front_matter("title: Intro\ncategory: guide\npermalink: intro\n")

        assert data == {"title": "Intro", "category": "guide", "permalink": "intro"}

    def test_scalar_and_list_values(self) -> None:
        """YAML scalars and sequences are preserved."""
        data = parse_front_matter("order: 3\ndraft: false\ntags: [a, b]\ndate: 2024-01-02\n")

        assert data == {"order": 3, "draft": False, "tags": ["a", "b"], "date": date(2024, 1, 2)}

    def test_empty_header(self) -> None:
        """Blank headers give an empty mapping."""
        assert parse_front_matter("") == {}
        assert parse_front_matter("# only a comment\n") == {}

    def test_invalid_yaml(self) -> None:
        """Broken YAML is reported as FrontMatterError."""
        with pytest.raises(FrontMatterError, match="invalid front matter") as info:
            parse_front_matter("title: [unclosed\n", "bad.adoc")

        assert info.value.path == "bad.adoc"

    def test_non_mapping(self) -> None:
        """A YAML list is not a valid header."""
        with pytest.raises(FrontMatterError, match="mapping"):
            parse_front_matter("- a\n- b\n")


class TestExtractMetadata:
    """Test extract_metadata."""

    def test_attaches_path(self, tmp_path: Path) -> None:
        """The canonical source path is stored under 'path'."""
        doc = tmp_path / "a.adoc"
        doc.write_text("---\ntitle: Intro\ncategory: guide\npermalink: intro\n---\n= Intro\n")

        meta = extract_metadata(doc)

        assert meta == {
            "title": "Intro",
            "category": "guide",
            "permalink": "intro",
            "path": str(doc.resolve()),
        }

    def test_reserved_path_wins(self, tmp_path: Path) -> None:
        """A declared 'path' field is overwritten."""
        doc = tmp_path / "a.adoc"
        doc.write_text("---\npath: /somewhere/else\n---\n")

        assert extract_metadata(doc)["path"] == str(doc.resolve())

    def test_document_without_header(self, tmp_path: Path) -> None:
        """Documents without front matter only carry their path."""
        doc = tmp_path / "plain.adoc"
        doc.write_text("= Plain\n\nNo header here.\n")

        assert extract_metadata(doc) == {"path": str(doc.resolve())}

    def test_malformed_header(self, tmp_path: Path) -> None:
        """Malformed headers raise FrontMatterError naming the file."""
        doc = tmp_path / "bad.adoc"
        doc.write_text("---\ntitle: Broken\n")

        with pytest.raises(FrontMatterError) as info:
            extract_metadata(doc)

        assert info.value.path == doc

    def test_missing_file(self, tmp_path: Path) -> None:
        """Unreadable paths raise OSError."""
        with pytest.raises(FileNotFoundError):
            extract_metadata(tmp_path / "missing.adoc")

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        """Undecodable bytes raise FrontMatterError naming the file."""
        doc = tmp_path / "latin.adoc"
        doc.write_bytes(b"---\ntitle: \xff\xfe\n---\n")

        with pytest.raises(FrontMatterError, match="not valid UTF-8") as info:
            extract_metadata(doc)

        assert info.value.path == doc
