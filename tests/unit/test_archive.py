#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for reading documentation site archives."""

import logging
import zipfile

import pytest
from utils import ASSET_BYTES, page_root, paragraph, section, text, write_json_archive

from snooty2mdx.exceptions import MalformedFileError, ZipFileSecurityError
from snooty2mdx.options import ArchiveOptions
from snooty2mdx.parsers.archive import (
    ArchiveDocument,
    collect_asset_manifest,
    entry_output_path,
    extract_assets,
    iter_archive_documents,
)


def _page(title):
    return {"ast": page_root(section(title, paragraph(text("Body"))))}


@pytest.mark.unit
class TestEntryOutputPath:
    """Test mapping archive entry names to output files."""

    def test_bson_entry(self):
        """Test BSON entries keep their directory and get the MDX extension."""
        assert entry_output_path("docs/guide/page.bson") == "docs/guide/page.mdx"

    def test_json_entry(self):
        """Test JSON entries are mapped the same way."""
        assert entry_output_path("docs/index.json") == "docs/index.mdx"

    def test_other_suffix_appended(self):
        """Test names with another suffix get the extension appended."""
        assert entry_output_path("docs/page.dat") == "docs/page.dat.mdx"

    def test_document_property(self):
        """Test ArchiveDocument exposes its output path."""
        document = ArchiveDocument(relative_path="a/b.bson", document={})

        assert document.output_path == "a/b.mdx"


@pytest.mark.unit
class TestCollectAssetManifest:
    """Test reading static asset manifests."""

    def test_valid_entries(self):
        """Test checksum/key pairs are collected."""
        document = {
            "static_assets": [
                {"checksum": "abc123", "key": "/images/pic.png"},
                {"checksum": "def456", "key": "images/logo.svg"},
            ]
        }

        assert collect_asset_manifest(document) == {"abc123": "/images/pic.png", "def456": "images/logo.svg"}

    def test_incomplete_entries_ignored(self):
        """Test entries with missing or non-string fields are skipped."""
        document = {
            "static_assets": [
                {"checksum": "abc123"},
                {"key": "images/x.png"},
                {"checksum": "", "key": "images/y.png"},
                {"checksum": 5, "key": "images/z.png"},
                "not an object",
            ]
        }

        assert collect_asset_manifest(document) == {}

    def test_missing_manifest(self):
        """Test documents without static assets yield an empty manifest."""
        assert collect_asset_manifest({"ast": {}}) == {}
        assert collect_asset_manifest({"static_assets": "x"}) == {}


@pytest.mark.unit
class TestIterArchiveDocuments:
    """Test iterating over page documents in an archive."""

    def test_json_entries(self, tmp_path):
        """Test JSON page entries are yielded in entry order with their manifests."""
        second = _page("Second")
        second["static_assets"] = [{"checksum": "abc123", "key": "images/pic.png"}]
        archive = write_json_archive(
            tmp_path / "site.zip",
            {"docs/first.json": _page("First"), "docs/second.json": second},
            extra_entries=[("static/abc123", ASSET_BYTES)],
        )

        documents = list(iter_archive_documents(archive))

        assert [d.relative_path for d in documents] == ["docs/first.json", "docs/second.json"]
        assert [d.output_path for d in documents] == ["docs/first.mdx", "docs/second.mdx"]
        assert documents[0].asset_manifest == {}
        assert documents[1].asset_manifest == {"abc123": "images/pic.png"}
        assert documents[0].document == _page("First")

    def test_raw_source_entries_skipped(self, tmp_path):
        """Test .txt.bson and .rst.bson entries are not decoded."""
        archive = write_json_archive(
            tmp_path / "site.zip",
            {"docs/page.json": _page("Page")},
            extra_entries=[("docs/page.txt.bson", b"raw text"), ("docs/page.rst.bson", b"raw rst")],
        )

        documents = list(iter_archive_documents(archive))

        assert [d.relative_path for d in documents] == ["docs/page.json"]

    def test_non_object_document_skipped(self, tmp_path, caplog):
        """Test a JSON entry that is not an object is skipped with a warning."""
        archive = write_json_archive(tmp_path / "site.zip", {"docs/list.json": [1, 2], "docs/ok.json": _page("Ok")})

        with caplog.at_level(logging.WARNING, logger="snooty2mdx"):
            documents = list(iter_archive_documents(archive))

        assert [d.relative_path for d in documents] == ["docs/ok.json"]
        assert "docs/list.json" in caplog.text

    def test_invalid_json_entry(self, tmp_path):
        """Test undecodable JSON raises MalformedFileError."""
        archive = write_json_archive(tmp_path / "site.zip", {}, extra_entries=[("docs/bad.json", b"{not json")])

        with pytest.raises(MalformedFileError):
            list(iter_archive_documents(archive))

    def test_not_a_zip(self, tmp_path):
        """Test a file that is not a zip archive raises MalformedFileError."""
        path = tmp_path / "site.zip"
        path.write_bytes(b"definitely not a zip")

        with pytest.raises(MalformedFileError):
            list(iter_archive_documents(path))

    def test_entry_limit(self, tmp_path):
        """Test the configured entry limit is enforced before reading."""
        archive = write_json_archive(tmp_path / "site.zip", {"a.json": _page("A"), "b.json": _page("B")})

        with pytest.raises(ZipFileSecurityError):
            list(iter_archive_documents(archive, ArchiveOptions(max_entries=1)))


@pytest.mark.unit
class TestBsonDocuments:
    """Test BSON page entries."""

    def test_bson_entry(self, tmp_path):
        """Test BSON entries are decoded."""
        bson = pytest.importorskip("bson")
        archive = tmp_path / "site.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("docs/page.bson", bson.encode(_page("Page")))

        documents = list(iter_archive_documents(archive))

        assert len(documents) == 1
        assert documents[0].output_path == "docs/page.mdx"
        assert documents[0].document["ast"] == _page("Page")["ast"]

    def test_multiple_documents_warns(self, tmp_path, caplog):
        """Test only the first of several BSON documents is used."""
        bson = pytest.importorskip("bson")
        archive = tmp_path / "site.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("docs/page.bson", bson.encode(_page("First")) + bson.encode(_page("Second")))

        with caplog.at_level(logging.WARNING, logger="snooty2mdx"):
            documents = list(iter_archive_documents(archive))

        assert documents[0].document["ast"] == _page("First")["ast"]
        assert "only the first one" in caplog.text

    def test_invalid_bson(self, tmp_path):
        """Test corrupt BSON raises MalformedFileError."""
        pytest.importorskip("bson")
        archive = tmp_path / "site.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("docs/page.bson", b"\x05\x00\x00")

        with pytest.raises(MalformedFileError):
            list(iter_archive_documents(archive))


@pytest.mark.unit
class TestExtractAssets:
    """Test extracting static assets."""

    def test_extracts_by_checksum(self, tmp_path):
        """Test assets are found by the base name of their entry and written to their key."""
        archive = write_json_archive(
            tmp_path / "site.zip",
            {},
            extra_entries=[("static/abc123", ASSET_BYTES), ("static/unlisted", b"other")],
        )
        output_dir = tmp_path / "out"

        written = extract_assets(archive, output_dir, {"abc123": "/images/pic.png"})

        target = (output_dir / "images" / "pic.png").resolve()
        assert written == [target]
        assert target.read_bytes() == ASSET_BYTES
        assert not (output_dir / "unlisted").exists()

    def test_checksum_written_once(self, tmp_path):
        """Test a checksum present twice in the archive is extracted once."""
        archive = write_json_archive(
            tmp_path / "site.zip",
            {},
            extra_entries=[("a/abc123", ASSET_BYTES), ("b/abc123", b"second copy")],
        )

        written = extract_assets(archive, tmp_path / "out", {"abc123": "images/pic.png"})

        assert len(written) == 1
        assert written[0].read_bytes() == ASSET_BYTES

    def test_unsafe_key_skipped(self, tmp_path, caplog):
        """Test keys escaping the output directory are skipped with a warning."""
        archive = write_json_archive(
            tmp_path / "site.zip",
            {},
            extra_entries=[("static/evil", b"x"), ("static/abc123", ASSET_BYTES)],
        )
        output_dir = tmp_path / "out"

        with caplog.at_level(logging.WARNING, logger="snooty2mdx"):
            written = extract_assets(archive, output_dir, {"evil": "../escape.png", "abc123": "images/pic.png"})

        assert written == [(output_dir / "images" / "pic.png").resolve()]
        assert not (tmp_path / "escape.png").exists()
        assert "Skipping asset evil" in caplog.text
