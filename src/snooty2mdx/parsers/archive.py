#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/parsers/archive.py
"""Reading documentation site archives.

A site archive is a zip file holding one BSON document per page (the page
AST plus its ``static_assets`` manifest) and the static assets themselves,
stored under their checksum. This module validates the archive, yields the
page documents, and extracts the assets the pages reference.
"""

from __future__ import annotations

import json
import logging
import posixpath
import zipfile
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from snooty2mdx.constants import (
    ARCHIVE_DOCUMENT_SUFFIX,
    ARCHIVE_JSON_SUFFIX,
    DEFAULT_FRAGMENT_EXTENSION,
    DEPS_BSON,
    IGNORED_ARCHIVE_SUFFIXES,
)
from snooty2mdx.exceptions import ArchiveSecurityError, MalformedFileError
from snooty2mdx.options import ArchiveOptions
from snooty2mdx.utils.decorators import requires_dependencies
from snooty2mdx.utils.paths import to_posix
from snooty2mdx.utils.security import validate_safe_extraction_path, validate_zip_archive

logger = logging.getLogger(__name__)


@dataclass
class ArchiveDocument:
    """A page document read from an archive.

    Parameters
    ----------
    relative_path : str
        POSIX path of the entry inside the archive
    document : Mapping
        Decoded page document, usually an ``{"ast": ...}`` envelope
    asset_manifest : dict
        Asset checksum to destination key, from the page's ``static_assets``

    """

    relative_path: str
    document: Mapping[str, Any]
    asset_manifest: dict[str, str] = field(default_factory=dict)

    @property
    def output_path(self) -> str:
        """Relative path of the MDX file produced for this page."""
        return entry_output_path(self.relative_path)


def entry_output_path(relative_path: str, ext: str = DEFAULT_FRAGMENT_EXTENSION) -> str:
    """Map an archive entry name to its output file path.

    Examples
    --------
        >>> entry_output_path("docs/guide/page.bson")
        'docs/guide/page.mdx'

    """
    stem, suffix = posixpath.splitext(to_posix(relative_path))
    return f"{stem}{ext}" if suffix in (ARCHIVE_DOCUMENT_SUFFIX, ARCHIVE_JSON_SUFFIX) else f"{relative_path}{ext}"


def collect_asset_manifest(document: Mapping[str, Any]) -> dict[str, str]:
    """Read the checksum to key mapping of a page's static assets.

    Entries without a non-empty string checksum and key are ignored.
    """
    manifest: dict[str, str] = {}
    assets = document.get("static_assets")
    if not isinstance(assets, list):
        return manifest
    for asset in assets:
        if not isinstance(asset, Mapping):
            continue
        checksum, key = asset.get("checksum"), asset.get("key")
        if isinstance(checksum, str) and isinstance(key, str) and checksum and key:
            manifest[checksum] = key
    return manifest


@requires_dependencies("bson", DEPS_BSON)
def decode_bson_documents(data: bytes, entry_name: str = "<bytes>") -> list[dict[str, Any]]:
    """Decode every BSON document stored back to back in ``data``.

    Raises
    ------
    DependencyError
        If pymongo's ``bson`` package is not installed
    MalformedFileError
        If the data is not valid BSON

    """
    import bson
    from bson.errors import InvalidBSON

    try:
        return bson.decode_all(data)
    except (InvalidBSON, ValueError) as e:
        raise MalformedFileError(
            f"Invalid BSON in archive entry {entry_name}: {e}", file_path=entry_name, original_error=e
        ) from e


def _decode_json_document(data: bytes, entry_name: str) -> list[Any]:
    try:
        return [json.loads(data.decode("utf-8"))]
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedFileError(
            f"Invalid JSON in archive entry {entry_name}: {e}", file_path=entry_name, original_error=e
        ) from e


def iter_archive_documents(
    zip_path: Union[str, Path],
    options: ArchiveOptions | None = None,
) -> Iterator[ArchiveDocument]:
    """Yield the page documents of a site archive in entry order.

    ``.bson`` entries are decoded with pymongo's ``bson`` package and ``.json``
    entries as JSON. Raw text and RST entries (``.txt.bson``, ``.rst.bson``)
    are skipped. Only the first document of an entry is used.

    Parameters
    ----------
    zip_path : str or Path
        Path of the archive
    options : ArchiveOptions or None, default = None
        Archive safety limits

    Yields
    ------
    ArchiveDocument
        One page document per entry

    Raises
    ------
    ZipFileSecurityError
        If the archive fails validation
    MalformedFileError
        If the archive or an entry cannot be decoded

    """
    options = options or ArchiveOptions()
    validate_zip_archive(
        zip_path,
        max_compression_ratio=options.max_compression_ratio,
        max_uncompressed_size=options.max_uncompressed_size,
        max_entries=options.max_entries,
    )

    with zipfile.ZipFile(zip_path, "r") as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            name = to_posix(info.filename)
            if name.endswith(IGNORED_ARCHIVE_SUFFIXES):
                logger.debug(f"Skipping non-AST archive entry: {name}")
                continue

            if name.endswith(ARCHIVE_DOCUMENT_SUFFIX):
                documents: list[Any] = decode_bson_documents(zf.read(info), name)
            elif name.endswith(ARCHIVE_JSON_SUFFIX):
                documents = _decode_json_document(zf.read(info), name)
            else:
                continue

            if not documents:
                continue
            if len(documents) > 1:
                logger.warning(
                    f"{name} contains {len(documents)} BSON documents - only the first one will be converted to MDX"
                )

            document = documents[0]
            if not isinstance(document, Mapping):
                logger.warning(f"Skipping archive entry {name}: document is not an object")
                continue

            yield ArchiveDocument(
                relative_path=name, document=document, asset_manifest=collect_asset_manifest(document)
            )


def extract_assets(
    zip_path: Union[str, Path],
    output_dir: Union[str, Path],
    asset_manifest: Mapping[str, str],
) -> list[Path]:
    """Copy the static assets named in ``asset_manifest`` out of the archive.

    Non-document entries whose base name is a known checksum are written to
    their key under ``output_dir``, each checksum once. Keys that would land
    outside ``output_dir`` are skipped with a warning.

    Parameters
    ----------
    zip_path : str or Path
        Path of the archive
    output_dir : str or Path
        Conversion output root
    asset_manifest : Mapping
        Asset checksum to destination key

    Returns
    -------
    list of Path
        Written asset files

    """
    written: list[Path] = []
    seen_checksums: set[str] = set()

    with zipfile.ZipFile(zip_path, "r") as zf:
        for info in zf.infolist():
            name = to_posix(info.filename)
            if info.is_dir() or name.endswith(ARCHIVE_DOCUMENT_SUFFIX):
                continue

            checksum = posixpath.basename(name)
            key = asset_manifest.get(checksum)
            if not key or checksum in seen_checksums:
                continue

            try:
                target = validate_safe_extraction_path(output_dir, to_posix(key).lstrip("/"))
            except ArchiveSecurityError as e:
                logger.warning(f"Skipping asset {checksum}: {e}")
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(zf.read(info))
            seen_checksums.add(checksum)
            written.append(target)
            logger.debug(f"Extracted asset {checksum} -> {target}")

    return written
