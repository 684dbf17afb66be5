#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/utils/security.py
"""Safety checks for archive input and filesystem output.

Documentation archives are untrusted input: entry names and asset keys end
up as output paths. These helpers reject zip bombs and any path that would
escape the output directory.

"""

from __future__ import annotations

import os
import zipfile
from pathlib import Path, PurePosixPath

from snooty2mdx.constants import (
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
)
from snooty2mdx.exceptions import ArchiveSecurityError, MalformedFileError, ZipFileSecurityError


def _is_windows_absolute(name: str) -> bool:
    return len(name) >= 2 and name[1] == ":"


def validate_zip_archive(
    file_path: str | Path,
    max_compression_ratio: float = DEFAULT_MAX_COMPRESSION_RATIO,
    max_uncompressed_size: int = DEFAULT_MAX_UNCOMPRESSED_SIZE,
    max_entries: int = DEFAULT_MAX_ZIP_ENTRIES,
) -> None:
    """Validate a zip archive before reading any entry.

    Parameters
    ----------
    file_path : str or Path
        Path to the zip archive to validate
    max_compression_ratio : float, default 100.0
        Maximum allowed compression ratio (uncompressed/compressed)
    max_uncompressed_size : int
        Maximum total uncompressed size in bytes
    max_entries : int
        Maximum number of entries in the archive

    Raises
    ------
    ZipFileSecurityError
        If the archive has too many entries, an unsafe entry name, or looks
        like a zip bomb
    MalformedFileError
        If the file is not a readable zip archive

    Examples
    --------
    >>> validate_zip_archive("docs-site.zip")

    >>> validate_zip_archive("bomb.zip")  # doctest: +SKIP
    ZipFileSecurityError: ZIP archive has suspicious compression ratio: 1000.0:1

    """
    try:
        with zipfile.ZipFile(file_path, "r") as zf:
            entries = zf.infolist()

            if len(entries) > max_entries:
                raise ZipFileSecurityError(f"ZIP archive contains too many entries: {len(entries)} > {max_entries}")

            total_uncompressed = 0
            total_compressed = 0

            for entry in entries:
                name = entry.filename.replace("\\", "/")
                if _is_windows_absolute(name):
                    raise ZipFileSecurityError(f"ZIP archive contains Windows absolute path: {entry.filename}")
                if name.startswith("/") or ".." in PurePosixPath(name).parts:
                    raise ZipFileSecurityError(f"ZIP archive contains suspicious path: {entry.filename}")

                total_uncompressed += entry.file_size
                total_compressed += entry.compress_size
                if total_uncompressed > max_uncompressed_size:
                    raise ZipFileSecurityError(
                        f"ZIP archive uncompressed size too large: "
                        f"{total_uncompressed / (1024 * 1024):.1f}MB > "
                        f"{max_uncompressed_size / (1024 * 1024):.1f}MB"
                    )

            if total_compressed > 0:
                compression_ratio = total_uncompressed / total_compressed
                if compression_ratio > max_compression_ratio:
                    raise ZipFileSecurityError(
                        f"ZIP archive has suspicious compression ratio: {compression_ratio:.1f}:1"
                    )

    except zipfile.BadZipFile as e:
        raise MalformedFileError(f"Invalid ZIP archive: {e}", file_path=str(file_path), original_error=e) from e
    except OSError as e:
        raise MalformedFileError(f"Could not read ZIP archive: {e}", file_path=str(file_path), original_error=e) from e


def validate_safe_extraction_path(output_dir: str | Path, entry_name: str) -> Path:
    """Return the absolute path an archive-derived relative path maps to under ``output_dir``.

    Used both for archive entries and for asset keys taken from page
    manifests, which name the destination of an extracted asset.

    Parameters
    ----------
    output_dir : str or Path
        Base directory of the conversion output
    entry_name : str
        Relative POSIX path taken from the archive

    Returns
    -------
    Path
        Resolved absolute destination path

    Raises
    ------
    ArchiveSecurityError
        If the path is absolute, contains ``.`` or ``..`` segments, or
        resolves outside ``output_dir``

    Examples
    --------
    >>> validate_safe_extraction_path("/tmp/out", "images/pic.png")
    PosixPath('/tmp/out/images/pic.png')

    >>> validate_safe_extraction_path("/tmp/out", "../etc/passwd")  # doctest: +SKIP
    ArchiveSecurityError: Unsafe path component in archive entry: ../etc/passwd (contains '..')

    """
    normalized_name = entry_name.replace("\\", "/")
    if _is_windows_absolute(normalized_name):
        raise ArchiveSecurityError(f"Unsafe Windows absolute path in archive entry: {entry_name}")

    rel_path = PurePosixPath(normalized_name)
    if rel_path.is_absolute():
        raise ArchiveSecurityError(f"Unsafe absolute path in archive entry: {entry_name}")
    if not rel_path.parts:
        raise ArchiveSecurityError(f"Empty path in archive entry: {entry_name!r}")
    for part in rel_path.parts:
        if part in (".", ".."):
            raise ArchiveSecurityError(f"Unsafe path component in archive entry: {entry_name} (contains '{part}')")

    output_dir_path = Path(output_dir).resolve()
    target_resolved = output_dir_path.joinpath(*rel_path.parts).resolve()

    output_dir_str = str(output_dir_path)
    target_str = str(target_resolved)
    if not (target_str.startswith(output_dir_str + os.sep) or target_str == output_dir_str):
        raise ArchiveSecurityError(f"Path escapes output directory: {entry_name} -> {target_str}")

    return target_resolved
