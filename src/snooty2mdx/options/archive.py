#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for reading documentation archives."""
# src/snooty2mdx/options/archive.py

from __future__ import annotations

from dataclasses import dataclass, field

from snooty2mdx.constants import (
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
)
from snooty2mdx.exceptions import ValidationError
from snooty2mdx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ArchiveOptions(CloneFrozenMixin):
    """Safety limits and behavior for zip archive input.

    Parameters
    ----------
    max_entries : int
        Maximum number of entries an archive may hold
    max_compression_ratio : float
        Maximum uncompressed/compressed size ratio, a zip bomb guard
    max_uncompressed_size : int
        Maximum total uncompressed size in bytes
    extract_assets : bool, default True
        Copy static assets referenced by the pages out of the archive

    """

    max_entries: int = field(
        default=DEFAULT_MAX_ZIP_ENTRIES,
        metadata={"help": "Maximum number of archive entries", "type": int},
    )
    max_compression_ratio: float = field(
        default=DEFAULT_MAX_COMPRESSION_RATIO,
        metadata={"help": "Maximum compression ratio of the archive", "type": float},
    )
    max_uncompressed_size: int = field(
        default=DEFAULT_MAX_UNCOMPRESSED_SIZE,
        metadata={"help": "Maximum total uncompressed size in bytes", "type": int},
    )
    extract_assets: bool = field(
        default=True,
        metadata={"help": "Extract static assets referenced by the pages"},
    )

    def __post_init__(self) -> None:
        """Validate limits are positive."""
        for name in ("max_entries", "max_compression_ratio", "max_uncompressed_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ValidationError(
                    f"{name} must be positive, got {value}", parameter_name=name, parameter_value=value
                )
