#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers for paths, frontmatter, dependency checks and archive safety."""

from snooty2mdx.utils.frontmatter import needs_quotes, object_to_yaml
from snooty2mdx.utils.paths import (
    dirname_posix,
    image_identifier,
    include_component_name,
    is_image_path,
    normalize_posix,
    relative_posix,
    to_component_name,
    to_fragment_path,
)

__all__ = [
    "dirname_posix",
    "image_identifier",
    "include_component_name",
    "is_image_path",
    "needs_quotes",
    "normalize_posix",
    "object_to_yaml",
    "relative_posix",
    "to_component_name",
    "to_fragment_path",
]
