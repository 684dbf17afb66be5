#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for snooty2mdx.

Each stage has its own frozen Options dataclass: ConversionOptions for the
Snooty AST conversion, MdxRendererOptions for text output and ArchiveOptions
for zip input.
"""

from __future__ import annotations

from snooty2mdx.options.archive import ArchiveOptions
from snooty2mdx.options.base import CloneFrozenMixin
from snooty2mdx.options.mdx import MdxRendererOptions
from snooty2mdx.options.snooty import ConversionOptions

__all__ = [
    "ArchiveOptions",
    "CloneFrozenMixin",
    "ConversionOptions",
    "MdxRendererOptions",
]
