#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Input readers: the Snooty AST converter and the site archive reader."""

from snooty2mdx.parsers.archive import ArchiveDocument, extract_assets, iter_archive_documents
from snooty2mdx.parsers.snooty import ConversionContext, SnootyToMdastConverter, snooty_ast_to_mdast

__all__ = [
    "ArchiveDocument",
    "ConversionContext",
    "SnootyToMdastConverter",
    "extract_assets",
    "iter_archive_documents",
    "snooty_ast_to_mdast",
]
