#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the snooty2mdx library.

This module centralizes the hardcoded values used across the converter so
that the dispatcher, the registry writer and the archive driver agree on
them.

Constants are organized by category:
1. Type Definitions
2. Conversion Behavior
3. Reference Registry
4. Archive Handling
5. Security Constants
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

BulletMarker = Literal["-", "*", "+"]
EmphasisMarker = Literal["*", "_"]

# =============================================================================
# Conversion Behavior
# =============================================================================

DEFAULT_FRAGMENT_EXTENSION = ".mdx"
DEFAULT_IMPORTER_PATH = "index.mdx"
DEFAULT_IMAGES_DIR_NAME = "images"
MAX_HEADING_DEPTH = 6

# Directives dropped when they carry neither children nor attributes.
DEFAULT_DROPPED_EMPTY_DIRECTIVES: tuple[str, ...] = ("toctree", "index", "seealso")

# Directive names whose argument becomes an ``expr`` attribute.
CONDITIONAL_DIRECTIVES: frozenset[str] = frozenset({"only", "cond"})

INCLUDE_DIRECTIVES: frozenset[str] = frozenset({"include", "sharedinclude"})

# Source extensions rewritten to the fragment extension for included files.
INCLUDE_SOURCE_EXTENSIONS: tuple[str, ...] = (".rst", ".txt")

IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif")

IMAGE_IDENTIFIER_SUFFIX = "Img"

LITERALINCLUDE_UNAVAILABLE_MARKER = "// Content from external file not available during conversion"

# =============================================================================
# Reference Registry
# =============================================================================

DEFAULT_REFERENCES_FILENAME = "references.ts"
REFERENCE_VALUE_MAX_LENGTH = 1000
REFERENCE_TRUNCATION_MARKER = "…"

SUBSTITUTION_COMPONENT = "SubstitutionReference"
REF_COMPONENT = "Ref"

# =============================================================================
# Archive Handling
# =============================================================================

ARCHIVE_DOCUMENT_SUFFIX = ".bson"
ARCHIVE_JSON_SUFFIX = ".json"
# Some archive entries carry raw text or RST rather than AST documents.
IGNORED_ARCHIVE_SUFFIXES: tuple[str, ...] = (".txt.bson", ".rst.bson")
AST_ENVELOPE_FIELD = "ast"
JSON_INPUT_SUFFIXES: tuple[str, ...] = ("_ast-input.json", ".json")
JSON_OUTPUT_SUFFIX = "_output.mdx"

DEPS_BSON = [("pymongo", "bson", ">=4.0")]

# =============================================================================
# Security Constants
# =============================================================================

DEFAULT_MAX_ZIP_ENTRIES = 50000
DEFAULT_MAX_COMPRESSION_RATIO = 100.0
DEFAULT_MAX_UNCOMPRESSED_SIZE = 2 * 1024 * 1024 * 1024  # 2GB
