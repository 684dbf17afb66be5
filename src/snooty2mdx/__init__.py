"""snooty2mdx - Convert Snooty documentation ASTs to MDX.

snooty2mdx takes the JSON-like abstract syntax tree that the Snooty parser
produces from reStructuredText sources and converts it to an mdast/MDX tree:
Markdown with embedded JSX components and ESM imports. Converted trees are
written as ``.mdx`` files.

Key Features
------------
- Section nesting folded into heading depths
- Directives and roles mapped to JSX components
- Include directives emitted as separate fragment files with import wiring
- Figures resolved to imported image assets
- Page metadata written as YAML frontmatter
- Substitutions and cross-references collected into a ``references.ts``
  registry merged across runs
- Whole site archives (zip of BSON page documents) converted in one go

Requirements
------------
- Python 3.10+
- pymongo for BSON archives (``pip install "snooty2mdx[bson]"``)

Examples
--------
Convert an AST in memory:

    >>> from snooty2mdx import snooty_ast_to_mdast, MdxRenderer
    >>> tree = snooty_ast_to_mdast({"type": "root", "children": [
    ...     {"type": "paragraph", "children": [{"type": "text", "value": "Hello"}]},
    ... ]})
    >>> MdxRenderer().render_to_string(tree)
    'Hello\\n'

Convert files:

    >>> from snooty2mdx import convert_archive, convert_json_file
    >>> convert_json_file("page_ast-input.json")
    >>> convert_archive("cloud-docs.zip", output_dir="build/cloud-docs")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from snooty2mdx.api import (
    ArchiveConversionResult,
    ConversionResult,
    convert_archive,
    convert_json_file,
    convert_page,
)
from snooty2mdx.exceptions import Snooty2MdxError
from snooty2mdx.options import ArchiveOptions, ConversionOptions, MdxRendererOptions
from snooty2mdx.parsers.snooty import ConversionContext, SnootyToMdastConverter, snooty_ast_to_mdast
from snooty2mdx.references import (
    ReferenceRegistry,
    ReferencesArtifact,
    RefTarget,
    collect_references,
    merge_references,
    read_existing_references,
    render_references,
)
from snooty2mdx.renderers.mdx import MdxRenderer

__all__ = [
    "__version__",
    "snooty_ast_to_mdast",
    "convert_page",
    "convert_json_file",
    "convert_archive",
    "ConversionResult",
    "ArchiveConversionResult",
    "ConversionContext",
    "SnootyToMdastConverter",
    "MdxRenderer",
    "ConversionOptions",
    "MdxRendererOptions",
    "ArchiveOptions",
    "ReferenceRegistry",
    "ReferencesArtifact",
    "RefTarget",
    "collect_references",
    "merge_references",
    "read_existing_references",
    "render_references",
    "Snooty2MdxError",
]
