#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/ast/__init__.py
"""Output tree module for converted documents.

The converter produces an mdast/MDX tree: plain Markdown nodes plus embedded
JSX components and an ESM import block. The module consists of:

- nodes: node classes mirroring the mdast/MDX grammar
- visitors: visitor pattern implementation and tree validation
- transforms: copying transformer, collector and inline-run normalizer
- serialization: mdast JSON serialization and deserialization
- utils: text extraction helpers

Examples
--------
    >>> from snooty2mdx.ast import Heading, Paragraph, Root, Text
    >>> from snooty2mdx.renderers.mdx import MdxRenderer
    >>>
    >>> tree = Root(children=[
    ...     Heading(depth=1, children=[Text(value="Intro")]),
    ...     Paragraph(children=[Text(value="Hello")]),
    ... ])
    >>> MdxRenderer().render_to_string(tree)
    '# Intro\\n\\nHello\\n'

"""

from __future__ import annotations

from snooty2mdx.ast.nodes import (
    INLINE_NODE_TYPES,
    AttributeValueExpression,
    Blockquote,
    Break,
    Code,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Html,
    InlineCode,
    Link,
    List,
    ListItem,
    MdxjsEsm,
    MdxJsxAttribute,
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    Paragraph,
    Root,
    Strong,
    Text,
    ThematicBreak,
    Yaml,
    get_attribute,
    get_node_children,
    is_inline_node,
    replace_node_children,
)
from snooty2mdx.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from snooty2mdx.ast.transforms import (
    InlineRunNormalizer,
    NodeCollector,
    NodeTransformer,
    wrap_inline_runs,
)
from snooty2mdx.ast.utils import extract_text
from snooty2mdx.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    # Nodes
    "Node",
    "Root",
    "Heading",
    "Paragraph",
    "Code",
    "Blockquote",
    "List",
    "ListItem",
    "ThematicBreak",
    "Html",
    "Yaml",
    "MdxjsEsm",
    "FootnoteDefinition",
    "MdxJsxFlowElement",
    "Text",
    "Emphasis",
    "Strong",
    "InlineCode",
    "Link",
    "Break",
    "FootnoteReference",
    "MdxJsxTextElement",
    "MdxJsxAttribute",
    "AttributeValueExpression",
    "INLINE_NODE_TYPES",
    "get_attribute",
    "get_node_children",
    "is_inline_node",
    "replace_node_children",
    # Visitors
    "NodeVisitor",
    "ValidationVisitor",
    # Transforms
    "NodeTransformer",
    "NodeCollector",
    "InlineRunNormalizer",
    "wrap_inline_runs",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    # Utilities
    "extract_text",
]
