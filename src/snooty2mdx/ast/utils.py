#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/ast/utils.py
"""Utility functions for working with output tree nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes

Examples
--------
    >>> from snooty2mdx.ast import Emphasis, Text
    >>> from snooty2mdx.ast.utils import extract_text
    >>> extract_text([Text(value="Hello "), Emphasis(children=[Text(value="world")])])
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from snooty2mdx.ast.nodes import InlineCode, Text, get_node_children

if TYPE_CHECKING:
    from snooty2mdx.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Text and inline code values are concatenated in document order, recursing
    through every container.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String placed between the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    if isinstance(node_or_nodes, (Text, InlineCode)):
        return node_or_nodes.value

    return joiner.join(extract_text(child, joiner) for child in get_node_children(node_or_nodes))
