#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/ast/serialization.py
"""JSON serialization and deserialization for output trees.

Trees are written in the mdast JSON shape consumed by remark and its MDX
plugins: every node is an object with a ``type`` discriminator, JSX
attributes are ``mdxJsxAttribute`` objects, and expression values are
``mdxJsxAttributeValueExpression`` objects.

Examples
--------
Serialize a tree:

    >>> from snooty2mdx.ast import Heading, Root, Text
    >>> from snooty2mdx.ast.serialization import ast_to_json
    >>> ast_to_json(Root(children=[Heading(depth=1, children=[Text(value="Intro")])]))
    '{"type": "root", "children": [{"type": "heading", "depth": 1, ...'

Deserialize it back:

    >>> from snooty2mdx.ast.serialization import json_to_ast
    >>> json_to_ast(json_str).children[0].depth
    1

"""

from __future__ import annotations

import json
from typing import Any, Callable

from snooty2mdx.ast.nodes import (
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
)
from snooty2mdx.exceptions import ParsingError

ATTRIBUTE_TYPE = "mdxJsxAttribute"
EXPRESSION_TYPE = "mdxJsxAttributeValueExpression"

_CHILDREN_NODES: dict[str, type[Node]] = {
    cls.type: cls
    for cls in (Root, Paragraph, Blockquote, ListItem, Emphasis, Strong)
}
_VALUE_NODES: dict[str, type[Node]] = {
    cls.type: cls
    for cls in (Text, InlineCode, Html, Yaml, MdxjsEsm)
}
_EMPTY_NODES: dict[str, type[Node]] = {cls.type: cls for cls in (ThematicBreak, Break)}


def _serialize_attribute(attribute: MdxJsxAttribute) -> dict[str, Any]:
    value: Any = attribute.value
    if isinstance(value, AttributeValueExpression):
        value = {"type": EXPRESSION_TYPE, "value": value.value}
    return {"type": ATTRIBUTE_TYPE, "name": attribute.name, "value": value}


def _deserialize_attribute(data: dict[str, Any]) -> MdxJsxAttribute:
    value = data.get("value")
    if isinstance(value, dict):
        value = AttributeValueExpression(str(value.get("value", "")))
    elif value is None:
        value = ""
    return MdxJsxAttribute(name=str(data.get("name", "")), value=value)


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its subtree to an mdast-shaped dictionary.

    Parameters
    ----------
    node : Node
        Node to serialize

    Returns
    -------
    dict
        JSON-compatible dictionary

    """
    result: dict[str, Any] = {"type": node.type}

    if isinstance(node, Heading):
        result["depth"] = node.depth
    elif isinstance(node, Code):
        result["lang"] = node.lang
        result["value"] = node.value
    elif isinstance(node, List):
        result["ordered"] = node.ordered
        if node.start is not None:
            result["start"] = node.start
    elif isinstance(node, Link):
        result["url"] = node.url
    elif isinstance(node, (FootnoteDefinition, FootnoteReference)):
        result["identifier"] = node.identifier
        if node.label is not None:
            result["label"] = node.label
    elif isinstance(node, (MdxJsxFlowElement, MdxJsxTextElement)):
        result["name"] = node.name
        result["attributes"] = [_serialize_attribute(a) for a in node.attributes]

    if node.type in _VALUE_NODES:
        result["value"] = node.value  # type: ignore[attr-defined]
    if hasattr(node, "children"):
        result["children"] = [ast_to_dict(child) for child in node.children]  # type: ignore[attr-defined]
    return result


def _children(data: dict[str, Any]) -> list[Node]:
    return [dict_to_ast(child) for child in data.get("children") or []]


def _deserialize_jsx(cls: Callable[..., Node], data: dict[str, Any]) -> Node:
    return cls(
        name=str(data.get("name") or ""),
        attributes=[_deserialize_attribute(a) for a in data.get("attributes") or []],
        children=_children(data),
    )


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Build a node and its subtree from an mdast-shaped dictionary.

    Parameters
    ----------
    data : dict
        Dictionary as produced by ``ast_to_dict``

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ParsingError
        If the dictionary has no ``type`` or names an unknown node type

    """
    if not isinstance(data, dict) or "type" not in data:
        raise ParsingError("Node data must be an object with a 'type' field", parsing_stage="deserialize")

    node_type = data["type"]
    if node_type in _CHILDREN_NODES:
        return _CHILDREN_NODES[node_type](children=_children(data))
    if node_type in _VALUE_NODES:
        return _VALUE_NODES[node_type](value=str(data.get("value") or ""))
    if node_type in _EMPTY_NODES:
        return _EMPTY_NODES[node_type]()
    if node_type == Heading.type:
        return Heading(depth=int(data.get("depth", 1)), children=_children(data))
    if node_type == Code.type:
        return Code(value=str(data.get("value") or ""), lang=data.get("lang"))
    if node_type == List.type:
        return List(ordered=bool(data.get("ordered")), children=_children(data), start=data.get("start"))
    if node_type == Link.type:
        return Link(url=str(data.get("url") or ""), children=_children(data))
    if node_type == FootnoteDefinition.type:
        return FootnoteDefinition(
            identifier=str(data.get("identifier") or ""), label=data.get("label"), children=_children(data)
        )
    if node_type == FootnoteReference.type:
        return FootnoteReference(identifier=str(data.get("identifier") or ""), label=data.get("label"))
    if node_type == MdxJsxFlowElement.type:
        return _deserialize_jsx(MdxJsxFlowElement, data)
    if node_type == MdxJsxTextElement.type:
        return _deserialize_jsx(MdxJsxTextElement, data)

    raise ParsingError(f"Unknown node type: {node_type}", parsing_stage="deserialize")


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a tree to mdast JSON text.

    Parameters
    ----------
    node : Node
        Root of the tree to serialize
    indent : int or None, default = None
        Indentation passed to ``json.dumps``

    Returns
    -------
    str
        JSON text

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Node:
    """Deserialize mdast JSON text produced by ``ast_to_json``."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON: {e}", parsing_stage="deserialize", original_error=e) from e
    return dict_to_ast(data)
