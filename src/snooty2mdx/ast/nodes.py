#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/ast/nodes.py
"""mdast/MDX node classes for the converted document tree.

This module defines the output tree produced by the Snooty converter. The
node kinds mirror the mdast grammar plus the MDX extensions (JSX elements and
ESM import blocks), so a converted tree can be serialized to the mdast JSON
shape understood by remark, or rendered directly to MDX text.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.
Each concrete class carries a ``type`` class attribute holding its mdast name.

Flow (block-level) nodes:
    - Root, Heading, Paragraph, Code, Blockquote
    - List, ListItem, ThematicBreak, Html
    - Yaml (frontmatter), MdxjsEsm (import statements)
    - FootnoteDefinition, MdxJsxFlowElement

Phrasing (inline) nodes:
    - Text, Emphasis, Strong, InlineCode
    - Link, Break, FootnoteReference, MdxJsxTextElement

JSX attribute values are either plain strings or AttributeValueExpression
instances, which the serializer writes verbatim between braces.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Optional, Union


@dataclass(frozen=True)
class AttributeValueExpression:
    """JSX attribute value written as a raw expression (``name={value}``).

    Parameters
    ----------
    value : str
        Expression source, e.g. an identifier, a number or JSON text

    """

    value: str


@dataclass(frozen=True)
class MdxJsxAttribute:
    """A single JSX attribute on an embedded component.

    Parameters
    ----------
    name : str
        Attribute name
    value : str or AttributeValueExpression
        Literal string value or raw expression

    """

    name: str
    value: Union[str, AttributeValueExpression]

    @property
    def is_expression(self) -> bool:
        """Whether the value is serialized as a raw expression."""
        return isinstance(self.value, AttributeValueExpression)


class Node(ABC):
    """Base class for all output tree nodes.

    All nodes inherit from this base class and support the visitor pattern
    for traversal and rendering.

    """

    type: ClassVar[str] = "node"

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Flow (block-level) Nodes
# ============================================================================


@dataclass
class Root(Node):
    """Root node holding a converted page or fragment.

    Parameters
    ----------
    children : list of Node, default = empty list
        Flow-level nodes of the document

    """

    type: ClassVar[str] = "root"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this root."""
        return visitor.visit_root(self)


@dataclass
class Heading(Node):
    """Section heading.

    Parameters
    ----------
    depth : int
        Heading depth, 1 to 6
    children : list of Node, default = empty list
        Phrasing content of the heading

    """

    type: ClassVar[str] = "heading"

    depth: int = 1
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph of phrasing content."""

    type: ClassVar[str] = "paragraph"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class Code(Node):
    """Fenced code block.

    Parameters
    ----------
    value : str, default = ""
        Code content
    lang : str or None, default = None
        Language tag for syntax highlighting

    """

    type: ClassVar[str] = "code"

    value: str = ""
    lang: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code(self)


@dataclass
class Blockquote(Node):
    """Block quotation."""

    type: ClassVar[str] = "blockquote"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_blockquote(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool, default = False
        Whether the list is numbered
    children : list of Node, default = empty list
        ListItem children
    start : int or None, default = None
        First number of an ordered list; unordered lists carry None

    """

    type: ClassVar[str] = "list"

    ordered: bool = False
    children: list[Node] = field(default_factory=list)
    start: Optional[int] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """Item of a List."""

    type: ClassVar[str] = "listItem"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    type: ClassVar[str] = "thematicBreak"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class Html(Node):
    """Raw HTML, used for visible degradation markers such as unsupported nodes."""

    type: ClassVar[str] = "html"

    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML node."""
        return visitor.visit_html(self)


@dataclass
class Yaml(Node):
    """YAML frontmatter block; ``value`` holds the YAML text without delimiters."""

    type: ClassVar[str] = "yaml"

    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this frontmatter block."""
        return visitor.visit_yaml(self)


@dataclass
class MdxjsEsm(Node):
    """ESM block holding raw import statements."""

    type: ClassVar[str] = "mdxjsEsm"

    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this ESM block."""
        return visitor.visit_mdxjs_esm(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote body.

    Parameters
    ----------
    identifier : str
        Footnote identifier referenced by FootnoteReference nodes
    label : str or None, default = None
        Original footnote label
    children : list of Node, default = empty list
        Flow content of the footnote

    """

    type: ClassVar[str] = "footnoteDefinition"

    identifier: str = ""
    label: Optional[str] = None
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote definition."""
        return visitor.visit_footnote_definition(self)


@dataclass
class MdxJsxFlowElement(Node):
    """Block-level embedded component (``<Name ...>...</Name>``).

    Parameters
    ----------
    name : str
        Component name
    attributes : list of MdxJsxAttribute, default = empty list
        Attributes in output order
    children : list of Node, default = empty list
        Flow content of the component

    """

    type: ClassVar[str] = "mdxJsxFlowElement"

    name: str = ""
    attributes: list[MdxJsxAttribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this component."""
        return visitor.visit_mdx_jsx_flow_element(self)


# ============================================================================
# Phrasing (inline) Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text run."""

    type: ClassVar[str] = "text"

    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text node."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasized phrasing content."""

    type: ClassVar[str] = "emphasis"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis node."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strongly emphasized phrasing content."""

    type: ClassVar[str] = "strong"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong node."""
        return visitor.visit_strong(self)


@dataclass
class InlineCode(Node):
    """Inline code span."""

    type: ClassVar[str] = "inlineCode"

    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code node."""
        return visitor.visit_inline_code(self)


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    url : str
        Link destination
    children : list of Node, default = empty list
        Link text

    """

    type: ClassVar[str] = "link"

    url: str = ""
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Break(Node):
    """Hard line break."""

    type: ClassVar[str] = "break"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_break(self)


@dataclass
class FootnoteReference(Node):
    """Reference to a FootnoteDefinition."""

    type: ClassVar[str] = "footnoteReference"

    identifier: str = ""
    label: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


@dataclass
class MdxJsxTextElement(Node):
    """Inline embedded component, the phrasing counterpart of MdxJsxFlowElement."""

    type: ClassVar[str] = "mdxJsxTextElement"

    name: str = ""
    attributes: list[MdxJsxAttribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline component."""
        return visitor.visit_mdx_jsx_text_element(self)


# ============================================================================
# Helpers
# ============================================================================

INLINE_NODE_TYPES: frozenset[str] = frozenset(
    {
        Text.type,
        Emphasis.type,
        Strong.type,
        InlineCode.type,
        Break.type,
        MdxJsxTextElement.type,
        Link.type,
        FootnoteReference.type,
    }
)

# Containers whose children are phrasing content by construction.
PHRASING_CONTAINER_TYPES: frozenset[str] = frozenset({Paragraph.type, Heading.type})

JsxElement = Union[MdxJsxFlowElement, MdxJsxTextElement]


def is_inline_node(node: Node) -> bool:
    """Return True when ``node`` is a phrasing-level node."""
    return node.type in INLINE_NODE_TYPES


def get_node_children(node: Node) -> list[Node]:
    """Return the child list of a node, or an empty list for leaves."""
    children = getattr(node, "children", None)
    return children if isinstance(children, list) else []


def replace_node_children(node: Node, children: list[Node]) -> Node:
    """Return a copy of ``node`` with its children replaced.

    Leaf nodes are returned unchanged.

    """
    if not hasattr(node, "children"):
        return node
    return replace(node, children=children)  # type: ignore[type-var]


def get_attribute(element: JsxElement, name: str) -> Union[str, AttributeValueExpression, None]:
    """Look up a JSX attribute value by name.

    Parameters
    ----------
    element : MdxJsxFlowElement or MdxJsxTextElement
        Component to inspect
    name : str
        Attribute name

    Returns
    -------
    str, AttributeValueExpression or None
        The first matching attribute value, or None when absent

    """
    for attribute in element.attributes:
        if attribute.name == name:
            return attribute.value
    return None
