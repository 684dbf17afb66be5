#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/ast/visitors.py
"""Visitor pattern implementation for output tree traversal.

This module provides the visitor base class used by the MDX renderer, the
reference collector and the tree transformers, plus a validation visitor
that checks the structural guarantees of a converted tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from snooty2mdx.ast.nodes import (
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
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    Paragraph,
    Root,
    Strong,
    Text,
    ThematicBreak,
    Yaml,
    get_node_children,
    is_inline_node,
)
from snooty2mdx.constants import MAX_HEADING_DEPTH


class NodeVisitor(ABC):
    """Abstract base class for output tree visitors.

    Subclasses implement one visit_* method per node kind. Each node's
    ``accept`` method dispatches to the matching method, so algorithms such as
    rendering or reference collection stay separate from the node classes.

    Examples
    --------
    Counting text nodes:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def generic_visit(self, node):
        ...         if isinstance(node, Text):
        ...             self.count += 1
        ...         for child in get_node_children(node):
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_root(self, node: Root) -> Any:
        """Visit a Root node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_blockquote(self, node: Blockquote) -> Any:
        """Visit a Blockquote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_html(self, node: Html) -> Any:
        """Visit an Html node."""
        pass

    @abstractmethod
    def visit_yaml(self, node: Yaml) -> Any:
        """Visit a Yaml frontmatter node."""
        pass

    @abstractmethod
    def visit_mdxjs_esm(self, node: MdxjsEsm) -> Any:
        """Visit an MdxjsEsm import block."""
        pass

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""
        pass

    @abstractmethod
    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> Any:
        """Visit a block-level component."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_inline_code(self, node: InlineCode) -> Any:
        """Visit an InlineCode node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_break(self, node: Break) -> Any:
        """Visit a Break node."""
        pass

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
        pass

    @abstractmethod
    def visit_mdx_jsx_text_element(self, node: MdxJsxTextElement) -> Any:
        """Visit an inline component."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Visit a node with no specific handler.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass


class ValidationVisitor(NodeVisitor):
    """Visitor that checks the structural guarantees of a converted tree.

    The checks performed are:

    - heading depths stay within 1..6
    - paragraphs, headings and inline containers hold only phrasing content
    - flow containers (root, list items, block quotes, footnote bodies and
      flow components) hold no bare phrasing content, which is what the
      inline-run normalizer guarantees
    - lists hold only list items, and only ordered lists carry a start index
    - JSX elements are named

    Parameters
    ----------
    strict : bool, default = True
        Raise ValueError on the first violation instead of collecting it

    Attributes
    ----------
    errors : list of str
        Violations found so far (non-strict mode)

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> tree.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        if self.strict:
            raise ValueError(message)
        self.errors.append(message)

    def _visit_children(self, node: Node) -> None:
        for child in get_node_children(node):
            if not isinstance(child, Node):
                self._add_error(f"{node.type} has a non-node child: {child!r}")
                continue
            child.accept(self)

    def _check_phrasing(self, node: Node) -> None:
        for child in get_node_children(node):
            if not isinstance(child, Node) or isinstance(child, (MdxJsxFlowElement, Html)):
                continue
            if not is_inline_node(child):
                self._add_error(f"{node.type} contains flow content: {child.type}")

    def _check_flow(self, node: Node) -> None:
        for child in get_node_children(node):
            if isinstance(child, Node) and is_inline_node(child):
                self._add_error(f"{node.type} contains unwrapped phrasing content: {child.type}")

    def visit_root(self, node: Root) -> None:
        """Validate a Root node."""
        self._check_flow(node)
        self._visit_children(node)

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.depth <= MAX_HEADING_DEPTH:
            self._add_error(f"Heading depth must be 1-{MAX_HEADING_DEPTH}, got {node.depth}")
        self._check_phrasing(node)
        self._visit_children(node)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._check_phrasing(node)
        self._visit_children(node)

    def visit_code(self, node: Code) -> None:
        """Validate a Code node."""
        if not isinstance(node.value, str):
            self._add_error("Code value must be a string")

    def visit_blockquote(self, node: Blockquote) -> None:
        """Validate a Blockquote node."""
        self._check_flow(node)
        self._visit_children(node)

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        for child in node.children:
            if not isinstance(child, ListItem):
                self._add_error(f"list contains a non-item child: {getattr(child, 'type', child)!r}")
        if not node.ordered and node.start is not None:
            self._add_error("Unordered list must not carry a start index")
        self._visit_children(node)

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        self._check_flow(node)
        self._visit_children(node)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Validate a ThematicBreak node."""
        pass

    def visit_html(self, node: Html) -> None:
        """Validate an Html node."""
        pass

    def visit_yaml(self, node: Yaml) -> None:
        """Validate a Yaml node."""
        pass

    def visit_mdxjs_esm(self, node: MdxjsEsm) -> None:
        """Validate an MdxjsEsm node."""
        for line in node.value.splitlines():
            if line.strip() and not line.startswith("import "):
                self._add_error(f"ESM block contains a non-import line: {line!r}")

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Validate a FootnoteDefinition node."""
        if not node.identifier:
            self._add_error("Footnote definition requires an identifier")
        self._check_flow(node)
        self._visit_children(node)

    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> None:
        """Validate a block-level component."""
        if not node.name:
            self._add_error("Flow component requires a name")
        self._check_flow(node)
        self._visit_children(node)

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        if not isinstance(node.value, str):
            self._add_error("Text value must be a string")

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._check_phrasing(node)
        self._visit_children(node)

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._check_phrasing(node)
        self._visit_children(node)

    def visit_inline_code(self, node: InlineCode) -> None:
        """Validate an InlineCode node."""
        pass

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        if not node.url:
            self._add_error("Link requires a url")
        self._check_phrasing(node)
        self._visit_children(node)

    def visit_break(self, node: Break) -> None:
        """Validate a Break node."""
        pass

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Validate a FootnoteReference node."""
        if not node.identifier:
            self._add_error("Footnote reference requires an identifier")

    def visit_mdx_jsx_text_element(self, node: MdxJsxTextElement) -> None:
        """Validate an inline component."""
        if not node.name:
            self._add_error("Inline component requires a name")
        self._check_phrasing(node)
        self._visit_children(node)
