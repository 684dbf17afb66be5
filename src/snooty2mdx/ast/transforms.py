#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/ast/transforms.py
"""Tree transformation utilities.

This module provides the copying transformer and collecting visitor used
across the package, and the inline-run normalizer that runs as the final pass
of every conversion.

Examples
--------
Wrap stray phrasing content into paragraphs:

    >>> from snooty2mdx.ast import transforms
    >>> children = transforms.wrap_inline_runs([Text(value="a"), ThematicBreak()])
    >>> [child.type for child in children]
    ['paragraph', 'thematicBreak']

"""

from __future__ import annotations

import copy
from typing import Callable

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
    replace_node_children,
)
from snooty2mdx.ast.visitors import NodeVisitor


class NodeTransformer(NodeVisitor):
    """Base class for transforming output trees.

    Subclasses override visit_* methods to return modified nodes, or None to
    remove a node. The default behavior copies every node, so a transformer
    never mutates the tree it is given.

    Examples
    --------
    >>> class UppercaseTransformer(NodeTransformer):
    ...     def visit_text(self, node):
    ...         return Text(value=node.value.upper())
    >>>
    >>> new_tree = UppercaseTransformer().transform(tree)

    """

    def transform(self, node: Node) -> Node | None:
        """Transform a node.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node or None
            Transformed node or None to remove

        """
        return node.accept(self)

    def _transform_children(self, children: list[Node]) -> list[Node]:
        """Transform a list of child nodes, dropping removed ones."""
        result = []
        for child in children:
            transformed = self.transform(child)
            if transformed is not None:
                result.append(transformed)
        return result

    def _generic_transform(self, node: Node) -> Node:
        """Copy a node, transforming its children when it has any."""
        if not hasattr(node, "children"):
            return copy.copy(node)
        return replace_node_children(node, self._transform_children(get_node_children(node)))

    def visit_root(self, node: Root) -> Root:
        """Transform a Root node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_heading(self, node: Heading) -> Heading:
        """Transform a Heading node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_paragraph(self, node: Paragraph) -> Paragraph:
        """Transform a Paragraph node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_code(self, node: Code) -> Code:
        """Transform a Code node."""
        return Code(value=node.value, lang=node.lang)

    def visit_blockquote(self, node: Blockquote) -> Blockquote:
        """Transform a Blockquote node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_list(self, node: List) -> List:
        """Transform a List node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_list_item(self, node: ListItem) -> ListItem:
        """Transform a ListItem node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_thematic_break(self, node: ThematicBreak) -> ThematicBreak:
        """Transform a ThematicBreak node."""
        return ThematicBreak()

    def visit_html(self, node: Html) -> Html:
        """Transform an Html node."""
        return Html(value=node.value)

    def visit_yaml(self, node: Yaml) -> Yaml:
        """Transform a Yaml node."""
        return Yaml(value=node.value)

    def visit_mdxjs_esm(self, node: MdxjsEsm) -> MdxjsEsm:
        """Transform an MdxjsEsm node."""
        return MdxjsEsm(value=node.value)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> FootnoteDefinition:
        """Transform a FootnoteDefinition node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> MdxJsxFlowElement:
        """Transform a block-level component."""
        return MdxJsxFlowElement(
            name=node.name,
            attributes=list(node.attributes),
            children=self._transform_children(node.children),
        )

    def visit_text(self, node: Text) -> Text:
        """Transform a Text node."""
        return Text(value=node.value)

    def visit_emphasis(self, node: Emphasis) -> Emphasis:
        """Transform an Emphasis node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_strong(self, node: Strong) -> Strong:
        """Transform a Strong node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_inline_code(self, node: InlineCode) -> InlineCode:
        """Transform an InlineCode node."""
        return InlineCode(value=node.value)

    def visit_link(self, node: Link) -> Link:
        """Transform a Link node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_break(self, node: Break) -> Break:
        """Transform a Break node."""
        return Break()

    def visit_footnote_reference(self, node: FootnoteReference) -> FootnoteReference:
        """Transform a FootnoteReference node."""
        return FootnoteReference(identifier=node.identifier, label=node.label)

    def visit_mdx_jsx_text_element(self, node: MdxJsxTextElement) -> MdxJsxTextElement:
        """Transform an inline component."""
        return MdxJsxTextElement(
            name=node.name,
            attributes=list(node.attributes),
            children=self._transform_children(node.children),
        )


class NodeCollector(NodeVisitor):
    """Visitor that collects nodes matching a condition.

    Parameters
    ----------
    predicate : callable or None, default = None
        Function that takes a node and returns True to collect it

    """

    def __init__(self, predicate: Callable[[Node], bool] | None = None):
        """Initialize the collector with an optional predicate function."""
        self.predicate = predicate or (lambda n: True)
        self.collected: list[Node] = []

    def _generic_visit(self, node: Node) -> None:
        if self.predicate(node):
            self.collected.append(node)
        for child in get_node_children(node):
            child.accept(self)

    def visit_root(self, node: Root) -> None:
        """Collect from a Root node."""
        self._generic_visit(node)

    def visit_heading(self, node: Heading) -> None:
        """Collect from a Heading node."""
        self._generic_visit(node)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Collect from a Paragraph node."""
        self._generic_visit(node)

    def visit_code(self, node: Code) -> None:
        """Collect from a Code node."""
        self._generic_visit(node)

    def visit_blockquote(self, node: Blockquote) -> None:
        """Collect from a Blockquote node."""
        self._generic_visit(node)

    def visit_list(self, node: List) -> None:
        """Collect from a List node."""
        self._generic_visit(node)

    def visit_list_item(self, node: ListItem) -> None:
        """Collect from a ListItem node."""
        self._generic_visit(node)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Collect from a ThematicBreak node."""
        self._generic_visit(node)

    def visit_html(self, node: Html) -> None:
        """Collect from an Html node."""
        self._generic_visit(node)

    def visit_yaml(self, node: Yaml) -> None:
        """Collect from a Yaml node."""
        self._generic_visit(node)

    def visit_mdxjs_esm(self, node: MdxjsEsm) -> None:
        """Collect from an MdxjsEsm node."""
        self._generic_visit(node)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Collect from a FootnoteDefinition node."""
        self._generic_visit(node)

    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> None:
        """Collect from a block-level component."""
        self._generic_visit(node)

    def visit_text(self, node: Text) -> None:
        """Collect from a Text node."""
        self._generic_visit(node)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Collect from an Emphasis node."""
        self._generic_visit(node)

    def visit_strong(self, node: Strong) -> None:
        """Collect from a Strong node."""
        self._generic_visit(node)

    def visit_inline_code(self, node: InlineCode) -> None:
        """Collect from an InlineCode node."""
        self._generic_visit(node)

    def visit_link(self, node: Link) -> None:
        """Collect from a Link node."""
        self._generic_visit(node)

    def visit_break(self, node: Break) -> None:
        """Collect from a Break node."""
        self._generic_visit(node)

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Collect from a FootnoteReference node."""
        self._generic_visit(node)

    def visit_mdx_jsx_text_element(self, node: MdxJsxTextElement) -> None:
        """Collect from an inline component."""
        self._generic_visit(node)


class InlineRunNormalizer(NodeTransformer):
    """Transformer that wraps stray phrasing content of flow containers in paragraphs.

    Every maximal run of consecutive inline nodes found directly under a flow
    container (root, list, list item, block quote, footnote definition or
    flow component) becomes a single Paragraph. Paragraphs, headings and
    inline containers keep their phrasing children as they are, which makes
    the pass idempotent: a normalized tree has no inline run left to wrap.

    """

    def normalize(self, nodes: list[Node]) -> list[Node]:
        """Normalize a sequence of sibling nodes.

        Parameters
        ----------
        nodes : list of Node
            Siblings that may mix flow and phrasing content

        Returns
        -------
        list of Node
            New sibling list with inline runs wrapped

        """
        result: list[Node] = []
        inline_run: list[Node] = []

        for node in nodes:
            transformed = self.transform(node)
            if transformed is None:
                continue
            if is_inline_node(transformed):
                inline_run.append(transformed)
                continue
            if inline_run:
                result.append(Paragraph(children=inline_run))
                inline_run = []
            result.append(transformed)

        if inline_run:
            result.append(Paragraph(children=inline_run))
        return result

    def visit_root(self, node: Root) -> Root:
        """Normalize the top-level children."""
        return Root(children=self.normalize(node.children))

    def visit_blockquote(self, node: Blockquote) -> Blockquote:
        """Normalize a block quote body."""
        return Blockquote(children=self.normalize(node.children))

    def visit_list(self, node: List) -> List:
        """Normalize list children."""
        return List(ordered=node.ordered, children=self.normalize(node.children), start=node.start)

    def visit_list_item(self, node: ListItem) -> ListItem:
        """Normalize a list item body."""
        return ListItem(children=self.normalize(node.children))

    def visit_footnote_definition(self, node: FootnoteDefinition) -> FootnoteDefinition:
        """Normalize a footnote body."""
        return FootnoteDefinition(
            identifier=node.identifier,
            label=node.label,
            children=self.normalize(node.children),
        )

    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> MdxJsxFlowElement:
        """Normalize the body of a block-level component."""
        return MdxJsxFlowElement(
            name=node.name,
            attributes=list(node.attributes),
            children=self.normalize(node.children),
        )


def wrap_inline_runs(nodes: list[Node]) -> list[Node]:
    """Wrap every maximal run of inline nodes in a paragraph, recursively.

    The input nodes are left untouched; a new sibling list of copied nodes is
    returned.

    Parameters
    ----------
    nodes : list of Node
        Siblings that may mix flow and phrasing content

    Returns
    -------
    list of Node
        Normalized siblings

    Examples
    --------
        >>> wrap_inline_runs([Text(value="a"), Strong(children=[Text(value="b")]), ThematicBreak()])
        [Paragraph(children=[Text(value='a'), Strong(children=[Text(value='b')])]), ThematicBreak()]

    """
    return InlineRunNormalizer().normalize(nodes)
