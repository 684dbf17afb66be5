#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/renderers/mdx.py
"""MDX rendering from the output tree.

This module provides the MdxRenderer class which serializes an mdast/MDX
tree to MDX text: YAML frontmatter between ``---`` fences, the ESM import
block, CommonMark blocks and inline content, and JSX components.

Rendering uses the visitor pattern. Every block is rendered to a string of
its own; containers (list items, block quotes, components) then indent or
prefix the lines of their children, so nesting needs no shared indentation
state.

"""

from __future__ import annotations

import re
from pathlib import Path
from typing import IO, Union

from snooty2mdx.ast import (
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
from snooty2mdx.ast.visitors import NodeVisitor
from snooty2mdx.options.mdx import MdxRendererOptions
from snooty2mdx.renderers.base import BaseRenderer, InlineContentMixin

_ESCAPED_CHARS = re.compile(r"([`*_\[\]<{])")
_LINE_LEADING_HASH = re.compile(r"^(\s*)#", re.MULTILINE)
_BACKTICK_RUN = re.compile(r"`+")
_URL_NEEDS_BRACKETS = re.compile(r"[\s()<>]")

JSX_INDENT = "  "
FOOTNOTE_INDENT = "    "


def _longest_run(pattern: re.Pattern, text: str) -> int:
    return max((len(m.group(0)) for m in pattern.finditer(text)), default=0)


def _indent_lines(text: str, prefix: str) -> str:
    return "\n".join(f"{prefix}{line}" if line.strip() else "" for line in text.split("\n"))


class MdxRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render output trees to MDX text.

    Parameters
    ----------
    options : MdxRendererOptions or None, default = None
        Rendering options

    Examples
    --------
        >>> from snooty2mdx.ast import Heading, Root, Text
        >>> renderer = MdxRenderer()
        >>> renderer.render_to_string(Root(children=[Heading(depth=2, children=[Text(value="Setup")])]))
        '## Setup\\n'

    """

    def __init__(self, options: MdxRendererOptions | None = None):
        """Initialize the MDX renderer with options."""
        BaseRenderer._validate_options_type(options, MdxRendererOptions, "mdx")
        options = options or MdxRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MdxRendererOptions = options
        self._output: list[str] = []
        self._list_marker: str | None = None

    def render_to_string(self, root: Root) -> str:
        """Render a tree to MDX text.

        Parameters
        ----------
        root : Root
            Tree to render

        Returns
        -------
        str
            MDX text ending with a single newline, or an empty string for an
            empty tree

        """
        self._output = []
        self._list_marker = None

        root.accept(self)

        result = "".join(self._output).replace("\r\n", "\n").rstrip("\n")
        self._output.clear()
        return f"{result}\n" if result else ""

    def render(self, root: Root, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a tree to MDX and write it to ``output``."""
        self.write_text_output(self.render_to_string(root), output)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render_block(self, node: Node) -> str:
        return self._render_inline_content([node])

    def _render_blocks(self, nodes: list[Node]) -> str:
        blocks = [self._render_block(node) for node in nodes]
        return "\n\n".join(block for block in blocks if block)

    def _escape_text(self, text: str) -> str:
        if not self.options.escape_text:
            return text
        text = _ESCAPED_CHARS.sub(r"\\\1", text.replace("\\", "\\\\"))
        return _LINE_LEADING_HASH.sub(r"\1\\#", text)

    @staticmethod
    def _render_attributes(attributes: list[MdxJsxAttribute]) -> str:
        parts = []
        for attribute in attributes:
            if attribute.is_expression:
                parts.append(f"{attribute.name}={{{attribute.value.value}}}")  # type: ignore[union-attr]
            else:
                parts.append(f'{attribute.name}="{attribute.value.replace(chr(34), "&#x22;")}"')
        return "".join(f" {part}" for part in parts)

    # ------------------------------------------------------------------
    # Flow content
    # ------------------------------------------------------------------

    def visit_root(self, node: Root) -> None:
        """Render a Root node."""
        self._output.append(self._render_blocks(node.children))

    def visit_yaml(self, node: Yaml) -> None:
        """Render frontmatter."""
        self._output.append(f"---\n{node.value}\n---")

    def visit_mdxjs_esm(self, node: MdxjsEsm) -> None:
        """Render an import block verbatim."""
        self._output.append(node.value)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node as an ATX heading."""
        content = self._render_inline_content(node.children).replace("\n", " ")
        self._output.append(f"{'#' * node.depth} {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_content(node.children))

    def visit_code(self, node: Code) -> None:
        """Render a fenced code block.

        The fence is one backtick longer than the longest backtick run in
        the code, and at least three long.

        """
        fence = "`" * max(3, _longest_run(_BACKTICK_RUN, node.value) + 1)
        lang = node.lang or ""
        if node.value:
            value = node.value[:-1] if node.value.endswith("\n") else node.value
            self._output.append(f"{fence}{lang}\n{value}\n{fence}")
        else:
            self._output.append(f"{fence}{lang}\n{fence}")

    def visit_blockquote(self, node: Blockquote) -> None:
        """Render a Blockquote node."""
        content = self._render_blocks(node.children)
        self._output.append("\n".join(f"> {line}" if line else ">" for line in content.split("\n")))

    def visit_list(self, node: List) -> None:
        """Render a List node, one item per line group."""
        saved_marker = self._list_marker
        items = []
        for index, item in enumerate(node.children):
            if node.ordered:
                self._list_marker = f"{(node.start if node.start is not None else 1) + index}."
            else:
                self._list_marker = self.options.bullet_marker
            items.append(self._render_block(item))
        self._list_marker = saved_marker
        self._output.append("\n".join(items))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node with its marker and indented continuation lines."""
        marker = self._list_marker or self.options.bullet_marker
        # Nested lists pick their own markers.
        self._list_marker = None
        content = self._render_blocks(node.children)
        self._list_marker = marker

        first, _, rest = content.partition("\n")
        rendered = f"{marker} {first}" if first else marker
        if rest:
            rendered += "\n" + _indent_lines(rest, " " * (len(marker) + 1))
        self._output.append(rendered)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("***")

    def visit_html(self, node: Html) -> None:
        """Render raw HTML verbatim."""
        self._output.append(node.value)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a FootnoteDefinition node."""
        content = self._render_blocks(node.children)
        first, _, rest = content.partition("\n")
        rendered = f"[^{node.identifier}]: {first}".rstrip()
        if rest:
            rendered += "\n" + _indent_lines(rest, FOOTNOTE_INDENT)
        self._output.append(rendered)

    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> None:
        """Render a block-level component.

        Childless components are self-closing; children are rendered as
        blocks indented by two spaces between the opening and closing tags.

        """
        opening = f"<{node.name}{self._render_attributes(node.attributes)}"
        content = self._render_blocks(node.children)
        if not content:
            self._output.append(f"{opening} />")
            return
        self._output.append(f"{opening}>\n{_indent_lines(content, JSX_INDENT)}\n</{node.name}>")

    # ------------------------------------------------------------------
    # Phrasing content
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node, escaping Markdown and MDX syntax."""
        self._output.append(self._escape_text(node.value))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        marker = self.options.emphasis_marker
        self._output.append(f"{marker}{self._render_inline_content(node.children)}{marker}")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        marker = self.options.strong_marker
        self._output.append(f"{marker}{self._render_inline_content(node.children)}{marker}")

    def visit_inline_code(self, node: InlineCode) -> None:
        """Render an InlineCode node with a fence longer than any backtick run inside it."""
        fence = "`" * (_longest_run(_BACKTICK_RUN, node.value) + 1)
        value = node.value
        padded = value.startswith(" ") and value.endswith(" ") and value.strip()
        if value.startswith("`") or value.endswith("`") or padded:
            value = f" {value} "
        self._output.append(f"{fence}{value}{fence}")

    def visit_link(self, node: Link) -> None:
        """Render a Link node as an inline link."""
        url = f"<{node.url}>" if not node.url or _URL_NEEDS_BRACKETS.search(node.url) else node.url
        self._output.append(f"[{self._render_inline_content(node.children)}]({url})")

    def visit_break(self, node: Break) -> None:
        """Render a hard line break."""
        self._output.append("\\\n")

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference node."""
        self._output.append(f"[^{node.identifier}]")

    def visit_mdx_jsx_text_element(self, node: MdxJsxTextElement) -> None:
        """Render an inline component."""
        opening = f"<{node.name}{self._render_attributes(node.attributes)}"
        content = self._render_inline_content(node.children)
        if not content:
            self._output.append(f"{opening} />")
        else:
            self._output.append(f"{opening}>{content}</{node.name}>")
