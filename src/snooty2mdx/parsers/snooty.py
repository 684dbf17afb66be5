#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/parsers/snooty.py
"""Snooty AST to mdast/MDX converter.

This module maps the JSON-like AST produced by the Snooty RST parser onto the
mdast/MDX output tree. Conversion is a recursive, depth-first walk: every
input node is dispatched on its ``type`` (and directives on their ``name``)
to a handler returning zero, one or many output nodes.

Besides the page tree, a conversion has two side channels:

- include directives are converted into independent fragment trees and
  handed to an emission callback together with their output path
- every component that must be imported (fragments and figure images) is
  recorded in the conversion context and written as an ESM import block at
  the top of the produced file

The converter never raises for malformed or partially-populated input nodes;
it degrades to the documented fallbacks and, for unknown childless nodes,
to a visible ``<!-- unsupported: ... -->`` marker.

"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

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
    wrap_inline_runs,
)
from snooty2mdx.constants import CONDITIONAL_DIRECTIVES, INCLUDE_DIRECTIVES, LITERALINCLUDE_UNAVAILABLE_MARKER
from snooty2mdx.exceptions import IncludeCycleError
from snooty2mdx.options import ConversionOptions
from snooty2mdx.utils.frontmatter import format_number, object_to_yaml
from snooty2mdx.utils.paths import (
    image_identifier,
    image_import_path,
    include_component_name,
    include_import_path,
    is_image_path,
    normalize_asset_path,
    resolve_image_target,
    to_component_name,
    to_fragment_path,
    to_posix,
)

logger = logging.getLogger(__name__)

SnootyNode = Mapping[str, Any]
ConvertResult = Union[Node, list[Node], None]
EmitCallback = Callable[[str, Root], None]

_NUMBER_PATTERN = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")

TABLE_COMPONENTS: dict[str, str] = {
    "table": "Table",
    "table_head": "TableHead",
    "table_body": "TableBody",
    "table_row": "TableRow",
    "table_cell": "TableCell",
}


@dataclass
class ConversionContext:
    """State owned by one page or fragment conversion.

    Parameters
    ----------
    emit_file : callable or None, default = None
        Callback receiving ``(fragment_path, fragment_tree)`` for every
        converted include
    current_outfile_path : str or None, default = None
        POSIX path, relative to the output root, of the file being produced
    imports : dict, default = empty dict
        Component name to import path, in first-registration order
    include_stack : list of str, default = empty list
        Fragment paths currently being converted, outermost first; shared
        with nested fragment contexts
    meta : dict, default = empty dict
        Options hoisted from ``meta`` directives, later ones winning

    """

    emit_file: Optional[EmitCallback] = None
    current_outfile_path: Optional[str] = None
    imports: dict[str, str] = field(default_factory=dict)
    include_stack: list[str] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    def register_import(self, component_name: str, import_path: str) -> None:
        """Record an import; re-registering a name replaces its path but keeps its position."""
        if not component_name or not import_path:
            return
        self.imports[component_name] = import_path

    def for_fragment(self, fragment_path: str) -> ConversionContext:
        """Create the context of a nested fragment conversion."""
        return ConversionContext(
            emit_file=self.emit_file,
            current_outfile_path=fragment_path,
            include_stack=self.include_stack,
        )


def _text_of(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _node_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def argument_text(argument: Any) -> str:
    """Flatten a directive argument (inline nodes or a raw string) to text."""
    if isinstance(argument, list):
        return "".join(_text_of(item.get("value")) for item in argument if isinstance(item, Mapping))
    if isinstance(argument, str):
        return argument
    return str(argument) if argument else ""


def _collect_values(nodes: list[Any]) -> str:
    parts: list[str] = []

    def walk(node: Any) -> None:
        if not isinstance(node, Mapping):
            return
        if isinstance(node.get("value"), str):
            parts.append(node["value"])
        for child in _node_list(node.get("children")):
            walk(child)

    for node in nodes:
        walk(node)
    return "".join(parts).strip()


def _coerce_start(*candidates: Any) -> int:
    for candidate in candidates:
        if candidate is None or isinstance(candidate, bool):
            continue
        try:
            return int(candidate)
        except (TypeError, ValueError):
            continue
    return 1


def options_to_attributes(options: Any) -> list[MdxJsxAttribute]:
    """Map directive options to JSX attributes.

    Strings are kept as literals; every other value becomes a JSON expression.
    """
    if not isinstance(options, Mapping):
        return []
    attributes = []
    for key, value in options.items():
        if isinstance(value, str):
            attributes.append(MdxJsxAttribute(name=str(key), value=value))
        else:
            expression = json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
            attributes.append(MdxJsxAttribute(name=str(key), value=AttributeValueExpression(expression)))
    return attributes


def _numeric_attribute(name: str, raw: Any) -> Optional[MdxJsxAttribute]:
    """Return a size attribute, as an expression only when the whole value is numeric.

    Values with units such as ``"100px"`` or ``"50%"`` stay string literals.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        return MdxJsxAttribute(name=name, value=str(raw).lower())
    if isinstance(raw, (int, float)):
        return MdxJsxAttribute(name=name, value=AttributeValueExpression(format_number(raw)))
    text = str(raw)
    if _NUMBER_PATTERN.fullmatch(text):
        return MdxJsxAttribute(name=name, value=AttributeValueExpression(format_number(float(text))))
    return MdxJsxAttribute(name=name, value=text)


def _span_anchors(ids: list[Any]) -> Optional[list[Node]]:
    anchors: list[Node] = [
        MdxJsxFlowElement(name="span", attributes=[MdxJsxAttribute(name="id", value=str(anchor_id))])
        for anchor_id in ids
        if anchor_id is not None and anchor_id != ""
    ]
    return anchors or None


class SnootyToMdastConverter:
    """Convert Snooty AST nodes to mdast/MDX nodes.

    Parameters
    ----------
    options : ConversionOptions or None, default = None
        Conversion options

    Examples
    --------
        >>> converter = SnootyToMdastConverter()
        >>> ctx = ConversionContext(current_outfile_path="guide/page.mdx")
        >>> converter.convert_node({"type": "text", "value": "Hello"}, 1, ctx)
        Text(value='Hello')

    """

    def __init__(self, options: ConversionOptions | None = None):
        """Initialize the converter and its dispatch tables."""
        self.options = options or ConversionOptions()

        self._node_handlers: dict[str, Callable[[SnootyNode, int, ConversionContext], ConvertResult]] = {
            "text": self._convert_text,
            "paragraph": self._convert_paragraph,
            "emphasis": self._convert_emphasis,
            "strong": self._convert_strong,
            "literal": self._convert_literal,
            "code": self._convert_code,
            "literal_block": self._convert_code,
            "bullet_list": self._convert_bullet_list,
            "enumerated_list": self._convert_enumerated_list,
            "ordered_list": self._convert_enumerated_list,
            "list": self._convert_list,
            "list_item": self._convert_list_item,
            "listItem": self._convert_list_item,
            "field_list": self._convert_field_list,
            "field": self._convert_field,
            "reference": self._convert_reference,
            "section": self._convert_section,
            "title": self._convert_heading,
            "heading": self._convert_heading,
            "directive": self._convert_directive,
            "ref_role": self._convert_ref_role,
            "doc": self._convert_ref_role,
            "role": self._convert_role,
            "superscript": self._convert_superscript,
            "subscript": self._convert_subscript,
            "definitionList": self._convert_definition_list,
            "definitionListItem": self._convert_definition_list_item,
            "line_block": self._convert_line_block,
            "line": self._convert_line,
            "title_reference": self._convert_title_reference,
            "footnote": self._convert_footnote,
            "footnote_reference": self._convert_footnote_reference,
            "substitution_reference": self._convert_substitution,
            "substitution": self._convert_substitution,
            "directive_argument": self._convert_transparent,
            "transition": self._convert_transition,
            "card-group": self._convert_card_group,
            "cta-banner": self._convert_cta_banner,
            "tabs": self._convert_tabs,
            "only": self._convert_only,
            "method-selector": self._convert_method_selector,
            "target": self._convert_target,
            "inline_target": self._convert_inline_target,
            "target_identifier": self._convert_inline_target,
            "block_quote": self._convert_block_quote,
            "admonition": self._convert_admonition,
            "named_reference": self._drop,
            "substitution_definition": self._drop,
            "comment": self._drop,
            "comment_block": self._drop,
        }
        for table_type in TABLE_COMPONENTS:
            self._node_handlers[table_type] = self._convert_table_part

        self._directive_handlers: dict[str, Callable[[SnootyNode, int, ConversionContext], ConvertResult]] = {
            "meta": self._convert_meta,
            "figure": self._convert_figure,
            "literalinclude": self._convert_literalinclude,
        }
        for include_name in INCLUDE_DIRECTIVES:
            self._directive_handlers[include_name] = self._convert_include

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def convert_node(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ConvertResult:
        """Convert a single input node.

        Parameters
        ----------
        node : Mapping
            Input node
        section_depth : int
            Nesting depth of the enclosing section, 1 at the page top level
        ctx : ConversionContext
            Context of the file being produced

        Returns
        -------
        Node, list of Node, or None
            None drops the node; a list splices several siblings in its place

        """
        if not isinstance(node, Mapping):
            logger.debug(f"Skipping non-object node: {node!r}")
            return None

        node_type = str(node.get("type", ""))
        handler = self._node_handlers.get(node_type)
        if handler is not None:
            return handler(node, section_depth, ctx)
        return self._convert_unknown(node, section_depth, ctx)

    def convert_children(self, nodes: Any, section_depth: int, ctx: ConversionContext) -> list[Node]:
        """Convert a list of input nodes, flattening multi-node results and dropping removed ones."""
        result: list[Node] = []
        for child in _node_list(nodes):
            converted = self.convert_node(child, section_depth, ctx)
            if isinstance(converted, list):
                result.extend(converted)
            elif converted is not None:
                result.append(converted)
        return result

    def convert_root(self, root: SnootyNode, ctx: ConversionContext) -> Root:
        """Assemble the output root of a page or fragment.

        Frontmatter comes first (root options overridden by ``meta``
        directives), then the import block (non-image imports before image
        imports, each group in discovery order), then the converted content.
        Stray inline runs are finally wrapped in paragraphs.

        Parameters
        ----------
        root : Mapping
            Input root node
        ctx : ConversionContext
            Fresh context for the file being produced

        Returns
        -------
        Root
            Output tree

        """
        content = self.convert_children(root.get("children"), 1, ctx)

        page_options = root.get("options")
        frontmatter = {**(page_options if isinstance(page_options, Mapping) else {}), **ctx.meta}

        children: list[Node] = []
        yaml_text = object_to_yaml(frontmatter) if frontmatter else ""
        if yaml_text:
            children.append(Yaml(value=yaml_text))

        if ctx.imports:
            entries = list(ctx.imports.items())
            ordered = [e for e in entries if not is_image_path(e[1])] + [e for e in entries if is_image_path(e[1])]
            children.append(MdxjsEsm(value="\n".join(f"import {name} from '{path}';" for name, path in ordered)))

        children.extend(content)
        return Root(children=wrap_inline_runs(children))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _importer_path(self, ctx: ConversionContext) -> str:
        return to_posix(ctx.current_outfile_path or self.options.default_importer_path)

    def _clamp_depth(self, depth: int) -> int:
        return max(1, min(depth, self.options.max_heading_depth))

    def _children(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> list[Node]:
        return self.convert_children(node.get("children"), section_depth, ctx)

    def _flow(self, name: str, node: SnootyNode, section_depth: int, ctx: ConversionContext,
              attributes: Optional[list[MdxJsxAttribute]] = None) -> MdxJsxFlowElement:
        return MdxJsxFlowElement(
            name=name,
            attributes=attributes or [],
            children=self._children(node, section_depth, ctx),
        )

    # ------------------------------------------------------------------
    # Inline and block passthrough
    # ------------------------------------------------------------------

    def _convert_text(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Text:
        return Text(value=_text_of(node.get("value")))

    def _convert_paragraph(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Paragraph:
        return Paragraph(children=self._children(node, section_depth, ctx))

    def _convert_emphasis(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Emphasis:
        return Emphasis(children=self._children(node, section_depth, ctx))

    def _convert_strong(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Strong:
        return Strong(children=self._children(node, section_depth, ctx))

    def _convert_literal(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> InlineCode:
        # Some producers store inline code as child text runs.
        value = _text_of(node.get("value"))
        if not value:
            value = "".join(
                _text_of(child.get("value"))
                for child in _node_list(node.get("children"))
                if isinstance(child, Mapping) and (child.get("type") == "text" or "value" in child)
            )
        return InlineCode(value=value)

    def _convert_code(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Code:
        value = _text_of(node.get("value"))
        if not value:
            value = "".join(
                _text_of(child.get("value")) for child in _node_list(node.get("children")) if isinstance(child, Mapping)
            )
        lang = node.get("lang")
        if lang is None:
            lang = node.get("language")
        return Code(value=value, lang=str(lang) if lang is not None else None)

    def _convert_bullet_list(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> List:
        return List(ordered=False, children=self._children(node, section_depth, ctx))

    def _convert_enumerated_list(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> List:
        return List(
            ordered=True,
            start=_coerce_start(node.get("startat"), node.get("start")),
            children=self._children(node, section_depth, ctx),
        )

    def _convert_list(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> List:
        enumtype = node.get("enumtype")
        ordered = enumtype == "ordered" if isinstance(enumtype, str) else bool(node.get("ordered"))
        start = _coerce_start(node.get("startat"), node.get("start")) if ordered else None
        return List(ordered=ordered, start=start, children=self._children(node, section_depth, ctx))

    def _convert_list_item(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ListItem:
        return ListItem(children=self._children(node, section_depth, ctx))

    def _convert_reference(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ConvertResult:
        refuri = node.get("refuri")
        if refuri:
            return Link(url=str(refuri), children=self._children(node, section_depth, ctx))
        return self._children(node, section_depth, ctx)

    def _convert_block_quote(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Blockquote:
        return Blockquote(children=self._children(node, section_depth, ctx))

    def _convert_transition(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ThematicBreak:
        return ThematicBreak()

    def _convert_line_block(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Paragraph:
        lines = _node_list(node.get("children"))
        children: list[Node] = []
        for index, line in enumerate(lines):
            children.extend(self.convert_children([line], section_depth, ctx))
            if index < len(lines) - 1:
                children.append(Break())
        return Paragraph(children=children)

    def _convert_line(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Text:
        return Text(value=_text_of(node.get("value")))

    def _convert_title_reference(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Emphasis:
        return Emphasis(children=self._children(node, section_depth, ctx))

    def _convert_superscript(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxTextElement:
        return MdxJsxTextElement(name="sup", children=self._children(node, section_depth, ctx))

    def _convert_subscript(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxTextElement:
        return MdxJsxTextElement(name="sub", children=self._children(node, section_depth, ctx))

    def _convert_transparent(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> list[Node]:
        return self._children(node, section_depth, ctx)

    def _drop(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> None:
        return None

    def _convert_unknown(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ConvertResult:
        if _node_list(node.get("children")):
            return self._children(node, section_depth, ctx)
        node_type = node.get("type")
        logger.debug(f"Unsupported node type without children: {node_type}")
        return Html(value=f"<!-- unsupported: {node_type if node_type is not None else 'undefined'} -->")

    # ------------------------------------------------------------------
    # Sections and headings
    # ------------------------------------------------------------------

    def _convert_section(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> list[Node]:
        children = _node_list(node.get("children"))
        # The parser names the title child ``title``; the frontend AST uses ``heading``.
        title_node = next(
            (c for c in children if isinstance(c, Mapping) and c.get("type") in ("title", "heading")),
            None,
        )

        result: list[Node] = []
        if title_node is not None:
            result.append(
                Heading(
                    depth=self._clamp_depth(section_depth),
                    children=self._children(title_node, section_depth, ctx),
                )
            )
        for child in children:
            if child is title_node:
                continue
            converted = self.convert_node(child, section_depth + 1, ctx)
            if isinstance(converted, list):
                result.extend(converted)
            elif converted is not None:
                result.append(converted)
        return result

    def _convert_heading(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Heading:
        depth = node.get("depth")
        if isinstance(depth, bool) or not isinstance(depth, (int, float)):
            depth = section_depth
        return Heading(depth=self._clamp_depth(int(depth)), children=self._children(node, section_depth, ctx))

    # ------------------------------------------------------------------
    # Structural components
    # ------------------------------------------------------------------

    def _convert_field_list(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        return self._flow("FieldList", node, section_depth, ctx)

    def _convert_field(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        attributes = [
            MdxJsxAttribute(name=key, value=str(node[key])) for key in ("name", "label") if node.get(key)
        ]
        return self._flow("Field", node, section_depth, ctx, attributes)

    def _convert_table_part(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        return self._flow(TABLE_COMPONENTS.get(str(node.get("type")), "Table"), node, section_depth, ctx)

    def _convert_definition_list(
        self, node: SnootyNode, section_depth: int, ctx: ConversionContext
    ) -> MdxJsxFlowElement:
        return self._flow("DefinitionList", node, section_depth, ctx)

    def _convert_definition_list_item(
        self, node: SnootyNode, section_depth: int, ctx: ConversionContext
    ) -> MdxJsxFlowElement:
        term = self.convert_children(node.get("term"), section_depth, ctx)
        return MdxJsxFlowElement(name="DefinitionListItem", children=term + self._children(node, section_depth, ctx))

    def _convert_card_group(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        return self._flow("CardGroup", node, section_depth, ctx, options_to_attributes(node.get("options")))

    def _convert_cta_banner(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        return self._flow("CTABanner", node, section_depth, ctx, options_to_attributes(node.get("options")))

    def _convert_tabs(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        return self._flow("Tabs", node, section_depth, ctx)

    def _convert_method_selector(
        self, node: SnootyNode, section_depth: int, ctx: ConversionContext
    ) -> MdxJsxFlowElement:
        return self._flow("MethodSelector", node, section_depth, ctx)

    def _convert_only(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        condition = argument_text(node.get("argument")).strip()
        return self._flow("Only", node, section_depth, ctx, [MdxJsxAttribute(name="condition", value=condition)])

    def _convert_admonition(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxFlowElement:
        name = node.get("name")
        if name is None:
            name = node.get("admonition_type")
        return self._flow(to_component_name(str(name if name is not None else "note")), node, section_depth, ctx)

    # ------------------------------------------------------------------
    # Roles, references and anchors
    # ------------------------------------------------------------------

    def _convert_ref_role(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ConvertResult:
        url = next((node[key] for key in ("url", "refuri", "target") if node.get(key) is not None), "")
        if not url:
            return self._children(node, section_depth, ctx)
        return MdxJsxTextElement(
            name="Ref",
            attributes=[MdxJsxAttribute(name="url", value=str(url))],
            children=self._children(node, section_depth, ctx),
        )

    def _convert_role(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxTextElement:
        attributes = []
        if node.get("target"):
            attributes.append(MdxJsxAttribute(name="target", value=str(node["target"])))
        children = self._children(node, section_depth, ctx)
        if not children and node.get("value"):
            children.append(Text(value=str(node["value"])))
        return MdxJsxTextElement(
            name=to_component_name(node.get("name") or "Role"), attributes=attributes, children=children
        )

    def _convert_substitution(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> MdxJsxTextElement:
        refname = node.get("refname") or node.get("name") or ""
        attributes = [MdxJsxAttribute(name="name", value=str(refname))] if refname else []
        return MdxJsxTextElement(
            name="SubstitutionReference",
            attributes=attributes,
            children=self._children(node, section_depth, ctx),
        )

    def _convert_target(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Optional[list[Node]]:
        ids: list[Any] = []
        if isinstance(node.get("html_id"), str):
            ids.append(node["html_id"])
        ids.extend(_node_list(node.get("ids")))
        if not ids and isinstance(node.get("name"), str):
            ids.append(node["name"])
        return _span_anchors(ids)

    def _convert_inline_target(
        self, node: SnootyNode, section_depth: int, ctx: ConversionContext
    ) -> Optional[list[Node]]:
        ids: list[Any] = list(_node_list(node.get("ids")))
        if isinstance(node.get("html_id"), str):
            ids.append(node["html_id"])
        return _span_anchors(ids)

    def _convert_footnote(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ConvertResult:
        identifier = node.get("id")
        if identifier is None:
            identifier = node.get("name")
        if identifier is None or str(identifier) == "":
            # No identifier to reference: keep the content inline.
            return self._children(node, section_depth, ctx)
        label = node.get("name")
        return FootnoteDefinition(
            identifier=str(identifier),
            label=str(label) if label else None,
            children=self._children(node, section_depth, ctx),
        )

    def _convert_footnote_reference(
        self, node: SnootyNode, section_depth: int, ctx: ConversionContext
    ) -> Optional[FootnoteReference]:
        identifier = node.get("id")
        if identifier is None or str(identifier) == "":
            return None
        label = node.get("refname")
        return FootnoteReference(identifier=str(identifier), label=str(label) if label else None)

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def _convert_directive(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> ConvertResult:
        directive_name = str(node.get("name") or "").lower()
        handler = self._directive_handlers.get(directive_name)
        if handler is not None:
            return handler(node, section_depth, ctx)
        return self._convert_generic_directive(node, section_depth, ctx)

    def _convert_meta(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> None:
        options = node.get("options")
        if isinstance(options, Mapping):
            ctx.meta.update(options)
        return None

    def _convert_figure(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Node:
        path_text = _collect_values(_node_list(node.get("children"))) or argument_text(node.get("argument"))
        asset_path = normalize_asset_path(path_text)
        if not asset_path:
            logger.debug("Figure directive without an image path")
            return Html(value="<!-- figure missing src -->")

        importer = self._importer_path(ctx)
        target = resolve_image_target(asset_path, importer, self.options.images_dir_name)
        identifier = image_identifier(target)
        ctx.register_import(identifier, image_import_path(importer, target))

        options = node.get("options")
        options = options if isinstance(options, Mapping) else {}

        attributes = [MdxJsxAttribute(name="src", value=AttributeValueExpression(identifier))]
        alt = options.get("alt")
        if isinstance(alt, str) and alt:
            attributes.append(MdxJsxAttribute(name="alt", value=alt))
        for dimension in ("width", "height"):
            attribute = _numeric_attribute(dimension, options.get(dimension))
            if attribute is not None:
                attributes.append(attribute)

        return MdxJsxFlowElement(name="Image", attributes=attributes)

    def _convert_literalinclude(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Code:
        source = argument_text(node.get("argument")).strip()
        options = node.get("options")
        language = options.get("language") if isinstance(options, Mapping) else None
        return Code(
            value=f"// Source: {source}\n{LITERALINCLUDE_UNAVAILABLE_MARKER}",
            lang=str(language) if language is not None else None,
        )

    def _include_content(self, node: SnootyNode) -> list[Any]:
        children = _node_list(node.get("children"))
        if (
            len(children) == 1
            and isinstance(children[0], Mapping)
            and children[0].get("type") == "directive"
            and str(children[0].get("name") or "").lower() == "extract"
        ):
            return _node_list(children[0].get("children"))
        return children

    def _enter_include(self, fragment_path: str, ctx: ConversionContext) -> None:
        if self.options.detect_include_cycles and fragment_path in ctx.include_stack:
            raise IncludeCycleError(fragment_path, ctx.include_stack)

    def convert_fragment(self, fragment_path: str, content: list[Any], ctx: ConversionContext) -> Root:
        """Convert include content as an independent root for ``fragment_path``.

        Raises
        ------
        IncludeCycleError
            If ``fragment_path`` is already being converted further up the
            include chain

        """
        self._enter_include(fragment_path, ctx)
        fragment_ctx = ctx.for_fragment(fragment_path)
        fragment_ctx.include_stack.append(fragment_path)
        try:
            return self.convert_root({"type": "root", "children": content}, fragment_ctx)
        finally:
            fragment_ctx.include_stack.pop()

    def _convert_include(self, node: SnootyNode, section_depth: int, ctx: ConversionContext) -> Node:
        path_text = argument_text(node.get("argument")).strip()
        if not path_text:
            logger.debug("Include directive without a path")
            return Html(value="<!-- include missing path -->")

        fragment_path = to_fragment_path(path_text, self.options.fragment_extension)

        try:
            fragment_tree = self.convert_fragment(fragment_path, self._include_content(node), ctx)
        except IncludeCycleError as e:
            logger.warning(f"{e.message}; leaving a marker in {self._importer_path(ctx)}")
            return Html(value=f"<!-- include cycle: {fragment_path} -->")

        if ctx.emit_file is not None:
            try:
                ctx.emit_file(fragment_path, fragment_tree)
            except Exception as e:
                logger.error(f"Failed to emit include file {fragment_path}: {e}", exc_info=True)

        component_name = include_component_name(fragment_path, self.options.fragment_extension)
        ctx.register_import(component_name, include_import_path(self._importer_path(ctx), fragment_path))
        return MdxJsxFlowElement(name=component_name)

    def _convert_generic_directive(
        self, node: SnootyNode, section_depth: int, ctx: ConversionContext
    ) -> Optional[MdxJsxFlowElement]:
        directive_name = str(node.get("name") or "").lower()
        attributes = options_to_attributes(node.get("options"))

        argument = node.get("argument")
        include_argument = True
        if argument and directive_name in CONDITIONAL_DIRECTIVES:
            attributes.append(MdxJsxAttribute(name="expr", value=argument_text(argument).strip()))
            include_argument = False

        children: list[Node] = []
        if include_argument:
            if isinstance(argument, list):
                children.extend(self.convert_children(argument, section_depth, ctx))
            elif isinstance(argument, str) and argument:
                children.append(Text(value=argument))
        children.extend(self._children(node, section_depth, ctx))

        if directive_name in self.options.dropped_empty_directives and not children and not attributes:
            return None

        return MdxJsxFlowElement(
            name=to_component_name(node.get("name") or "Directive"),
            attributes=attributes,
            children=children,
        )


def snooty_ast_to_mdast(
    root: SnootyNode,
    on_emit_file: Optional[EmitCallback] = None,
    current_outfile_path: Optional[str] = None,
    options: ConversionOptions | None = None,
) -> Root:
    """Convert a Snooty AST root into an mdast/MDX tree.

    Parameters
    ----------
    root : Mapping
        Input root node (the ``ast`` payload of a page document)
    on_emit_file : callable or None, default = None
        Receives ``(fragment_path, fragment_tree)`` for every include, nested
        includes first
    current_outfile_path : str or None, default = None
        POSIX path of the produced file relative to the output root; import
        paths are computed from it
    options : ConversionOptions or None, default = None
        Conversion options

    Returns
    -------
    Root
        Converted page tree

    Examples
    --------
        >>> tree = snooty_ast_to_mdast({
        ...     "type": "root",
        ...     "children": [{"type": "section", "children": [
        ...         {"type": "heading", "children": [{"type": "text", "value": "Intro"}]},
        ...         {"type": "paragraph", "children": [{"type": "text", "value": "Hello"}]},
        ...     ]}],
        ... })
        >>> [child.type for child in tree.children]
        ['heading', 'paragraph']

    """
    converter = SnootyToMdastConverter(options)
    ctx = ConversionContext(emit_file=on_emit_file, current_outfile_path=current_outfile_path)
    return converter.convert_root(root, ctx)
