#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the Snooty AST to mdast dispatcher."""

import pytest
from utils import directive, figure, heading, include, paragraph, section, text

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
    Paragraph,
    Root,
    Strong,
    Text,
    ThematicBreak,
)
from snooty2mdx.options import ConversionOptions
from snooty2mdx.parsers.snooty import (
    ConversionContext,
    SnootyToMdastConverter,
    argument_text,
    options_to_attributes,
)


def convert(node, section_depth=1, ctx=None, options=None):
    """Convert a single node with a fresh converter."""
    converter = SnootyToMdastConverter(options)
    return converter.convert_node(node, section_depth, ctx or ConversionContext(current_outfile_path="index.mdx"))


@pytest.mark.unit
class TestInlineNodes:
    """Test conversion of phrasing content."""

    def test_text(self):
        """Test text nodes keep their value."""
        assert convert(text("Hello")) == Text(value="Hello")

    def test_text_without_value(self):
        """Test a text node without a value becomes empty text."""
        assert convert({"type": "text"}) == Text(value="")

    def test_emphasis_and_strong(self):
        """Test emphasis and strong wrap their converted children."""
        node = paragraph({"type": "emphasis", "children": [text("a")]}, {"type": "strong", "children": [text("b")]})

        assert convert(node) == Paragraph(
            children=[Emphasis(children=[Text(value="a")]), Strong(children=[Text(value="b")])]
        )

    def test_literal_value(self):
        """Test inline literals become inline code."""
        assert convert({"type": "literal", "value": "mongosh"}) == InlineCode(value="mongosh")

    def test_literal_children(self):
        """Test inline literals stored as child text runs are joined."""
        node = {"type": "literal", "children": [text("db."), text("find()")]}

        assert convert(node) == InlineCode(value="db.find()")

    def test_reference_with_uri(self):
        """Test external references become links."""
        node = {"type": "reference", "refuri": "https://www.mongodb.com", "children": [text("MongoDB")]}

        assert convert(node) == Link(url="https://www.mongodb.com", children=[Text(value="MongoDB")])

    def test_reference_without_uri(self):
        """Test references without a URI splice their children."""
        node = {"type": "reference", "children": [text("plain")]}

        assert convert(node) == [Text(value="plain")]

    def test_title_reference(self):
        """Test title references render as emphasis."""
        node = {"type": "title_reference", "children": [text("Book")]}

        assert convert(node) == Emphasis(children=[Text(value="Book")])

    def test_superscript_and_subscript(self):
        """Test superscript and subscript become sup and sub components."""
        assert convert({"type": "superscript", "children": [text("2")]}) == MdxJsxTextElement(
            name="sup", children=[Text(value="2")]
        )
        assert convert({"type": "subscript", "children": [text("i")]}) == MdxJsxTextElement(
            name="sub", children=[Text(value="i")]
        )

    def test_ref_role_with_url(self):
        """Test cross-references become Ref components."""
        node = {"type": "ref_role", "url": "/docs/install", "children": [text("Install")]}

        assert convert(node) == MdxJsxTextElement(
            name="Ref",
            attributes=[MdxJsxAttribute(name="url", value="/docs/install")],
            children=[Text(value="Install")],
        )

    def test_ref_role_falls_back_to_target(self):
        """Test the target is used when no url is given."""
        node = {"type": "ref_role", "target": "install-atlas", "children": [text("Install")]}

        result = convert(node)

        assert result.attributes == [MdxJsxAttribute(name="url", value="install-atlas")]

    def test_ref_role_without_url(self):
        """Test cross-references without any target splice their children."""
        assert convert({"type": "ref_role", "children": [text("x")]}) == [Text(value="x")]

    def test_role(self):
        """Test generic roles become named inline components."""
        node = {"type": "role", "name": "guilabel", "target": "save", "children": [text("Save")]}

        assert convert(node) == MdxJsxTextElement(
            name="Guilabel",
            attributes=[MdxJsxAttribute(name="target", value="save")],
            children=[Text(value="Save")],
        )

    def test_role_with_value_only(self):
        """Test a role without children uses its value as text."""
        node = {"type": "role", "name": "abbr", "value": "CLI"}

        assert convert(node).children == [Text(value="CLI")]

    def test_substitution_reference(self):
        """Test substitution references keep their name and text."""
        node = {"type": "substitution_reference", "refname": "service", "children": [text("Atlas")]}

        assert convert(node) == MdxJsxTextElement(
            name="SubstitutionReference",
            attributes=[MdxJsxAttribute(name="name", value="service")],
            children=[Text(value="Atlas")],
        )

    def test_footnote_reference(self):
        """Test footnote references keep their identifier and label."""
        node = {"type": "footnote_reference", "id": "id1", "refname": "note"}

        assert convert(node) == FootnoteReference(identifier="id1", label="note")

    def test_footnote_reference_without_id(self):
        """Test footnote references without an identifier are dropped."""
        assert convert({"type": "footnote_reference"}) is None


@pytest.mark.unit
class TestBlockNodes:
    """Test conversion of flow content."""

    def test_code(self):
        """Test code blocks keep value and language."""
        node = {"type": "code", "lang": "python", "value": "print('hi')"}

        assert convert(node) == Code(value="print('hi')", lang="python")

    def test_literal_block_language_key(self):
        """Test literal blocks read the language field."""
        node = {"type": "literal_block", "language": "sh", "children": [text("ls -l")]}

        assert convert(node) == Code(value="ls -l", lang="sh")

    def test_code_without_language(self):
        """Test code blocks without a language."""
        assert convert({"type": "code", "value": "x"}) == Code(value="x", lang=None)

    def test_bullet_list(self):
        """Test bullet lists become unordered lists."""
        node = {"type": "bullet_list", "children": [{"type": "list_item", "children": [paragraph(text("one"))]}]}

        assert convert(node) == List(
            ordered=False,
            children=[ListItem(children=[Paragraph(children=[Text(value="one")])])],
        )

    def test_enumerated_list_start(self):
        """Test enumerated lists keep their start index."""
        assert convert({"type": "enumerated_list", "start": 3, "children": []}) == List(ordered=True, start=3)

    def test_enumerated_list_startat(self):
        """Test enumerated lists prefer startat over start."""
        node = {"type": "enumerated_list", "enumtype": "arabic", "startat": 3, "start": 7, "children": []}

        assert convert(node) == List(ordered=True, start=3)

    def test_ordered_list_startat(self):
        """Test ordered lists read startat."""
        assert convert({"type": "ordered_list", "startat": "5", "children": []}).start == 5

    def test_enumerated_list_default_start(self):
        """Test enumerated lists start at 1 by default."""
        assert convert({"type": "enumerated_list", "children": []}).start == 1

    def test_list_enumtype_ordered(self):
        """Test generic lists read enumtype and startat."""
        node = {"type": "list", "enumtype": "ordered", "startat": "4", "children": []}

        assert convert(node) == List(ordered=True, start=4)

    def test_list_unordered(self):
        """Test unordered generic lists carry no start index."""
        node = {"type": "list", "enumtype": "unordered", "startat": 4, "children": []}

        assert convert(node) == List(ordered=False, start=None)

    def test_list_item_alias(self):
        """Test the listItem spelling is accepted."""
        assert convert({"type": "listItem", "children": []}) == ListItem()

    def test_block_quote(self):
        """Test block quotes wrap their children."""
        node = {"type": "block_quote", "children": [paragraph(text("quoted"))]}

        assert convert(node) == Blockquote(children=[Paragraph(children=[Text(value="quoted")])])

    def test_transition(self):
        """Test transitions become thematic breaks."""
        assert convert({"type": "transition"}) == ThematicBreak()

    def test_line_block(self):
        """Test line blocks join lines with hard breaks."""
        node = {"type": "line_block", "children": [{"type": "line", "value": "a"}, {"type": "line", "value": "b"}]}

        assert convert(node) == Paragraph(children=[Text(value="a"), Break(), Text(value="b")])

    def test_field_list(self):
        """Test field lists and fields become components."""
        node = {
            "type": "field_list",
            "children": [{"type": "field", "name": "param", "label": "x", "children": [paragraph(text("doc"))]}],
        }

        result = convert(node)

        assert result.name == "FieldList"
        field_element = result.children[0]
        assert field_element.name == "Field"
        assert field_element.attributes == [
            MdxJsxAttribute(name="name", value="param"),
            MdxJsxAttribute(name="label", value="x"),
        ]

    @pytest.mark.parametrize(
        "node_type,component",
        [
            ("table", "Table"),
            ("table_head", "TableHead"),
            ("table_body", "TableBody"),
            ("table_row", "TableRow"),
            ("table_cell", "TableCell"),
        ],
    )
    def test_table_parts(self, node_type, component):
        """Test table nodes map to table components."""
        assert convert({"type": node_type, "children": []}) == MdxJsxFlowElement(name=component)

    def test_definition_list(self):
        """Test definition list items put the term before the body."""
        node = {
            "type": "definitionList",
            "children": [
                {"type": "definitionListItem", "term": [text("Term")], "children": [paragraph(text("Body"))]}
            ],
        }

        result = convert(node)

        assert result.name == "DefinitionList"
        assert result.children[0] == MdxJsxFlowElement(
            name="DefinitionListItem",
            children=[Text(value="Term"), Paragraph(children=[Text(value="Body")])],
        )

    def test_footnote(self):
        """Test footnotes become definitions."""
        node = {"type": "footnote", "id": "id1", "name": "note", "children": [paragraph(text("Detail"))]}

        assert convert(node) == FootnoteDefinition(
            identifier="id1",
            label="note",
            children=[Paragraph(children=[Text(value="Detail")])],
        )

    def test_footnote_without_identifier(self):
        """Test footnotes without id or name keep their content in place."""
        node = {"type": "footnote", "children": [paragraph(text("Detail"))]}

        assert convert(node) == [Paragraph(children=[Text(value="Detail")])]

    def test_targets(self):
        """Test targets become anchor spans."""
        node = {"type": "target", "html_id": "install", "ids": ["install-atlas"]}

        assert convert(node) == [
            MdxJsxFlowElement(name="span", attributes=[MdxJsxAttribute(name="id", value="install")]),
            MdxJsxFlowElement(name="span", attributes=[MdxJsxAttribute(name="id", value="install-atlas")]),
        ]

    def test_target_name_fallback(self):
        """Test a target without ids uses its name."""
        result = convert({"type": "target", "name": "setup"})

        assert result == [MdxJsxFlowElement(name="span", attributes=[MdxJsxAttribute(name="id", value="setup")])]

    def test_target_without_anchor(self):
        """Test targets without any identifier are dropped."""
        assert convert({"type": "target"}) is None

    def test_inline_target(self):
        """Test inline targets emit an anchor per id."""
        result = convert({"type": "inline_target", "ids": ["a", "b"]})

        assert [element.attributes[0].value for element in result] == ["a", "b"]

    @pytest.mark.parametrize("node_type", ["comment", "comment_block", "named_reference", "substitution_definition"])
    def test_dropped_nodes(self, node_type):
        """Test nodes without output are removed."""
        assert convert({"type": node_type, "children": [text("x")]}) is None

    def test_non_mapping_node(self):
        """Test non-object nodes are skipped."""
        assert convert("stray string") is None

    def test_unknown_childless(self):
        """Test unknown leaves become a visible marker."""
        assert convert({"type": "mystery"}) == Html(value="<!-- unsupported: mystery -->")

    def test_missing_type(self):
        """Test a node without a type is reported as undefined."""
        assert convert({"value": "x"}) == Html(value="<!-- unsupported: undefined -->")

    def test_unknown_with_children(self):
        """Test unknown containers splice their converted children."""
        assert convert({"type": "mystery", "children": [text("kept")]}) == [Text(value="kept")]


@pytest.mark.unit
class TestSections:
    """Test section flattening and heading depths."""

    def test_section_heading_depth(self):
        """Test nested sections produce increasing heading depths."""
        node = section("A", section("B", section("C")))

        assert convert(node) == [
            Heading(depth=1, children=[Text(value="A")]),
            Heading(depth=2, children=[Text(value="B")]),
            Heading(depth=3, children=[Text(value="C")]),
        ]

    def test_heading_depth_clamped(self):
        """Test depths beyond the limit are clamped."""
        node = section("A", section("B", section("C")))

        result = convert(node, options=ConversionOptions(max_heading_depth=2))

        assert [h.depth for h in result] == [1, 2, 2]

    def test_title_node_type(self):
        """Test the parser's title node is used as the heading."""
        node = {"type": "section", "children": [{"type": "title", "children": [text("T")]}, paragraph(text("p"))]}

        assert convert(node) == [
            Heading(depth=1, children=[Text(value="T")]),
            Paragraph(children=[Text(value="p")]),
        ]

    def test_section_without_heading(self):
        """Test sections without a title splice their content."""
        assert convert(section(None, paragraph(text("body")))) == [Paragraph(children=[Text(value="body")])]

    def test_standalone_heading_uses_depth_field(self):
        """Test explicit heading depths win over the section depth."""
        assert convert({"type": "heading", "depth": 4, "children": [text("h")]}, section_depth=2).depth == 4

    def test_standalone_heading_without_depth(self):
        """Test headings without a depth use the section depth."""
        assert convert(heading("h"), section_depth=3).depth == 3

    def test_heading_depth_upper_bound(self):
        """Test explicit depths above six are clamped."""
        assert convert({"type": "heading", "depth": 9, "children": []}).depth == 6


@pytest.mark.unit
class TestOptionsToAttributes:
    """Test directive option mapping."""

    def test_strings_are_literals(self):
        """Test string options stay literal attributes."""
        assert options_to_attributes({"caption": "Example"}) == [MdxJsxAttribute(name="caption", value="Example")]

    def test_other_values_are_expressions(self):
        """Test non-string options become JSON expressions."""
        result = options_to_attributes({"copyable": True, "count": 3, "tags": ["a", "b"], "missing": None})

        assert result == [
            MdxJsxAttribute(name="copyable", value=AttributeValueExpression("true")),
            MdxJsxAttribute(name="count", value=AttributeValueExpression("3")),
            MdxJsxAttribute(name="tags", value=AttributeValueExpression('["a","b"]')),
            MdxJsxAttribute(name="missing", value=AttributeValueExpression("null")),
        ]

    def test_non_mapping(self):
        """Test anything but a mapping yields no attributes."""
        assert options_to_attributes(None) == []
        assert options_to_attributes(["x"]) == []

    def test_argument_text(self):
        """Test arguments flatten to text."""
        assert argument_text([text("a "), text("b")]) == "a b"
        assert argument_text("raw") == "raw"
        assert argument_text(None) == ""


@pytest.mark.unit
class TestDirectives:
    """Test directive conversion."""

    def test_generic_directive(self):
        """Test unknown directives become components with options as attributes."""
        node = directive("io-code-block", paragraph(text("body")), options={"copyable": True, "caption": "Example"})

        assert convert(node) == MdxJsxFlowElement(
            name="IoCodeBlock",
            attributes=[
                MdxJsxAttribute(name="copyable", value=AttributeValueExpression("true")),
                MdxJsxAttribute(name="caption", value="Example"),
            ],
            children=[Paragraph(children=[Text(value="body")])],
        )

    def test_directive_argument_first(self):
        """Test directive arguments are converted before the body."""
        node = directive("note", paragraph(text("body")), argument=[text("Title")])

        assert convert(node).children == [Text(value="Title"), Paragraph(children=[Text(value="body")])]

    def test_directive_string_argument(self):
        """Test raw string arguments become text."""
        assert convert(directive("topic", argument="Heading")).children == [Text(value="Heading")]

    def test_conditional_directive(self):
        """Test conditional directives move their argument to an expr attribute."""
        node = directive("cond", paragraph(text("x")), argument=[text(" html ")])

        result = convert(node)

        assert result.name == "Cond"
        assert result.attributes == [MdxJsxAttribute(name="expr", value="html")]
        assert result.children == [Paragraph(children=[Text(value="x")])]

    def test_only_node(self):
        """Test only nodes carry their condition."""
        node = {"type": "only", "argument": [text("website")], "children": [paragraph(text("x"))]}

        assert convert(node).attributes == [MdxJsxAttribute(name="condition", value="website")]

    def test_admonition(self):
        """Test admonition nodes are named after their kind."""
        node = {"type": "admonition", "name": "warning", "children": [paragraph(text("careful"))]}

        assert convert(node).name == "Warning"

    def test_card_group_and_banner(self):
        """Test card groups and banners keep their options."""
        card_group = convert({"type": "card-group", "options": {"columns": 3}, "children": []})
        banner = convert({"type": "cta-banner", "options": {"url": "/x"}, "children": []})

        assert card_group == MdxJsxFlowElement(
            name="CardGroup", attributes=[MdxJsxAttribute(name="columns", value=AttributeValueExpression("3"))]
        )
        assert banner.name == "CTABanner"
        assert banner.attributes == [MdxJsxAttribute(name="url", value="/x")]

    def test_tabs_and_method_selector(self):
        """Test tab containers map to components."""
        assert convert({"type": "tabs", "children": []}).name == "Tabs"
        assert convert({"type": "method-selector", "children": []}).name == "MethodSelector"

    @pytest.mark.parametrize("name", ["toctree", "index", "seealso"])
    def test_empty_directive_dropped(self, name):
        """Test listed directives are dropped when empty."""
        assert convert(directive(name)) is None

    def test_dropped_directive_kept_with_options(self):
        """Test listed directives with options are kept."""
        assert convert(directive("toctree", options={"titlesonly": True})).name == "Toctree"

    def test_dropped_directive_list_configurable(self):
        """Test the dropped directive list comes from the options."""
        options = ConversionOptions(dropped_empty_directives=("glossary",))

        assert convert(directive("glossary"), options=options) is None
        assert convert(directive("toctree"), options=options) == MdxJsxFlowElement(name="Toctree")

    def test_meta_is_hoisted(self):
        """Test meta directives produce no node and fill the context."""
        ctx = ConversionContext()

        result = convert(directive("meta", options={"description": "About"}), ctx=ctx)

        assert result is None
        assert ctx.meta == {"description": "About"}

    def test_literalinclude(self):
        """Test literalinclude leaves a placeholder code block."""
        node = directive("literalinclude", argument=[text("/code/example.py")], options={"language": "python"})

        assert convert(node) == Code(
            value="// Source: /code/example.py\n// Content from external file not available during conversion",
            lang="python",
        )


@pytest.mark.unit
class TestFigures:
    """Test figure conversion and image imports."""

    def test_figure(self):
        """Test figures become Image components with an import."""
        ctx = ConversionContext(current_outfile_path="guide/page.mdx")
        node = figure("/images/pic.png", width="100", height="50%", alt="A picture")

        result = convert(node, ctx=ctx)

        assert result == MdxJsxFlowElement(
            name="Image",
            attributes=[
                MdxJsxAttribute(name="src", value=AttributeValueExpression("PicImg")),
                MdxJsxAttribute(name="alt", value="A picture"),
                MdxJsxAttribute(name="width", value=AttributeValueExpression("100")),
                MdxJsxAttribute(name="height", value="50%"),
            ],
        )
        assert ctx.imports == {"PicImg": "../images/pic.png"}

    def test_figure_numeric_options(self):
        """Test numeric option values become expressions."""
        ctx = ConversionContext(current_outfile_path="index.mdx")

        result = convert(figure("pic.png", width=250, height=12.5), ctx=ctx)

        assert result.attributes[1:] == [
            MdxJsxAttribute(name="width", value=AttributeValueExpression("250")),
            MdxJsxAttribute(name="height", value=AttributeValueExpression("12.5")),
        ]
        assert ctx.imports == {"PicImg": "../images/pic.png"}

    def test_figure_width_with_unit(self):
        """Test sizes with a unit stay string literals."""
        ctx = ConversionContext(current_outfile_path="index.mdx")

        result = convert(figure("pic.png", width="100px"), ctx=ctx)

        assert result.attributes[1:] == [MdxJsxAttribute(name="width", value="100px")]

    def test_figure_path_from_children(self):
        """Test the image path may come from the directive body."""
        ctx = ConversionContext(current_outfile_path="docs/page.mdx")
        node = directive("figure", text("/images/diagram.svg"))

        convert(node, ctx=ctx)

        assert ctx.imports == {"DiagramImg": "../images/diagram.svg"}

    def test_figure_without_path(self):
        """Test figures without a path leave a marker and no import."""
        ctx = ConversionContext()

        assert convert(directive("figure"), ctx=ctx) == Html(value="<!-- figure missing src -->")
        assert ctx.imports == {}


@pytest.mark.unit
class TestIncludes:
    """Test include fragments and their emission."""

    def test_include_emits_fragment(self):
        """Test includes emit a fragment and become an imported component."""
        emitted = []
        ctx = ConversionContext(
            emit_file=lambda path, tree: emitted.append((path, tree)), current_outfile_path="guide/page.mdx"
        )
        node = include("/includes/steps.rst", paragraph(text("Step one")))

        result = convert(node, ctx=ctx)

        assert result == MdxJsxFlowElement(name="Steps")
        assert ctx.imports == {"Steps": "../includes/steps.mdx"}
        assert emitted == [("includes/steps.mdx", Root(children=[Paragraph(children=[Text(value="Step one")])]))]

    def test_include_extract_wrapper(self):
        """Test a single extract directive is unwrapped."""
        emitted = []
        ctx = ConversionContext(emit_file=lambda path, tree: emitted.append(tree))
        node = include("/includes/a.rst", directive("extract", paragraph(text("inner"))))

        convert(node, ctx=ctx)

        assert emitted[0].children == [Paragraph(children=[Text(value="inner")])]

    def test_include_without_path(self):
        """Test includes without a path leave a marker."""
        ctx = ConversionContext()

        assert convert(directive("include"), ctx=ctx) == Html(value="<!-- include missing path -->")
        assert ctx.imports == {}

    def test_sharedinclude(self):
        """Test sharedinclude is handled like include."""
        ctx = ConversionContext()

        result = convert(directive("sharedinclude", argument=[text("shared/banner.rst")]), ctx=ctx)

        assert result == MdxJsxFlowElement(name="Banner")
        assert ctx.imports == {"Banner": "./shared/banner.mdx"}

    def test_nested_includes_emitted_first(self):
        """Test nested fragments are emitted before their parent with relative imports."""
        emitted = []
        ctx = ConversionContext(
            emit_file=lambda path, tree: emitted.append((path, tree)), current_outfile_path="index.mdx"
        )
        node = include("/includes/outer.rst", include("/includes/inner.rst", paragraph(text("deep"))))

        convert(node, ctx=ctx)

        assert [path for path, _ in emitted] == ["includes/inner.mdx", "includes/outer.mdx"]
        outer_tree = emitted[1][1]
        assert outer_tree.children == [
            MdxjsEsm(value="import Inner from './inner.mdx';"),
            MdxJsxFlowElement(name="Inner"),
        ]
        assert ctx.imports == {"Outer": "./includes/outer.mdx"}

    def test_include_cycle_marker(self):
        """Test a fragment including itself is cut with a marker."""
        emitted = []
        ctx = ConversionContext(emit_file=lambda path, tree: emitted.append((path, tree)))
        node = include("/includes/loop.rst", include("/includes/loop.rst"))

        result = convert(node, ctx=ctx)

        assert result == MdxJsxFlowElement(name="Loop")
        marker = Html(value="<!-- include cycle: includes/loop.mdx -->")
        assert emitted == [("includes/loop.mdx", Root(children=[marker]))]
        assert ctx.include_stack == []

    def test_emit_failure_does_not_abort(self, caplog):
        """Test a failing emission callback is logged and conversion continues."""

        def failing_emit(path, tree):
            raise OSError("disk full")

        ctx = ConversionContext(emit_file=failing_emit)

        with caplog.at_level("ERROR", logger="snooty2mdx.parsers.snooty"):
            result = convert(include("/includes/a.rst"), ctx=ctx)

        assert result == MdxJsxFlowElement(name="A")
        assert "Failed to emit include file includes/a.mdx" in caplog.text


@pytest.mark.unit
class TestConversionContext:
    """Test import registration and fragment contexts."""

    def test_register_import_keeps_position(self):
        """Test re-registering a name keeps its first position."""
        ctx = ConversionContext()
        ctx.register_import("A", "./a.mdx")
        ctx.register_import("B", "./b.mdx")
        ctx.register_import("A", "./a2.mdx")

        assert list(ctx.imports.items()) == [("A", "./a2.mdx"), ("B", "./b.mdx")]

    def test_register_import_ignores_empty(self):
        """Test empty names or paths are not recorded."""
        ctx = ConversionContext()
        ctx.register_import("", "./a.mdx")
        ctx.register_import("A", "")

        assert ctx.imports == {}

    def test_for_fragment_shares_include_stack(self):
        """Test fragment contexts get fresh imports but the same include stack."""
        ctx = ConversionContext(current_outfile_path="index.mdx")
        ctx.register_import("A", "./a.mdx")

        fragment_ctx = ctx.for_fragment("includes/x.mdx")

        assert fragment_ctx.imports == {}
        assert fragment_ctx.current_outfile_path == "includes/x.mdx"
        assert fragment_ctx.include_stack is ctx.include_stack
