#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/renderers/mdast_json.py
"""mdast JSON rendering of output trees.

This module provides the MdastJsonRenderer class which writes a converted
tree in the mdast JSON shape, for inspecting a conversion or handing the tree
to remark-based tooling. The renderer uses the ast.serialization module.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Union

from snooty2mdx.ast import Root
from snooty2mdx.ast.serialization import ast_to_json
from snooty2mdx.renderers.base import BaseRenderer


class MdastJsonRenderer(BaseRenderer):
    """Render output trees to mdast JSON.

    Parameters
    ----------
    indent : int or None, default = 2
        Indentation of the JSON text; None writes it on one line

    Examples
    --------
        >>> from snooty2mdx.ast import Root, Text
        >>> MdastJsonRenderer(indent=None).render_to_string(Root(children=[Text(value="x")]))
        '{"type": "root", "children": [{"type": "text", "value": "x"}]}\\n'

    """

    def __init__(self, indent: int | None = 2):
        """Initialize the renderer."""
        BaseRenderer.__init__(self)
        self.indent = indent

    def render_to_string(self, root: Root) -> str:
        """Render a tree to mdast JSON text ending with a newline."""
        return ast_to_json(root, indent=self.indent) + "\n"

    def render(self, root: Root, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the tree to mdast JSON and write it to ``output``."""
        self.write_text_output(self.render_to_string(root), output)
