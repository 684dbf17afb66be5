#  Copyright (c) 2025 Tom Villani, Ph.D.
r"""Configuration options for MDX text rendering."""
# src/snooty2mdx/options/mdx.py

from __future__ import annotations

from dataclasses import dataclass, field

from snooty2mdx.constants import BulletMarker, EmphasisMarker
from snooty2mdx.exceptions import ValidationError
from snooty2mdx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MdxRendererOptions(CloneFrozenMixin):
    r"""Options for rendering an mdast/MDX tree to text.

    Parameters
    ----------
    bullet_marker : {"-", "\*", "+"}, default "-"
        Marker used for unordered list items
    emphasis_marker : {"\*", "\_"}, default "\*"
        Delimiter used for emphasis
    strong_marker : str, default "\*\*"
        Delimiter used for strong emphasis
    escape_text : bool, default True
        Escape characters in text that Markdown or MDX would otherwise
        interpret (``\``, backtick, ``*``, ``_``, brackets, ``<``, ``{`` and a
        line-leading ``#``)

    """

    bullet_marker: BulletMarker = field(
        default="-",
        metadata={"help": "Marker for unordered list items", "choices": ["-", "*", "+"]},
    )
    emphasis_marker: EmphasisMarker = field(
        default="*",
        metadata={"help": "Delimiter for emphasis", "choices": ["*", "_"]},
    )
    strong_marker: str = field(
        default="**",
        metadata={"help": "Delimiter for strong emphasis", "choices": ["**", "__"]},
    )
    escape_text: bool = field(
        default=True,
        metadata={"help": "Escape Markdown and MDX syntax characters in text"},
    )

    def __post_init__(self) -> None:
        """Validate marker choices.

        Raises
        ------
        ValidationError
            If a marker is not one of its allowed values.

        """
        if self.bullet_marker not in ("-", "*", "+"):
            raise ValidationError(
                f"bullet_marker must be one of '-', '*', '+', got {self.bullet_marker!r}",
                parameter_name="bullet_marker",
                parameter_value=self.bullet_marker,
            )
        if self.emphasis_marker not in ("*", "_"):
            raise ValidationError(
                f"emphasis_marker must be '*' or '_', got {self.emphasis_marker!r}",
                parameter_name="emphasis_marker",
                parameter_value=self.emphasis_marker,
            )
        if self.strong_marker not in ("**", "__"):
            raise ValidationError(
                f"strong_marker must be '**' or '__', got {self.strong_marker!r}",
                parameter_name="strong_marker",
                parameter_value=self.strong_marker,
            )
