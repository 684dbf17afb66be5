#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Snooty AST conversion."""
# src/snooty2mdx/options/snooty.py

from __future__ import annotations

from dataclasses import dataclass, field

from snooty2mdx.constants import (
    DEFAULT_DROPPED_EMPTY_DIRECTIVES,
    DEFAULT_FRAGMENT_EXTENSION,
    DEFAULT_IMAGES_DIR_NAME,
    DEFAULT_IMPORTER_PATH,
    MAX_HEADING_DEPTH,
)
from snooty2mdx.exceptions import ValidationError
from snooty2mdx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Options controlling the Snooty AST to mdast conversion.

    Parameters
    ----------
    fragment_extension : str, default ".mdx"
        Extension given to emitted include fragments
    default_importer_path : str, default "index.mdx"
        Output path assumed when a conversion is not told which file it produces
    max_heading_depth : int, default 6
        Deepest heading level emitted; deeper sections are clamped to it
    images_dir_name : str, default "images"
        Directory segment under which figure assets are resolved
    dropped_empty_directives : tuple of str
        Directive names dropped when they carry no children and no options
    detect_include_cycles : bool, default True
        Replace an include that re-enters a fragment being converted with a
        visible marker instead of recursing

    """

    fragment_extension: str = field(
        default=DEFAULT_FRAGMENT_EXTENSION,
        metadata={"help": "Extension given to emitted include fragments"},
    )
    default_importer_path: str = field(
        default=DEFAULT_IMPORTER_PATH,
        metadata={"help": "Output path assumed when the produced file is unknown"},
    )
    max_heading_depth: int = field(
        default=MAX_HEADING_DEPTH,
        metadata={"help": "Deepest heading level emitted (1-6)", "type": int},
    )
    images_dir_name: str = field(
        default=DEFAULT_IMAGES_DIR_NAME,
        metadata={"help": "Directory segment under which figure assets live"},
    )
    dropped_empty_directives: tuple[str, ...] = field(
        default=DEFAULT_DROPPED_EMPTY_DIRECTIVES,
        metadata={"help": "Directives dropped when empty of children and options"},
    )
    detect_include_cycles: bool = field(
        default=True,
        metadata={"help": "Replace cyclic includes with a marker instead of recursing"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if not 1 <= self.max_heading_depth <= MAX_HEADING_DEPTH:
            raise ValidationError(
                f"max_heading_depth must be between 1 and {MAX_HEADING_DEPTH}, got {self.max_heading_depth}",
                parameter_name="max_heading_depth",
                parameter_value=self.max_heading_depth,
            )
        if not self.fragment_extension.startswith("."):
            raise ValidationError(
                f"fragment_extension must start with '.', got {self.fragment_extension!r}",
                parameter_name="fragment_extension",
                parameter_value=self.fragment_extension,
            )
        if not self.images_dir_name or "/" in self.images_dir_name:
            raise ValidationError(
                "images_dir_name must be a single non-empty path segment",
                parameter_name="images_dir_name",
                parameter_value=self.images_dir_name,
            )
        # Lists arrive from config files; keep the field hashable.
        if not isinstance(self.dropped_empty_directives, tuple):
            object.__setattr__(self, "dropped_empty_directives", tuple(self.dropped_empty_directives))
