#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/renderers/base.py
"""Base classes for output tree renderers.

This module defines the abstract base class renderers inherit from, the
helper that writes rendered text to a path or stream, and the mixin used to
render inline content to a string.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import TextIOBase
from pathlib import Path
from typing import IO, Any, Union

from snooty2mdx.ast import Node, Root
from snooty2mdx.exceptions import OutputWriteError, ValidationError


class BaseRenderer(ABC):
    """Abstract base class for output tree renderers.

    Parameters
    ----------
    options : Any or None, default = None
        Renderer-specific options

    """

    def __init__(self, options: Any = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, root: Root, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the tree and write it to ``output``.

        Parameters
        ----------
        root : Root
            Tree to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object

        Raises
        ------
        OutputWriteError
            If the output cannot be written

        """
        pass

    def render_to_string(self, root: Root) -> str:
        """Render the tree to a string, for renderers producing text."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the type this renderer expects.

        Raises
        ------
        ValidationError
            If options are not None and not an instance of ``expected_type``

        """
        if options is not None and not isinstance(options, expected_type):
            raise ValidationError(
                f"{renderer_name} renderer expects {expected_type.__name__}, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write rendered text to a file path or a text/binary stream.

        Parent directories of a file path are created as needed. Files are
        written as UTF-8.

        Raises
        ------
        OutputWriteError
            If the file cannot be written
        TypeError
            If ``output`` is neither a path nor a writable stream

        """
        if isinstance(output, (str, Path)):
            path = Path(output)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(text, encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(path), original_error=e) from e
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        if isinstance(output, TextIOBase) or "b" not in getattr(output, "mode", "b"):
            output.write(text)  # type: ignore[arg-type]
        else:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]


class InlineContentMixin:
    """Mixin rendering nested nodes to a string by temporarily capturing output.

    The implementing class keeps its rendered fragments in ``_output`` and
    its visit methods append to it.

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of nodes and return the text they produced."""
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result
