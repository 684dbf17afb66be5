"""Test utilities for the snooty2mdx test suite.

This module provides builders for Snooty AST nodes, temporary directory
helpers, and a writer for site archives.
"""

import json
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Iterable, Optional

# PNG signature bytes standing in for an image asset
ASSET_BYTES = b"\x89PNG\r\n\x1a\n"


def text(value: str) -> dict:
    """Build a text node."""
    return {"type": "text", "value": value}


def paragraph(*children: dict) -> dict:
    """Build a paragraph node."""
    return {"type": "paragraph", "children": list(children)}


def heading(title: str) -> dict:
    """Build a heading node holding a single text run."""
    return {"type": "heading", "children": [text(title)]}


def section(title: Optional[str], *children: dict) -> dict:
    """Build a section whose first child is its heading."""
    body = [heading(title)] if title is not None else []
    return {"type": "section", "children": body + list(children)}


def directive(
    name: str,
    *children: dict,
    argument: Any = None,
    options: Optional[dict] = None,
) -> dict:
    """Build a directive node."""
    node: dict = {"type": "directive", "name": name, "children": list(children)}
    if argument is not None:
        node["argument"] = argument
    if options is not None:
        node["options"] = options
    return node


def include(path: str, *children: dict) -> dict:
    """Build an include directive whose argument is a single text run."""
    return directive("include", *children, argument=[text(path)])


def figure(path: str, **options: Any) -> dict:
    """Build a figure directive with its path as argument."""
    return directive("figure", argument=[text(path)], options=options or None)


def page_root(*children: dict, options: Optional[dict] = None) -> dict:
    """Build a page root node."""
    root: dict = {"type": "root", "children": list(children)}
    if options is not None:
        root["options"] = options
    return root


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp(prefix="snooty2mdx_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a temporary directory created by ``create_test_temp_dir``."""
    shutil.rmtree(path, ignore_errors=True)


def write_json_archive(zip_path: Path, pages: dict, extra_entries: Optional[Iterable[tuple]] = None) -> Path:
    """Write a site archive whose page documents are stored as JSON entries.

    Parameters
    ----------
    zip_path : Path
        Archive to create
    pages : dict
        Entry name to page document
    extra_entries : iterable of (str, bytes), optional
        Additional raw entries such as static assets

    Returns
    -------
    Path
        The archive path

    """
    with zipfile.ZipFile(zip_path, "w") as zf:
        for name, document in pages.items():
            zf.writestr(name, json.dumps(document))
        for name, data in extra_entries or ():
            zf.writestr(name, data)
    return zip_path
