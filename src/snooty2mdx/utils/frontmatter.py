#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/utils/frontmatter.py
"""YAML frontmatter construction for converted pages.

Page metadata (root options and ``meta`` directive options) is written as a
YAML block at the top of each page. The output format is fixed so that
regenerated pages are byte-identical: plain scalars stay bare, anything
that could be misread is JSON-quoted, and nested mappings and sequences are
indented by two spaces.

"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any

_PLAIN_SCALAR_PATTERN = re.compile(r"[^A-Za-z0-9_\-.]")


def needs_quotes(value: str) -> bool:
    """Whether a string must be JSON-quoted to be written as a YAML scalar.

    Examples
    --------
        >>> needs_quotes("atlas-cli")
        False
        >>> needs_quotes("Atlas CLI")
        True

    """
    return bool(_PLAIN_SCALAR_PATTERN.search(value)) or value != value.strip()


def format_number(value: int | float) -> str:
    """Format a number the way JavaScript's ``String()`` does.

    Integral floats lose their fractional part and non-finite values use the
    ``Infinity``/``NaN`` spellings.

    Examples
    --------
        >>> format_number(100.0)
        '100'
        >>> format_number(2.5)
        '2.5'

    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def _count_leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_inline(lines: list[str]) -> bool:
    return len(lines) == 1 and not lines[0].startswith(" ")


def _stringify(value: Any, indent: int) -> list[str]:
    pad = " " * indent

    if value is None:
        return []
    if isinstance(value, str):
        # An empty bare scalar would read back as null.
        return [json.dumps(value, ensure_ascii=False) if not value or needs_quotes(value) else value]
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, (int, float)):
        return [format_number(value)]

    if isinstance(value, (list, tuple)):
        if not value:
            return ["[]"]
        lines: list[str] = []
        for item in value:
            item_lines = _stringify(item, indent + 2)
            if not item_lines:
                continue
            if _is_inline(item_lines):
                lines.append(f"{pad}- {item_lines[0]}")
                continue
            base = _count_leading_spaces(item_lines[0])
            lines.append(f"{pad}- {item_lines[0][base:]}")
            for line in item_lines[1:]:
                lead = _count_leading_spaces(line)
                lines.append(f"{pad}  {' ' * max(0, lead - base)}{line[lead:]}")
        return lines

    if isinstance(value, Mapping):
        if not value:
            return ["{}"]
        lines = []
        for key, child in value.items():
            child_lines = _stringify(child, indent + 2)
            if not child_lines:
                continue
            if _is_inline(child_lines):
                lines.append(f"{pad}{key}: {child_lines[0]}")
                continue
            lines.append(f"{pad}{key}:")
            base = _count_leading_spaces(child_lines[0])
            for line in child_lines:
                lead = _count_leading_spaces(line)
                lines.append(f"{pad}  {' ' * max(0, lead - base)}{line[lead:]}")
        return lines

    return [json.dumps(value, ensure_ascii=False, default=str)]


def object_to_yaml(obj: Mapping[str, Any]) -> str:
    """Serialize a frontmatter mapping to YAML text without delimiters.

    Parameters
    ----------
    obj : Mapping
        Top-level frontmatter mapping; keys keep their insertion order

    Returns
    -------
    str
        YAML lines joined with ``\\n``. ``None`` values are omitted.

    Examples
    --------
        >>> print(object_to_yaml({"title": "Install Atlas", "keywords": ["atlas", "cli"], "draft": False}))
        title: "Install Atlas"
        keywords:
          - atlas
          - cli
        draft: false

    """
    yaml_lines: list[str] = []
    for key, value in obj.items():
        value_lines = _stringify(value, 2)
        if not value_lines:
            continue
        if _is_inline(value_lines):
            yaml_lines.append(f"{key}: {value_lines[0]}")
        else:
            yaml_lines.append(f"{key}:")
            yaml_lines.extend(value_lines)
    return "\n".join(yaml_lines)
