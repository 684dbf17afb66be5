#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/references.py
"""Substitution and cross-reference registry.

Converted pages keep ``<SubstitutionReference name="...">`` and
``<Ref url="...">`` components in place of resolved text. The values those
components stand for are gathered into a ``references.ts`` TypeScript module
that the site imports. The module is regenerated on every run and merged with
the copy already on disk, so independent runs over different inputs add up.

The output is deterministic: keys are sorted and every value is written as an
escaped single-quoted literal.

"""

from __future__ import annotations

import json
import logging
import re
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from snooty2mdx.ast import MdxJsxTextElement, Node, NodeCollector, extract_text, get_attribute
from snooty2mdx.constants import (
    REF_COMPONENT,
    REFERENCE_TRUNCATION_MARKER,
    REFERENCE_VALUE_MAX_LENGTH,
    SUBSTITUTION_COMPONENT,
)
from snooty2mdx.exceptions import OutputWriteError

logger = logging.getLogger(__name__)

_LITERAL = r"""(["'])((?:(?!\{n})[^\\]|\\.)*)\{n}"""
_SUBSTITUTION_ENTRY = re.compile(
    _LITERAL.format(n=1) + r"\s*:\s*" + _LITERAL.format(n=3) + r"\s*,?"
)
_REF_ENTRY = re.compile(
    _LITERAL.format(n=1)
    + r"\s*:\s*\{\s*title:\s*"
    + _LITERAL.format(n=3)
    + r"\s*,\s*url:\s*"
    + _LITERAL.format(n=5)
    + r"\s*\}\s*,?"
)
_NAMED_SUBSTITUTIONS = re.compile(r"export\s+const\s+substitutions\s*=\s*\{([\s\S]*?)\}\s*as\s+const")
_DEFAULT_SUBSTITUTIONS = re.compile(r"substitutions\s*:\s*\{([\s\S]*?)\}\s*,")
_NAMED_REFS = re.compile(r"export\s+const\s+refs\s*=\s*\{([\s\S]*?)\}\s*as\s+const")
_DEFAULT_REFS = re.compile(r"refs\s*:\s*\{([\s\S]*?)\}\s*\n\s*\}")
_ESCAPE_SEQUENCE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f"}


@dataclass(frozen=True)
class RefTarget:
    """Title and URL of a cross-reference target."""

    title: str
    url: str


@dataclass
class ReferencesArtifact:
    """Collected substitutions and cross-references.

    Parameters
    ----------
    substitutions : dict
        Substitution name to resolved text
    refs : dict
        Reference URL to its target

    """

    substitutions: dict[str, str] = field(default_factory=dict)
    refs: dict[str, RefTarget] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """Whether nothing has been collected."""
        return not self.substitutions and not self.refs


def _is_component(name: str):
    def predicate(node: Node) -> bool:
        return isinstance(node, MdxJsxTextElement) and node.name == name

    return predicate


def collect_references(tree: Node) -> ReferencesArtifact:
    """Collect substitution values and reference targets from an output tree.

    Parameters
    ----------
    tree : Node
        Converted page or fragment tree

    Returns
    -------
    ReferencesArtifact
        Substitutions with non-empty text and every ``Ref`` with a literal
        ``url`` attribute; a ``Ref`` without text uses its URL as title.

    """
    artifact = ReferencesArtifact()

    substitutions = NodeCollector(_is_component(SUBSTITUTION_COMPONENT))
    tree.accept(substitutions)
    for element in substitutions.collected:
        name = get_attribute(element, "name")  # type: ignore[arg-type]
        text = extract_text(element)
        if isinstance(name, str) and name and text:
            artifact.substitutions[name] = text

    refs = NodeCollector(_is_component(REF_COMPONENT))
    tree.accept(refs)
    for element in refs.collected:
        url = get_attribute(element, "url")  # type: ignore[arg-type]
        if isinstance(url, str) and url:
            artifact.refs[url] = RefTarget(title=extract_text(element) or url, url=url)

    return artifact


def merge_references(base: ReferencesArtifact, add: ReferencesArtifact) -> ReferencesArtifact:
    """Merge two artifacts into a new one; entries of ``add`` win."""
    return ReferencesArtifact(
        substitutions={**base.substitutions, **add.substitutions},
        refs={**base.refs, **add.refs},
    )


def escape_ts_string(value: object) -> str:
    """Write a value as a single-quoted TypeScript string literal.

    Values longer than 1000 characters are truncated and marked with ``…``.

    Examples
    --------
        >>> escape_ts_string("it's")
        "'it\\\\'s'"

    """
    text = value if isinstance(value, str) else ("" if value is None else str(value))
    if len(text) > REFERENCE_VALUE_MAX_LENGTH:
        text = text[:REFERENCE_VALUE_MAX_LENGTH] + REFERENCE_TRUNCATION_MARKER
    text = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f"'{text}'"


def render_references(artifact: ReferencesArtifact) -> str:
    """Render the ``references.ts`` module text.

    Parameters
    ----------
    artifact : ReferencesArtifact
        Registry content

    Returns
    -------
    str
        TypeScript source exporting ``substitutions``, ``refs`` and a default
        object holding both

    """
    substitution_lines = "\n".join(
        f"    {json.dumps(key, ensure_ascii=False)}: {escape_ts_string(value)},"
        for key, value in sorted(artifact.substitutions.items())
    )
    ref_lines = "\n".join(
        f"    {escape_ts_string(url)}: {{ title: {escape_ts_string(target.title)}, url: {escape_ts_string(url)} }},"
        for url, target in sorted(artifact.refs.items())
    )
    return (
        f"export const substitutions = {{\n{substitution_lines}\n}} as const;\n"
        f"export const refs = {{\n{ref_lines}\n}} as const;\n"
        "const references = { substitutions, refs } as const;\n"
        "export default references;\n"
    )


build_references_ts = render_references


def _decode_literal(body: str) -> str:
    def replace(match: re.Match) -> str:
        escaped = match.group(1)
        if len(escaped) == 5 and escaped[0] == "u":
            return chr(int(escaped[1:], 16))
        return _SIMPLE_ESCAPES.get(escaped, escaped)

    return _ESCAPE_SEQUENCE.sub(replace, body)


def parse_references(text: str) -> ReferencesArtifact:
    """Re-read a previously generated ``references.ts`` module.

    The named-export form is tried first and the default-object form is the
    fallback. Parsing is best-effort: entries that do not match are skipped
    and text that does not look like a registry yields an empty artifact.

    Parameters
    ----------
    text : str
        Module source

    Returns
    -------
    ReferencesArtifact
        Parsed entries

    """
    artifact = ReferencesArtifact()

    subs_match = _NAMED_SUBSTITUTIONS.search(text) or _DEFAULT_SUBSTITUTIONS.search(text)
    if subs_match:
        for entry in _SUBSTITUTION_ENTRY.finditer(subs_match.group(1)):
            artifact.substitutions[_decode_literal(entry.group(2))] = _decode_literal(entry.group(4))

    refs_match = _NAMED_REFS.search(text) or _DEFAULT_REFS.search(text)
    if refs_match:
        for entry in _REF_ENTRY.finditer(refs_match.group(1)):
            artifact.refs[_decode_literal(entry.group(2))] = RefTarget(
                title=_decode_literal(entry.group(4)),
                url=_decode_literal(entry.group(6)),
            )

    return artifact


def read_existing_references(path: Union[str, Path]) -> ReferencesArtifact:
    """Load the registry already on disk, or an empty one when it cannot be read."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"No existing references read from {path}: {e}")
        return ReferencesArtifact()
    return parse_references(text)


class ReferenceRegistry:
    """Thread-safe accumulator of references across the pages of a run.

    Examples
    --------
        >>> registry = ReferenceRegistry()
        >>> registry.add_tree(page_tree)
        >>> registry.persist("out/references.ts")

    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._lock = threading.Lock()
        self._artifact = ReferencesArtifact()

    def add(self, artifact: ReferencesArtifact) -> None:
        """Merge an artifact in; its entries win over earlier ones."""
        with self._lock:
            self._artifact = merge_references(self._artifact, artifact)

    def add_tree(self, tree: Node) -> ReferencesArtifact:
        """Collect references from a tree, merge them in and return them."""
        artifact = collect_references(tree)
        self.add(artifact)
        return artifact

    def snapshot(self) -> ReferencesArtifact:
        """Return a copy of the accumulated references."""
        with self._lock:
            return merge_references(ReferencesArtifact(), self._artifact)

    def persist(self, path: Union[str, Path]) -> ReferencesArtifact:
        """Merge with the registry on disk and write the result.

        Parameters
        ----------
        path : str or Path
            Location of ``references.ts``

        Returns
        -------
        ReferencesArtifact
            The merged content that was written

        Raises
        ------
        OutputWriteError
            If the file cannot be written

        """
        target = Path(path)
        with self._lock:
            merged = merge_references(read_existing_references(target), self._artifact)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(render_references(merged), encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(target), original_error=e) from e

        logger.info(f"Wrote {len(merged.substitutions)} substitutions and {len(merged.refs)} refs to {target}")
        return merged
