"""The major exported API functions for Snooty AST conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/snooty2mdx/api.py
import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from snooty2mdx.ast import Root, ValidationVisitor
from snooty2mdx.constants import (
    AST_ENVELOPE_FIELD,
    DEFAULT_REFERENCES_FILENAME,
    JSON_INPUT_SUFFIXES,
    JSON_OUTPUT_SUFFIX,
)
from snooty2mdx.exceptions import (
    ArchiveSecurityError,
    FileAccessError,
    FileNotFoundError,
    MalformedFileError,
    OutputWriteError,
    ParsingError,
)
from snooty2mdx.options import ArchiveOptions, ConversionOptions, MdxRendererOptions
from snooty2mdx.parsers.archive import extract_assets, iter_archive_documents
from snooty2mdx.parsers.snooty import snooty_ast_to_mdast
from snooty2mdx.references import ReferenceRegistry, ReferencesArtifact, collect_references, merge_references
from snooty2mdx.renderers.mdast_json import MdastJsonRenderer
from snooty2mdx.renderers.mdx import MdxRenderer
from snooty2mdx.utils.decorators import debug_timer
from snooty2mdx.utils.paths import to_posix
from snooty2mdx.utils.security import validate_safe_extraction_path

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one page.

    Parameters
    ----------
    output_path : Path
        The page's MDX file
    tree : Root
        Converted page tree
    written_files : list of Path
        Every file written, emitted fragments first and the page last
    references : ReferencesArtifact
        References collected from the page and its fragments

    """

    output_path: Path
    tree: Root
    written_files: list[Path] = field(default_factory=list)
    references: ReferencesArtifact = field(default_factory=ReferencesArtifact)


@dataclass
class ArchiveConversionResult:
    """Outcome of converting a site archive."""

    output_dir: Path
    pages: list[ConversionResult] = field(default_factory=list)
    assets: list[Path] = field(default_factory=list)
    references_path: Optional[Path] = None

    @property
    def file_count(self) -> int:
        """Number of MDX files written."""
        return sum(len(page.written_files) for page in self.pages)


def unwrap_ast(document: Any) -> Mapping[str, Any]:
    """Return the AST root of a page document, unwrapping an ``{"ast": ...}`` envelope.

    Raises
    ------
    ParsingError
        If the document or its AST is not an object

    """
    if not isinstance(document, Mapping):
        raise ParsingError(f"Expected a JSON object, got {type(document).__name__}", parsing_stage="input")
    root = document.get(AST_ENVELOPE_FIELD, document)
    if not isinstance(root, Mapping):
        raise ParsingError(
            f"Expected the '{AST_ENVELOPE_FIELD}' field to be an object, got {type(root).__name__}",
            parsing_stage="input",
        )
    return root


def default_output_path(input_path: Union[str, Path]) -> Path:
    """Derive the MDX output path of a JSON input file.

    Examples
    --------
        >>> default_output_path("samples/page_ast-input.json")
        PosixPath('samples/page_output.mdx')

    """
    path = Path(input_path)
    for suffix in JSON_INPUT_SUFFIXES:
        if path.name.endswith(suffix):
            return path.with_name(path.name[: -len(suffix)] + JSON_OUTPUT_SUFFIX)
    return path.with_name(path.name + JSON_OUTPUT_SUFFIX)


def convert_page(
    tree: Mapping[str, Any],
    output_path: Union[str, Path],
    output_root: Union[str, Path, None] = None,
    registry: Optional[ReferenceRegistry] = None,
    conversion_options: ConversionOptions | None = None,
    renderer_options: MdxRendererOptions | None = None,
) -> ConversionResult:
    """Convert one page document and write it, with its include fragments, as MDX.

    Fragments are written under ``output_root`` at the path the converter
    assigns them. A fragment that cannot be written is logged and skipped;
    conversion of the page continues.

    Parameters
    ----------
    tree : Mapping
        Page document, either the AST root or an ``{"ast": ...}`` envelope
    output_path : str or Path
        MDX file to write for the page
    output_root : str, Path or None, default = None
        Root of the output tree; defaults to the directory of ``output_path``
    registry : ReferenceRegistry or None, default = None
        Accumulator receiving the references found in the page and fragments
    conversion_options : ConversionOptions or None, default = None
        Conversion options
    renderer_options : MdxRendererOptions or None, default = None
        MDX rendering options

    Returns
    -------
    ConversionResult
        Page tree, written files and collected references

    Raises
    ------
    ParsingError
        If ``tree`` is not a page document
    OutputWriteError
        If the page file cannot be written

    Examples
    --------
        >>> result = convert_page({"ast": {"type": "root", "children": []}}, "out/index.mdx")
        >>> result.written_files
        [PosixPath('out/index.mdx')]

    """
    root = unwrap_ast(tree)
    output_path = Path(output_path)
    output_root = Path(output_root) if output_root is not None else output_path.parent
    renderer = MdxRenderer(renderer_options)

    written: list[Path] = []
    collected = ReferencesArtifact()

    def emit_fragment(fragment_path: str, fragment_tree: Root) -> None:
        nonlocal collected
        try:
            target = validate_safe_extraction_path(output_root, fragment_path)
            renderer.render(fragment_tree, target)
        except (ArchiveSecurityError, OutputWriteError) as e:
            logger.error(f"Failed to emit include file {fragment_path}: {e}")
            return
        written.append(target)
        collected = merge_references(collected, collect_references(fragment_tree))
        logger.debug(f"Wrote fragment {target}")

    current_outfile_path = to_posix(os.path.relpath(output_path, output_root))

    with debug_timer(logger, f"Converting {current_outfile_path}"):
        mdast = snooty_ast_to_mdast(
            root,
            on_emit_file=emit_fragment,
            current_outfile_path=current_outfile_path,
            options=conversion_options,
        )

    validator = ValidationVisitor(strict=False)
    mdast.accept(validator)
    for problem in validator.errors:
        logger.warning(f"{current_outfile_path}: {problem}")

    renderer.render(mdast, output_path)
    written.append(output_path)
    collected = merge_references(collected, collect_references(mdast))

    if registry is not None:
        registry.add(collected)

    logger.info(f"Wrote {output_path} ({len(written)} file{'' if len(written) == 1 else 's'})")
    return ConversionResult(output_path=output_path, tree=mdast, written_files=written, references=collected)


def convert_json_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    references_path: Union[str, Path, None] = None,
    conversion_options: ConversionOptions | None = None,
    renderer_options: MdxRendererOptions | None = None,
    mdast_json_path: Union[str, Path, None] = None,
) -> ConversionResult:
    """Convert a page AST stored as JSON.

    Parameters
    ----------
    input_path : str or Path
        JSON file holding the page document
    output_path : str, Path or None, default = None
        MDX file to write; defaults to the input name with ``_ast-input.json``
        (or ``.json``) replaced by ``_output.mdx``
    references_path : str, Path or None, default = None
        Where to merge the reference registry; defaults to ``references.ts``
        next to the output file
    conversion_options : ConversionOptions or None, default = None
        Conversion options
    renderer_options : MdxRendererOptions or None, default = None
        MDX rendering options
    mdast_json_path : str, Path or None, default = None
        Also write the converted page tree as mdast JSON to this file

    Returns
    -------
    ConversionResult
        Page tree, written files and collected references

    Raises
    ------
    FileNotFoundError
        If the input file does not exist
    FileAccessError
        If the input file cannot be read
    MalformedFileError
        If the input is not valid JSON

    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(str(input_path))
    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(input_path), original_error=e) from e
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedFileError(
            f"Invalid JSON in {input_path}: {e}", file_path=str(input_path), original_error=e
        ) from e

    output_path = Path(output_path) if output_path is not None else default_output_path(input_path)

    registry = ReferenceRegistry()
    result = convert_page(
        document,
        output_path,
        registry=registry,
        conversion_options=conversion_options,
        renderer_options=renderer_options,
    )
    registry.persist(references_path or output_path.parent / DEFAULT_REFERENCES_FILENAME)
    if mdast_json_path is not None:
        MdastJsonRenderer().render(result.tree, mdast_json_path)
        logger.info(f"Wrote mdast JSON to {mdast_json_path}")
    return result


def convert_archive(
    zip_path: Union[str, Path],
    output_dir: Union[str, Path, None] = None,
    references_path: Union[str, Path, None] = None,
    archive_options: ArchiveOptions | None = None,
    conversion_options: ConversionOptions | None = None,
    renderer_options: MdxRendererOptions | None = None,
) -> ArchiveConversionResult:
    """Convert every page of a site archive into a folder of MDX files.

    The archive's directory structure is preserved: ``docs/page.bson``
    becomes ``<output_dir>/docs/page.mdx``. After all pages are converted,
    the static assets they reference are extracted, and the reference
    registry is merged into ``references.ts``.

    Parameters
    ----------
    zip_path : str or Path
        Site archive
    output_dir : str, Path or None, default = None
        Output root; defaults to the archive name without ``.zip``
    references_path : str, Path or None, default = None
        Where to merge the reference registry; defaults to
        ``<output_dir>/references.ts``
    archive_options : ArchiveOptions or None, default = None
        Archive safety limits and asset extraction
    conversion_options : ConversionOptions or None, default = None
        Conversion options
    renderer_options : MdxRendererOptions or None, default = None
        MDX rendering options

    Returns
    -------
    ArchiveConversionResult
        Converted pages, extracted assets and the registry location

    Raises
    ------
    FileNotFoundError
        If the archive does not exist
    ZipFileSecurityError
        If the archive fails validation
    MalformedFileError
        If the archive or one of its documents cannot be decoded
    DependencyError
        If the archive holds BSON documents and pymongo is not installed

    """
    zip_path = Path(zip_path)
    if not zip_path.exists():
        raise FileNotFoundError(str(zip_path))
    archive_options = archive_options or ArchiveOptions()
    output_dir = Path(output_dir) if output_dir is not None else Path(zip_path.stem)
    output_dir.mkdir(parents=True, exist_ok=True)

    result = ArchiveConversionResult(output_dir=output_dir)
    registry = ReferenceRegistry()
    asset_manifest: dict[str, str] = {}

    for document in iter_archive_documents(zip_path, archive_options):
        asset_manifest.update(document.asset_manifest)
        page_path = validate_safe_extraction_path(output_dir, document.output_path)
        try:
            root = unwrap_ast(document.document)
        except ParsingError as e:
            logger.warning(f"Skipping {document.relative_path}: {e}")
            continue
        result.pages.append(
            convert_page(
                root,
                page_path,
                output_root=output_dir.resolve(),
                registry=registry,
                conversion_options=conversion_options,
                renderer_options=renderer_options,
            )
        )

    logger.info(f"Wrote {result.file_count} files")

    if archive_options.extract_assets and asset_manifest:
        result.assets = extract_assets(zip_path, output_dir, asset_manifest)
        logger.info(f"Wrote {len(result.assets)} static assets")

    result.references_path = Path(references_path or output_dir / DEFAULT_REFERENCES_FILENAME)
    registry.persist(result.references_path)
    logger.info(f"Wrote folder {output_dir}/")
    return result
