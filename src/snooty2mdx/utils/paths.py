#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/utils/paths.py
"""Path and identifier helpers for emitted MDX files.

All paths handled here are POSIX-style and relative to the output root, since
they end up in ``import`` statements that must look the same on every
platform. Nothing in this module touches the filesystem.

"""

from __future__ import annotations

import posixpath
import re

from snooty2mdx.constants import (
    DEFAULT_FRAGMENT_EXTENSION,
    DEFAULT_IMAGES_DIR_NAME,
    IMAGE_EXTENSIONS,
    IMAGE_IDENTIFIER_SUFFIX,
    INCLUDE_SOURCE_EXTENSIONS,
)

_NAME_SPLIT_PATTERN = re.compile(r"[-_]")
_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")
_EXTENSION_PATTERN = re.compile(r"\.[^.]+$")
_BACKSLASHES = re.compile(r"\\+")


def to_component_name(name: str) -> str:
    """Derive a component name from a directive or role name.

    The name is split on ``-`` and ``_`` and the first character of every part
    is upper-cased; the rest of each part is kept as is.

    Examples
    --------
        >>> to_component_name("io-code-block")
        'IoCodeBlock'
        >>> to_component_name("release_notes")
        'ReleaseNotes'

    """
    return "".join(part[:1].upper() + part[1:] for part in _NAME_SPLIT_PATTERN.split(str(name)))


def to_posix(path: str) -> str:
    """Replace runs of backslashes with a forward slash."""
    return _BACKSLASHES.sub("/", path)


def normalize_posix(path: str) -> str:
    """Normalize a POSIX path, collapsing ``.`` and ``..`` segments."""
    return posixpath.normpath(to_posix(path))


def dirname_posix(path: str) -> str:
    """Return the directory part of a POSIX path, ``.`` for a bare file name."""
    return posixpath.dirname(to_posix(path)) or "."


def relative_posix(from_dir: str, to_path: str) -> str:
    """Compute the POSIX path of ``to_path`` relative to the directory ``from_dir``.

    Both paths are taken relative to the same root. Returns ``.`` when they
    are equal.

    Examples
    --------
        >>> relative_posix("guide", "guide/images/pic.png")
        'images/pic.png'
        >>> relative_posix("guide/sub", "includes/steps.mdx")
        '../../includes/steps.mdx'

    """
    from_parts = [p for p in normalize_posix(from_dir).split("/") if p not in ("", ".")]
    to_parts = [p for p in normalize_posix(to_path).split("/") if p not in ("", ".")]

    common = 0
    while common < min(len(from_parts), len(to_parts)) and from_parts[common] == to_parts[common]:
        common += 1

    parts = [".."] * (len(from_parts) - common) + to_parts[common:]
    return "/".join(parts) or "."


def to_fragment_path(path_text: str, ext: str = DEFAULT_FRAGMENT_EXTENSION) -> str:
    """Map an include argument to the relative output path of its fragment.

    ``.rst`` and ``.txt`` extensions (any case) are rewritten to ``ext``, the
    extension is appended when missing, and leading slashes are dropped.

    Examples
    --------
        >>> to_fragment_path("/includes/steps.rst")
        'includes/steps.mdx'
        >>> to_fragment_path("includes/intro")
        'includes/intro.mdx'

    """
    trimmed = to_posix(path_text.strip())
    lowered = trimmed.lower()
    for source_ext in INCLUDE_SOURCE_EXTENSIONS:
        if lowered.endswith(source_ext):
            trimmed = trimmed[: -len(source_ext)] + ext
            break
    else:
        if not lowered.endswith(ext.lower()):
            trimmed = f"{trimmed}{ext}"
    return trimmed.lstrip("/")


def _identifier_from_stem(stem: str) -> str:
    identifier = _INVALID_IDENTIFIER_CHARS.sub("_", to_component_name(stem))
    if identifier[:1].isdigit():
        identifier = f"_{identifier}"
    return identifier


def image_identifier(target_path: str) -> str:
    """Derive the import identifier for an image asset.

    The base file name without extension is turned into a component name,
    characters that are not valid in an identifier become ``_``, a leading
    digit gets an ``_`` prefix, and the ``Img`` suffix is appended.

    Examples
    --------
        >>> image_identifier("guide/images/pic.png")
        'PicImg'
        >>> image_identifier("images/2024-chart.v2.svg")
        '_2024Chart_v2Img'

    """
    base_name = to_posix(target_path).split("/")[-1] or "image"
    stem = _EXTENSION_PATTERN.sub("", base_name) or "image"
    return f"{_identifier_from_stem(stem)}{IMAGE_IDENTIFIER_SUFFIX}"


def include_component_name(fragment_path: str, ext: str = DEFAULT_FRAGMENT_EXTENSION) -> str:
    """Derive the component name used to render an included fragment.

    Examples
    --------
        >>> include_component_name("includes/steps-install.mdx")
        'StepsInstall'
        >>> include_component_name("includes/3.0-notes.mdx")
        '_3_0Notes'

    """
    base_name = to_posix(fragment_path).split("/")[-1]
    if base_name.lower().endswith(ext.lower()):
        base_name = base_name[: -len(ext)]
    name = to_component_name(base_name).replace(".", "_")
    if name[:1].isdigit():
        name = f"_{name}"
    return name


def is_image_path(path: str) -> bool:
    """Whether ``path`` names an image asset, judged by its extension."""
    return path.lower().endswith(IMAGE_EXTENSIONS)


def normalize_asset_path(path_text: str) -> str:
    r"""Normalize a figure path found in the source.

    Escaped dots (``\.``) are unescaped, backslashes become ``/``, and
    leading slashes and a leading ``./`` are removed.

    Examples
    --------
        >>> normalize_asset_path("/images/pic\\.png")
        'images/pic.png'

    """
    asset = to_posix(path_text.strip().replace("\\.", ".")).lstrip("/")
    if asset.startswith("./"):
        asset = asset[2:]
    return asset


def resolve_image_target(
    asset_path: str,
    importer_path: str,
    images_dir_name: str = DEFAULT_IMAGES_DIR_NAME,
) -> str:
    """Return the output-root relative location of a figure asset.

    Assets live under ``<top>/images/`` where ``<top>`` is the first segment
    of the file being produced, or under ``images/`` when that file sits at
    the output root. A path containing an ``images/`` segment is re-anchored
    there; a bare file name is placed there; any other path is kept.

    Examples
    --------
        >>> resolve_image_target("images/pic.png", "guide/page.mdx")
        'guide/images/pic.png'
        >>> resolve_image_target("pic.png", "index.mdx")
        'images/pic.png'

    """
    importer = to_posix(importer_path)
    top_level = importer.split("/")[0] if "/" in importer else ""
    images_root = f"{top_level}/{images_dir_name}" if top_level else images_dir_name

    target = asset_path.lstrip("/")
    marker = f"{images_dir_name}/"
    marker_index = target.find(marker)
    if marker_index >= 0:
        return f"{images_root}/{target[marker_index + len(marker):]}"
    if "/" not in target:
        return f"{images_root}/{target}"
    return target


def image_import_path(importer_path: str, target_path: str) -> str:
    """Compute the import path of an image asset for the file being produced.

    The path relative to the importer's directory is computed, and its
    leading ``./`` is replaced by ``../`` (any other relative path gets a
    ``../`` prefix), because the MDX host resolves asset imports from the
    page's own route directory.

    Examples
    --------
        >>> image_import_path("guide/page.mdx", "guide/images/pic.png")
        '../images/pic.png'

    """
    import_path = relative_posix(dirname_posix(importer_path), target_path)
    if not import_path.startswith("."):
        import_path = f"./{import_path}"
    if import_path.startswith("./"):
        return "../" + import_path[2:].lstrip("/")
    return f"../{import_path}"


def include_import_path(importer_path: str, fragment_path: str) -> str:
    """Compute the import path of an emitted fragment for the file importing it.

    Examples
    --------
        >>> include_import_path("guide/page.mdx", "includes/steps.mdx")
        '../includes/steps.mdx'
        >>> include_import_path("index.mdx", "includes/steps.mdx")
        './includes/steps.mdx'

    """
    import_path = relative_posix(dirname_posix(importer_path), fragment_path.lstrip("/"))
    if not import_path.startswith("."):
        import_path = f"./{import_path}"
    return import_path
