#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the snooty2mdx CLI.

Configuration files hold option tables for each stage::

    # .snooty2mdx.toml
    [snooty]
    max_heading_depth = 4

    [mdx]
    bullet_marker = "*"

    [archive]
    extract_assets = false

The same tables may live under ``[tool.snooty2mdx]`` in ``pyproject.toml``.
Files are found by walking up from the working directory.
"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAMES = [".snooty2mdx.toml", ".snooty2mdx.yaml", ".snooty2mdx.yml", ".snooty2mdx.json"]
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_SECTION = "snooty2mdx"


def _require_mapping(config: Any, config_path: Path, kind: str) -> Dict[str, Any]:
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"{kind} config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.snooty2mdx]`` table of a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict when the file has none

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file, walking up from ``start_dir``.

    In each directory the dedicated files are checked first (``.toml``,
    ``.yaml``, ``.yml``, ``.json``), then ``pyproject.toml`` when it has a
    ``[tool.snooty2mdx]`` section. Unparseable pyproject files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read or parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".snooty2mdx.toml")
    >>> config.get("mdx", {}).get("bullet_marker")
    '*'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    ext = config_path.suffix.lower()

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                return _require_mapping(tomllib.load(f), config_path, "TOML")
        if ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                return _require_mapping(yaml.safe_load(f), config_path, "YAML")
        if ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                return _require_mapping(json.load(f), config_path, "JSON")
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None, discover: bool = True
) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. ``SNOOTY2MDX_CONFIG`` environment variable
    3. Auto-discovered file (see :func:`find_config_in_parents`)

    Returns
    -------
    dict
        Loaded configuration, empty when none is found

    Raises
    ------
    argparse.ArgumentTypeError
        If a named config file cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)
    if discover:
        discovered_path = find_config_in_parents()
        if discovered_path:
            return load_config_file(discovered_path)
    return {}
