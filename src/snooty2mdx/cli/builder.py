#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction for the snooty2mdx CLI.

Besides the fixed arguments, one flag is generated for every field of the
options dataclasses, named after the field and prefixed with its stage
(``--snooty-max-heading-depth``, ``--mdx-bullet-marker``,
``--archive-no-extract-assets``). Help text, value types and choices come
from the field metadata.
"""

import argparse
from dataclasses import MISSING, fields
from typing import Any, Dict, Mapping

from snooty2mdx.cli.actions import DynamicVersionAction, env_default, parse_bool
from snooty2mdx.constants import DEPS_BSON
from snooty2mdx.exceptions import (
    DependencyError,
    FileError,
    MalformedFileError,
    ParsingError,
    RenderingError,
    SecurityError,
    ValidationError,
)
from snooty2mdx.options import ArchiveOptions, ConversionOptions, MdxRendererOptions
from snooty2mdx.utils.packages import describe_dependency, get_package_version

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_MALFORMED_INPUT_ERROR = 5
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
EXIT_SECURITY_ERROR = 8

OPTION_GROUPS: tuple[tuple[str, type, str], ...] = (
    ("snooty", ConversionOptions, "Conversion options"),
    ("mdx", MdxRendererOptions, "MDX output options"),
    ("archive", ArchiveOptions, "Archive input options"),
)


def _get_version() -> str:
    lines = [f"snooty2mdx {get_package_version('snooty2mdx') or 'unknown'}"]
    lines.extend(f"  {describe_dependency(*dependency)}" for dependency in DEPS_BSON)
    return "\n".join(lines)


def _field_default(field_obj: Any) -> Any:
    if field_obj.default is not MISSING:
        return field_obj.default
    if field_obj.default_factory is not MISSING:
        return field_obj.default_factory()
    return None


def _add_options_group(parser: argparse.ArgumentParser, prefix: str, options_class: type, title: str) -> None:
    group = parser.add_argument_group(title)
    for field_obj in fields(options_class):
        dest = f"{prefix}.{field_obj.name}"
        flag_name = field_obj.name.replace("_", "-")
        help_text = field_obj.metadata.get("help", "")
        default = _field_default(field_obj)

        if isinstance(default, bool):
            if default:
                group.add_argument(
                    f"--{prefix}-no-{flag_name}",
                    dest=dest,
                    action="store_false",
                    default=env_default(dest, parse_bool),
                    help=f"Disable: {help_text}",
                )
            else:
                group.add_argument(
                    f"--{prefix}-{flag_name}",
                    dest=dest,
                    action="store_true",
                    default=env_default(dest, parse_bool),
                    help=help_text,
                )
        elif isinstance(default, tuple):
            group.add_argument(
                f"--{prefix}-{flag_name}",
                dest=dest,
                nargs="*",
                metavar="NAME",
                default=env_default(dest, lambda value: tuple(v.strip() for v in value.split(",") if v.strip())),
                help=f"{help_text} (default: {', '.join(default)})",
            )
        else:
            value_type = field_obj.metadata.get("type", str)
            group.add_argument(
                f"--{prefix}-{flag_name}",
                dest=dest,
                type=value_type,
                choices=field_obj.metadata.get("choices"),
                default=env_default(dest, value_type),
                help=f"{help_text} (default: {default})",
            )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="snooty2mdx",
        description="Convert Snooty documentation ASTs (JSON pages or site archives) to MDX.",
        epilog="Every option can also be set with a SNOOTY2MDX_<DEST> environment variable, "
        "e.g. SNOOTY2MDX_MDX_BULLET_MARKER=*.",
    )
    parser.add_argument("input", nargs="?", help="Page AST (.json) or site archive (.zip)")
    parser.add_argument(
        "-o",
        "--out",
        help="Output file for a .json input, output directory for a .zip input",
    )
    parser.add_argument("--references", help="Path of the references.ts registry to merge into")
    parser.add_argument("--mdast-json", help="For a .json input, also write the converted page tree as mdast JSON")
    parser.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Do not load any configuration file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    parser.add_argument("--trace", action="store_true", help="Debug logging with module names and line numbers")
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--version", action=DynamicVersionAction, version_callback=_get_version)

    for prefix, options_class, title in OPTION_GROUPS:
        _add_options_group(parser, prefix, options_class, title)

    return parser


def build_options(parsed_args: argparse.Namespace, config: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the options objects from configuration tables and parsed flags.

    Flags (and their environment defaults) override the configuration
    tables, which override the dataclass defaults.

    Returns
    -------
    dict
        Options instance per stage prefix

    Raises
    ------
    ValidationError
        If a configuration table is malformed or names an unknown option,
        or if an option value is invalid

    """
    cli_values = vars(parsed_args)
    built: Dict[str, Any] = {}
    for prefix, options_class, _title in OPTION_GROUPS:
        section = config.get(prefix, {})
        if not isinstance(section, Mapping):
            raise ValidationError(
                f"Configuration section [{prefix}] must be a table, got {type(section).__name__}",
                parameter_name=prefix,
                parameter_value=section,
            )
        values = dict(section)
        values.update(
            {dest.split(".", 1)[1]: value for dest, value in cli_values.items() if dest.startswith(f"{prefix}.")}
        )
        built[prefix] = options_class().create_updated(**values)
    return built


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, SecurityError):
        return EXIT_SECURITY_ERROR
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, MalformedFileError):
        return EXIT_MALFORMED_INPUT_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR
