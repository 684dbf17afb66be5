"""Command-line interface for snooty2mdx.

Converts a single page AST stored as JSON, or a whole documentation site
archive, to MDX files.

Environment Variable Support
----------------------------
Every stage option supports an environment variable default named
SNOOTY2MDX_<DEST>, where DEST is the option's stage and field name
upper-cased (``SNOOTY2MDX_MDX_BULLET_MARKER``). CLI arguments always
override environment variables, which override configuration files.
SNOOTY2MDX_CONFIG names a configuration file.

Examples
--------
Convert one page::

    $ snooty2mdx samples/page_ast-input.json

Convert a site archive into a folder::

    $ snooty2mdx cloud-docs.zip --out build/cloud-docs

Merge references into a shared registry::

    $ snooty2mdx cloud-docs.zip --references site/references.ts

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from pathlib import Path

from snooty2mdx.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_options,
    create_parser,
    get_exit_code_for_exception,
)
from snooty2mdx.cli.config import load_config_with_priority
from snooty2mdx.exceptions import Snooty2MdxError
from snooty2mdx.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from the command-line arguments; --trace wins over --verbose and --log-level."""
    if parsed_args.trace or (parsed_args.verbose and parsed_args.log_level == "WARNING"):
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level)

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _run(parsed_args: argparse.Namespace, options: dict) -> None:
    from snooty2mdx.api import convert_archive, convert_json_file

    input_path = Path(parsed_args.input)
    if input_path.suffix.lower() == ".json":
        print(f"Converting {input_path} to MDX...")
        result = convert_json_file(
            input_path,
            output_path=parsed_args.out,
            references_path=parsed_args.references,
            conversion_options=options["snooty"],
            renderer_options=options["mdx"],
            mdast_json_path=parsed_args.mdast_json,
        )
        count = len(result.written_files)
        print(f"✓ Wrote {count} file{'' if count == 1 else 's'}")
        print(f"✓ Wrote {result.output_path}")
        if parsed_args.mdast_json:
            print(f"✓ Wrote mdast JSON {parsed_args.mdast_json}")
    else:
        print(f"Converting {input_path} to MDX...")
        archive_result = convert_archive(
            input_path,
            output_dir=parsed_args.out,
            references_path=parsed_args.references,
            archive_options=options["archive"],
            conversion_options=options["snooty"],
            renderer_options=options["mdx"],
        )
        print(f"✓ Wrote {archive_result.file_count} files")
        if archive_result.assets:
            print(f"✓ Wrote {len(archive_result.assets)} static assets")
        print(f"✓ Wrote folder {archive_result.output_dir}/")


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.input:
        print("Error: No input file provided", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_VALIDATION_ERROR

    if not parsed_args.input.lower().endswith((".json", ".zip")):
        print("Error: Input file must end in .json or .zip", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_VALIDATION_ERROR

    _setup_logging_level(parsed_args)

    try:
        config = (
            {}
            if parsed_args.no_config
            else load_config_with_priority(parsed_args.config, os.environ.get("SNOOTY2MDX_CONFIG"))
        )
        options = build_options(parsed_args, config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Snooty2MdxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    try:
        _run(parsed_args, options)
    except Snooty2MdxError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.exception("Unexpected error during conversion")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
