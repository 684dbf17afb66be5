#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/snooty2mdx/utils/decorators.py
"""Utility decorators for optional dependencies and timing.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from snooty2mdx.exceptions import DependencyError
from snooty2mdx.utils.packages import check_version_requirement


def requires_dependencies(feature_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before a function runs.

    Parameters
    ----------
    feature_name : str
        Name of the feature needing the packages (e.g. "bson"). It appears in
        error messages so users know which extra to install.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "pymongo")
        - import_name: Module name for import statement (e.g., "bson")
        - version_spec: Version requirement (e.g., ">=4.0" or "" for any version)

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("bson", [("pymongo", "bson", ">=4.0")])
        ... def decode(data):
        ...     import bson
        ...     return bson.decode_all(data)

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=feature_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    install_command=f'pip install "snooty2mdx[{feature_name}]"',
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Converting guide/page.mdx")

    Yields
    ------
    None
        Control flow to the code block being timed

    Examples
    --------
        >>> with debug_timer(logger, "Converting index.mdx"):
        ...     tree = snooty_ast_to_mdast(root)
        ... # Logs: "Converting index.mdx completed in 0.01s"

    Notes
    -----
    Nothing is measured when the logger is not enabled for DEBUG.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug("%s completed in %.2fs", operation, elapsed)
    else:
        yield
