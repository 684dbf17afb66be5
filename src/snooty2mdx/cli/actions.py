#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom argparse actions for the snooty2mdx CLI."""

import argparse
import logging
import os
from typing import Any, Callable, Optional

ENV_PREFIX = "SNOOTY2MDX_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def env_key_for(dest: str) -> str:
    """Environment variable name providing the default of an argument.

    Examples
    --------
    >>> env_key_for("mdx.bullet_marker")
    'SNOOTY2MDX_MDX_BULLET_MARKER'

    """
    return ENV_PREFIX + dest.upper().replace("-", "_").replace(".", "_")


def parse_bool(value: str) -> bool:
    """Parse a boolean environment value."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"expected one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got {value!r}")


def env_default(dest: str, convert: Optional[Callable[[str], Any]] = None) -> Any:
    """Read and convert the environment default of ``dest``.

    Returns ``argparse.SUPPRESS`` when the variable is unset or invalid, so
    that unset options leave the namespace untouched.
    """
    env_key = env_key_for(dest)
    env_value = os.environ.get(env_key)
    if env_value is None:
        return argparse.SUPPRESS
    try:
        return convert(env_value) if convert else env_value
    except (ValueError, TypeError) as e:
        logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")
        return argparse.SUPPRESS


class DynamicVersionAction(argparse._VersionAction):
    """Version action computing its text when invoked."""

    def __init__(self, option_strings, version_callback=None, **kwargs):
        """Initialize with a callback returning the version text."""
        self.version_callback = version_callback
        kwargs.setdefault("version", "placeholder")
        kwargs.setdefault("dest", argparse.SUPPRESS)
        kwargs.setdefault("default", argparse.SUPPRESS)
        super().__init__(option_strings, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Display version and exit."""
        version = self.version_callback() if self.version_callback else self.version
        parser.exit(message=f"{version}\n")
