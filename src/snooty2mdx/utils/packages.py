"""Helpers for checking installed optional packages."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/snooty2mdx/utils/packages.py
from __future__ import annotations

import importlib.util
from importlib import metadata
from typing import Optional, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet


def get_package_version(package_name: str) -> Optional[str]:
    """Get the installed version of a distribution.

    Parameters
    ----------
    package_name : str
        Distribution name as used by pip (e.g. ``"pymongo"``)

    Returns
    -------
    str or None
        Version string if installed, None otherwise

    """
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check if an installed distribution meets a version requirement.

    Parameters
    ----------
    package_name : str
        Distribution name
    version_spec : str
        Version specification (e.g., ">=4.0")

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None

    try:
        spec = SpecifierSet(version_spec)
    except InvalidSpecifier:
        return False, installed_version
    return version.parse(installed_version) in spec, installed_version


def describe_dependency(install_name: str, import_name: str, version_spec: str) -> str:
    """Return a one-line availability summary for an optional dependency.

    Examples
    --------
        >>> describe_dependency("pymongo", "bson", ">=4.0")
        'pymongo>=4.0: installed (4.10.1)'

    """
    requirement = f"{install_name}{version_spec}"
    if importlib.util.find_spec(import_name) is None:
        return f"{requirement}: not installed"
    meets, installed = check_version_requirement(install_name, version_spec) if version_spec else (True, None)
    installed = installed or get_package_version(install_name) or "unknown version"
    if not meets:
        return f"{requirement}: version mismatch ({installed})"
    return f"{requirement}: installed ({installed})"
