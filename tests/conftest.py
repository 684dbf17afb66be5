"""Pytest configuration and shared fixtures for the snooty2mdx test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir, directive, page_root, paragraph, section, text

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level replaced by the CLI's logging setup."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    try:
        yield
    finally:
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)
        logging.getLogger("snooty2mdx").setLevel(logging.NOTSET)


@pytest.fixture
def sample_page() -> dict:
    """Provide a small page document exercising the common node types.

    Returns
    -------
    dict
        Page document in the ``{"ast": ...}`` envelope form.

    """
    return {
        "ast": page_root(
            section(
                "Install Atlas",
                paragraph(text("Run the "), {"type": "literal", "value": "atlas"}, text(" command.")),
                directive("note", paragraph(text("Requires a cluster."))),
                section("Next Steps", paragraph(text("Connect to your cluster."))),
            ),
            options={"title": "Install Atlas"},
        )
    }
