"""
Shared pytest fixtures and configuration for datacontracts tests.

This module provides:
- Settings cache isolation
- An isolated metadata registry for registry/resolver tests
- structlog capture at debug level

Usage:
    Fixtures are auto-discovered by pytest. Simply use them as function
    arguments (pytest injects them automatically).
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
import structlog
from structlog.testing import capture_logs

# Ensure datacontracts package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datacontracts.core.logging import configure_logging
from datacontracts.core.settings import reset_settings
from datacontracts.schema.registry import MetadataRegistry


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_fixture() -> Generator[None, None, None]:
    """
    Drop cached settings before and after each test.

    Tests that set ``DATACONTRACTS_*`` variables with ``monkeypatch`` see
    them on the next ``get_settings()`` call.
    """
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def isolated_registry() -> MetadataRegistry:
    """
    A private registry for registry/resolver tests.

    The global registry is never cleared in tests: record classes declared
    at module level register once, at import.
    """
    return MetadataRegistry()


@pytest.fixture
def debug_logs() -> Generator[list[dict], None, None]:
    """Capture structlog events at debug level, restoring config afterwards."""
    saved = structlog.get_config()
    configure_logging(level="DEBUG", json_format=True)
    with capture_logs() as logs:
        yield logs
    structlog.configure(**saved)
