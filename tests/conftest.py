"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the procinfra test suite.
"""

import os
import shutil
import sys
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from procinfra.config import Config

# Child program used by process tests (prints lines, then idles)
READY_SERVER = Path(__file__).parent / "fixtures" / "ready_server.py"


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (spawn processes, use filesystem)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full system integration)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line("markers", "slow: Tests that take >1 second to run")


def pytest_collection_modifyitems(config, items):
    """Add 'unit' marker to tests without other markers."""
    for item in items:
        if not any(
            mark.name in ["integration", "e2e"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Keep PROCINFRA_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("PROCINFRA_"):
            monkeypatch.delenv(key)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory that is cleaned up after the test.

    Yields:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp(prefix="procinfra-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def proc_config(temp_dir: Path) -> Config:
    """
    Configuration with a log directory and short readiness settings.

    Returns:
        Config: log.dir under temp_dir, 5s timeout, 0.1s poll interval
    """
    return Config(
        data={
            "log": {"dir": str(temp_dir / "logs"), "level": "debug"},
            "readiness": {"timeout": 5.0, "interval": 0.1},
        }
    )


@pytest.fixture
def ready_server() -> Callable[..., list[str]]:
    """
    Build command lines running the ready_server.py child program.

    Example:
        cmd = ready_server("--line", "listening on port 9000")
    """

    def build(*args: str) -> list[str]:
        return [sys.executable, "-u", str(READY_SERVER), *args]

    return build
