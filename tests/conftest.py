"""Shared test fixtures for sitehooks.

Provides reusable fixtures for building registries, creating isolated
config environments, managing output and logging state, and running CLI
commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sitehooks.output import OutputFormat, OutputHandler, OutputManager, reset_output, set_output
from sitehooks.plugins import PluginRegistry


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the ``sitehooks`` logger after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time, and the CLI callback attaches an OutputHandler and a
    level to the package logger. Both would leak into later tests
    (stale streams, filtered DEBUG records in ``caplog``).
    """
    yield
    reset_output()
    package_logger = logging.getLogger("sitehooks")
    for handler in list(package_logger.handlers):
        if isinstance(handler, OutputHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> PluginRegistry:
    """An empty registry with a small root context."""
    return PluginRegistry(context={"source_dir": "/site/docs", "base": "/"})


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary directory.

    Clears ``SITEHOOKS_CONFIG`` and changes the working directory to
    tmp_path so that config discovery never picks up a real file.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.delenv("SITEHOOKS_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
