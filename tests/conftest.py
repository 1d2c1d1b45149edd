"""Shared test fixtures for reqview.

Provides reusable fixtures for isolated config environments, output state,
mock HTTP transports and running CLI commands. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from reqview.models import GlobalConfig
from reqview.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config, forces the XDG code path, and
    clears the environment variables that feed configuration resolution.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("reqview.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["REQVIEW_URL", "FETCH_URL", "REQVIEW_TIMEOUT", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Config and output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_config() -> GlobalConfig:
    """Default configuration with colour disabled, so renders are exact text."""
    config = GlobalConfig()
    config.render.color = False
    return config


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format, colourless OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format OutputManager for tests that ignore stderr."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for an httpx.MockTransport answering every request the same way.

    Example::

        transport = mock_transport(200, b'{"a": 1}', "application/json")
    """

    def _make(
        status_code: int = 200,
        body: bytes = b"",
        content_type: str | None = "application/json",
    ) -> httpx.MockTransport:
        headers = {"content-type": content_type} if content_type else {}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, headers=headers, content=body)

        return httpx.MockTransport(handler)

    return _make


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner capturing stdout/stderr."""
    from typer.testing import CliRunner

    return CliRunner()
