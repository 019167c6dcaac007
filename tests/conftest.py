"""Global pytest fixtures for gae-support."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

GAE_VARIABLES = (
    "GAE_ENV",
    "GAE_INSTANCE",
    "GAE_APPLICATION",
    "GAE_SERVICE",
    "GAE_VERSION",
    "GOOGLE_CLOUD_PROJECT",
    "SERVER_SOFTWARE",
    "GAE_SUPPORT_BASE_PATH",
    "GAE_SUPPORT_CONSOLE",
    "GAE_SUPPORT_LOG_BATCH_SIZE",
    "GAE_SUPPORT_SYSLOG_ADDRESS",
)


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure no App Engine signal from the host leaks into a test."""
    for name in GAE_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point `tempfile.gettempdir()` at a per-test directory."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def base_path(tmp_path: Path) -> Path:
    """An empty application base directory."""
    path = tmp_path / "app"
    path.mkdir()
    return path
