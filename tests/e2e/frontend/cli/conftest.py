"""Fixtures and default marks for end-to-end CLI tests."""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from gae_support.entrypoints.cli.main import gae_support

# pylint: disable=redefined-outer-name
# pylint: disable=unused-argument

E2E_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "e2e"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `e2e` marks to items in this directory."""
    for item in items:
        if E2E_ROOT in item.path.resolve().parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.e2e)


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated filesystem."""
    with runner.isolated_filesystem():
        yield


@click.command()
def log_demo():
    """Emit one message per level on a project and a third-party logger."""
    logger = logging.getLogger("gae_support.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    gae_support.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        gae_support.commands.pop("log-demo", None)
        # Cloup groups also track commands per help section.
        for section in getattr(gae_support, "_section_set", ()):
            section.commands.pop("log-demo", None)
