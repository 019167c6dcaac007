"""Build an App Engine aware application from configuration."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from gae_support import config
from gae_support.adapters.hosting import EnvironHostingEnvironment
from gae_support.adapters.log_transport import JsonLinesTransport
from gae_support.adapters.optimizer import ArtifactOptimizer
from gae_support.foundation import GaeApplication
from gae_support.interfaces.hosting import HostingEnvironment
from gae_support.interfaces.optimizer import Optimizer


def build_optimizer_factory(environment: HostingEnvironment):
    """Return a factory building `ArtifactOptimizer`s aware of the hosting context."""

    def factory(base_path: Path, interactive: bool) -> Optimizer:
        return ArtifactOptimizer(base_path, interactive, environment.detect())

    return factory


def create_application(
    base_path: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    output: TextIO | None = None,
    interactive: bool | None = None,
) -> GaeApplication:
    """Create the application for the current process.

    Args:
        base_path: Application root; defaults to `GAE_SUPPORT_BASE_PATH` or the cwd.
        environ: Environment to read; defaults to `os.environ`.
        output: Framework output channel; defaults to an in-memory buffer.
        interactive: Force console/serving mode; detected when None.
    """
    if base_path is None:
        base_path = config.get_base_path(environ)
    if interactive is None:
        interactive = config.running_in_console(environ)

    environment = EnvironHostingEnvironment(environ)
    return GaeApplication(
        base_path,
        environment=environment,
        optimizer_factory=build_optimizer_factory(environment),
        log_transport=JsonLinesTransport(),
        output=output,
        interactive=interactive,
    )
