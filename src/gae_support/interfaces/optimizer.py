"""Cache-artifact optimizer port."""

import abc
from pathlib import Path


class Optimizer(abc.ABC):
    """Locates pre-generated framework artifacts (config, routes, services).

    Implementations are constructed with the application base path and a flag
    telling whether the process is an interactive (console) run.
    """

    def __init__(self, base_path: Path, interactive: bool) -> None:
        self.base_path = Path(base_path)
        self.interactive = interactive

    @abc.abstractmethod
    def bootstrap(self) -> None:
        """Prepare the optimizer. Called exactly once per application."""

    @abc.abstractmethod
    def cached_config_path(self) -> Path | None:
        """Path of the cached configuration, or None to use the default."""

    @abc.abstractmethod
    def cached_routes_path(self) -> Path | None:
        """Path of the cached routes, or None to use the default."""

    @abc.abstractmethod
    def cached_services_path(self) -> Path | None:
        """Path of the cached services manifest, or None to use the default."""

    @staticmethod
    @abc.abstractmethod
    def temporary_path() -> Path:
        """Local directory standing in for the storage bucket."""
