"""Application capability set.

Both the framework kernel and the App Engine adapter implement this contract,
so entrypoints never need to know which one they hold.
"""

import abc
from collections.abc import Callable, Hashable
from pathlib import Path
from typing import Any, TextIO


class Application(abc.ABC):
    """Path queries, container binding and output shared by applications."""

    @property
    @abc.abstractmethod
    def base_path(self) -> Path:
        """Root directory of the application."""

    @property
    @abc.abstractmethod
    def output(self) -> TextIO:
        """The framework's standard output channel."""

    @abc.abstractmethod
    def running_in_console(self) -> bool:
        """True for interactive (console) runs, False when serving."""

    @abc.abstractmethod
    def storage_path(self, *parts: str) -> Path:
        """Storage root, optionally joined with `parts`."""

    @abc.abstractmethod
    def cached_config_path(self) -> Path:
        """Path of the configuration cache file."""

    @abc.abstractmethod
    def cached_routes_path(self) -> Path:
        """Path of the routes cache file."""

    @abc.abstractmethod
    def cached_services_path(self) -> Path:
        """Path of the services manifest cache file."""

    @abc.abstractmethod
    def make(self, key: Hashable) -> Any:
        """Resolve a binding from the application container."""

    @abc.abstractmethod
    def singleton(self, key: Hashable, factory: Callable[[], Any]) -> None:
        """Register a lazily built, shared binding."""
