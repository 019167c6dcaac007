"""Framework kernel: default paths, container and output channel."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Hashable
from pathlib import Path
from typing import Any, TextIO

from gae_support import config
from gae_support.interfaces.application import Application
from gae_support.logging import config_local_file_handler

from .container import Container

CACHE_DIR = Path("bootstrap") / "cache"
STORAGE_DIR = "storage"
LOG_FILE = ("logs", "app.log")


class FrameworkApplication(Application):
    """The framework's own application with its default filesystem layout.

    Layout relative to `base_path`:
    - ``storage/`` for writable state (logs, compiled views, ...);
    - ``bootstrap/cache/{config,routes,services}.json`` for cached artifacts.

    The application binds itself as `Application` and binds `logging.Logger`
    to a lazily built logger writing to ``storage/logs/app.log``.
    """

    def __init__(
        self,
        base_path: Path | str,
        *,
        output: TextIO | None = None,
        interactive: bool | None = None,
    ) -> None:
        self._base_path = Path(base_path)
        self._output = output if output is not None else io.StringIO()
        self._interactive = interactive
        self.container = Container()

        self.container.instance(Application, self)
        self.register_log_bindings()

    # --- Paths ---

    @property
    def base_path(self) -> Path:
        return self._base_path

    def storage_path(self, *parts: str) -> Path:
        return self._base_path.joinpath(STORAGE_DIR, *parts)

    def cached_config_path(self) -> Path:
        return self._base_path / CACHE_DIR / "config.json"

    def cached_routes_path(self) -> Path:
        return self._base_path / CACHE_DIR / "routes.json"

    def cached_services_path(self) -> Path:
        return self._base_path / CACHE_DIR / "services.json"

    # --- Runtime ---

    @property
    def output(self) -> TextIO:
        return self._output

    def echo(self, text: str) -> None:
        """Write `text` to the output channel."""
        self._output.write(text)

    def running_in_console(self) -> bool:
        if self._interactive is None:
            self._interactive = config.running_in_console()
        return self._interactive

    # --- Container ---

    def make(self, key: Hashable) -> Any:
        return self.container.make(key)

    def singleton(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self.container.singleton(key, factory)

    def register_log_bindings(self) -> None:
        self.singleton(logging.Logger, self.make_default_logger)

    def default_log_handler(self) -> logging.Handler:
        return config_local_file_handler(self.storage_path(*LOG_FILE))

    def make_default_logger(self) -> logging.Logger:
        app_logger = logging.Logger(config.LOG_CHANNEL, logging.DEBUG)
        app_logger.addHandler(self.default_log_handler())
        return app_logger
