"""App Engine aware application.

`GaeApplication` wraps a `FrameworkApplication` and adapts it to App Engine:

1. detects the hosting context (not hosted, standard or flexible runtime);
2. picks a log sink: a local file when not hosted, syslog on the standard
   runtime, a batched remote transport on the flexible runtime;
3. routes the debug dumpers' lines into the framework output channel, since
   the runtime offers no usable stdout for them;
4. bootstraps the cache-artifact optimizer;
5. builds the wrapped framework application last.

Path queries consult the optimizer first, then an App Engine specific rule,
then the framework default. Everything else is delegated unchanged.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Hashable
from pathlib import Path
from typing import Any, TextIO

from gae_support import config
from gae_support.interfaces.application import Application
from gae_support.interfaces.hosting import HostingContext, HostingEnvironment
from gae_support.interfaces.log_transport import LogTransport
from gae_support.interfaces.optimizer import Optimizer
from gae_support.logging import (
    config_local_file_handler,
    config_remote_batch_handler,
    config_syslog_handler,
)

from .application import LOG_FILE, FrameworkApplication
from .container import Container
from .dumpers import DumperRegistry, make_line_output
from .errors import MissingLogTransportError

logger = logging.getLogger(__name__)

BUCKET_DIR_MODE = 0o755
BUCKET_SUBDIRS = ("app", "framework", Path("framework") / "views")

LogConfigurator = Callable[[logging.Logger], "logging.Logger | None"]
OptimizerFactory = Callable[[Path, bool], Optimizer]
FrameworkFactory = Callable[..., FrameworkApplication]


class GaeApplication(Application):
    """Framework application adapted to run on Google App Engine."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        base_path: Path | str | None = None,
        *,
        environment: HostingEnvironment,
        optimizer_factory: OptimizerFactory,
        log_transport: LogTransport | None = None,
        output: TextIO | None = None,
        interactive: bool | None = None,
        dumpers: DumperRegistry | None = None,
        framework_factory: FrameworkFactory = FrameworkApplication,
    ) -> None:
        base_path = Path(base_path) if base_path is not None else config.get_base_path()
        if interactive is None:
            interactive = config.running_in_console()
        output = output if output is not None else io.StringIO()

        self._log_configurator: LogConfigurator | None = None
        self._log_transport = log_transport
        self._bucket_path: Path | None = None

        self._context = environment.detect()
        logger.debug("Detected hosting context: %s", self._context)

        if self._context.is_standard:
            self.configure_logging_using(self._push_syslog_handler)
        elif self._context.is_flexible:
            if log_transport is None:
                raise MissingLogTransportError()
            self.configure_logging_using(self._push_remote_handler)
        else:
            self.configure_logging_using(self._push_local_file_handler)

        self.dumpers = dumpers if dumpers is not None else DumperRegistry()
        self.dumpers.register_line_output(make_line_output(output))

        self._optimizer = optimizer_factory(base_path, interactive)
        self._optimizer.bootstrap()

        self._framework = framework_factory(
            base_path, output=output, interactive=interactive
        )
        self.register_log_bindings()
        self._framework.container.instance(Application, self)

    # --- Hosting context ---

    @property
    def hosting_context(self) -> HostingContext:
        return self._context

    def is_running_on_gae(self) -> bool:
        return self._context.is_hosted

    def gae_app_id(self) -> str | None:
        return self._context.project_id

    def gae_app_service(self) -> str | None:
        return self._context.service

    def gae_app_version(self) -> str | None:
        return self._context.version

    # --- Paths ---

    def cached_config_path(self) -> Path:
        return self._optimizer.cached_config_path() or self._framework.cached_config_path()

    def cached_routes_path(self) -> Path:
        return self._optimizer.cached_routes_path() or self._framework.cached_routes_path()

    def cached_services_path(self) -> Path:
        if path := self._optimizer.cached_services_path():
            return path
        if self.is_running_on_gae():
            return self.storage_path() / "framework" / "services.json"
        return self._framework.cached_services_path()

    def storage_path(self, *parts: str) -> Path:
        """Storage root, or the bucket-backed directory when on App Engine.

        The bucket directory and its ``app``, ``framework`` and
        ``framework/views`` subdirectories are created on first use. Creation
        errors propagate.
        """
        if not self.is_running_on_gae():
            return self._framework.storage_path(*parts)
        return self._bucket_root().joinpath(*parts)

    def _bucket_root(self) -> Path:
        if self._bucket_path is not None:
            return self._bucket_path

        path = self._optimizer.temporary_path()
        if not path.exists():
            path.mkdir(BUCKET_DIR_MODE, parents=True)
            for subdir in BUCKET_SUBDIRS:
                (path / subdir).mkdir(BUCKET_DIR_MODE, parents=True)
            logger.debug("Created bucket storage at %s", path)
        self._bucket_path = path
        return path

    # --- Logging ---

    @property
    def log_configurator(self) -> LogConfigurator | None:
        return self._log_configurator

    def configure_logging_using(self, callback: LogConfigurator | None) -> GaeApplication:
        """Set the callback that configures the application logger.

        The callback runs once, when `logging.Logger` is first resolved. It
        receives a fresh logger and may return a replacement. Exceptions it
        raises propagate to the caller of `make`. Passing None restores the
        default file handler under the storage root.
        """
        self._log_configurator = callback
        return self

    def register_log_bindings(self) -> None:
        self._framework.singleton(logging.Logger, self._make_logger)

    def _make_logger(self) -> logging.Logger:
        app_logger = logging.Logger(config.LOG_CHANNEL, logging.DEBUG)
        if self._log_configurator is None:
            self._push_local_file_handler(app_logger)
            return app_logger

        configured = self._log_configurator(app_logger)
        return configured if configured is not None else app_logger

    def _push_local_file_handler(self, app_logger: logging.Logger) -> None:
        app_logger.addHandler(config_local_file_handler(self.storage_path(*LOG_FILE)))

    def _push_syslog_handler(self, app_logger: logging.Logger) -> None:
        app_logger.addHandler(
            config_syslog_handler(config.SYSLOG_IDENT, config.get_syslog_address())
        )

    def _push_remote_handler(self, app_logger: logging.Logger) -> None:
        assert self._log_transport is not None
        app_logger.addHandler(
            config_remote_batch_handler(
                self._log_transport,
                capacity=config.get_log_batch_size(),
                labels={
                    "project_id": self._context.project_id or "",
                    "service": self._context.service or "",
                    "version": self._context.version or "",
                },
            )
        )

    # --- Delegation ---

    @property
    def base_path(self) -> Path:
        return self._framework.base_path

    @property
    def output(self) -> TextIO:
        return self._framework.output

    @property
    def container(self) -> Container:
        return self._framework.container

    def echo(self, text: str) -> None:
        self._framework.echo(text)

    def running_in_console(self) -> bool:
        return self._framework.running_in_console()

    def make(self, key: Hashable) -> Any:
        return self._framework.make(key)

    def singleton(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._framework.singleton(key, factory)
