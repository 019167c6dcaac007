"""Logging helpers used by the application sinks and the CLI.

This module provides the three platform sinks an application logger can be
wired to (a local file, syslog, and a batched remote transport), plus the
console handler with Rich and the in-memory "flight recorder" used by the
`gae-support` CLI.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from datetime import datetime, timezone
from logging.handlers import BufferingHandler, MemoryHandler, SysLogHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import Mapping
    from logging import Logger

    from gae_support.interfaces.log_transport import LogTransport

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "gae_support"

LINE_FORMAT = "[%(asctime)s] %(name)s.%(levelname)s: %(message)s"
LABELS_KEY = "logging.googleapis.com/labels"


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix.

    For records whose logger name does not start with the project prefix,
    sets `record.prefix` to a short bracketed token like "[click_extra]".
    Project loggers get an empty prefix. The record is always let through.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler for console output.

    The handler writes to stderr. In debug mode the handler is set to DEBUG
    and includes source file/line information; otherwise a short third-party
    prefix is applied.

    Args:
        level: Minimum level for console output (overridden to DEBUG in debug_mode).
        debug_mode: When True, enable debug formatting (show_path, timestamps).
        color: Enable color output when True.

    Returns:
        RichHandler: Configured handler suitable to attach to the root logger.
    """

    # keep it consistent with click-extra's --color / --no-color option
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(prefix)s %(message)s"
        if not debug_mode
        else "%(asctime)s %(name)s: %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))

    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Configure and return an in-memory flight recorder backed by a file.

    Buffers up to `capacity` records and flushes them to the file when a
    record at `flush_level` or higher is emitted (or on close if
    `flush_on_close` is True).

    Returns:
        MemoryHandler: A memory-backed handler with a FileHandler target.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


# ============================================================================
#                          Application log sinks
# ============================================================================


def config_local_file_handler(path: Path) -> logging.FileHandler:
    """Return a handler appending formatted lines to `path`.

    Parent directories are created; the file itself is only opened when the
    first record is emitted.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(logging.Formatter(LINE_FORMAT))
    return handler


def config_syslog_handler(
    ident: str, address: str | tuple[str, int]
) -> SysLogHandler:
    """Return a handler forwarding records to the system log facility."""
    handler = SysLogHandler(address=address, facility=SysLogHandler.LOG_USER)
    handler.ident = f"{ident}: "
    handler.setFormatter(logging.Formatter("%(name)s.%(levelname)s: %(message)s"))
    return handler


class TransportBatchHandler(BufferingHandler):
    """Buffer records and ship them to a `LogTransport` as whole batches.

    A batch is shipped when the buffer reaches `capacity`, when a record at
    `flush_level` or above arrives, and when the handler is closed.
    """

    def __init__(
        self,
        transport: LogTransport,
        capacity: int,
        flush_level: int = logging.ERROR,
        labels: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(capacity)
        self.transport = transport
        self.flush_level = flush_level
        self.labels = dict(labels or {})

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        return len(self.buffer) >= self.capacity or record.levelno >= self.flush_level

    def to_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        """Render a record as a structured entry."""
        entry: dict[str, Any] = {
            "severity": record.levelname,
            "message": self.format(record),
            "logger": record.name,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        }
        if self.labels:
            entry[LABELS_KEY] = dict(self.labels)
        return entry

    def flush(self) -> None:
        self.acquire()
        try:
            if self.buffer:
                self.transport.write_batch([self.to_entry(r) for r in self.buffer])
                self.buffer.clear()
        finally:
            self.release()

    def close(self) -> None:
        try:
            super().close()
        finally:
            self.transport.close()


def config_remote_batch_handler(
    transport: LogTransport,
    capacity: int,
    flush_level: int = logging.ERROR,
    labels: Mapping[str, str] | None = None,
) -> TransportBatchHandler:
    """Return a batching handler in front of a remote log transport."""
    handler = TransportBatchHandler(
        transport, capacity=capacity, flush_level=flush_level, labels=labels
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a human-friendly startup line and DEBUG diagnostics for the CLI."""

    logger.info(
        "gae-support %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s", str(log_path) if log_path else "<none>"
        )
    if logger_levels:
        logger.debug(
            "Per-logger overrides: %s",
            {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
        )
