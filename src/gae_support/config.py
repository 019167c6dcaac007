"""Configuration utilities for gae-support.

This module centralizes small helpers and constants related to application
configuration. Everything is read from the process environment; callers may
pass an explicit mapping instead (tests do).
"""

import os
from collections.abc import Mapping
from pathlib import Path

BASE_PATH_ENV = "GAE_SUPPORT_BASE_PATH"  # pragma: no mutate
CONSOLE_ENV = "GAE_SUPPORT_CONSOLE"  # pragma: no mutate
LOG_BATCH_SIZE_ENV = "GAE_SUPPORT_LOG_BATCH_SIZE"  # pragma: no mutate
SYSLOG_ADDRESS_ENV = "GAE_SUPPORT_SYSLOG_ADDRESS"  # pragma: no mutate

LOG_CHANNEL = "app"
SYSLOG_IDENT = "app"
DEFAULT_LOG_BATCH_SIZE = 50
DEFAULT_SYSLOG_SOCKET = "/dev/log"
DEFAULT_SYSLOG_HOST = ("localhost", 514)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when a configuration value in the environment is malformed."""


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def get_base_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get the application base path.

    Returns:
        The value of `GAE_SUPPORT_BASE_PATH`, or the current working directory
        when it is unset.
    """
    if value := _environ(environ).get(BASE_PATH_ENV):
        return Path(value)
    return Path.cwd()


def running_in_console(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when the process is an interactive/console run.

    `GAE_SUPPORT_CONSOLE` wins when set to a recognised boolean. Otherwise a
    process is serving requests iff a WSGI server announced itself through
    `SERVER_SOFTWARE` (gunicorn does this for its workers).

    Raises:
        ConfigError: If `GAE_SUPPORT_CONSOLE` is set to an unrecognised value.
    """
    env = _environ(environ)
    if (flag := env.get(CONSOLE_ENV)) is not None and flag.strip():
        normalized = flag.strip().lower()
        if normalized in _TRUTHY:
            return True
        if normalized in _FALSY:
            return False
        raise ConfigError(f"{CONSOLE_ENV} must be a boolean, got {flag!r}")
    return "SERVER_SOFTWARE" not in env


def get_log_batch_size(environ: Mapping[str, str] | None = None) -> int:
    """Number of records the remote log handler buffers before shipping a batch.

    Raises:
        ConfigError: If `GAE_SUPPORT_LOG_BATCH_SIZE` is not a positive integer.
    """
    raw = _environ(environ).get(LOG_BATCH_SIZE_ENV)
    if not raw:
        return DEFAULT_LOG_BATCH_SIZE
    try:
        size = int(raw)
    except ValueError as e:
        raise ConfigError(f"{LOG_BATCH_SIZE_ENV} must be an integer, got {raw!r}") from e
    if size < 1:
        raise ConfigError(f"{LOG_BATCH_SIZE_ENV} must be positive, got {size}")
    return size


def get_syslog_address(
    environ: Mapping[str, str] | None = None,
) -> str | tuple[str, int]:
    """Resolve the syslog address for the standard runtime.

    `GAE_SUPPORT_SYSLOG_ADDRESS` accepts either `host:port` or a unix socket
    path. Without it, `/dev/log` is used when present, else UDP localhost:514.

    Raises:
        ConfigError: If a `host:port` value carries a non-integer port.
    """
    raw = _environ(environ).get(SYSLOG_ADDRESS_ENV)
    if not raw:
        if Path(DEFAULT_SYSLOG_SOCKET).exists():
            return DEFAULT_SYSLOG_SOCKET
        return DEFAULT_SYSLOG_HOST
    if raw.startswith("/"):
        return raw
    host, sep, port = raw.rpartition(":")
    if not sep or not host:
        raise ConfigError(f"{SYSLOG_ADDRESS_ENV} must be HOST:PORT or a path, got {raw!r}")
    try:
        return host, int(port)
    except ValueError as e:
        raise ConfigError(f"{SYSLOG_ADDRESS_ENV} has an invalid port: {raw!r}") from e
