"""Hosting detection from App Engine environment variables.

App Engine announces itself through environment variables: the standard
runtime sets ``GAE_ENV=standard``; the flexible runtime sets
``GAE_INSTANCE`` without ``GAE_ENV`` (newer images set ``GAE_ENV=flex``).
Both set ``GAE_SERVICE``, ``GAE_VERSION`` and ``GOOGLE_CLOUD_PROJECT``.
"""

import os
from collections.abc import Mapping

from gae_support.interfaces.hosting import HostingContext, HostingEnvironment, HostingKind

DEFAULT_SERVICE = "default"


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def is_gae_std(environ: Mapping[str, str] | None = None) -> bool:
    """Return True on the standard runtime."""
    return _env(environ).get("GAE_ENV") == "standard"


def is_gae_flex(environ: Mapping[str, str] | None = None) -> bool:
    """Return True on the flexible runtime."""
    env = _env(environ)
    gae_env = env.get("GAE_ENV")
    if gae_env == "flex":
        return True
    return not gae_env and bool(env.get("GAE_INSTANCE"))


def is_gae(environ: Mapping[str, str] | None = None) -> bool:
    """Return True on any App Engine runtime."""
    return is_gae_std(environ) or is_gae_flex(environ)


def gae_project(environ: Mapping[str, str] | None = None) -> str:
    """Project id, falling back to ``GAE_APPLICATION`` without its partition."""
    env = _env(environ)
    if project := env.get("GOOGLE_CLOUD_PROJECT"):
        return project
    # e.g. "s~my-project" -> "my-project"
    return env.get("GAE_APPLICATION", "").rpartition("~")[2]


def gae_service(environ: Mapping[str, str] | None = None) -> str:
    return _env(environ).get("GAE_SERVICE") or DEFAULT_SERVICE


def gae_version(environ: Mapping[str, str] | None = None) -> str:
    return _env(environ).get("GAE_VERSION", "")


class EnvironHostingEnvironment(HostingEnvironment):
    """HostingEnvironment reading a mapping (``os.environ`` by default)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def detect(self) -> HostingContext:
        if is_gae_std(self._environ):
            kind = HostingKind.STANDARD
        elif is_gae_flex(self._environ):
            kind = HostingKind.FLEXIBLE
        else:
            return HostingContext.not_hosted()

        return HostingContext(
            kind=kind,
            project_id=gae_project(self._environ),
            service=gae_service(self._environ),
            version=gae_version(self._environ),
        )
