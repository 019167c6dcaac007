"""Foundation for gae-support.

The framework kernel (`FrameworkApplication`, its `Container`), the debug
dumpers, and the `GaeApplication` adapter that wraps the kernel so it runs
unmodified on App Engine.
"""

from .application import FrameworkApplication
from .container import Container
from .dumpers import CliDumper, DumperRegistry, HtmlDumper
from .gae_application import GaeApplication

__all__ = [
    "CliDumper",
    "Container",
    "DumperRegistry",
    "FrameworkApplication",
    "GaeApplication",
    "HtmlDumper",
]
