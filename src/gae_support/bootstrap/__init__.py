"""Bootstrap (composition root) for gae-support.

Assembles a `GaeApplication` at runtime: wires the concrete adapters
(environment-variable hosting detection, artifact optimizer, JSON-lines log
transport) to the foundation kernel and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/foundation directly).
- This package may import: `gae_support.adapters`, `gae_support.foundation`,
  `gae_support.interfaces`, and `gae_support.config`.
- Inner layers must not import `gae_support.bootstrap`.
"""

from .bootstrap import create_application

__all__ = ["create_application"]
