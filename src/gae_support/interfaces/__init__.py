"""Interfaces (application boundary) for gae-support.

Defines framework-free contracts: ABCs and small DTOs shared by the
foundation kernel, the App Engine adapter and the concrete adapters
(hosting detection, cache-artifact optimizer, remote log transport).

Dependency rule: this package is independent; do not import from any other
`gae_support.*` module. It may be imported by `gae_support.adapters`,
`gae_support.foundation` and `gae_support.bootstrap`.
"""
