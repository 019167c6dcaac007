"""Entrypoints (inbound adapters) for gae-support.

Expose the application to the outside world: currently the `gae-support` CLI
for inspecting the detected hosting context and resolved paths.

Dependency rule: may import `gae_support.bootstrap`; avoid importing
`gae_support.adapters` directly.
"""
