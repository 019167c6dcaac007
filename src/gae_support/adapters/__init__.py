"""Adapters (infrastructure) for gae-support.

Concrete implementations of the ports in `gae_support.interfaces`: hosting
detection from environment variables, the cache-artifact optimizer, and the
remote log transport.

Dependency rule: may import `gae_support.interfaces` and `gae_support.config`;
the interfaces must not import this package.
"""
