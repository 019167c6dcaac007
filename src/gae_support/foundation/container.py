"""Minimal dependency container used by the framework kernel."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from .errors import BindingResolutionError

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass
class _Binding:
    factory: Callable[[], Any]
    shared: bool
    instance: Any = _UNSET


class Container:
    """Maps keys to factories.

    Shared bindings (`singleton`) are built on the first `make` and cached;
    plain bindings (`bind`) are built on every `make`. Registering a key
    again replaces the previous binding and drops any cached instance.
    """

    def __init__(self) -> None:
        self._bindings: dict[Hashable, _Binding] = {}

    def bind(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._bindings[key] = _Binding(factory, shared=False)

    def singleton(self, key: Hashable, factory: Callable[[], Any]) -> None:
        if key in self._bindings:
            logger.debug("Replacing binding for %r", key)
        self._bindings[key] = _Binding(factory, shared=True)

    def instance(self, key: Hashable, value: Any) -> None:
        self._bindings[key] = _Binding(lambda: value, shared=True, instance=value)

    def bound(self, key: Hashable) -> bool:
        return key in self._bindings

    def resolved(self, key: Hashable) -> bool:
        """True when a shared binding has already been built."""
        binding = self._bindings.get(key)
        return binding is not None and binding.instance is not _UNSET

    def make(self, key: Hashable) -> Any:
        """Resolve `key`.

        Raises:
            BindingResolutionError: If nothing is bound to `key`.
        """
        try:
            binding = self._bindings[key]
        except KeyError:
            raise BindingResolutionError(key) from None

        if not binding.shared:
            return binding.factory()
        if binding.instance is _UNSET:
            binding.instance = binding.factory()
        return binding.instance
