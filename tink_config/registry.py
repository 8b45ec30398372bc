"""Primitive registry: key managers by type URL and keyset wrappers by family."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Protocol

from .families import PrimitiveFamily
from .key_managers import KeyManager, builtin_key_managers
from .utils import canonical_json_bytes, sha256_prefixed


class RegistryError(ValueError):
    """Raised when the registry rejects a registration or lookup."""


class PrimitiveRegistryProtocol(Protocol):
    """Registration actions a registry exposes for each primitive family."""

    def register_key_manager(self, family: PrimitiveFamily) -> None:
        """Register the family's key managers. Must be idempotent."""

    def register_wrapper(self, family: PrimitiveFamily) -> None:
        """Register the family's keyset wrapper. Must be idempotent."""


@dataclass(frozen=True, slots=True)
class PrimitiveSetEntry:
    """One key of a keyset, already loaded into a primitive."""

    key_id: int
    primitive: Any
    primary: bool = False


@dataclass(frozen=True, slots=True)
class WrappedPrimitive:
    """A keyset usable as a single primitive."""

    family: PrimitiveFamily
    primary: Any
    entries: tuple[PrimitiveSetEntry, ...] = field(default=())

    def all(self) -> list[Any]:
        return [entry.primitive for entry in self.entries]

    def by_key_id(self, key_id: int) -> Any:
        for entry in self.entries:
            if entry.key_id == key_id:
                return entry.primitive
        raise RegistryError(f"no primitive for key id {key_id}")


class PrimitiveWrapper:
    """Selects the primary key of a primitive set."""

    def __init__(self, family: PrimitiveFamily) -> None:
        self.family = family

    def wrap(self, primitive_set: list[PrimitiveSetEntry]) -> WrappedPrimitive:
        if not primitive_set:
            raise RegistryError("primitive set must not be empty")
        primaries = [entry for entry in primitive_set if entry.primary]
        if len(primaries) != 1:
            raise RegistryError(f"primitive set must have exactly one primary, found {len(primaries)}")
        return WrappedPrimitive(
            family=self.family,
            primary=primaries[0].primitive,
            entries=tuple(primitive_set),
        )


class InMemoryPrimitiveRegistry:
    """Thread-safe, idempotent registry of key managers and wrappers."""

    def __init__(self) -> None:
        self._managers: dict[str, KeyManager] = {}
        self._new_key_allowed: dict[str, bool] = {}
        self._wrappers: dict[PrimitiveFamily, PrimitiveWrapper] = {}
        self._lock = threading.Lock()

    def register_key_manager(self, family: PrimitiveFamily) -> None:
        managers = builtin_key_managers(family)
        if not managers:
            raise RegistryError(f"no built-in key managers for {family.value}")
        with self._lock:
            for manager in managers:
                self._check_compatible(manager)
            for manager in managers:
                self._managers.setdefault(manager.type_url, manager)
                self._new_key_allowed.setdefault(manager.type_url, True)

    def register_key_manager_instance(self, manager: KeyManager, *, new_key_allowed: bool = True) -> None:
        """Register one key manager directly, e.g. for a custom primitive."""
        if not manager.type_url:
            raise RegistryError("key manager type_url must be non-empty")
        with self._lock:
            self._check_compatible(manager)
            self._managers.setdefault(manager.type_url, manager)
            self._new_key_allowed[manager.type_url] = new_key_allowed

    def register_wrapper(self, family: PrimitiveFamily) -> None:
        with self._lock:
            self._wrappers.setdefault(family, PrimitiveWrapper(family))

    def register_primitive_wrapper(self, wrapper: PrimitiveWrapper) -> None:
        """Register a wrapper instance directly, e.g. for a custom primitive."""
        with self._lock:
            existing = self._wrappers.get(wrapper.family)
            if existing is not None and type(existing) is not type(wrapper):
                raise RegistryError(
                    f"wrapper for {wrapper.family.value} already registered as {type(existing).__name__}"
                )
            self._wrappers.setdefault(wrapper.family, wrapper)

    def get_key_manager(self, type_url: str) -> KeyManager:
        with self._lock:
            manager = self._managers.get(type_url)
        if manager is None:
            raise RegistryError(f"no key manager registered for {type_url}")
        return manager

    def get_primitive(self, type_url: str, key_material: bytes) -> Any:
        return self.get_key_manager(type_url).primitive(key_material)

    def is_new_key_allowed(self, type_url: str) -> bool:
        with self._lock:
            if type_url not in self._new_key_allowed:
                raise RegistryError(f"no key manager registered for {type_url}")
            return self._new_key_allowed[type_url]

    def has_wrapper(self, family: PrimitiveFamily) -> bool:
        with self._lock:
            return family in self._wrappers

    def wrap(self, family: PrimitiveFamily, primitive_set: list[PrimitiveSetEntry]) -> WrappedPrimitive:
        with self._lock:
            wrapper = self._wrappers.get(family)
        if wrapper is None:
            raise RegistryError(f"no primitive wrapper registered for {family.value}")
        return wrapper.wrap(primitive_set)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "key_managers": {
                    url: {
                        "family": manager.family.value,
                        "version": manager.version,
                        "new_key_allowed": self._new_key_allowed[url],
                    }
                    for url, manager in sorted(self._managers.items())
                },
                "wrappers": sorted(family.value for family in self._wrappers),
            }

    def snapshot_hash(self) -> str:
        return sha256_prefixed(canonical_json_bytes(self.snapshot()))

    def _check_compatible(self, manager: KeyManager) -> None:
        existing = self._managers.get(manager.type_url)
        if existing is None:
            return
        if existing.family is not manager.family or existing.version != manager.version:
            raise RegistryError(
                f"{manager.type_url} already registered for {existing.family.value} v{existing.version}"
            )


_default_registry = InMemoryPrimitiveRegistry()
_default_lock = threading.Lock()


def get_default_registry() -> InMemoryPrimitiveRegistry:
    with _default_lock:
        return _default_registry


def reset_default_registry() -> InMemoryPrimitiveRegistry:
    """Replace the process-wide registry with an empty one and return it."""
    global _default_registry
    with _default_lock:
        _default_registry = InMemoryPrimitiveRegistry()
        return _default_registry
