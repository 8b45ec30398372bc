"""Registration of primitive families from registry configs.

`register_config` walks the entries of a config in order. Each entry's
primitive name is resolved to a `PrimitiveFamily`, then the registry is asked
to register that family's key managers and, as a separate step, its keyset
wrapper. The first failure aborts the batch: entries before it stay
registered, entries after it are never attempted. Registry actions are
idempotent, so re-running the whole batch after fixing the bad entry is the
expected recovery.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import structlog

from .constants import STEP_KEY_MANAGER, STEP_WRAPPER
from .entry import ConfigError, KeyTypeEntry, RegistryConfig
from .families import PrimitiveFamily, normalize_primitive_name, parse_primitive_family
from .registry import PrimitiveRegistryProtocol, get_default_registry

log = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


class UnknownPrimitiveError(ConfigError):
    """Raised for primitive names outside the known families."""

    def __init__(self, name: str, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.name = name
        self.index = index


class RegistrationError(ConfigError):
    """Raised when a registry action fails; the delegate error is chained as __cause__."""

    def __init__(
        self,
        family: PrimitiveFamily,
        step: str,
        *,
        index: int | None = None,
        entry: KeyTypeEntry | None = None,
        cause: BaseException | None = None,
    ) -> None:
        where = f"entry[{index}] " if index is not None else ""
        super().__init__(f"{where}{family.value} {step} registration failed: {cause}")
        self.family = family
        self.step = step
        self.index = index
        self.entry = entry


def register_config(
    config: RegistryConfig | Iterable[KeyTypeEntry],
    *,
    registry: PrimitiveRegistryProtocol | None = None,
) -> None:
    """Register every entry of `config`, stopping at the first failure.

    Entries are not validated here; call `validate_entry` on programmatically
    built entries first. Only `primitive_name` drives registration: an entry's
    `type_url`, `key_manager_version` and `new_key_allowed` are informational
    and do not change what the registry installs for the family.
    """
    target = registry if registry is not None else get_default_registry()
    entries = config.entries if isinstance(config, RegistryConfig) else tuple(config)

    for index, entry in enumerate(entries):
        family = parse_primitive_family(entry.primitive_name)
        if family is None:
            raise UnknownPrimitiveError(
                entry.primitive_name,
                f"A non-standard primitive '{entry.primitive_name}' "
                f"'{normalize_primitive_name(entry.primitive_name)}', "
                "register it directly with the registry's register_key_manager_instance() "
                "and register_primitive_wrapper().",
                index=index,
            )

        log.debug(
            "config.entry.register",
            index=index,
            family=family.value,
            primitive_name=entry.primitive_name,
            type_url=entry.type_url,
        )
        _run_step(target, family, STEP_KEY_MANAGER, index=index, entry=entry)
        _run_step(target, family, STEP_WRAPPER, index=index, entry=entry)

    log.debug("config.register.complete", entries=len(entries))


def register_wrapper(
    primitive_name: str,
    *,
    registry: PrimitiveRegistryProtocol | None = None,
) -> None:
    """Register only the keyset wrapper for a known primitive name."""
    target = registry if registry is not None else get_default_registry()
    family = parse_primitive_family(primitive_name)
    if family is None:
        raise UnknownPrimitiveError(
            primitive_name,
            f"Cannot register primitive wrapper for non-standard primitive {primitive_name} "
            "(call register_primitive_wrapper() on the registry directly)",
        )
    _run_step(target, family, STEP_WRAPPER)


def _run_step(
    registry: PrimitiveRegistryProtocol,
    family: PrimitiveFamily,
    step: str,
    *,
    index: int | None = None,
    entry: KeyTypeEntry | None = None,
) -> None:
    action = registry.register_key_manager if step == STEP_KEY_MANAGER else registry.register_wrapper
    try:
        action(family)
    except Exception as exc:
        raise RegistrationError(family, step, index=index, entry=entry, cause=exc) from exc
