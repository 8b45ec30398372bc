"""Key type entries: construction and validation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .constants import TYPE_URL_PREFIX


class ConfigError(ValueError):
    """Base class for registry config failures."""


class EntryValidationError(ConfigError):
    """Raised when a key type entry is malformed."""


class MissingFieldError(EntryValidationError):
    """Raised when a required key type entry field is empty."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing {field_name}.")
        self.field = field_name


@dataclass(frozen=True, slots=True)
class KeyTypeEntry:
    """Describes one registrable key type."""

    catalogue_name: str
    primitive_name: str
    type_url: str
    key_manager_version: int = 0
    new_key_allowed: bool = True

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_key_type_entry(
    catalogue_name: str,
    primitive_name: str,
    key_proto_name: str,
    key_manager_version: int = 0,
    new_key_allowed: bool = True,
) -> KeyTypeEntry:
    """Build an entry whose type URL is the Tink namespace plus the key proto name."""
    return KeyTypeEntry(
        catalogue_name=catalogue_name,
        primitive_name=primitive_name,
        type_url=TYPE_URL_PREFIX + key_proto_name,
        key_manager_version=key_manager_version,
        new_key_allowed=new_key_allowed,
    )


def validate_entry(entry: KeyTypeEntry) -> None:
    """Check required fields in order: type_url, primitive_name, catalogue_name.

    Only the first missing field is reported. A valid entry may still name a
    primitive that registration does not know about.
    """
    if not entry.type_url:
        raise MissingFieldError("type_url")
    if not entry.primitive_name:
        raise MissingFieldError("primitive_name")
    if not entry.catalogue_name:
        raise MissingFieldError("catalogue_name")
    if entry.key_manager_version < 0:
        raise EntryValidationError("key_manager_version must be non-negative")


def parse_key_type_entry(raw: dict[str, Any]) -> KeyTypeEntry:
    if not isinstance(raw, dict):
        raise EntryValidationError("key type entry must be an object")

    values: dict[str, Any] = {}
    for key in ("catalogue_name", "primitive_name", "type_url"):
        value = raw.get(key, "")
        if not isinstance(value, str):
            raise EntryValidationError(f"{key} must be a string")
        values[key] = value

    version = raw.get("key_manager_version", 0)
    if isinstance(version, bool) or not isinstance(version, int):
        raise EntryValidationError("key_manager_version must be an integer")
    if version < 0:
        raise EntryValidationError("key_manager_version must be non-negative")

    new_key_allowed = raw.get("new_key_allowed", True)
    if not isinstance(new_key_allowed, bool):
        raise EntryValidationError("new_key_allowed must be a boolean")

    return KeyTypeEntry(
        key_manager_version=version,
        new_key_allowed=new_key_allowed,
        **values,
    )


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Ordered set of key type entries registered together."""

    entries: tuple[KeyTypeEntry, ...] = ()
    config_name: str = ""

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "config_name": self.config_name,
            "entry": [entry.to_dict() for entry in self.entries],
        }
