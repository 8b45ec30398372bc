"""Primitive registration from declarative registry configs."""

import logging

from .codec import CodecError, decode_registry_config, encode_registry_config
from .config import RegistrationError, UnknownPrimitiveError, register_config, register_wrapper
from .entry import (
    ConfigError,
    EntryValidationError,
    KeyTypeEntry,
    MissingFieldError,
    RegistryConfig,
    build_key_type_entry,
    parse_key_type_entry,
    validate_entry,
)
from .families import PrimitiveFamily, normalize_primitive_name, parse_primitive_family
from .key_managers import KeyManager, KeyManagerError
from .registry import (
    InMemoryPrimitiveRegistry,
    PrimitiveRegistryProtocol,
    PrimitiveSetEntry,
    PrimitiveWrapper,
    RegistryError,
    WrappedPrimitive,
    get_default_registry,
    reset_default_registry,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CodecError",
    "decode_registry_config",
    "encode_registry_config",
    "RegistrationError",
    "UnknownPrimitiveError",
    "register_config",
    "register_wrapper",
    "ConfigError",
    "EntryValidationError",
    "KeyTypeEntry",
    "MissingFieldError",
    "RegistryConfig",
    "build_key_type_entry",
    "parse_key_type_entry",
    "validate_entry",
    "PrimitiveFamily",
    "normalize_primitive_name",
    "parse_primitive_family",
    "KeyManager",
    "KeyManagerError",
    "InMemoryPrimitiveRegistry",
    "PrimitiveRegistryProtocol",
    "PrimitiveSetEntry",
    "PrimitiveWrapper",
    "RegistryError",
    "WrappedPrimitive",
    "get_default_registry",
    "reset_default_registry",
]

__version__ = "0.1.0"
