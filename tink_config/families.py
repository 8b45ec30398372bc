"""Primitive families recognized by registry configs."""

from __future__ import annotations

import enum


class PrimitiveFamily(enum.Enum):
    """Closed set of primitive kinds that can be registered from a config."""

    MAC = "mac"
    AEAD = "aead"
    DETERMINISTIC_AEAD = "deterministic-aead"
    HYBRID = "hybrid"
    SIGNATURE = "signature"
    STREAMING_AEAD = "streaming-aead"


# Encrypt/decrypt and sign/verify pairs share one registration action.
PRIMITIVE_NAME_ALIASES: dict[str, PrimitiveFamily] = {
    "mac": PrimitiveFamily.MAC,
    "aead": PrimitiveFamily.AEAD,
    "deterministicaead": PrimitiveFamily.DETERMINISTIC_AEAD,
    "hybridencrypt": PrimitiveFamily.HYBRID,
    "hybriddecrypt": PrimitiveFamily.HYBRID,
    "publickeysign": PrimitiveFamily.SIGNATURE,
    "publickeyverify": PrimitiveFamily.SIGNATURE,
    "streamingaead": PrimitiveFamily.STREAMING_AEAD,
}


def normalize_primitive_name(name: str) -> str:
    """Lowercase a primitive name and drop `-`, so `deterministic-aead` matches `DeterministicAead`."""
    if not isinstance(name, str):
        return ""
    return name.lower().replace("-", "")


def parse_primitive_family(name: str) -> PrimitiveFamily | None:
    """Resolve a raw primitive name to its family, or None when unknown."""
    return PRIMITIVE_NAME_ALIASES.get(normalize_primitive_name(name))


def primitive_names_for(family: PrimitiveFamily) -> list[str]:
    return sorted(name for name, value in PRIMITIVE_NAME_ALIASES.items() if value is family)
