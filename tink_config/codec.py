"""Registry config document encoding/decoding."""

from __future__ import annotations

import json
from typing import Any

from .entry import EntryValidationError, RegistryConfig, parse_key_type_entry
from .utils import canonical_json_bytes

try:
    import cbor2
except Exception:  # pragma: no cover - optional dependency
    cbor2 = None


class CodecError(ValueError):
    """Raised on encoding/decoding failures."""


def has_cbor_support() -> bool:
    return cbor2 is not None


def decode_json(data: bytes | str) -> dict[str, Any]:
    try:
        if isinstance(data, bytes):
            decoded = json.loads(data.decode("utf-8"))
        else:
            decoded = json.loads(data)
    except Exception as exc:
        raise CodecError(f"invalid JSON document: {exc}") from exc

    if not isinstance(decoded, dict):
        raise CodecError("decoded JSON must be an object")
    return decoded


def decode_cbor(data: bytes) -> dict[str, Any]:
    if cbor2 is None:
        raise CodecError("CBOR support unavailable: install 'cbor2'")
    try:
        decoded = cbor2.loads(data)
    except Exception as exc:
        raise CodecError(f"invalid CBOR document: {exc}") from exc
    if not isinstance(decoded, dict):
        raise CodecError("decoded CBOR must be a map/object")
    return decoded


def encode_cbor(document: dict[str, Any]) -> bytes:
    if cbor2 is None:
        raise CodecError("CBOR support unavailable: install 'cbor2'")
    try:
        return cbor2.dumps(document, canonical=True)
    except Exception as exc:
        raise CodecError(f"failed to encode CBOR: {exc}") from exc


def registry_config_from_dict(document: dict[str, Any]) -> RegistryConfig:
    """Build a RegistryConfig from a decoded document.

    Entries are read from `entry` (the RegistryConfig message field name) or
    `entries`.
    """
    config_name = document.get("config_name", "")
    if not isinstance(config_name, str):
        raise CodecError("config_name must be a string")

    raw_entries = document.get("entry", document.get("entries", []))
    if not isinstance(raw_entries, list):
        raise CodecError("entry must be an array")

    entries = []
    for index, raw in enumerate(raw_entries):
        try:
            entries.append(parse_key_type_entry(raw))
        except EntryValidationError as exc:
            raise CodecError(f"entry[{index}]: {exc}") from exc
    return RegistryConfig(entries=tuple(entries), config_name=config_name)


def decode_registry_config(data: bytes | str, encoding: str = "json") -> RegistryConfig:
    if encoding == "json":
        return registry_config_from_dict(decode_json(data))
    if encoding == "cbor":
        if isinstance(data, str):
            raise CodecError("CBOR documents must be bytes")
        return registry_config_from_dict(decode_cbor(data))
    raise CodecError(f"unsupported encoding: {encoding}")


def encode_registry_config(config: RegistryConfig, encoding: str = "json") -> bytes:
    document = config.to_dict()
    if encoding == "json":
        return canonical_json_bytes(document)
    if encoding == "cbor":
        return encode_cbor(document)
    raise CodecError(f"unsupported encoding: {encoding}")


def detect_encoding_from_path(path: str) -> str:
    if path.lower().endswith(".cbor"):
        return "cbor"
    return "json"
