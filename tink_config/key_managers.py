"""Built-in key managers backed by `cryptography` primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, AESGCMSIV, AESSIV, ChaCha20Poly1305

from .constants import TYPE_URL_PREFIX
from .families import PrimitiveFamily


class KeyManagerError(ValueError):
    """Raised when key material cannot be loaded into a primitive."""


@dataclass(frozen=True, slots=True)
class KeyManager:
    """Loads raw key material of one key type into a primitive object."""

    type_url: str
    family: PrimitiveFamily
    loader: Callable[[bytes], Any] = field(compare=False)
    key_sizes: frozenset[int] = frozenset()
    version: int = 0

    def primitive(self, key_material: bytes) -> Any:
        if not isinstance(key_material, bytes):
            raise KeyManagerError(f"{self.type_url}: key material must be bytes")
        if self.key_sizes and len(key_material) not in self.key_sizes:
            raise KeyManagerError(
                f"{self.type_url}: invalid key size {len(key_material)}, expected one of {sorted(self.key_sizes)}"
            )
        try:
            return self.loader(key_material)
        except ValueError as exc:
            raise KeyManagerError(f"{self.type_url}: {exc}") from exc


class HmacMac:
    """MAC primitive over HMAC-SHA256."""

    def __init__(self, key: bytes) -> None:
        self._key = key

    def compute_mac(self, data: bytes) -> bytes:
        h = hmac.HMAC(self._key, hashes.SHA256())
        h.update(data)
        return h.finalize()

    def verify_mac(self, tag: bytes, data: bytes) -> None:
        h = hmac.HMAC(self._key, hashes.SHA256())
        h.update(data)
        try:
            h.verify(tag)
        except InvalidSignature as exc:
            raise KeyManagerError("MAC verification failed") from exc


def _type_url(key_proto_name: str) -> str:
    return TYPE_URL_PREFIX + key_proto_name


BUILTIN_KEY_MANAGERS: dict[PrimitiveFamily, tuple[KeyManager, ...]] = {
    PrimitiveFamily.MAC: (
        KeyManager(_type_url("HmacKey"), PrimitiveFamily.MAC, HmacMac, frozenset({16, 32, 64})),
    ),
    PrimitiveFamily.AEAD: (
        KeyManager(_type_url("AesGcmKey"), PrimitiveFamily.AEAD, AESGCM, frozenset({16, 32})),
        KeyManager(_type_url("AesGcmSivKey"), PrimitiveFamily.AEAD, AESGCMSIV, frozenset({16, 32})),
        KeyManager(_type_url("ChaCha20Poly1305Key"), PrimitiveFamily.AEAD, ChaCha20Poly1305, frozenset({32})),
    ),
    PrimitiveFamily.DETERMINISTIC_AEAD: (
        KeyManager(_type_url("AesSivKey"), PrimitiveFamily.DETERMINISTIC_AEAD, AESSIV, frozenset({64})),
    ),
    PrimitiveFamily.HYBRID: (
        KeyManager(
            _type_url("EciesX25519PrivateKey"),
            PrimitiveFamily.HYBRID,
            X25519PrivateKey.from_private_bytes,
            frozenset({32}),
        ),
        KeyManager(
            _type_url("EciesX25519PublicKey"),
            PrimitiveFamily.HYBRID,
            X25519PublicKey.from_public_bytes,
            frozenset({32}),
        ),
    ),
    PrimitiveFamily.SIGNATURE: (
        KeyManager(
            _type_url("Ed25519PrivateKey"),
            PrimitiveFamily.SIGNATURE,
            Ed25519PrivateKey.from_private_bytes,
            frozenset({32}),
        ),
        KeyManager(
            _type_url("Ed25519PublicKey"),
            PrimitiveFamily.SIGNATURE,
            Ed25519PublicKey.from_public_bytes,
            frozenset({32}),
        ),
    ),
    PrimitiveFamily.STREAMING_AEAD: (
        # Segment cipher only; segmentation belongs to the streaming layer.
        KeyManager(_type_url("AesGcmHkdfStreamingKey"), PrimitiveFamily.STREAMING_AEAD, AESGCM, frozenset({16, 32})),
    ),
}


def builtin_key_managers(family: PrimitiveFamily) -> tuple[KeyManager, ...]:
    return BUILTIN_KEY_MANAGERS.get(family, ())
