from __future__ import annotations

import os
import unittest

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from tink_config.families import PrimitiveFamily
from tink_config.key_managers import BUILTIN_KEY_MANAGERS, HmacMac, KeyManagerError, builtin_key_managers


def _manager(family: PrimitiveFamily, key_proto_name: str):
    for manager in builtin_key_managers(family):
        if manager.type_url.endswith("." + key_proto_name):
            return manager
    raise AssertionError(f"no manager for {key_proto_name}")


class KeyManagerTests(unittest.TestCase):
    def test_every_family_has_managers(self) -> None:
        self.assertEqual(set(BUILTIN_KEY_MANAGERS), set(PrimitiveFamily))
        for family, managers in BUILTIN_KEY_MANAGERS.items():
            for manager in managers:
                self.assertIs(manager.family, family)
                self.assertTrue(manager.type_url.startswith("type.googleapis.com/google.crypto.tink."))

    def test_aes_gcm_primitive_roundtrip(self) -> None:
        aead = _manager(PrimitiveFamily.AEAD, "AesGcmKey").primitive(os.urandom(32))
        nonce = os.urandom(12)
        ciphertext = aead.encrypt(nonce, b"hello", b"ad")
        self.assertEqual(aead.decrypt(nonce, ciphertext, b"ad"), b"hello")

    def test_hmac_compute_and_verify(self) -> None:
        mac = _manager(PrimitiveFamily.MAC, "HmacKey").primitive(os.urandom(32))
        self.assertIsInstance(mac, HmacMac)
        tag = mac.compute_mac(b"data")
        mac.verify_mac(tag, b"data")
        with self.assertRaises(KeyManagerError):
            mac.verify_mac(tag, b"other")

    def test_ed25519_private_key_loads(self) -> None:
        raw = os.urandom(32)
        key = _manager(PrimitiveFamily.SIGNATURE, "Ed25519PrivateKey").primitive(raw)
        self.assertIsInstance(key, Ed25519PrivateKey)

    def test_wrong_key_size_rejected(self) -> None:
        with self.assertRaises(KeyManagerError):
            _manager(PrimitiveFamily.DETERMINISTIC_AEAD, "AesSivKey").primitive(os.urandom(32))
        with self.assertRaises(KeyManagerError):
            _manager(PrimitiveFamily.AEAD, "ChaCha20Poly1305Key").primitive("x" * 32)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
