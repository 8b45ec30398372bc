from __future__ import annotations

import os
import unittest

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from tink_config.families import PrimitiveFamily
from tink_config.key_managers import KeyManager
from tink_config.registry import InMemoryPrimitiveRegistry, PrimitiveSetEntry, PrimitiveWrapper, RegistryError

AES_GCM_URL = "type.googleapis.com/google.crypto.tink.AesGcmKey"


class InMemoryRegistryTests(unittest.TestCase):
    def test_register_key_manager_installs_family(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        registry.register_key_manager(PrimitiveFamily.AEAD)

        manager = registry.get_key_manager(AES_GCM_URL)
        self.assertIs(manager.family, PrimitiveFamily.AEAD)
        self.assertTrue(registry.is_new_key_allowed(AES_GCM_URL))
        self.assertIsInstance(registry.get_primitive(AES_GCM_URL, os.urandom(16)), AESGCM)

    def test_registration_is_idempotent(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        registry.register_key_manager(PrimitiveFamily.MAC)
        registry.register_wrapper(PrimitiveFamily.MAC)
        before = registry.snapshot_hash()
        registry.register_key_manager(PrimitiveFamily.MAC)
        registry.register_wrapper(PrimitiveFamily.MAC)
        self.assertEqual(before, registry.snapshot_hash())
        self.assertTrue(before.startswith("sha256:"))

    def test_lookup_of_unregistered_type_url_fails(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        with self.assertRaises(RegistryError):
            registry.get_key_manager(AES_GCM_URL)
        with self.assertRaises(RegistryError):
            registry.is_new_key_allowed(AES_GCM_URL)

    def test_custom_key_manager_and_conflict(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        custom = KeyManager("type.example.com/CustomMacKey", PrimitiveFamily.MAC, bytes, frozenset({8}))
        registry.register_key_manager_instance(custom, new_key_allowed=False)
        self.assertFalse(registry.is_new_key_allowed(custom.type_url))
        self.assertEqual(registry.get_primitive(custom.type_url, b"12345678"), b"12345678")

        clash = KeyManager(AES_GCM_URL, PrimitiveFamily.MAC, bytes)
        registry.register_key_manager_instance(clash)
        with self.assertRaises(RegistryError):
            registry.register_key_manager(PrimitiveFamily.AEAD)
        self.assertIs(registry.get_key_manager(AES_GCM_URL).family, PrimitiveFamily.MAC)

    def test_wrap_selects_primary(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        registry.register_wrapper(PrimitiveFamily.AEAD)
        wrapped = registry.wrap(
            PrimitiveFamily.AEAD,
            [
                PrimitiveSetEntry(key_id=1, primitive="old"),
                PrimitiveSetEntry(key_id=2, primitive="new", primary=True),
            ],
        )
        self.assertEqual(wrapped.primary, "new")
        self.assertEqual(wrapped.all(), ["old", "new"])
        self.assertEqual(wrapped.by_key_id(1), "old")
        with self.assertRaises(RegistryError):
            wrapped.by_key_id(9)

    def test_wrap_requires_registered_wrapper_and_single_primary(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        with self.assertRaises(RegistryError):
            registry.wrap(PrimitiveFamily.MAC, [PrimitiveSetEntry(1, "k", primary=True)])

        registry.register_wrapper(PrimitiveFamily.MAC)
        with self.assertRaises(RegistryError):
            registry.wrap(PrimitiveFamily.MAC, [])
        with self.assertRaises(RegistryError):
            registry.wrap(PrimitiveFamily.MAC, [PrimitiveSetEntry(1, "a"), PrimitiveSetEntry(2, "b")])

    def test_register_primitive_wrapper_rejects_other_wrapper_type(self) -> None:
        class ReversedWrapper(PrimitiveWrapper):
            pass

        registry = InMemoryPrimitiveRegistry()
        registry.register_primitive_wrapper(PrimitiveWrapper(PrimitiveFamily.HYBRID))
        registry.register_primitive_wrapper(PrimitiveWrapper(PrimitiveFamily.HYBRID))
        with self.assertRaises(RegistryError):
            registry.register_primitive_wrapper(ReversedWrapper(PrimitiveFamily.HYBRID))

    def test_snapshot_lists_managers_and_wrappers(self) -> None:
        registry = InMemoryPrimitiveRegistry()
        registry.register_key_manager(PrimitiveFamily.SIGNATURE)
        registry.register_wrapper(PrimitiveFamily.SIGNATURE)
        snapshot = registry.snapshot()
        self.assertEqual(snapshot["wrappers"], ["signature"])
        self.assertEqual(
            sorted(snapshot["key_managers"]),
            [
                "type.googleapis.com/google.crypto.tink.Ed25519PrivateKey",
                "type.googleapis.com/google.crypto.tink.Ed25519PublicKey",
            ],
        )


if __name__ == "__main__":
    unittest.main()
