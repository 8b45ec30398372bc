from __future__ import annotations

import unittest

from tink_config.families import (
    PRIMITIVE_NAME_ALIASES,
    PrimitiveFamily,
    normalize_primitive_name,
    parse_primitive_family,
    primitive_names_for,
)


class PrimitiveFamilyTests(unittest.TestCase):
    def test_known_names_resolve_case_insensitively(self) -> None:
        cases = {
            "MAC": PrimitiveFamily.MAC,
            "Aead": PrimitiveFamily.AEAD,
            "DeterministicAead": PrimitiveFamily.DETERMINISTIC_AEAD,
            "HybridEncrypt": PrimitiveFamily.HYBRID,
            "hybriddecrypt": PrimitiveFamily.HYBRID,
            "PublicKeySign": PrimitiveFamily.SIGNATURE,
            "PUBLICKEYVERIFY": PrimitiveFamily.SIGNATURE,
            "StreamingAead": PrimitiveFamily.STREAMING_AEAD,
        }
        for name, family in cases.items():
            with self.subTest(name=name):
                self.assertIs(parse_primitive_family(name), family)

    def test_hyphens_are_ignored(self) -> None:
        self.assertIs(parse_primitive_family("deterministic-aead"), PrimitiveFamily.DETERMINISTIC_AEAD)
        self.assertIs(parse_primitive_family("Public-Key-Sign"), PrimitiveFamily.SIGNATURE)
        self.assertEqual(normalize_primitive_name("Hybrid-Encrypt"), "hybridencrypt")

    def test_other_separators_and_whitespace_are_not_ignored(self) -> None:
        for name in (" m_a-c ", "mac ", "Hybrid Encrypt", "public_key_sign"):
            with self.subTest(name=name):
                self.assertIsNone(parse_primitive_family(name))

    def test_unknown_names(self) -> None:
        self.assertIsNone(parse_primitive_family("CustomMac"))
        self.assertIsNone(parse_primitive_family(""))
        self.assertIsNone(parse_primitive_family("signature"))

    def test_every_family_has_an_alias(self) -> None:
        self.assertEqual(set(PRIMITIVE_NAME_ALIASES.values()), set(PrimitiveFamily))
        self.assertEqual(primitive_names_for(PrimitiveFamily.HYBRID), ["hybriddecrypt", "hybridencrypt"])


if __name__ == "__main__":
    unittest.main()
