from __future__ import annotations

import unittest

from pngme.chunk_type import ChunkType
from pngme.errors import InvalidChunkType


class ChunkTypeTests(unittest.TestCase):
    def test_from_bytes(self):
        ct = ChunkType.from_bytes(bytes([82, 117, 83, 116]))
        self.assertEqual(bytes(ct), b"RuSt")
        self.assertEqual(ct.raw, b"RuSt")

    def test_from_string(self):
        self.assertEqual(ChunkType.from_string("RuSt"), ChunkType.from_bytes(b"RuSt"))
        self.assertEqual(str(ChunkType.from_string("RuSt")), "RuSt")

    def test_critical(self):
        self.assertTrue(ChunkType.from_string("RuSt").is_critical())
        self.assertTrue(ChunkType.from_string("RuST").is_critical())
        self.assertFalse(ChunkType.from_string("ruSt").is_critical())
        self.assertFalse(ChunkType.from_string("ruST").is_critical())

    def test_public(self):
        self.assertTrue(ChunkType.from_string("RUSt").is_public())
        # lowercase second letter marks a private chunk
        self.assertFalse(ChunkType.from_string("RuSt").is_public())

    def test_safe_to_copy(self):
        self.assertTrue(ChunkType.from_string("RuSt").is_safe_to_copy())
        self.assertFalse(ChunkType.from_string("RuST").is_safe_to_copy())

    def test_reserved_bit(self):
        ct = ChunkType.from_string("RuSt")
        self.assertTrue(ct.is_reserved_bit_valid())
        self.assertTrue(ct.is_valid())

    def test_reserved_bit_set_is_constructible_but_invalid(self):
        ct = ChunkType.from_string("Rust")
        self.assertFalse(ct.is_reserved_bit_valid())
        self.assertFalse(ct.is_valid())

    def test_standard_types(self):
        ihdr = ChunkType.from_string("IHDR")
        self.assertTrue(ihdr.is_critical() and ihdr.is_public() and ihdr.is_valid())
        self.assertFalse(ihdr.is_safe_to_copy())
        text = ChunkType.from_string("tEXt")
        self.assertFalse(text.is_critical())
        self.assertTrue(text.is_safe_to_copy())

    def test_invalid_characters(self):
        for s in ("Ru5T", "Ru1t", "R st", "Ruét", "Ru@t", "Ru[t"):
            with self.assertRaises(InvalidChunkType, msg=s):
                ChunkType.from_string(s)
        with self.assertRaises(InvalidChunkType):
            ChunkType.from_bytes(b"Ru\x00t")
        with self.assertRaises(InvalidChunkType):
            ChunkType.from_bytes(b"Ru\xd3t")

    def test_invalid_length(self):
        for s in ("", "Rus", "RuStY"):
            with self.assertRaises(InvalidChunkType):
                ChunkType.from_string(s)
        with self.assertRaises(InvalidChunkType):
            ChunkType.from_bytes(b"RuS")

    def test_length_and_character_errors_differ(self):
        with self.assertRaises(InvalidChunkType) as length_err:
            ChunkType.from_string("RuStY")
        with self.assertRaises(InvalidChunkType) as char_err:
            ChunkType.from_string("Ru5T")
        self.assertIn("length", str(length_err.exception))
        self.assertIn("character", str(char_err.exception))

    def test_equality_is_case_sensitive(self):
        self.assertNotEqual(ChunkType.from_string("RuST"), ChunkType.from_string("rust"))
        self.assertEqual(ChunkType.from_string("RuST"), ChunkType.from_string("RuST"))
        self.assertEqual(len({ChunkType.from_string("RuST"), ChunkType.from_bytes(b"RuST")}), 1)

    def test_immutable(self):
        ct = ChunkType.from_string("RuST")
        with self.assertRaises(AttributeError):
            ct.raw = b"IEND"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
