from __future__ import annotations

import struct
import unittest
import zlib

from pngme import ops
from pngme.chunk import Chunk
from pngme.chunk_type import ChunkType
from pngme.constants import PNG_SIGNATURE
from pngme.encryption import _HAS_CRYPTO, EncryptionParams
from pngme.errors import (
    ChunkNotFoundError,
    DecryptionError,
    EncodingError,
    InvalidChunkType,
    ProtectedChunkError,
)
from pngme.png import Png


# Cheap Argon2id settings so the suite stays fast
FAST_PARAMS = EncryptionParams(time_cost=1, memory_cost_kib=64, parallelism=1)


def _raw_chunk(type_bytes: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(type_bytes + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + type_bytes + payload + struct.pack(">I", crc)


def _minimal_png() -> Png:
    ihdr = struct.pack(">IIBBBBB", 1, 1, 8, 0, 0, 0, 0)
    return Png.parse(PNG_SIGNATURE + _raw_chunk(b"IHDR", ihdr) + _raw_chunk(b"IEND", b""))


class OperationTests(unittest.TestCase):
    def test_encode_then_decode(self):
        png = ops.encode(_minimal_png(), "RuST", "hello")
        self.assertEqual(ops.decode(png, "RuST"), "hello")

    def test_end_to_end_through_bytes(self):
        png = ops.encode(_minimal_png(), "teSt", bytes([0x68, 0x69]))
        reparsed = Png.parse(png.pack())
        self.assertEqual(ops.decode(reparsed, "teSt"), "hi")

    def test_encode_returns_same_stream(self):
        png = _minimal_png()
        self.assertIs(ops.encode(png, "RuSt", "x"), png)
        self.assertEqual(str(png.chunks[-2].chunk_type), "RuSt")

    def test_decode_is_case_sensitive(self):
        png = ops.encode(_minimal_png(), "RuST", "hello")
        with self.assertRaises(ChunkNotFoundError):
            ops.decode(png, "rust")

    def test_remove_then_decode(self):
        png = ops.encode(_minimal_png(), "RuST", "hello")
        png = ops.remove(png, "RuST")
        with self.assertRaises(ChunkNotFoundError):
            ops.decode(png, "RuST")
        self.assertEqual(png.pack(), _minimal_png().pack())

    def test_remove_missing(self):
        with self.assertRaises(ChunkNotFoundError):
            ops.remove(_minimal_png(), "RuST")

    def test_remove_protected(self):
        with self.assertRaises(ProtectedChunkError):
            ops.remove(_minimal_png(), "IEND")
        with self.assertRaises(ProtectedChunkError):
            ops.remove(_minimal_png(), "IHDR")

    def test_invalid_type_argument(self):
        png = _minimal_png()
        with self.assertRaises(InvalidChunkType):
            ops.encode(png, "Ru5T", "hello")
        with self.assertRaises(InvalidChunkType):
            ops.decode(png, "RuSTy")
        with self.assertRaises(InvalidChunkType):
            ops.remove(png, "")
        self.assertEqual(len(png), 2)

    def test_encode_rejects_unencodable_message(self):
        png = _minimal_png()
        # argv bytes that are not UTF-8 arrive as lone surrogates
        with self.assertRaises(EncodingError):
            ops.encode(png, "RuST", "\udcff\udcfe")
        self.assertEqual(len(png), 2)

    def test_decode_non_text_payload(self):
        png = _minimal_png()
        png.append_chunk(Chunk(ChunkType.from_string("RuST"), b"\xc3\x28"))
        with self.assertRaises(EncodingError):
            ops.decode(png, "RuST")

    def test_list_chunks(self):
        png = ops.encode(_minimal_png(), "RuST", "hello")
        summaries = ops.list_chunks(png)
        self.assertEqual([str(s.chunk_type) for s in summaries], ["IHDR", "RuST", "IEND"])
        self.assertEqual([s.length for s in summaries], [13, 5, 0])
        self.assertEqual(summaries[-1].crc, 0xAE426082)
        self.assertEqual(summaries[1].crc, png.chunks[1].crc)


@unittest.skipUnless(_HAS_CRYPTO, "argon2-cffi and PyCryptodomex are required")
class EncryptedOperationTests(unittest.TestCase):
    def test_roundtrip(self):
        png = ops.encode(_minimal_png(), "ruSt", "attack at dawn", password="pw", params=FAST_PARAMS)
        payload = png.chunk_by_type(ChunkType.from_string("ruSt")).payload
        self.assertNotIn(b"attack", payload)
        reparsed = Png.parse(png.pack())
        self.assertEqual(ops.decode(reparsed, "ruSt", password="pw"), "attack at dawn")

    def test_wrong_password(self):
        png = ops.encode(_minimal_png(), "ruSt", "secret", password="pw", params=FAST_PARAMS)
        with self.assertRaises(DecryptionError):
            ops.decode(png, "ruSt", password="nope")

    def test_password_on_plain_message(self):
        png = ops.encode(_minimal_png(), "ruSt", "plain")
        with self.assertRaises(DecryptionError):
            ops.decode(png, "ruSt", password="pw")


if __name__ == "__main__":
    unittest.main()
