from __future__ import annotations

from dataclasses import dataclass

from .constants import PROPERTY_BIT
from .errors import InvalidChunkType


def _is_type_byte(b: int) -> bool:
    # A-Z or a-z (65-90, 97-122)
    return 65 <= b <= 90 or 97 <= b <= 122


@dataclass(frozen=True, order=True)
class ChunkType:
    """Four-letter chunk type code.

    The letters are compared as raw bytes (``RuST`` != ``rust``). Bit 5 of
    each byte (the case bit) encodes, in order: ancillary, private,
    reserved and safe-to-copy.
    """

    raw: bytes

    def __post_init__(self):
        raw = self.raw
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise InvalidChunkType(f"Chunk type must be bytes, got {type(raw).__name__}")
        raw = bytes(raw)
        if len(raw) != 4:
            raise InvalidChunkType(f"Bad chunk type length: {len(raw)} (expected 4)")
        for b in raw:
            if not _is_type_byte(b):
                raise InvalidChunkType(f"Bad chunk type byte: {b} ({b:#04x})")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "ChunkType":
        return cls(raw)

    @classmethod
    def from_string(cls, s: str) -> "ChunkType":
        if not isinstance(s, str):
            raise InvalidChunkType(f"Chunk type must be a string, got {type(s).__name__}")
        if len(s) != 4:
            raise InvalidChunkType(f"Bad chunk type length: {len(s)} (expected 4)")
        for ch in s:
            if not _is_type_byte(ord(ch)):
                raise InvalidChunkType(f"Bad chunk type character: {ch!r}")
        return cls(s.encode("ascii"))

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.raw.decode("ascii")

    def _bit_clear(self, index: int) -> bool:
        return self.raw[index] & PROPERTY_BIT == 0

    def is_critical(self) -> bool:
        return self._bit_clear(0)

    def is_public(self) -> bool:
        return self._bit_clear(1)

    def is_reserved_bit_valid(self) -> bool:
        return self._bit_clear(2)

    def is_safe_to_copy(self) -> bool:
        return not self._bit_clear(3)

    def is_valid(self) -> bool:
        """Conformance check; only the reserved bit can make a type non-conformant."""
        return self.is_reserved_bit_valid()
