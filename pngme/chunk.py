from __future__ import annotations

import struct
from typing import Tuple

from .chunk_type import ChunkType
from .constants import CHUNK_OVERHEAD, MAX_CHUNK_LENGTH, TEXT_ENCODING
from .crc import chunk_crc
from .errors import (
    ChunkLengthError,
    CrcMismatch,
    EncodingError,
    InvalidChunkType,
    UnexpectedEof,
)


# Chunk framing (big-endian)
#  - length u32 (payload bytes only)
#  - type[4]
#  - payload[length]
#  - crc u32 over type || payload
_CHUNK_HDR_STRUCT = struct.Struct(">I4s")
_CHUNK_CRC_STRUCT = struct.Struct(">I")


class Chunk:
    """One length-prefixed, typed, CRC-protected PNG chunk.

    Instances are immutable; the CRC is computed on construction.
    """

    __slots__ = ("_chunk_type", "_payload", "_crc")

    def __init__(self, chunk_type: ChunkType, payload: bytes):
        payload = bytes(payload)
        object.__setattr__(self, "_chunk_type", chunk_type)
        object.__setattr__(self, "_payload", payload)
        object.__setattr__(self, "_crc", chunk_crc(chunk_type.raw, payload))

    def __setattr__(self, name, value):
        raise AttributeError(f"Chunk is immutable; cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Chunk is immutable; cannot delete {name!r}")

    @property
    def chunk_type(self) -> ChunkType:
        return self._chunk_type

    @property
    def payload(self) -> bytes:
        return self._payload

    @property
    def length(self) -> int:
        return len(self._payload)

    @property
    def crc(self) -> int:
        return self._crc

    def payload_as_text(self) -> str:
        try:
            return self._payload.decode(TEXT_ENCODING)
        except UnicodeDecodeError as exc:
            raise EncodingError(f"Chunk {self._chunk_type} payload is not valid {TEXT_ENCODING}: {exc.reason}") from exc

    def pack(self) -> bytes:
        return (
            _CHUNK_HDR_STRUCT.pack(self.length, self._chunk_type.raw)
            + self._payload
            + _CHUNK_CRC_STRUCT.pack(self._crc)
        )

    def __bytes__(self) -> bytes:
        return self.pack()

    @classmethod
    def parse(cls, buf: bytes, offset: int = 0) -> Tuple["Chunk", int]:
        """Decode the chunk starting at ``offset`` in ``buf``.

        Returns (chunk, bytes_consumed). Errors carry ``offset``.
        """
        view = memoryview(buf)
        remaining = len(view) - offset
        if remaining < _CHUNK_HDR_STRUCT.size:
            raise UnexpectedEof(
                f"Truncated chunk header: {remaining} byte(s) left, need {_CHUNK_HDR_STRUCT.size}",
                offset=offset,
            )
        length, type_bytes = _CHUNK_HDR_STRUCT.unpack_from(view, offset)
        if length > MAX_CHUNK_LENGTH:
            raise ChunkLengthError(f"Chunk length too large ({length} > 2^31 - 1)", offset=offset)
        total = CHUNK_OVERHEAD + length
        if remaining < total:
            raise UnexpectedEof(
                f"Truncated {type_bytes!r} chunk: declared {length} payload byte(s), {remaining - CHUNK_OVERHEAD} available",
                offset=offset,
            )
        start = offset + _CHUNK_HDR_STRUCT.size
        payload = bytes(view[start : start + length])
        (stored_crc,) = _CHUNK_CRC_STRUCT.unpack_from(view, start + length)
        # CRC first: a damaged type code is reported as corruption
        computed_crc = chunk_crc(type_bytes, payload)
        if stored_crc != computed_crc:
            raise CrcMismatch(
                f"Bad CRC for {type_bytes!r} chunk (stored {stored_crc:#010x}, computed {computed_crc:#010x})",
                offset=offset,
            )
        try:
            chunk_type = ChunkType.from_bytes(type_bytes)
        except InvalidChunkType as exc:
            raise InvalidChunkType(str(exc), offset=offset) from exc
        return cls(chunk_type, payload), total

    def __eq__(self, other) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._chunk_type == other._chunk_type and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((self._chunk_type, self._payload))

    def __repr__(self) -> str:
        return f"Chunk(chunk_type={self._chunk_type!s}, length={self.length}, crc={self._crc:#010x})"

    def __str__(self) -> str:
        try:
            text = self.payload_as_text()
        except EncodingError:
            text = "[invalid data]"
        return f"len: {self.length}, type: {self._chunk_type}, data: {text}"
