from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .chunk import Chunk
from .chunk_type import ChunkType
from .constants import HEADER_TYPE, PNG_SIGNATURE, PROTECTED_TYPES, TRAILER_TYPE
from .errors import (
    ChunkNotFoundError,
    InvalidSignature,
    MissingHeader,
    MissingTrailer,
    ProtectedChunkError,
)


def _check_structure(chunks: List[Chunk]) -> None:
    if not chunks or chunks[0].chunk_type.raw != HEADER_TYPE:
        found = str(chunks[0].chunk_type) if chunks else "nothing"
        raise MissingHeader(f"Stream must start with {HEADER_TYPE.decode()} (found {found})")
    if chunks[-1].chunk_type.raw != TRAILER_TYPE:
        raise MissingTrailer(f"Stream must end with {TRAILER_TYPE.decode()} (found {chunks[-1].chunk_type})")


class Png:
    """An ordered PNG chunk stream.

    The first chunk is always IHDR and the last always IEND; everything in
    between keeps insertion order. Edits rebuild the chunk list rather than
    touching existing Chunk objects.
    """

    signature = PNG_SIGNATURE

    def __init__(self, chunks: Iterable[Chunk]):
        chunk_list = list(chunks)
        _check_structure(chunk_list)
        self._chunks: Tuple[Chunk, ...] = tuple(chunk_list)

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> "Png":
        return cls(chunks)

    @classmethod
    def parse(cls, buf: bytes) -> "Png":
        sig_len = len(PNG_SIGNATURE)
        if bytes(buf[:sig_len]) != PNG_SIGNATURE:
            raise InvalidSignature("Not a PNG stream (bad signature)")
        chunks: List[Chunk] = []
        pos = sig_len
        end = len(buf)
        while pos < end:
            chunk, consumed = Chunk.parse(buf, pos)
            chunks.append(chunk)
            pos += consumed
        if not chunks or chunks[-1].chunk_type.raw != TRAILER_TYPE:
            raise MissingTrailer(f"Stream does not end with {TRAILER_TYPE.decode()}")
        return cls(chunks)

    def pack(self) -> bytes:
        return PNG_SIGNATURE + b"".join(c.pack() for c in self._chunks)

    def __bytes__(self) -> bytes:
        return self.pack()

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        return self._chunks

    @property
    def header(self) -> Chunk:
        return self._chunks[0]

    def append_chunk(self, chunk: Chunk) -> None:
        """Insert ``chunk`` just before the trailer. Duplicate types are allowed."""
        self._chunks = self._chunks[:-1] + (chunk, self._chunks[-1])

    def chunk_by_type(self, chunk_type: ChunkType) -> Optional[Chunk]:
        for c in self._chunks:
            if c.chunk_type == chunk_type:
                return c
        return None

    def remove_chunk_by_type(self, chunk_type: ChunkType) -> Chunk:
        """Remove and return the first chunk of ``chunk_type``."""
        if chunk_type.raw in PROTECTED_TYPES:
            raise ProtectedChunkError(f"Refusing to remove structural chunk {chunk_type}")
        for i, c in enumerate(self._chunks):
            if c.chunk_type == chunk_type:
                self._chunks = self._chunks[:i] + self._chunks[i + 1 :]
                return c
        raise ChunkNotFoundError(f"No {chunk_type} chunk found")

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self._chunks == other._chunks

    def __repr__(self) -> str:
        return f"Png(chunks={[str(c.chunk_type) for c in self._chunks]})"
