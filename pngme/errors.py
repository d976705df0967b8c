from __future__ import annotations

from typing import Optional


class PngError(Exception):
    """Base class for pngme-specific errors."""

    exit_code = 1


# Chunk parsing
class ChunkParseError(PngError):
    """A single chunk could not be decoded.

    ``offset`` is the absolute position of the chunk in the buffer being
    parsed, when known.
    """

    def __init__(self, message: str, *, offset: Optional[int] = None):
        super().__init__(message)
        self.offset = offset

    def __str__(self) -> str:
        msg = super().__str__()
        if self.offset is None:
            return msg
        return f"{msg} (at byte offset {self.offset})"


class InvalidChunkType(ChunkParseError):
    exit_code = 3


class CrcMismatch(ChunkParseError):
    exit_code = 4


class UnexpectedEof(ChunkParseError):
    exit_code = 5


class ChunkLengthError(ChunkParseError):
    exit_code = 6


# Stream structure
class StreamParseError(PngError):
    pass


class InvalidSignature(StreamParseError):
    exit_code = 7


class MissingHeader(StreamParseError):
    exit_code = 8


class MissingTrailer(StreamParseError):
    exit_code = 9


# Lookup/edit
class ChunkNotFoundError(PngError):
    exit_code = 10


class ProtectedChunkError(PngError):
    exit_code = 11


# Payload interpretation
class EncodingError(PngError):
    exit_code = 12


class DecryptionError(PngError):
    exit_code = 13
