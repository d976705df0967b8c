from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .chunk import Chunk
from .chunk_type import ChunkType
from .encryption import EncryptionParams, open_sealed, seal
from .errors import ChunkNotFoundError, EncodingError
from .png import Png
from .constants import TEXT_ENCODING


@dataclass(frozen=True)
class ChunkSummary:
    chunk_type: ChunkType
    length: int
    crc: int


def encode(
    png: Png,
    chunk_type: str,
    message: bytes | str,
    *,
    password: Optional[str] = None,
    params: Optional[EncryptionParams] = None,
) -> Png:
    """Append ``message`` as a new chunk of ``chunk_type`` and return the stream.

    With ``password`` the message is sealed before it is stored.
    """
    ctype = ChunkType.from_string(chunk_type)
    if isinstance(message, str):
        try:
            data = message.encode(TEXT_ENCODING)
        except UnicodeEncodeError as exc:
            raise EncodingError(f"Message is not valid {TEXT_ENCODING}: {exc.reason}") from exc
    else:
        data = bytes(message)
    if password is not None:
        data = seal(password, ctype.raw, data, params)
    png.append_chunk(Chunk(ctype, data))
    return png


def decode(png: Png, chunk_type: str, *, password: Optional[str] = None) -> str:
    ctype = ChunkType.from_string(chunk_type)
    chunk = png.chunk_by_type(ctype)
    if chunk is None:
        raise ChunkNotFoundError(f"No {ctype} chunk found")
    if password is None:
        return chunk.payload_as_text()
    plain = open_sealed(password, ctype.raw, chunk.payload)
    try:
        return plain.decode(TEXT_ENCODING)
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Decrypted {ctype} message is not valid {TEXT_ENCODING}") from exc


def remove(png: Png, chunk_type: str) -> Png:
    png.remove_chunk_by_type(ChunkType.from_string(chunk_type))
    return png


def list_chunks(png: Png) -> List[ChunkSummary]:
    return [ChunkSummary(chunk_type=c.chunk_type, length=c.length, crc=c.crc) for c in png.chunks]
