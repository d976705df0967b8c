"""
CRC-32 (ISO-HDLC / IEEE 802.3) as used by PNG chunks.

Polynomial 0x04C11DB7 (reflected 0xEDB88320), init 0xFFFFFFFF, final XOR
0xFFFFFFFF. zlib implements exactly this variant.
"""

import zlib


def crc32(data: bytes, crc: int = 0) -> int:
    return zlib.crc32(data, crc) & 0xFFFFFFFF


def chunk_crc(type_bytes: bytes, payload: bytes) -> int:
    """CRC over the type code followed by the payload (length excluded)."""
    return crc32(payload, crc32(type_bytes))
