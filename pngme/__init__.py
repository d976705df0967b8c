"""
pngme — hide messages inside PNG files without touching the image data.

Features:

- Chunk model: validated four-letter chunk types, CRC-32 checked chunks, and
  a chunk stream that keeps IHDR first and IEND last.
- Operations to encode a message as a new chunk, decode it, remove it, and
  list every chunk in a file.
- Optional message encryption via XChaCha20-Poly1305 with Argon2id key
  derivation.

The library works on in-memory byte buffers; file handling lives in pngme.cli.
"""

from .chunk import Chunk
from .chunk_type import ChunkType
from .png import Png

__version__ = "0.1"

__all__ = [
    "Chunk",
    "ChunkType",
    "Png",
    "constants",
    "errors",
    "ops",
    "encryption",
]
