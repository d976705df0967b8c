"""Password-based sealing of chunk payloads.

Keys come from Argon2id (argon2-cffi) and payloads are sealed with
XChaCha20-Poly1305 from PyCryptodomex. The chunk type code is bound to the
ciphertext as associated data, so a sealed payload moved into a chunk of a
different type fails to open.

Sealed layout (big-endian):
- magic[4] = b"PMX1"
- time_cost u8
- memory_cost_kib u32
- parallelism u8
- salt[16]
- nonce[24]
- ciphertext
- tag[16]
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass

try:  # pragma: no cover - availability depends on environment
    from argon2.low_level import Type as _ArgonType, hash_secret_raw as _argon_hash  # type: ignore
    _HAS_ARGON2 = True
except ImportError:  # pragma: no cover
    _ArgonType = None  # type: ignore
    _argon_hash = None  # type: ignore
    _HAS_ARGON2 = False

try:  # pragma: no cover - availability depends on environment
    from Cryptodome.Cipher import ChaCha20_Poly1305  # type: ignore
    _HAS_CRYPTODOME = True
except ImportError:  # pragma: no cover
    ChaCha20_Poly1305 = None  # type: ignore
    _HAS_CRYPTODOME = False

from .constants import (
    ARGON_MAX_MEMORY_COST_KIB,
    ARGON_MEMORY_COST_KIB,
    ARGON_PARALLELISM,
    ARGON_TIME_COST,
    SEALED_MAGIC,
)
from .errors import DecryptionError


NONCE_SIZE = 24
TAG_SIZE = 16
KEY_SIZE = 32
SALT_SIZE = 16

_SEALED_HDR_STRUCT = struct.Struct(">4sBIB16s24s")

_HAS_CRYPTO = bool(_HAS_ARGON2 and _HAS_CRYPTODOME)


@dataclass
class EncryptionParams:
    time_cost: int = ARGON_TIME_COST
    memory_cost_kib: int = ARGON_MEMORY_COST_KIB
    parallelism: int = ARGON_PARALLELISM


def _ensure_backend() -> None:
    if not _HAS_CRYPTO:
        raise RuntimeError("argon2-cffi and PyCryptodomex are required for encryption support")


def derive_key(password: str, salt: bytes, params: EncryptionParams) -> bytes:
    _ensure_backend()
    return _argon_hash(
        password.encode("utf-8"),
        salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost_kib,
        parallelism=params.parallelism,
        hash_len=KEY_SIZE,
        type=_ArgonType.ID,
    )


def is_sealed(payload: bytes) -> bool:
    return len(payload) >= _SEALED_HDR_STRUCT.size + TAG_SIZE and payload[:4] == SEALED_MAGIC


def seal(password: str, aad: bytes, plaintext: bytes, params: EncryptionParams | None = None) -> bytes:
    """Encrypt ``plaintext`` under ``password``; ``aad`` is authenticated but not stored."""
    _ensure_backend()
    params = params or EncryptionParams()
    salt = os.urandom(SALT_SIZE)
    nonce = os.urandom(NONCE_SIZE)
    key = derive_key(password, salt, params)
    cipher = ChaCha20_Poly1305.new(key=key, nonce=nonce)
    header = _SEALED_HDR_STRUCT.pack(
        SEALED_MAGIC, params.time_cost, params.memory_cost_kib, params.parallelism, salt, nonce
    )
    cipher.update(aad + header)
    ciphertext, tag = cipher.encrypt_and_digest(plaintext)
    return header + ciphertext + tag


def open_sealed(password: str, aad: bytes, payload: bytes) -> bytes:
    _ensure_backend()
    if not is_sealed(payload):
        raise DecryptionError("Payload is not an encrypted message")
    magic, time_cost, memory_cost_kib, parallelism, salt, nonce = _SEALED_HDR_STRUCT.unpack_from(payload)
    if time_cost < 1 or parallelism < 1 or not (8 * parallelism <= memory_cost_kib <= ARGON_MAX_MEMORY_COST_KIB):
        raise DecryptionError("Unsupported Argon2 parameters in encrypted payload")
    params = EncryptionParams(time_cost=time_cost, memory_cost_kib=memory_cost_kib, parallelism=parallelism)
    header = payload[: _SEALED_HDR_STRUCT.size]
    ciphertext = payload[_SEALED_HDR_STRUCT.size : -TAG_SIZE]
    tag = payload[-TAG_SIZE:]
    key = derive_key(password, salt, params)
    cipher = ChaCha20_Poly1305.new(key=key, nonce=nonce)
    cipher.update(aad + header)
    try:
        return cipher.decrypt_and_verify(ciphertext, tag)
    except ValueError as exc:
        raise DecryptionError("Wrong password or corrupted encrypted payload") from exc
