# PNG file signature: \x89 'P' 'N' 'G' \r \n \x1a \n
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Structural chunk types: the stream starts with HEADER and ends with TRAILER
HEADER_TYPE = b"IHDR"
TRAILER_TYPE = b"IEND"
PROTECTED_TYPES = (HEADER_TYPE, TRAILER_TYPE)

# Chunk layout: length u32 BE | type[4] | payload | crc u32 BE
CHUNK_OVERHEAD = 12
MAX_CHUNK_LENGTH = (1 << 31) - 1

# Bit 5 of each type byte carries a property flag (letter case)
PROPERTY_BIT = 1 << 5

TEXT_ENCODING = "utf-8"

# Encrypted payload framing
SEALED_MAGIC = b"PMX1"

# Argon2id parameters used for new encrypted payloads
ARGON_TIME_COST = 3
ARGON_MEMORY_COST_KIB = 64 * 1024  # 64 MiB
ARGON_PARALLELISM = 4
# Upper bound accepted when reading parameters back from a payload
ARGON_MAX_MEMORY_COST_KIB = 1024 * 1024  # 1 GiB
