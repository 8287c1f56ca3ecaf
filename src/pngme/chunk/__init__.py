"""
Chunk Codec
===========

This package implements the PNG-style chunk record: a 4-byte chunk type,
an opaque payload, and the length/CRC framing around them.

This module provides:
- **ChunkType**: The 4-byte tag with its property bits
- **Chunk**: A tag + payload pair with wire encoding and decoding
- **Checksum utilities**: CRC-32 (IEEE) over tag and payload

Quick Start
-----------
Building a chunk:

    >>> from pngme.chunk import Chunk, ChunkType
    >>> chunk = Chunk(ChunkType.from_str("RuSt"), b"secret")
    >>> wire = chunk.encode()
    >>> len(wire)
    18

Reading it back:

    >>> Chunk.decode(wire).data_as_string()
    'secret'

Reference
---------
- PNG file structure: http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html
"""

# =============================================================================
# Public API Exports
# =============================================================================

from pngme.chunk.checksum import (
    LENGTH_BYTES,
    CHUNK_TYPE_BYTES,
    CRC_BYTES,
    METADATA_BYTES,
    MAX_DATA_LENGTH,
    crc32,
    chunk_crc,
    verify_chunk_crc,
)
from pngme.chunk.chunk_type import ChunkType
from pngme.chunk.chunk import Chunk

__all__ = [
    # Constants
    "LENGTH_BYTES",
    "CHUNK_TYPE_BYTES",
    "CRC_BYTES",
    "METADATA_BYTES",
    "MAX_DATA_LENGTH",
    # Checksum
    "crc32",
    "chunk_crc",
    "verify_chunk_crc",
    # Records
    "ChunkType",
    "Chunk",
]
