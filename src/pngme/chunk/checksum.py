"""
Chunk CRC Calculations
======================

This module provides the CRC-32 routine used to protect chunk records.

Algorithm
---------
- Polynomial: 0x04C11DB7 (IEEE 802.3), reflected form 0xEDB88320
- Initial value: 0xFFFFFFFF
- Final XOR: 0xFFFFFFFF
- Input and output reflected

This is the "CRC-32/ISO-HDLC" parameterization used by PNG, zlib and
Ethernet. The computation is delegated to :func:`zlib.crc32`, which
implements exactly this variant.

Coverage
--------
The CRC of a chunk covers the 4 type bytes followed by the payload. The
length field is NOT included.

Usage
-----
    from pngme.chunk.checksum import chunk_crc

    crc = chunk_crc(b"RuSt", b"This is where your secret message will be!")
    assert crc == 2882656334
"""

import struct
import zlib
from typing import Final

# =============================================================================
# Wire Layout Constants
# =============================================================================

# Size of the big-endian payload length field
LENGTH_BYTES: Final[int] = 4

# Size of the chunk type tag
CHUNK_TYPE_BYTES: Final[int] = 4

# Size of the trailing big-endian CRC field
CRC_BYTES: Final[int] = 4

# Everything in a record except the payload
METADATA_BYTES: Final[int] = LENGTH_BYTES + CHUNK_TYPE_BYTES + CRC_BYTES

# Largest payload the length field can describe
MAX_DATA_LENGTH: Final[int] = 0xFFFFFFFF

# Mask for 32-bit values
CRC_MASK: Final[int] = 0xFFFFFFFF

_U32 = struct.Struct(">I")


# =============================================================================
# CRC Functions
# =============================================================================

def crc32(data: bytes, crc: int = 0) -> int:
    """
    Calculate the CRC-32 (IEEE) of a byte sequence.

    Args:
        data: Bytes to checksum
        crc: Running CRC from a previous call, for incremental use

    Returns:
        Unsigned 32-bit CRC value
    """
    return zlib.crc32(data, crc) & CRC_MASK


def chunk_crc(chunk_type: bytes, data: bytes) -> int:
    """
    Calculate the CRC stored at the end of a chunk record.

    Equivalent to ``crc32(chunk_type + data)`` without building the
    concatenated buffer.

    Args:
        chunk_type: The 4 type tag bytes
        data: The chunk payload

    Returns:
        Unsigned 32-bit CRC value
    """
    return crc32(data, crc32(chunk_type))


def verify_chunk_crc(chunk_type: bytes, data: bytes, stored: int) -> bool:
    """Return True if ``stored`` matches the CRC of the tag and payload."""
    return chunk_crc(chunk_type, data) == stored


# =============================================================================
# Integer Packing
# =============================================================================

def pack_u32(value: int) -> bytes:
    """Pack an unsigned 32-bit integer as 4 big-endian bytes."""
    return _U32.pack(value)


def unpack_u32(data: bytes, offset: int = 0) -> int:
    """
    Read a big-endian unsigned 32-bit integer.

    The caller must make sure 4 bytes are available at ``offset``.
    """
    return _U32.unpack_from(data, offset)[0]
