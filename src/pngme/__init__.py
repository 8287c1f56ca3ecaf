"""
PNGme - PNG Chunk Codec
=======================

This package encodes and decodes PNG-style chunk records: the
length + type + data + CRC units that PNG files are built from. It is
typically used to hide a text message inside a private chunk.

Main Components
---------------
- **chunk**: The ChunkType tag and the Chunk record codec
- **errors**: Exception hierarchy for every failure the codec reports
- **config**: Environment-driven settings for the command-line tool
- **cli**: The ``pngchunk`` command-line tool

Quick Start
-----------
Encode a message:
    >>> from pngme import Chunk
    >>> chunk = Chunk.from_strings("RuSt", "hello")
    >>> wire = chunk.encode()

Decode it again:
    >>> Chunk.decode(wire).data_as_string()
    'hello'

Or use the command-line tool:
    $ pngchunk encode RuSt "hello"
    $ pngchunk decode 0000000552755374...

Reference Documentation
-----------------------
- PNG Structure: http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from pngme.errors import (
    PngmeError,
    ChunkTypeError,
    ChunkTypeLengthError,
    InvalidCharacterError,
    ChunkTypeDecodeError,
    ChunkError,
    InputTooShortError,
    InvalidChunkTypeError,
    TruncatedPayloadError,
    ChecksumMismatchError,
    PayloadDecodeError,
    PayloadTooLargeError,
)
from pngme.chunk import (
    Chunk,
    ChunkType,
    crc32,
    chunk_crc,
)

__all__ = [
    "__version__",
    # Codec
    "Chunk",
    "ChunkType",
    "crc32",
    "chunk_crc",
    # Errors
    "PngmeError",
    "ChunkTypeError",
    "ChunkTypeLengthError",
    "InvalidCharacterError",
    "ChunkTypeDecodeError",
    "ChunkError",
    "InputTooShortError",
    "InvalidChunkTypeError",
    "TruncatedPayloadError",
    "ChecksumMismatchError",
    "PayloadDecodeError",
    "PayloadTooLargeError",
]
