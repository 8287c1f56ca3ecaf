"""
PNGme Error Hierarchy
=====================

This module defines the exception hierarchy for the PNGme chunk toolkit.
All exceptions inherit from PngmeError, allowing callers to catch every
codec-related error with a single except clause if desired.

Exception Hierarchy
-------------------
PngmeError (base)
├── ChunkTypeError (type tag construction and rendering)
│   ├── ChunkTypeLengthError - tag is not exactly 4 bytes
│   ├── InvalidCharacterError - tag contains a non-letter byte
│   └── ChunkTypeDecodeError - tag bytes are not printable text
└── ChunkError (chunk record encoding and decoding)
    ├── InputTooShortError - fewer than 12 bytes supplied
    ├── InvalidChunkTypeError - decoded tag fails validation
    ├── TruncatedPayloadError - declared length exceeds available bytes
    ├── ChecksumMismatchError - stored CRC differs from computed CRC
    ├── PayloadDecodeError - payload is not valid UTF-8
    └── PayloadTooLargeError - payload length does not fit in 32 bits

Every error is recoverable: the codec raises, the caller decides. Nothing
in the codec catches or logs these exceptions on the way out.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class PngmeError(Exception):
    """
    Base exception for all PNGme errors.

    All exceptions in the toolkit inherit from this class, allowing callers
    to catch all codec-related errors with a single except clause:

        try:
            chunk = Chunk.decode(data)
        except PngmeError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Chunk Type Exceptions
# =============================================================================

class ChunkTypeError(PngmeError):
    """Base exception for chunk type (4-byte tag) errors."""
    pass


class ChunkTypeLengthError(ChunkTypeError):
    """
    Chunk type has the wrong number of bytes.

    A chunk type is always exactly 4 bytes. Raised when building a tag
    from text or raw bytes of any other length.
    """

    def __init__(self, length: int, message: str = ""):
        self.length = length
        if not message:
            message = (
                f"Expected 4 bytes but received {length} when creating chunk type"
            )
        super().__init__(message)


class InvalidCharacterError(ChunkTypeError):
    """
    Chunk type text contains a character outside A-Z and a-z.

    Also raised for text that cannot be represented as single bytes.
    """

    def __init__(self, text: str, message: str = ""):
        self.text = text
        if not message:
            message = f"Chunk type {text!r} contains one or more invalid characters"
        super().__init__(message)


class ChunkTypeDecodeError(ChunkTypeError):
    """
    Chunk type bytes cannot be rendered as text.

    Only tags built through the unchecked byte path can hit this, since
    the text path rejects anything that is not an ASCII letter.
    """

    def __init__(self, raw: bytes):
        self.raw = raw
        super().__init__(f"Chunk type bytes {raw.hex()} are not valid ASCII text")


# =============================================================================
# Chunk Exceptions
# =============================================================================

class ChunkError(PngmeError):
    """Base exception for chunk record errors."""
    pass


class InputTooShortError(ChunkError):
    """
    Not enough bytes to hold even an empty chunk.

    A record needs 4 length bytes, 4 tag bytes and 4 checksum bytes,
    so anything shorter than 12 bytes is rejected before parsing.
    """

    def __init__(self, length: int, minimum: int = 12):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"At least {minimum} bytes must be supplied to construct a chunk "
            f"(got {length})"
        )


class InvalidChunkTypeError(ChunkError):
    """
    Decoded chunk type fails validation.

    Raised when the tag read from the wire contains non-letter bytes or
    has its reserved bit set.
    """

    def __init__(self, chunk_type: object, message: str = ""):
        self.chunk_type = chunk_type
        if not message:
            message = f"Invalid chunk type {chunk_type!r}"
        super().__init__(message)


class TruncatedPayloadError(ChunkError):
    """
    Declared payload length runs past the end of the input.

    The length field promised more payload (plus the 4-byte checksum)
    than the buffer actually holds.
    """

    def __init__(self, declared: int, available: int):
        self.declared = declared
        self.available = available
        super().__init__(
            f"Chunk declares {declared} payload bytes but only {available} "
            f"bytes remain for payload and checksum"
        )


class ChecksumMismatchError(ChunkError):
    """
    CRC verification failed.

    Raised when the checksum stored in the record doesn't match the
    CRC-32 computed over the tag and payload. This indicates corruption
    or tampering.

    Attributes:
        expected: The checksum stored on the wire
        actual: The checksum computed from the decoded tag and payload
    """

    def __init__(self, expected: int, actual: int, message: str = ""):
        self.expected = expected
        self.actual = actual
        if not message:
            message = (
                f"Invalid CRC when constructing chunk. "
                f"Expected {expected} but found {actual}"
            )
        super().__init__(message)


class PayloadDecodeError(ChunkError):
    """Chunk payload is not valid UTF-8 text."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        message = "Chunk data is not valid UTF-8"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PayloadTooLargeError(ChunkError):
    """
    Payload cannot be described by the 32-bit length field.

    The wire length field is an unsigned 32-bit integer, so payloads of
    4 GiB or more cannot be encoded.
    """

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Chunk data of {length} bytes exceeds the 32-bit length field"
        )
