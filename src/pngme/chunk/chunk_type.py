"""
Chunk Type Definition
=====================

A chunk type is the 4-byte tag that names a chunk. Besides identifying the
chunk, bit 5 (value 0x20, the ASCII lower-case bit) of each byte carries a
property flag, so the case of each letter is meaningful.

Property Bits
-------------
    Byte    Name            Bit 5 = 0 (upper)   Bit 5 = 1 (lower)
    ----    ----            -----------------   -----------------
    0       Ancillary       critical            ancillary
    1       Private         public              private
    2       Reserved        valid               invalid (reserved)
    3       Safe-to-copy    unsafe to copy      safe to copy

Examples:
    "IHDR" - critical, public, reserved-bit valid, unsafe to copy
    "RuSt" - critical, private, reserved-bit valid, safe to copy
    "Rust" - reserved bit set, so the tag is not valid

Construction
------------
There are two constructors:
- ``ChunkType.from_bytes()`` wraps 4 raw bytes verbatim. Nothing but the
  length is checked, so a tag read off the wire can always be represented
  and then inspected with ``is_valid()``.
- ``ChunkType.from_str()`` parses text and rejects anything that is not
  4 ASCII letters.

All flag queries are pure functions of the 4 bytes and never raise.

Reference
---------
- PNG chunk naming conventions:
  http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions
"""

from dataclasses import dataclass
from typing import Union

from pngme.errors import (
    ChunkTypeDecodeError,
    ChunkTypeLengthError,
    InvalidCharacterError,
)
from pngme.chunk.checksum import CHUNK_TYPE_BYTES

# Bit 5 of each tag byte holds that byte's property flag
PROPERTY_BIT = 0x20

# Byte positions of the property flags
ANCILLARY_BYTE = 0
PRIVATE_BYTE = 1
RESERVED_BYTE = 2
SAFE_TO_COPY_BYTE = 3


@dataclass(frozen=True)
class ChunkType:
    """
    A 4-byte chunk type tag.

    Instances are immutable; equality and hashing are byte-wise.

    Attributes:
        raw: The 4 tag bytes exactly as they appear on the wire
    """
    raw: bytes

    def __post_init__(self) -> None:
        """Normalize the tag bytes and enforce the 4-byte size."""
        raw = bytes(self.raw)
        if len(raw) != CHUNK_TYPE_BYTES:
            raise ChunkTypeLengthError(len(raw))
        object.__setattr__(self, "raw", raw)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_bytes(cls, raw: Union[bytes, bytearray, list[int]]) -> "ChunkType":
        """
        Wrap 4 raw bytes as a chunk type without validating them.

        Args:
            raw: Exactly 4 bytes (any bytes-like value or list of ints)

        Returns:
            A ChunkType holding those bytes verbatim

        Raises:
            ChunkTypeLengthError: If raw is not exactly 4 bytes long
        """
        return cls(raw=bytes(raw))

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        """
        Parse a chunk type from text such as ``"RuSt"``.

        Args:
            text: 4 ASCII letters

        Returns:
            The parsed ChunkType

        Raises:
            ChunkTypeLengthError: If the UTF-8 encoding of text is not 4 bytes
            InvalidCharacterError: If any byte is not in A-Z or a-z

        Example:
            >>> ChunkType.from_str("RuSt").is_valid()
            True
            >>> ChunkType.from_str("Rust").is_valid()
            False
        """
        raw = text.encode("utf-8")
        if len(raw) != CHUNK_TYPE_BYTES:
            raise ChunkTypeLengthError(len(raw))
        if not _all_ascii_letters(raw):
            raise InvalidCharacterError(text)
        return cls.from_bytes(raw)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_bytes(self) -> bytes:
        """Get the 4 tag bytes."""
        return self.raw

    def to_str(self) -> str:
        """
        Render the tag as text.

        Raises:
            ChunkTypeDecodeError: If the bytes are not ASCII, which can only
                happen for tags built with ``from_bytes()``
        """
        try:
            return self.raw.decode("ascii")
        except UnicodeDecodeError:
            raise ChunkTypeDecodeError(self.raw) from None

    def __str__(self) -> str:
        return self.to_str()

    # =========================================================================
    # Property Queries
    # =========================================================================

    def is_valid(self) -> bool:
        """
        Check whether the tag is well formed.

        All bytes must be ASCII letters and the reserved bit must be clear.
        """
        return _all_ascii_letters(self.raw) and self.is_reserved_bit_valid()

    def is_critical(self) -> bool:
        """A chunk is critical if bit 5 of the first byte is 0."""
        return not self.raw[ANCILLARY_BYTE] & PROPERTY_BIT

    def is_public(self) -> bool:
        """A chunk is public if bit 5 of the second byte is 0."""
        return not self.raw[PRIVATE_BYTE] & PROPERTY_BIT

    def is_reserved_bit_valid(self) -> bool:
        """Bit 5 of the third byte is reserved and must be 0."""
        return not self.raw[RESERVED_BYTE] & PROPERTY_BIT

    def is_safe_to_copy(self) -> bool:
        """A chunk is safe to copy if bit 5 of the fourth byte is 1."""
        return bool(self.raw[SAFE_TO_COPY_BYTE] & PROPERTY_BIT)

    def describe(self) -> dict[str, bool]:
        """
        Get all property flags at once.

        Returns:
            Mapping of flag name to value, in tag byte order, plus "valid"
        """
        return {
            "critical": self.is_critical(),
            "public": self.is_public(),
            "reserved_bit_valid": self.is_reserved_bit_valid(),
            "safe_to_copy": self.is_safe_to_copy(),
            "valid": self.is_valid(),
        }


def _all_ascii_letters(raw: bytes) -> bool:
    # bytes.isalpha() only accepts A-Z and a-z
    return raw.isalpha()
