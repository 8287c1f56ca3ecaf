"""
Chunk Record
============

This module defines the Chunk record: a chunk type, a payload, and the
wire encoding that wraps them.

Record Format
-------------
    Offset  Size    Description
    ------  ----    -----------
    0       4       Payload length L (big-endian, unsigned)
    4       4       Chunk type (4 ASCII letters)
    8       L       Payload
    8+L     4       CRC-32 of chunk type + payload (big-endian)

A record is therefore always 12 + L bytes. The CRC is never stored on a
Chunk instance: it is recomputed from the tag and payload whenever it is
needed, so a Chunk built in memory is always self-consistent.

Decoding
--------
``Chunk.from_bytes()`` reads one record starting at an offset and returns
the chunk together with the offset just past it, so consecutive records
can be walked by the caller. ``Chunk.decode()`` is the single-record form
and ignores any trailing bytes.

Every slice is bounds-checked first; malformed input raises one of the
ChunkError subclasses from ``pngme.errors`` and is never read past the
end of the buffer.
"""

from dataclasses import dataclass
import logging

from pngme.errors import (
    ChecksumMismatchError,
    InputTooShortError,
    InvalidChunkTypeError,
    PayloadDecodeError,
    PayloadTooLargeError,
    TruncatedPayloadError,
)
from pngme.chunk.checksum import (
    CHUNK_TYPE_BYTES,
    CRC_BYTES,
    LENGTH_BYTES,
    MAX_DATA_LENGTH,
    METADATA_BYTES,
    chunk_crc,
    pack_u32,
    unpack_u32,
)
from pngme.chunk.chunk_type import ChunkType

# Logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chunk:
    """
    A single chunk record.

    Attributes:
        chunk_type: The 4-byte type tag
        data: The payload bytes

    Example:
        >>> chunk = Chunk(ChunkType.from_str("RuSt"), b"hello")
        >>> Chunk.decode(chunk.encode()) == chunk
        True
    """
    chunk_type: ChunkType
    data: bytes = b""

    def __post_init__(self) -> None:
        """Freeze the payload as immutable bytes."""
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_strings(cls, chunk_type: str, message: str) -> "Chunk":
        """
        Build a chunk from tag text and a text message.

        Args:
            chunk_type: Tag text, e.g. "RuSt"
            message: Payload text, stored as UTF-8

        Raises:
            ChunkTypeError: If the tag text is not 4 ASCII letters
        """
        return cls(ChunkType.from_str(chunk_type), message.encode("utf-8"))

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def length(self) -> int:
        """Number of payload bytes."""
        return len(self.data)

    @property
    def record_size(self) -> int:
        """Total encoded size of this chunk in bytes."""
        return METADATA_BYTES + len(self.data)

    def crc(self) -> int:
        """CRC-32 of the chunk type bytes followed by the payload."""
        return chunk_crc(self.chunk_type.to_bytes(), self.data)

    def data_as_string(self) -> str:
        """
        Decode the payload as UTF-8 text.

        Raises:
            PayloadDecodeError: If the payload is not valid UTF-8
        """
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadDecodeError(str(e)) from e

    # =========================================================================
    # Serialization
    # =========================================================================

    def encode(self) -> bytes:
        """
        Serialize the chunk to its wire form.

        Returns:
            length (4) + chunk type (4) + data (L) + crc (4)

        Raises:
            PayloadTooLargeError: If the payload does not fit the length field
        """
        if len(self.data) > MAX_DATA_LENGTH:
            raise PayloadTooLargeError(len(self.data))

        result = bytearray()
        result.extend(pack_u32(len(self.data)))
        result.extend(self.chunk_type.to_bytes())
        result.extend(self.data)
        result.extend(pack_u32(self.crc()))
        return bytes(result)

    def to_bytes(self) -> bytes:
        """Alias for encode()."""
        return self.encode()

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> tuple["Chunk", int]:
        """
        Parse one chunk record from a buffer.

        Args:
            data: Buffer holding the record, possibly followed by more data
            offset: Where the record starts in the buffer

        Returns:
            Tuple of (chunk, offset just past the record's CRC)

        Raises:
            InputTooShortError: Fewer than 12 bytes available at offset
            InvalidChunkTypeError: The tag is not a valid chunk type
            TruncatedPayloadError: The declared length runs past the buffer
            ChecksumMismatchError: The stored CRC doesn't match
        """
        view = memoryview(data)[offset:]
        if len(view) < METADATA_BYTES:
            raise InputTooShortError(len(view), METADATA_BYTES)

        # Length word, then the tag
        data_length = unpack_u32(view, 0)
        pos = LENGTH_BYTES
        chunk_type = ChunkType.from_bytes(bytes(view[pos:pos + CHUNK_TYPE_BYTES]))
        pos += CHUNK_TYPE_BYTES

        if not chunk_type.is_valid():
            raise InvalidChunkTypeError(chunk_type)

        # Payload and CRC must both be present
        remaining = len(view) - pos
        if data_length + CRC_BYTES > remaining:
            raise TruncatedPayloadError(data_length, remaining)

        payload = bytes(view[pos:pos + data_length])
        pos += data_length
        stored_crc = unpack_u32(view, pos)
        pos += CRC_BYTES

        chunk = cls(chunk_type, payload)
        actual_crc = chunk.crc()
        if stored_crc != actual_crc:
            raise ChecksumMismatchError(stored_crc, actual_crc)

        logger.debug(
            f"Decoded chunk {chunk_type.raw!r} at offset {offset}: "
            f"{data_length} bytes, crc 0x{actual_crc:08X}"
        )
        return chunk, offset + pos

    @classmethod
    def decode(cls, data: bytes) -> "Chunk":
        """
        Parse a single chunk record, ignoring any bytes after it.

        Raises the same errors as from_bytes().
        """
        chunk, _ = cls.from_bytes(data)
        return chunk

    def __str__(self) -> str:
        return (
            f"Chunk {{ type: {self.chunk_type.raw.decode('latin-1')}, "
            f"length: {self.length}, crc: {self.crc()} }}"
        )
