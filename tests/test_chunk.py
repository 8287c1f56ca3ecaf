"""
Chunk Unit Tests
================

This module contains tests for the Chunk record codec.

Test Categories
---------------
1. Construction: building chunks in memory
2. Encoding: byte-exact wire output
3. Decoding: parsing valid records
4. Decode errors: every malformed-input failure
5. Round-trip: encode/decode cycles
"""

import dataclasses
import logging
import struct

import pytest

from pngme.chunk import Chunk, ChunkType
from pngme.errors import (
    ChecksumMismatchError,
    ChunkError,
    ChunkTypeError,
    InputTooShortError,
    InvalidChunkTypeError,
    PayloadDecodeError,
    PayloadTooLargeError,
    PngmeError,
    TruncatedPayloadError,
)

SECRET_MESSAGE = "This is where your secret message will be!"
SECRET_CRC = 2882656334


# =============================================================================
# Test Fixtures
# =============================================================================

def build_record(length: int, chunk_type: bytes, data: bytes, crc: int) -> bytes:
    """Assemble a record field by field, bypassing the encoder."""
    return struct.pack(">I", length) + chunk_type + data + struct.pack(">I", crc)


@pytest.fixture
def testing_chunk() -> Chunk:
    """The RuSt chunk carrying the secret message."""
    return Chunk(ChunkType.from_str("RuSt"), SECRET_MESSAGE.encode("utf-8"))


@pytest.fixture
def secret_record() -> bytes:
    """Wire bytes of the testing chunk, assembled by hand."""
    message = SECRET_MESSAGE.encode("utf-8")
    return build_record(len(message), b"RuSt", message, SECRET_CRC)


# =============================================================================
# Construction Tests
# =============================================================================

class TestChunkConstruction:
    """Tests for building chunks in memory."""

    def test_chunk_length(self, testing_chunk: Chunk):
        assert testing_chunk.length == 42

    def test_chunk_type(self, testing_chunk: Chunk):
        assert str(testing_chunk.chunk_type) == "RuSt"

    def test_chunk_string(self, testing_chunk: Chunk):
        assert testing_chunk.data_as_string() == SECRET_MESSAGE

    def test_chunk_crc(self, testing_chunk: Chunk):
        assert testing_chunk.crc() == SECRET_CRC

    def test_record_size(self, testing_chunk: Chunk):
        assert testing_chunk.record_size == 12 + 42

    def test_from_strings(self, testing_chunk: Chunk):
        assert Chunk.from_strings("RuSt", SECRET_MESSAGE) == testing_chunk

    def test_from_strings_bad_type(self):
        with pytest.raises(ChunkTypeError):
            Chunk.from_strings("Ru1t", "hello")

    def test_payload_normalized_to_bytes(self):
        chunk = Chunk(ChunkType.from_str("RuSt"), bytearray(b"abc"))
        assert isinstance(chunk.data, bytes)
        assert chunk == Chunk(ChunkType.from_str("RuSt"), b"abc")

    def test_empty_payload(self):
        chunk = Chunk(ChunkType.from_str("IEND"))
        assert chunk.length == 0
        assert chunk.data_as_string() == ""

    def test_immutable(self, testing_chunk: Chunk):
        with pytest.raises(dataclasses.FrozenInstanceError):
            testing_chunk.data = b"changed"

    def test_invalid_utf8_payload(self):
        chunk = Chunk(ChunkType.from_str("RuSt"), b"\xff\xfe\xfd")
        with pytest.raises(PayloadDecodeError):
            chunk.data_as_string()

    def test_str(self, testing_chunk: Chunk):
        text = str(testing_chunk)
        assert "RuSt" in text
        assert "42" in text
        assert str(SECRET_CRC) in text


# =============================================================================
# Encoding Tests
# =============================================================================

class TestChunkEncode:
    """Tests for the wire encoding."""

    def test_as_bytes(self, testing_chunk: Chunk, secret_record: bytes):
        assert testing_chunk.encode() == secret_record

    def test_encoded_length(self, testing_chunk: Chunk):
        assert len(testing_chunk.encode()) == 54

    def test_to_bytes_alias(self, testing_chunk: Chunk):
        assert testing_chunk.to_bytes() == testing_chunk.encode()

    def test_field_layout(self, testing_chunk: Chunk):
        wire = testing_chunk.encode()
        assert wire[0:4] == b"\x00\x00\x00\x2a"
        assert wire[4:8] == b"RuSt"
        assert wire[8:50] == SECRET_MESSAGE.encode("utf-8")
        assert wire[50:54] == bytes([0xAB, 0xD1, 0xD8, 0x4E])

    def test_empty_payload_is_12_bytes(self):
        wire = Chunk(ChunkType.from_str("IEND")).encode()
        assert wire == bytes.fromhex("0000000049454e44ae426082")

    def test_payload_too_large(self, monkeypatch: pytest.MonkeyPatch):
        """Payloads beyond the 32-bit length field are rejected."""
        monkeypatch.setattr("pngme.chunk.chunk.MAX_DATA_LENGTH", 4)
        chunk = Chunk(ChunkType.from_str("RuSt"), b"hello")
        with pytest.raises(PayloadTooLargeError) as exc_info:
            chunk.encode()
        assert exc_info.value.length == 5


# =============================================================================
# Decoding Tests
# =============================================================================

class TestChunkDecode:
    """Tests for parsing valid records."""

    def test_valid_chunk_from_bytes(self, secret_record: bytes):
        chunk = Chunk.decode(secret_record)

        assert chunk.length == 42
        assert str(chunk.chunk_type) == "RuSt"
        assert chunk.data_as_string() == SECRET_MESSAGE
        assert chunk.crc() == SECRET_CRC

    def test_from_bytes_returns_next_offset(self, secret_record: bytes):
        chunk, end = Chunk.from_bytes(secret_record)
        assert end == len(secret_record) == chunk.record_size

    def test_trailing_bytes_ignored(self, testing_chunk: Chunk, secret_record: bytes):
        chunk = Chunk.decode(secret_record + b"\x00\x01\x02trailing")
        assert chunk == testing_chunk

    def test_from_bytes_with_offset(self, testing_chunk: Chunk, secret_record: bytes):
        chunk, end = Chunk.from_bytes(b"\x89PNG" + secret_record, offset=4)
        assert chunk == testing_chunk
        assert end == 4 + len(secret_record)

    def test_consecutive_records(self, testing_chunk: Chunk):
        """The returned offset lands on the next record."""
        iend = Chunk(ChunkType.from_str("IEND"))
        stream = testing_chunk.encode() + iend.encode()

        first, offset = Chunk.from_bytes(stream)
        second, offset = Chunk.from_bytes(stream, offset)

        assert first == testing_chunk
        assert second == iend
        assert offset == len(stream)

    def test_empty_payload_record(self):
        chunk = Chunk.decode(bytes.fromhex("0000000049454e44ae426082"))
        assert chunk.chunk_type == ChunkType.from_str("IEND")
        assert chunk.data == b""

    def test_accepts_bytearray_and_memoryview(self, secret_record: bytes):
        assert Chunk.decode(bytearray(secret_record)) == Chunk.decode(secret_record)
        assert Chunk.decode(memoryview(secret_record)) == Chunk.decode(secret_record)

    def test_decode_logs_debug(self, secret_record: bytes, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.DEBUG, logger="pngme.chunk.chunk")
        Chunk.decode(secret_record)
        assert "b'RuSt'" in caplog.text


# =============================================================================
# Decode Error Tests
# =============================================================================

class TestChunkDecodeErrors:
    """Tests for rejecting malformed records."""

    @pytest.mark.parametrize("size", [0, 1, 4, 8, 11])
    def test_too_short(self, size: int):
        with pytest.raises(InputTooShortError) as exc_info:
            Chunk.decode(bytes(size))
        assert exc_info.value.length == size

    def test_too_short_after_offset(self, secret_record: bytes):
        with pytest.raises(InputTooShortError):
            Chunk.from_bytes(secret_record, offset=len(secret_record) - 11)

    def test_reserved_bit_tag(self):
        message = b"hello"
        # Correct CRC, so only the tag can fail
        crc = Chunk(ChunkType.from_bytes(b"Rust"), message).crc()
        record = build_record(5, b"Rust", message, crc)
        with pytest.raises(InvalidChunkTypeError) as exc_info:
            Chunk.decode(record)
        assert exc_info.value.chunk_type == ChunkType.from_bytes(b"Rust")

    def test_non_letter_tag(self):
        record = build_record(0, b"Ru1t", b"", 0)
        with pytest.raises(InvalidChunkTypeError):
            Chunk.decode(record)

    def test_truncated_payload(self, secret_record: bytes):
        with pytest.raises(TruncatedPayloadError) as exc_info:
            Chunk.decode(secret_record[:30])
        assert exc_info.value.declared == 42
        assert exc_info.value.available == 22

    def test_missing_crc_byte(self, secret_record: bytes):
        with pytest.raises(TruncatedPayloadError):
            Chunk.decode(secret_record[:-1])

    def test_huge_declared_length(self):
        record = build_record(0xFFFFFFFF, b"RuSt", b"", 0)
        with pytest.raises(TruncatedPayloadError):
            Chunk.decode(record)

    def test_invalid_chunk_from_bytes(self):
        message = SECRET_MESSAGE.encode("utf-8")
        record = build_record(len(message), b"RuSt", message, SECRET_CRC - 1)
        with pytest.raises(ChecksumMismatchError) as exc_info:
            Chunk.decode(record)
        assert exc_info.value.expected == SECRET_CRC - 1
        assert exc_info.value.actual == SECRET_CRC

    def test_corrupted_last_byte(self, secret_record: bytes):
        corrupted = bytearray(secret_record)
        corrupted[-1] ^= 0xFF
        with pytest.raises(ChecksumMismatchError):
            Chunk.decode(bytes(corrupted))

    def test_corrupted_payload(self, secret_record: bytes):
        corrupted = bytearray(secret_record)
        corrupted[10] ^= 0x01
        with pytest.raises(ChecksumMismatchError):
            Chunk.decode(bytes(corrupted))

    def test_error_hierarchy(self):
        for error_class in (
            InputTooShortError,
            InvalidChunkTypeError,
            TruncatedPayloadError,
            ChecksumMismatchError,
            PayloadDecodeError,
            PayloadTooLargeError,
        ):
            assert issubclass(error_class, ChunkError)
            assert issubclass(error_class, PngmeError)

    def test_checksum_message(self):
        error = ChecksumMismatchError(1, 2)
        assert str(error) == "Invalid CRC when constructing chunk. Expected 1 but found 2"


# =============================================================================
# Round-Trip Tests
# =============================================================================

class TestChunkRoundTrip:
    """Tests for encode/decode cycles."""

    @pytest.mark.parametrize(
        "tag, data",
        [
            ("RuSt", b""),
            ("IHDR", bytes(range(13))),
            ("tEXt", b"Comment\x00hidden"),
            ("zzZz", bytes(range(256)) * 4),
        ],
    )
    def test_round_trip(self, tag: str, data: bytes):
        chunk = Chunk(ChunkType.from_str(tag), data)
        decoded = Chunk.decode(chunk.encode())
        assert decoded == chunk
        assert decoded.crc() == chunk.crc()

    def test_reencode_is_identity(self, secret_record: bytes):
        assert Chunk.decode(secret_record).encode() == secret_record
