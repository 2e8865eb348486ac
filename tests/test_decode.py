# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Tests for primitive decoders."""

import math

import pytest

from postcard_lite import (
    PostcardError,
    init_slice,
    encode_bool,
    encode_u8,
    encode_i8,
    encode_u16,
    encode_i16,
    encode_u32,
    encode_i32,
    encode_u64,
    encode_i64,
    encode_u128,
    encode_i128,
    encode_string,
    encode_f32,
    encode_f64,
    encode_byte_array,
    encode_option_none,
    encode_option_some,
    encode_variant,
    start_seq,
    start_map,
    decode_bool,
    decode_u8,
    decode_i8,
    decode_u16,
    decode_i16,
    decode_u32,
    decode_i32,
    decode_u64,
    decode_i64,
    decode_u128,
    decode_i128,
    decode_f32,
    decode_f64,
    decode_byte_array_len,
    decode_byte_array,
    decode_string_len,
    decode_string,
    decode_option_tag,
    decode_variant,
    decode_seq_len,
    decode_map_len,
    take_byte_array,
    take_string,
)

from helpers import encoded, reader_for


class TestFixedWidth:
    """Tests for single-byte and float decoders."""

    def test_bool(self):
        """0x00 and 0x01 are the only booleans."""
        r = reader_for(b"\x00\x01\x02")
        assert decode_bool(r) == (PostcardError.SUCCESS, False)
        assert decode_bool(r) == (PostcardError.SUCCESS, True)
        assert decode_bool(r).error == PostcardError.INVALID_INPUT
        assert r.len == 2

    def test_u8_i8(self):
        """8-bit integers are one raw byte."""
        r = reader_for(b"\xFF\xFF\x80\x7F")
        assert decode_u8(r) == (PostcardError.SUCCESS, 255)
        assert decode_i8(r) == (PostcardError.SUCCESS, -1)
        assert decode_i8(r) == (PostcardError.SUCCESS, -128)
        assert decode_i8(r) == (PostcardError.SUCCESS, 127)

    def test_f32(self):
        """f32 reads 4 little-endian bytes."""
        r = reader_for(b"\x00\x00\x80\x3F")
        assert decode_f32(r) == (PostcardError.SUCCESS, 1.0)
        assert r.len == 4

    def test_f64(self):
        """f64 reads 8 little-endian bytes."""
        r = reader_for(b"\x00\x00\x00\x00\x00\x00\xF0\x3F")
        assert decode_f64(r) == (PostcardError.SUCCESS, 1.0)

    def test_f32_nan(self):
        """NaN survives a round trip."""
        r = reader_for(encoded(encode_f32, math.nan))
        err, value = decode_f32(r)
        assert err == PostcardError.SUCCESS
        assert math.isnan(value)

    @pytest.mark.parametrize("decode, data", [
        (decode_bool, b""),
        (decode_u8, b""),
        (decode_i8, b""),
        (decode_option_tag, b""),
        (decode_f32, b"\x00\x00\x80"),
        (decode_f64, b"\x00" * 7),
    ])
    def test_truncated(self, decode, data):
        """Short input is incomplete, never an IndexError."""
        r = reader_for(data)
        assert decode(r).error == PostcardError.INCOMPLETE_DATA
        assert r.len == 0


class TestVarintIntegers:
    """Tests for 16/32/64/128-bit decoders."""

    def test_u32_1234(self):
        """D2 09 decodes to 1234."""
        r = reader_for(b"\xD2\x09")
        assert decode_u32(r) == (PostcardError.SUCCESS, 1234)
        assert r.len == 2

    def test_i32_minus_ten(self):
        """0x13 decodes to -10."""
        assert decode_i32(reader_for(b"\x13")) == (PostcardError.SUCCESS, -10)

    def test_u16_rejects_wider_value(self):
        """A three-byte value above u16 overflows and leaves the cursor."""
        r = reader_for(b"\xFF\xFF\x07")
        assert decode_u16(r).error == PostcardError.OVERFLOW
        assert r.len == 0

    def test_i16_rejects_wider_value(self):
        """A zigzag value outside i16 overflows."""
        r = reader_for(b"\x80\x80\x04")  # zigzag 65536 -> 32768
        assert decode_i16(r).error == PostcardError.OVERFLOW

    def test_u32_rejects_u64_value(self):
        """A u64 written value above u32 is rejected."""
        data = encoded(encode_u64, 1 << 32)
        assert len(data) == 5
        r = reader_for(data)
        assert decode_u32(r).error == PostcardError.OVERFLOW
        assert r.len == 0
        assert decode_u64(r) == (PostcardError.SUCCESS, 1 << 32)

    def test_i32_rejects_i64_value(self):
        """An i64 written value below i32 is rejected."""
        r = reader_for(encoded(encode_i64, -(1 << 31) - 1))
        assert decode_i32(r).error == PostcardError.OVERFLOW

    def test_u32_budget(self):
        """Six bytes are too many for a u32."""
        r = reader_for(b"\x80\x80\x80\x80\x80\x01")
        assert decode_u32(r).error == PostcardError.OVERFLOW

    def test_i64_extremes(self):
        """i64 bounds decode."""
        assert decode_i64(reader_for(b"\xFF" * 9 + b"\x01")) == (
            PostcardError.SUCCESS, -(1 << 63))
        assert decode_i64(reader_for(b"\xFE" + b"\xFF" * 8 + b"\x01")) == (
            PostcardError.SUCCESS, (1 << 63) - 1)

    def test_u128_i128_extremes(self):
        """128-bit bounds decode from their 19-byte forms."""
        assert decode_u128(reader_for(b"\xFF" * 18 + b"\x03")) == (
            PostcardError.SUCCESS, (1 << 128) - 1)
        assert decode_i128(reader_for(b"\xFF" * 18 + b"\x03")) == (
            PostcardError.SUCCESS, -(1 << 127))
        assert decode_i128(reader_for(b"\xFE" + b"\xFF" * 17 + b"\x03")) == (
            PostcardError.SUCCESS, (1 << 127) - 1)

    def test_u128_rejects_wider_value(self):
        """A 19th byte carrying bits above 128 overflows."""
        r = reader_for(b"\xFF" * 18 + b"\x04")
        assert decode_u128(r).error == PostcardError.OVERFLOW
        assert r.len == 0

    def test_u64_rejects_u128_value(self):
        """A u128 value above 64 bits does not decode as a u64."""
        r = reader_for(encoded(encode_u128, 1 << 64))
        assert decode_u64(r).error == PostcardError.OVERFLOW
        assert decode_u128(r) == (PostcardError.SUCCESS, 1 << 64)

    @pytest.mark.parametrize("decode", [decode_u16, decode_i16, decode_u32, decode_i32,
                                        decode_u64, decode_i64, decode_u128,
                                        decode_i128, decode_variant,
                                        decode_seq_len, decode_map_len])
    def test_truncated(self, decode):
        """Varints cut short are incomplete."""
        r = reader_for(b"\x80")
        assert decode(r).error == PostcardError.INCOMPLETE_DATA
        assert r.len == 0

    def test_no_cursor(self):
        """A missing cursor is invalid input."""
        assert decode_u16(None).error == PostcardError.INVALID_INPUT
        assert decode_i64(None).error == PostcardError.INVALID_INPUT
        assert decode_bool(None).error == PostcardError.INVALID_INPUT
        assert decode_f64(None).error == PostcardError.INVALID_INPUT


class TestTags:
    """Tests for option, variant, sequence and map decoders."""

    def test_option_tag(self):
        """Option tags decode to is_some."""
        r = reader_for(b"\x00\x01\x05")
        assert decode_option_tag(r) == (PostcardError.SUCCESS, False)
        assert decode_option_tag(r) == (PostcardError.SUCCESS, True)
        assert decode_option_tag(r).error == PostcardError.INVALID_INPUT
        assert r.len == 2

    def test_variant(self):
        """Variant discriminants are u32 varints."""
        assert decode_variant(reader_for(b"\xC8\x01")) == (PostcardError.SUCCESS, 200)

    def test_seq_and_map_len(self):
        """Sequence and map lengths are unsigned varints."""
        r = reader_for(b"\x03\x80\x01")
        assert decode_seq_len(r) == (PostcardError.SUCCESS, 3)
        assert decode_map_len(r) == (PostcardError.SUCCESS, 128)


class TestByteArrays:
    """Tests for two-step byte array and string decoding."""

    def test_hi(self):
        """03 'H' 'i' '!' decodes to length 3 and the original bytes."""
        r = reader_for(b"\x03Hi!")
        err, length = decode_string_len(r)
        assert err == PostcardError.SUCCESS
        assert length == 3

        dest = bytearray(8)
        assert decode_string(r, dest, len(dest), length) == (PostcardError.SUCCESS, 3)
        assert dest[:3] == b"Hi!"
        assert r.len == 4

    def test_default_max_length(self):
        """max_length defaults to the destination size."""
        r = reader_for(b"\x02\xAA\xBB")
        _, length = decode_byte_array_len(r)
        dest = bytearray(2)
        assert decode_byte_array(r, dest, None, length).is_ok
        assert dest == b"\xAA\xBB"

    def test_destination_too_small(self):
        """A short destination is not written to."""
        r = reader_for(b"\x05Hello")
        _, length = decode_string_len(r)
        dest = bytearray(b"\xEE" * 4)
        assert decode_string(r, dest, len(dest), length).error == PostcardError.BUFFER_TOO_SMALL
        assert dest == b"\xEE" * 4
        assert r.len == 1

    def test_declared_max_smaller_than_dest(self):
        """The declared maximum is honoured even if dest is bigger."""
        r = reader_for(b"\x03abc")
        _, length = decode_byte_array_len(r)
        dest = bytearray(10)
        assert decode_byte_array(r, dest, 2, length).error == PostcardError.BUFFER_TOO_SMALL

    def test_max_larger_than_dest(self):
        """A maximum beyond the destination is invalid."""
        r = reader_for(b"\x03abc")
        _, length = decode_byte_array_len(r)
        assert decode_byte_array(r, bytearray(2), 8, length).error == PostcardError.INVALID_INPUT

    def test_source_truncated(self):
        """Fewer source bytes than declared is incomplete, checked first."""
        r = reader_for(b"\x05Hi")
        _, length = decode_byte_array_len(r)
        dest = bytearray(1)
        assert decode_byte_array(r, dest, 1, length).error == PostcardError.INCOMPLETE_DATA
        assert r.len == 1

    def test_empty_payload(self):
        """Zero-length arrays decode."""
        r = reader_for(b"\x00")
        _, length = decode_byte_array_len(r)
        assert decode_byte_array(r, bytearray(0), 0, length) == (PostcardError.SUCCESS, 0)
        assert r.len == 1

    def test_skip_payload(self):
        """dest=None skips the payload."""
        r = reader_for(b"\x02ab\x07")
        _, length = decode_byte_array_len(r)
        assert decode_byte_array(r, None, None, length).is_ok
        assert decode_u8(r) == (PostcardError.SUCCESS, 7)

    def test_read_only_destination(self):
        """Destinations must be writable."""
        r = reader_for(b"\x01a")
        _, length = decode_byte_array_len(r)
        assert decode_byte_array(r, b"x", 1, length).error == PostcardError.INVALID_INPUT

    def test_string_bytes_unchecked(self):
        """decode_string copies bytes without UTF-8 validation."""
        r = reader_for(b"\x02\xFF\xFE")
        _, length = decode_string_len(r)
        dest = bytearray(2)
        assert decode_string(r, dest, 2, length).is_ok
        assert dest == b"\xFF\xFE"


class TestTake:
    """Tests for borrowed byte array and checked string decoding."""

    def test_take_byte_array(self):
        """The payload is a view into the source."""
        source = bytearray(b"\x03abc\x01")
        r = init_slice(source)
        err, view = take_byte_array(r)
        assert err == PostcardError.SUCCESS
        assert isinstance(view, memoryview)
        assert bytes(view) == b"abc"
        source[1] = ord("z")
        assert bytes(view) == b"zbc"
        assert r.len == 4

    def test_take_byte_array_truncated(self):
        """A short payload rolls back the length prefix."""
        r = reader_for(b"\x05ab")
        assert take_byte_array(r).error == PostcardError.INCOMPLETE_DATA
        assert r.len == 0

    def test_take_string(self):
        """Strings decode to str."""
        r = reader_for(encoded(encode_string, "héllo"))
        assert take_string(r) == (PostcardError.SUCCESS, "héllo")

    def test_take_string_bad_utf8(self):
        """Invalid UTF-8 is invalid input and nothing is consumed."""
        r = reader_for(b"\x02\xFF\xFE")
        assert take_string(r).error == PostcardError.INVALID_INPUT
        assert r.len == 0


class TestRecord:
    """Decoding several fields in the order they were written."""

    def test_fields_in_order(self, cursor):
        """Offsets match between the encode and decode passes."""
        assert encode_u32(cursor, 1234) == PostcardError.SUCCESS
        assert encode_string(cursor, "PostcardTest") == PostcardError.SUCCESS

        r = cursor.reader()
        assert r.capacity == cursor.len
        assert decode_u32(r) == (PostcardError.SUCCESS, 1234)
        assert take_string(r) == (PostcardError.SUCCESS, "PostcardTest")
        assert r.len == cursor.len
        assert decode_u8(r).error == PostcardError.INCOMPLETE_DATA


def _encode_option(cursor, present):
    return encode_option_some(cursor) if present else encode_option_none(cursor)


class TestRoundTrip:
    """Every primitive decodes to the value it was encoded from."""

    @pytest.mark.parametrize("encode, decode, value", [
        (encode_bool, decode_bool, False),
        (encode_bool, decode_bool, True),
        (encode_u8, decode_u8, 0),
        (encode_u8, decode_u8, 0xFF),
        (encode_i8, decode_i8, -0x80),
        (encode_i8, decode_i8, 0x7F),
        (encode_u16, decode_u16, 0),
        (encode_u16, decode_u16, 0xFFFF),
        (encode_i16, decode_i16, -0x8000),
        (encode_i16, decode_i16, 0x7FFF),
        (encode_u32, decode_u32, 127),
        (encode_u32, decode_u32, 0xFFFFFFFF),
        (encode_i32, decode_i32, -(1 << 31)),
        (encode_i32, decode_i32, (1 << 31) - 1),
        (encode_u64, decode_u64, 128),
        (encode_u64, decode_u64, (1 << 64) - 1),
        (encode_i64, decode_i64, -(1 << 63)),
        (encode_i64, decode_i64, (1 << 63) - 1),
        (encode_u128, decode_u128, (1 << 128) - 1),
        (encode_i128, decode_i128, -(1 << 127)),
        (encode_i128, decode_i128, (1 << 127) - 1),
        (encode_f32, decode_f32, -1.5),
        (encode_f32, decode_f32, 3.4028234663852886e38),
        (encode_f32, decode_f32, math.inf),
        (encode_f64, decode_f64, math.pi),
        (encode_f64, decode_f64, -1.7976931348623157e308),
        (encode_byte_array, take_byte_array, b""),
        (encode_byte_array, take_byte_array, b"\x00\x01\xFF" * 50),
        (encode_string, take_string, ""),
        (encode_string, take_string, "PostcardTest é"),
        (_encode_option, decode_option_tag, False),
        (_encode_option, decode_option_tag, True),
        (encode_variant, decode_variant, 0),
        (encode_variant, decode_variant, 0xFFFFFFFF),
        (start_seq, decode_seq_len, 3),
        (start_seq, decode_seq_len, (1 << 64) - 1),
        (start_map, decode_map_len, 0),
        (start_map, decode_map_len, 300),
    ])
    def test_roundtrip(self, encode, decode, value):
        """The decoded value matches and the offsets line up."""
        c = init_slice(bytearray(256))
        assert encode(c, value) == PostcardError.SUCCESS

        r = c.reader()
        err, decoded = decode(r)

        assert err == PostcardError.SUCCESS
        assert decoded == value
        assert r.len == c.len
