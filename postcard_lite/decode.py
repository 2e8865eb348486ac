# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Primitive decoders.

Each function reads one wire value at the cursor and returns a Decoded
pair. The cursor only advances on success, so a failed decode can be
inspected or retried from the same position.

Byte arrays and strings are decoded in two steps: first the length
(decode_byte_array_len / decode_string_len), then the payload into a
caller-provided destination (decode_byte_array / decode_string).
"""

import struct
from typing import Optional

from .encode import (
    F32_FORMAT,
    F64_FORMAT,
    I16_MAX,
    I16_MIN,
    I32_MAX,
    I32_MIN,
    OPTION_NONE,
    OPTION_SOME,
    U16_MAX,
    U32_MAX,
)
from .errors import Decoded, PostcardError, failed, ok
from .slice import PostcardSlice, readable
from .varint import (
    U16_MAX_BYTES,
    U32_MAX_BYTES,
    U64_MAX_BYTES,
    U128_MAX_BYTES,
    decode_signed_varint,
    decode_unsigned_varint,
)



def _take_byte(cursor: Optional[PostcardSlice]) -> Decoded:
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    if cursor.len >= cursor.capacity:
        return failed(PostcardError.INCOMPLETE_DATA)
    byte = cursor.data[cursor.len]
    cursor.len += 1
    return ok(byte)


def _take_tag(cursor: Optional[PostcardSlice]) -> Decoded:
    """Read a 0x00/0x01 byte as a bool; anything else is invalid."""
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    if cursor.len >= cursor.capacity:
        return failed(PostcardError.INCOMPLETE_DATA)
    byte = cursor.data[cursor.len]
    if byte == OPTION_NONE:
        value = False
    elif byte == OPTION_SOME:
        value = True
    else:
        return failed(PostcardError.INVALID_INPUT)
    cursor.len += 1
    return ok(value)


def _take_float(cursor: Optional[PostcardSlice], fmt: struct.Struct) -> Decoded:
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    if cursor.len + fmt.size > cursor.capacity:
        return failed(PostcardError.INCOMPLETE_DATA)
    (value,) = fmt.unpack_from(cursor.data, cursor.len)
    cursor.len += fmt.size
    return ok(value)


def _decode_narrow(cursor, decoder, max_bytes: int, low: int, high: int) -> Decoded:
    """Decode a varint and reject values outside [low, high] without advancing."""
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    start = cursor.len
    err, value = decoder(cursor, max_bytes)
    if err:
        return failed(err)
    if not low <= value <= high:
        cursor.len = start
        return failed(PostcardError.OVERFLOW)
    return ok(value)


def decode_bool(cursor: PostcardSlice) -> Decoded:
    """Decode a bool; bytes other than 0x00/0x01 are INVALID_INPUT."""
    return _take_tag(cursor)


def decode_u8(cursor: PostcardSlice) -> Decoded:
    return _take_byte(cursor)


def decode_i8(cursor: PostcardSlice) -> Decoded:
    err, byte = _take_byte(cursor)
    if err:
        return failed(err)
    return ok(byte - 0x100 if byte & 0x80 else byte)


def decode_u16(cursor: PostcardSlice) -> Decoded:
    return _decode_narrow(cursor, decode_unsigned_varint, U16_MAX_BYTES, 0, U16_MAX)


def decode_i16(cursor: PostcardSlice) -> Decoded:
    return _decode_narrow(cursor, decode_signed_varint, U16_MAX_BYTES, I16_MIN, I16_MAX)


def decode_u32(cursor: PostcardSlice) -> Decoded:
    """
    Decode a u32 varint.

    A well-formed varint whose value does not fit in 32 bits (e.g. one
    written for a u64) is rejected with OVERFLOW.
    """
    return _decode_narrow(cursor, decode_unsigned_varint, U32_MAX_BYTES, 0, U32_MAX)


def decode_i32(cursor: PostcardSlice) -> Decoded:
    return _decode_narrow(cursor, decode_signed_varint, U32_MAX_BYTES, I32_MIN, I32_MAX)


def decode_u64(cursor: PostcardSlice) -> Decoded:
    return decode_unsigned_varint(cursor, U64_MAX_BYTES)


def decode_i64(cursor: PostcardSlice) -> Decoded:
    return decode_signed_varint(cursor, U64_MAX_BYTES)


def decode_u128(cursor: PostcardSlice) -> Decoded:
    """Decode a u128 varint (up to 19 bytes)."""
    return decode_unsigned_varint(cursor, U128_MAX_BYTES)


def decode_i128(cursor: PostcardSlice) -> Decoded:
    return decode_signed_varint(cursor, U128_MAX_BYTES)


def decode_f32(cursor: PostcardSlice) -> Decoded:
    """Decode 4 little-endian bytes as an f32 (returned as a Python float)."""
    return _take_float(cursor, F32_FORMAT)


def decode_f64(cursor: PostcardSlice) -> Decoded:
    return _take_float(cursor, F64_FORMAT)


def decode_byte_array_len(cursor: PostcardSlice) -> Decoded:
    """Decode the varint length prefix of a byte array."""
    return decode_unsigned_varint(cursor, U64_MAX_BYTES)


def decode_byte_array(
    cursor: PostcardSlice,
    dest,
    max_length: Optional[int],
    actual_length: int,
) -> Decoded:
    """
    Copy a byte-array payload into a caller-provided destination.

    Args:
        cursor: Decode cursor positioned after the length prefix
        dest: Writable buffer receiving the bytes, or None to skip them
        max_length: Capacity of dest to honour (default: len(dest))
        actual_length: Length returned by decode_byte_array_len

    Returns:
        Decoded(SUCCESS, actual_length). INCOMPLETE_DATA if the source holds
        fewer than actual_length bytes, BUFFER_TOO_SMALL if actual_length
        exceeds max_length. dest is not modified on error.
    """
    if not readable(cursor) or not isinstance(actual_length, int) or actual_length < 0:
        return failed(PostcardError.INVALID_INPUT)

    target = None
    if dest is not None:
        try:
            target = memoryview(dest).cast("B")
        except TypeError:
            return failed(PostcardError.INVALID_INPUT)
        if target.readonly:
            return failed(PostcardError.INVALID_INPUT)
        if max_length is None:
            max_length = target.nbytes
        elif max_length > target.nbytes:
            return failed(PostcardError.INVALID_INPUT)
    elif max_length is None:
        max_length = actual_length

    if cursor.len + actual_length > cursor.capacity:
        return failed(PostcardError.INCOMPLETE_DATA)
    if actual_length > max_length:
        return failed(PostcardError.BUFFER_TOO_SMALL)

    if target is not None and actual_length:
        target[:actual_length] = cursor.data[cursor.len:cursor.len + actual_length]
    cursor.len += actual_length
    return ok(actual_length)


def decode_string_len(cursor: PostcardSlice) -> Decoded:
    """Decode the varint byte length of a string."""
    return decode_byte_array_len(cursor)


def decode_string(
    cursor: PostcardSlice,
    dest,
    max_length: Optional[int],
    actual_length: int,
) -> Decoded:
    """
    Copy string bytes into dest. No terminator is written and the bytes
    are not checked for valid UTF-8; use take_string for a checked str.
    """
    return decode_byte_array(cursor, dest, max_length, actual_length)


def decode_option_tag(cursor: PostcardSlice) -> Decoded:
    """Decode an option tag; value is True for Some, False for None."""
    return _take_tag(cursor)


def decode_variant(cursor: PostcardSlice) -> Decoded:
    """Decode an enum discriminant (u32 varint)."""
    return decode_u32(cursor)


def decode_seq_len(cursor: PostcardSlice) -> Decoded:
    return decode_unsigned_varint(cursor, U64_MAX_BYTES)


def decode_map_len(cursor: PostcardSlice) -> Decoded:
    return decode_seq_len(cursor)


def take_byte_array(cursor: PostcardSlice) -> Decoded:
    """
    Decode a length-prefixed byte array without copying.

    Returns:
        Decoded(SUCCESS, memoryview) borrowing the source buffer
    """
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    start = cursor.len
    err, length = decode_byte_array_len(cursor)
    if err:
        return failed(err)
    if cursor.len + length > cursor.capacity:
        cursor.len = start
        return failed(PostcardError.INCOMPLETE_DATA)
    view = cursor.data[cursor.len:cursor.len + length]
    cursor.len += length
    return ok(view)


def take_string(cursor: PostcardSlice) -> Decoded:
    """
    Decode a length-prefixed string into a str.

    Unlike decode_string, the bytes must be valid UTF-8 (INVALID_INPUT
    otherwise).
    """
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    start = cursor.len
    err, view = take_byte_array(cursor)
    if err:
        return failed(err)
    try:
        return ok(str(view, "utf-8"))
    except UnicodeDecodeError:
        cursor.len = start
        return failed(PostcardError.INVALID_INPUT)
