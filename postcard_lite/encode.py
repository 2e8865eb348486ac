# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Primitive encoders.

Each function writes one wire value at the cursor and advances it by the
number of bytes written. On any error nothing is written and the offset is
left where it was.
"""

import struct
from typing import Optional, Union

from .errors import PostcardError
from .slice import PostcardSlice, writable
from .varint import (
    U16_MAX_BYTES,
    U32_MAX_BYTES,
    U64_MAX,
    U64_MAX_BYTES,
    U128_MAX,
    U128_MAX_BYTES,
    encode_signed_varint,
    encode_unsigned_varint,
    size_unsigned_varint,
)

U8_MAX = 0xFF
U16_MAX = 0xFFFF
U32_MAX = 0xFFFF_FFFF
I8_MIN, I8_MAX = -0x80, 0x7F
I16_MIN, I16_MAX = -0x8000, 0x7FFF
I32_MIN, I32_MAX = -0x8000_0000, 0x7FFF_FFFF
I64_MIN, I64_MAX = -0x8000_0000_0000_0000, 0x7FFF_FFFF_FFFF_FFFF
I128_MIN, I128_MAX = -(1 << 127), (1 << 127) - 1

OPTION_NONE = 0x00
OPTION_SOME = 0x01

F32_FORMAT = struct.Struct("<f")
F64_FORMAT = struct.Struct("<d")

BytesLike = Union[bytes, bytearray, memoryview]


def check_range(value, low: int, high: int) -> PostcardError:
    """Validate that value is an int within [low, high]."""
    if not isinstance(value, int):
        return PostcardError.INVALID_INPUT
    if value < low or value > high:
        return PostcardError.OVERFLOW
    return PostcardError.SUCCESS


def _put_byte(cursor: PostcardSlice, byte: int) -> PostcardError:
    if not writable(cursor):
        return PostcardError.INVALID_INPUT
    if cursor.len >= cursor.capacity:
        return PostcardError.BUFFER_TOO_SMALL
    cursor.data[cursor.len] = byte
    cursor.len += 1
    return PostcardError.SUCCESS


def _put_float(cursor: PostcardSlice, fmt: struct.Struct, value) -> PostcardError:
    if not writable(cursor) or not isinstance(value, (int, float)):
        return PostcardError.INVALID_INPUT
    if cursor.len + fmt.size > cursor.capacity:
        return PostcardError.BUFFER_TOO_SMALL
    try:
        fmt.pack_into(cursor.data, cursor.len, value)
    except OverflowError:
        return PostcardError.OVERFLOW
    cursor.len += fmt.size
    return PostcardError.SUCCESS


def encode_bool(cursor: PostcardSlice, value: bool) -> PostcardError:
    """Encode a bool as 0x00 / 0x01."""
    return _put_byte(cursor, 0x01 if value else 0x00)


def encode_u8(cursor: PostcardSlice, value: int) -> PostcardError:
    """Encode a u8 as one raw byte."""
    err = check_range(value, 0, U8_MAX)
    if err:
        return err
    return _put_byte(cursor, value)


def encode_i8(cursor: PostcardSlice, value: int) -> PostcardError:
    """Encode an i8 as one two's-complement byte."""
    err = check_range(value, I8_MIN, I8_MAX)
    if err:
        return err
    return _put_byte(cursor, value & 0xFF)


def encode_u16(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, 0, U16_MAX)
    if err:
        return err
    return encode_unsigned_varint(cursor, value, U16_MAX_BYTES)


def encode_i16(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, I16_MIN, I16_MAX)
    if err:
        return err
    return encode_signed_varint(cursor, value, U16_MAX_BYTES)


def encode_u32(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, 0, U32_MAX)
    if err:
        return err
    return encode_unsigned_varint(cursor, value, U32_MAX_BYTES)


def encode_i32(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, I32_MIN, I32_MAX)
    if err:
        return err
    return encode_signed_varint(cursor, value, U32_MAX_BYTES)


def encode_u64(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, 0, U64_MAX)
    if err:
        return err
    return encode_unsigned_varint(cursor, value, U64_MAX_BYTES)


def encode_i64(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, I64_MIN, I64_MAX)
    if err:
        return err
    return encode_signed_varint(cursor, value, U64_MAX_BYTES)


def encode_u128(cursor: PostcardSlice, value: int) -> PostcardError:
    """Encode a u128 as a varint of at most 19 bytes."""
    err = check_range(value, 0, U128_MAX)
    if err:
        return err
    return encode_unsigned_varint(cursor, value, U128_MAX_BYTES)


def encode_i128(cursor: PostcardSlice, value: int) -> PostcardError:
    err = check_range(value, I128_MIN, I128_MAX)
    if err:
        return err
    return encode_signed_varint(cursor, value, U128_MAX_BYTES)


def encode_f32(cursor: PostcardSlice, value: float) -> PostcardError:
    """
    Encode an f32 as 4 little-endian bytes.

    Values too large for single precision return OVERFLOW.
    """
    return _put_float(cursor, F32_FORMAT, value)


def encode_f64(cursor: PostcardSlice, value: float) -> PostcardError:
    """Encode an f64 as 8 little-endian bytes."""
    return _put_float(cursor, F64_FORMAT, value)


def encode_byte_array(
    cursor: PostcardSlice,
    data: Optional[BytesLike],
    length: Optional[int] = None,
) -> PostcardError:
    """
    Encode a varint length prefix followed by the raw bytes.

    Args:
        cursor: Encode cursor
        data: Payload (may be None only when length is 0)
        length: Number of bytes of data to encode (default: all of it)

    Returns:
        SUCCESS, or the error kind. The length prefix is only written when
        the payload fits too.
    """
    if not writable(cursor):
        return PostcardError.INVALID_INPUT
    if data is None:
        if length:
            return PostcardError.INVALID_INPUT
        data = b""
    try:
        payload = memoryview(data).cast("B")
    except TypeError:
        return PostcardError.INVALID_INPUT
    if length is None:
        length = payload.nbytes
    elif length < 0 or length > payload.nbytes:
        return PostcardError.INVALID_INPUT
    if length > U64_MAX:
        return PostcardError.OVERFLOW

    if cursor.len + size_unsigned_varint(length) + length > cursor.capacity:
        return PostcardError.BUFFER_TOO_SMALL

    err = encode_unsigned_varint(cursor, length, U64_MAX_BYTES)
    if err:
        return err
    cursor.data[cursor.len:cursor.len + length] = payload[:length]
    cursor.len += length
    return PostcardError.SUCCESS


def encode_string(
    cursor: PostcardSlice,
    string: Union[str, BytesLike, None],
    length: Optional[int] = None,
) -> PostcardError:
    """
    Encode a string: varint byte length, then the UTF-8 bytes.

    A str is UTF-8 encoded first; bytes-like input is written as-is and
    length counts bytes, not characters. A str that cannot be UTF-8
    encoded (lone surrogates) is INVALID_INPUT.
    """
    if isinstance(string, str):
        try:
            string = string.encode("utf-8")
        except UnicodeEncodeError:
            return PostcardError.INVALID_INPUT
    return encode_byte_array(cursor, string, length)


def encode_option_none(cursor: PostcardSlice) -> PostcardError:
    """Encode the None tag of an option."""
    return _put_byte(cursor, OPTION_NONE)


def encode_option_some(cursor: PostcardSlice) -> PostcardError:
    """Encode the Some tag of an option. The caller encodes the payload next."""
    return _put_byte(cursor, OPTION_SOME)


def encode_variant(cursor: PostcardSlice, discriminant: int) -> PostcardError:
    """Encode an enum discriminant as a u32 varint."""
    return encode_u32(cursor, discriminant)


def start_seq(cursor: PostcardSlice, count: int) -> PostcardError:
    """Encode a sequence length. Elements follow, encoded by the caller."""
    return encode_unsigned_varint(cursor, count, U64_MAX_BYTES)


def start_map(cursor: PostcardSlice, count: int) -> PostcardError:
    """Encode a map length. Key/value pairs follow, encoded by the caller."""
    return encode_unsigned_varint(cursor, count, U64_MAX_BYTES)
