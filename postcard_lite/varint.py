# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Varint encoding/decoding (LEB128-style, postcard compatible).

Postcard uses unsigned LEB128 for variable-length integers and zigzag
mapping for signed ones. Every multi-byte integer type is a varint with a
maximum byte budget derived from its bit width.
"""

from typing import Optional

from .errors import Decoded, PostcardError, failed, ok
from .slice import PostcardSlice, readable, writable

U64_MAX = 0xFFFF_FFFF_FFFF_FFFF
U128_MAX = (1 << 128) - 1


def varint_max(bits: int) -> int:
    """Maximum encoded length of a varint for an integer of `bits` width."""
    return (bits + 6) // 7


U16_MAX_BYTES = varint_max(16)
U32_MAX_BYTES = varint_max(32)
U64_MAX_BYTES = varint_max(64)
U128_MAX_BYTES = varint_max(128)

# Exclusive upper bounds of the 1..18 byte encodings
_THRESHOLDS = tuple(1 << (7 * n) for n in range(1, U128_MAX_BYTES))


def _width(max_bytes: int) -> int:
    """Integer width carried by a byte budget: 64 bits, or 128 above it."""
    return 128 if max_bytes > U64_MAX_BYTES else 64


def size_unsigned_varint(value: int) -> int:
    """
    Number of bytes an unsigned value occupies as a varint.

    Args:
        value: Integer in [0, 2**128)

    Returns:
        Encoded length, 1 to 19
    """
    for size, limit in enumerate(_THRESHOLDS, start=1):
        if value < limit:
            return size
    return U128_MAX_BYTES


def zigzag_encode(value: int, bits: int = 64) -> int:
    """Map a signed `bits`-wide integer onto an unsigned magnitude."""
    return ((value << 1) ^ (value >> (bits - 1))) & ((1 << bits) - 1)


def zigzag_decode(value: int) -> int:
    """Invert zigzag_encode."""
    return (value >> 1) ^ -(value & 1)


def size_signed_varint(value: int, bits: int = 64) -> int:
    """Number of bytes a signed value occupies as a zigzag varint."""
    return size_unsigned_varint(zigzag_encode(value, bits))


def encode_unsigned_varint(
    cursor: PostcardSlice, value: int, max_bytes: int
) -> PostcardError:
    """
    Encode an unsigned integer as a varint at the cursor.

    Args:
        cursor: Encode cursor
        value: Non-negative integer to encode
        max_bytes: Byte budget of the declared type

    Returns:
        SUCCESS, or the error kind; the cursor is untouched on error
    """
    if not writable(cursor) or not isinstance(value, int) or value < 0:
        return PostcardError.INVALID_INPUT
    if value >> _width(max_bytes):
        return PostcardError.OVERFLOW

    needed = size_unsigned_varint(value)
    if needed > max_bytes:
        return PostcardError.OVERFLOW
    if cursor.len + needed > cursor.capacity:
        return PostcardError.BUFFER_TOO_SMALL

    data = cursor.data
    pos = cursor.len
    while value >= 0x80:
        data[pos] = (value & 0x7F) | 0x80
        value >>= 7
        pos += 1
    data[pos] = value
    cursor.len = pos + 1
    return PostcardError.SUCCESS


def encode_signed_varint(
    cursor: PostcardSlice, value: int, max_bytes: int
) -> PostcardError:
    """Encode a signed integer as a zigzag varint at the cursor."""
    if not isinstance(value, int):
        return PostcardError.INVALID_INPUT
    return encode_unsigned_varint(
        cursor, zigzag_encode(value, _width(max_bytes)), max_bytes
    )


def decode_unsigned_varint(
    cursor: Optional[PostcardSlice], max_bytes: int
) -> Decoded:
    """
    Decode a varint from the cursor.

    Args:
        cursor: Decode cursor
        max_bytes: Byte budget of the declared type

    Returns:
        Decoded(SUCCESS, value); on error the cursor is not advanced
    """
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)

    data = cursor.data
    pos = cursor.len
    value = 0
    shift = 0

    for _ in range(max_bytes):
        if pos >= cursor.capacity:
            return failed(PostcardError.INCOMPLETE_DATA)

        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift

        if not (byte & 0x80):
            if value >> _width(max_bytes):
                return failed(PostcardError.OVERFLOW)
            cursor.len = pos
            return ok(value)

        shift += 7

    return failed(PostcardError.OVERFLOW)


def decode_signed_varint(
    cursor: Optional[PostcardSlice], max_bytes: int
) -> Decoded:
    """Decode a zigzag varint from the cursor."""
    err, magnitude = decode_unsigned_varint(cursor, max_bytes)
    if err:
        return failed(err)
    return ok(zigzag_decode(magnitude))
