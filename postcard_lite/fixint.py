# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Fixed-width integer encoding.

Postcard writes integers as varints by default. A field can opt into a raw
fixed-width form instead, little-endian or big-endian, which trades size
for a constant layout (register maps, hashes, values that are usually
large).

Example:
    encode_fixint_le(cursor, U16, 0xABCD)   # writes CD AB
    encode_fixint_be(cursor, U16, 0xABCD)   # writes AB CD
"""

from typing import NamedTuple

from .encode import check_range
from .errors import Decoded, PostcardError, failed, ok
from .slice import PostcardSlice, readable, writable


class FixInt(NamedTuple):
    """Width and signedness of a fixed-width integer type."""
    size: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.size * 8 - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        if self.signed:
            return (1 << (self.size * 8 - 1)) - 1
        return (1 << (self.size * 8)) - 1


U16 = FixInt(2, False)
U32 = FixInt(4, False)
U64 = FixInt(8, False)
U128 = FixInt(16, False)
I16 = FixInt(2, True)
I32 = FixInt(4, True)
I64 = FixInt(8, True)
I128 = FixInt(16, True)


def _encode(cursor: PostcardSlice, kind: FixInt, value: int, byteorder: str) -> PostcardError:
    if not writable(cursor):
        return PostcardError.INVALID_INPUT
    err = check_range(value, kind.min, kind.max)
    if err:
        return err
    if cursor.len + kind.size > cursor.capacity:
        return PostcardError.BUFFER_TOO_SMALL
    end = cursor.len + kind.size
    cursor.data[cursor.len:end] = value.to_bytes(kind.size, byteorder, signed=kind.signed)
    cursor.len = end
    return PostcardError.SUCCESS


def _decode(cursor: PostcardSlice, kind: FixInt, byteorder: str) -> Decoded:
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    if cursor.len + kind.size > cursor.capacity:
        return failed(PostcardError.INCOMPLETE_DATA)
    end = cursor.len + kind.size
    value = int.from_bytes(cursor.data[cursor.len:end], byteorder, signed=kind.signed)
    cursor.len = end
    return ok(value)


def encode_fixint_le(cursor: PostcardSlice, kind: FixInt, value: int) -> PostcardError:
    """
    Encode value as kind.size little-endian bytes.

    Returns:
        SUCCESS; OVERFLOW if value does not fit kind; INVALID_INPUT for a
        non-integer; BUFFER_TOO_SMALL (nothing written)
    """
    return _encode(cursor, kind, value, "little")


def encode_fixint_be(cursor: PostcardSlice, kind: FixInt, value: int) -> PostcardError:
    """Encode value as kind.size big-endian bytes."""
    return _encode(cursor, kind, value, "big")


def decode_fixint_le(cursor: PostcardSlice, kind: FixInt) -> Decoded:
    """Decode kind.size little-endian bytes; INCOMPLETE_DATA if short."""
    return _decode(cursor, kind, "little")


def decode_fixint_be(cursor: PostcardSlice, kind: FixInt) -> Decoded:
    return _decode(cursor, kind, "big")


def size_fixint(kind: FixInt) -> int:
    return kind.size
