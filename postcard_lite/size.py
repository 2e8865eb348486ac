# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Encoded-size calculators.

Pure functions returning exactly how many bytes the matching encode_*
function writes, so callers can size a buffer before encoding.

Integer arguments are wrapped to the width of their type first, the way a
C cast would, so a value the encoder rejects as OVERFLOW still gets the
size of its truncated form.

Example:
    needed = size_u32(1234) + size_string(len(name)) + size_bool()
    cursor = init_slice(bytearray(needed))
"""

from .varint import size_signed_varint, size_unsigned_varint

BOOL_SIZE = 1
U8_SIZE = 1
F32_SIZE = 4
F64_SIZE = 8
OPTION_TAG_SIZE = 1


def _unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) & ((1 << bits) - 1)) - half


def size_bool() -> int:
    return BOOL_SIZE


def size_u8() -> int:
    return U8_SIZE


def size_i8() -> int:
    return U8_SIZE


def size_u16(value: int) -> int:
    return size_unsigned_varint(_unsigned(value, 16))


def size_i16(value: int) -> int:
    return size_signed_varint(_signed(value, 16))


def size_u32(value: int) -> int:
    return size_unsigned_varint(_unsigned(value, 32))


def size_i32(value: int) -> int:
    return size_signed_varint(_signed(value, 32))


def size_u64(value: int) -> int:
    return size_unsigned_varint(_unsigned(value, 64))


def size_i64(value: int) -> int:
    return size_signed_varint(_signed(value, 64))


def size_u128(value: int) -> int:
    return size_unsigned_varint(_unsigned(value, 128))


def size_i128(value: int) -> int:
    return size_signed_varint(_signed(value, 128), 128)


def size_f32() -> int:
    return F32_SIZE


def size_f64() -> int:
    return F64_SIZE


def size_byte_array(length: int) -> int:
    """Length prefix plus payload."""
    return size_unsigned_varint(length) + length


def size_string(length: int) -> int:
    """Length prefix plus payload; length is in UTF-8 bytes."""
    return size_byte_array(length)


def size_option_none() -> int:
    return OPTION_TAG_SIZE


def size_option_some(inner_size: int) -> int:
    """Tag byte plus the caller-computed size of the payload."""
    return OPTION_TAG_SIZE + inner_size


def size_variant(discriminant: int) -> int:
    """Size of the discriminant only; add the payload size separately."""
    return size_u32(discriminant)


def size_seq(count: int) -> int:
    """Size of the length prefix only; add the element sizes separately."""
    return size_unsigned_varint(count)


def size_map(count: int) -> int:
    return size_unsigned_varint(count)
