# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
postcard-lite - allocation-free postcard wire format codec.

Values are encoded into, and decoded from, a caller-owned buffer through a
PostcardSlice cursor. Every operation returns an outcome instead of
raising: encoders return a PostcardError, decoders a Decoded pair.

Example usage:
    from postcard_lite import init_slice, encode_u32, encode_string, decode_u32

    buf = bytearray(32)
    cursor = init_slice(buf)
    encode_u32(cursor, 1234)          # D2 09
    encode_string(cursor, "Hi!")      # 03 48 69 21

    reader = cursor.reader()
    err, value = decode_u32(reader)   # PostcardError.SUCCESS, 1234

Fields carry no tags or names: decode them in the order they were encoded.
"""

from .errors import PostcardError, Decoded
from .slice import PostcardSlice, init_slice
from .varint import (
    U16_MAX_BYTES,
    U32_MAX_BYTES,
    U64_MAX_BYTES,
    U128_MAX_BYTES,
    varint_max,
    zigzag_encode,
    zigzag_decode,
    encode_unsigned_varint,
    encode_signed_varint,
    decode_unsigned_varint,
    decode_signed_varint,
)
from .encode import (
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
    encode_f32,
    encode_f64,
    encode_byte_array,
    encode_string,
    encode_option_none,
    encode_option_some,
    encode_variant,
    start_seq,
    start_map,
)
from .decode import (
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
from .size import (
    size_bool,
    size_u8,
    size_i8,
    size_u16,
    size_i16,
    size_u32,
    size_i32,
    size_u64,
    size_i64,
    size_u128,
    size_i128,
    size_f32,
    size_f64,
    size_byte_array,
    size_string,
    size_option_none,
    size_option_some,
    size_variant,
    size_seq,
    size_map,
    size_unsigned_varint,
    size_signed_varint,
)
from .fixint import (
    FixInt,
    encode_fixint_le,
    encode_fixint_be,
    decode_fixint_le,
    decode_fixint_be,
    size_fixint,
)
from .cobs import cobs_encode, cobs_decode, cobs_max_encoded_length
from .crc32 import crc32
from .flavors import (
    CobsAccumulator,
    FeedResult,
    FeedStatus,
    to_slice_cobs,
    from_bytes_cobs,
    append_crc32,
    strip_crc32,
)
from .transport import (
    Transport,
    TransportError,
    TimeoutError,
    ProtocolError,
    FrameTooLargeError,
)

__version__ = "0.1.0"

__all__ = [
    # Outcomes
    "PostcardError",
    "Decoded",
    # Cursor
    "PostcardSlice",
    "init_slice",
    # Varint
    "U16_MAX_BYTES",
    "U32_MAX_BYTES",
    "U64_MAX_BYTES",
    "U128_MAX_BYTES",
    "varint_max",
    "zigzag_encode",
    "zigzag_decode",
    "encode_unsigned_varint",
    "encode_signed_varint",
    "decode_unsigned_varint",
    "decode_signed_varint",
    # Encoding
    "encode_bool",
    "encode_u8",
    "encode_i8",
    "encode_u16",
    "encode_i16",
    "encode_u32",
    "encode_i32",
    "encode_u64",
    "encode_i64",
    "encode_u128",
    "encode_i128",
    "encode_f32",
    "encode_f64",
    "encode_byte_array",
    "encode_string",
    "encode_option_none",
    "encode_option_some",
    "encode_variant",
    "start_seq",
    "start_map",
    # Decoding
    "decode_bool",
    "decode_u8",
    "decode_i8",
    "decode_u16",
    "decode_i16",
    "decode_u32",
    "decode_i32",
    "decode_u64",
    "decode_i64",
    "decode_u128",
    "decode_i128",
    "decode_f32",
    "decode_f64",
    "decode_byte_array_len",
    "decode_byte_array",
    "decode_string_len",
    "decode_string",
    "decode_option_tag",
    "decode_variant",
    "decode_seq_len",
    "decode_map_len",
    "take_byte_array",
    "take_string",
    # Sizes
    "size_bool",
    "size_u8",
    "size_i8",
    "size_u16",
    "size_i16",
    "size_u32",
    "size_i32",
    "size_u64",
    "size_i64",
    "size_u128",
    "size_i128",
    "size_f32",
    "size_f64",
    "size_byte_array",
    "size_string",
    "size_option_none",
    "size_option_some",
    "size_variant",
    "size_seq",
    "size_map",
    "size_unsigned_varint",
    "size_signed_varint",
    # Fixed-width integers
    "FixInt",
    "encode_fixint_le",
    "encode_fixint_be",
    "decode_fixint_le",
    "decode_fixint_be",
    "size_fixint",
    # Framing
    "cobs_encode",
    "cobs_decode",
    "cobs_max_encoded_length",
    "crc32",
    "CobsAccumulator",
    "FeedResult",
    "FeedStatus",
    "to_slice_cobs",
    "from_bytes_cobs",
    "append_crc32",
    "strip_crc32",
    # Transport
    "Transport",
    "TransportError",
    "TimeoutError",
    "ProtocolError",
    "FrameTooLargeError",
]
