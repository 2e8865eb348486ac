# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
COBS (Consistent Overhead Byte Stuffing) encoder/decoder.

COBS is a framing algorithm that eliminates 0x00 bytes from data,
allowing 0x00 to be used as a packet delimiter. Both directions write into
a PostcardSlice instead of building new bytes.
"""

from .errors import PostcardError
from .slice import PostcardSlice, writable

# Longest run of non-zero bytes a single code byte can describe
MAX_RUN = 254


def cobs_max_encoded_length(length: int) -> int:
    """Worst-case encoded size (without delimiter) of `length` input bytes."""
    return length + length // MAX_RUN + 1


def cobs_encoded_length(data) -> int:
    """Exact encoded size (without delimiter) of data."""
    size = 1
    run = 0
    for byte in memoryview(data).cast("B"):
        size += 1
        if byte == 0:
            run = 0
        else:
            run += 1
            if run == MAX_RUN:
                size += 1
                run = 0
    return size


def cobs_encode(data, out: PostcardSlice) -> PostcardError:
    """
    Encode data using COBS, appending to out.

    Args:
        data: Raw bytes to encode
        out: Encode cursor receiving the COBS bytes (no delimiter)

    Returns:
        SUCCESS, INVALID_INPUT, or BUFFER_TOO_SMALL (nothing written)
    """
    if not writable(out):
        return PostcardError.INVALID_INPUT
    try:
        src = memoryview(data).cast("B")
    except TypeError:
        return PostcardError.INVALID_INPUT
    if out.len + cobs_encoded_length(src) > out.capacity:
        return PostcardError.BUFFER_TOO_SMALL

    dst = out.data
    code_idx = out.len
    pos = code_idx + 1
    code = 1

    for byte in src:
        if byte == 0:
            dst[code_idx] = code
            code_idx = pos
            pos += 1
            code = 1
        else:
            dst[pos] = byte
            pos += 1
            code += 1
            if code == 0xFF:
                dst[code_idx] = code
                code_idx = pos
                pos += 1
                code = 1

    dst[code_idx] = code
    out.len = pos
    return PostcardError.SUCCESS


def cobs_decode(data, out: PostcardSlice) -> PostcardError:
    """
    Decode COBS-encoded data, appending to out.

    Decoding stops at the first 0x00 delimiter, if any. out may view the
    same memory as data to decode in place: the write position never
    passes the read position.

    Args:
        data: COBS-encoded bytes (with or without trailing delimiter)
        out: Cursor receiving the decoded bytes

    Returns:
        SUCCESS; INCOMPLETE_DATA if a block is cut short; BUFFER_TOO_SMALL
        if out runs out of room. out.len only advances on success.
    """
    if not writable(out):
        return PostcardError.INVALID_INPUT
    try:
        src = memoryview(data).cast("B")
    except TypeError:
        return PostcardError.INVALID_INPUT

    dst = out.data
    pos = out.len
    end = len(src)
    i = 0

    while i < end:
        code = src[i]
        if code == 0:
            break
        i += 1

        for _ in range(1, code):
            if i >= end or src[i] == 0:
                return PostcardError.INCOMPLETE_DATA
            if pos >= out.capacity:
                return PostcardError.BUFFER_TOO_SMALL
            dst[pos] = src[i]
            pos += 1
            i += 1

        if code < 0xFF and i < end and src[i] != 0:
            if pos >= out.capacity:
                return PostcardError.BUFFER_TOO_SMALL
            dst[pos] = 0
            pos += 1

    out.len = pos
    return PostcardError.SUCCESS
