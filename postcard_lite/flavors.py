# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Message flavors layered on top of the primitive codec.

- COBS framing: to_slice_cobs / from_bytes_cobs wrap a whole encoded
  message so that 0x00 can delimit messages on a byte stream.
- CRC suffix: append_crc32 / strip_crc32 add and verify a CRC-32 over a
  whole encoded message.
- CobsAccumulator collects COBS frames arriving in arbitrary chunks (for
  example from a serial port) in a fixed-size buffer.
"""

import logging
import struct
from enum import IntEnum
from typing import NamedTuple, Optional

from .cobs import cobs_decode, cobs_encode, cobs_encoded_length
from .crc32 import crc32
from .errors import Decoded, PostcardError, failed, ok
from .slice import PostcardSlice, readable, writable

logger = logging.getLogger(__name__)

FRAME_DELIMITER = 0x00
CRC_SIZE = 4

_CRC = struct.Struct("<I")


def to_slice_cobs(payload, out: PostcardSlice) -> PostcardError:
    """
    COBS-encode an encoded message and terminate it with 0x00.

    Args:
        payload: Encoded message, e.g. cursor.encoded()
        out: Cursor receiving the frame

    Returns:
        SUCCESS, or the error kind (nothing written)
    """
    if not writable(out):
        return PostcardError.INVALID_INPUT
    try:
        src = memoryview(payload).cast("B")
    except TypeError:
        return PostcardError.INVALID_INPUT
    if out.len + cobs_encoded_length(src) + 1 > out.capacity:
        return PostcardError.BUFFER_TOO_SMALL

    err = cobs_encode(src, out)
    if err:
        return err
    out.data[out.len] = FRAME_DELIMITER
    out.len += 1
    return PostcardError.SUCCESS


def from_bytes_cobs(buffer) -> Decoded:
    """
    Decode a COBS frame in place.

    Args:
        buffer: Writable buffer holding one frame (delimiter optional). Its
            contents are overwritten by the decoded message.

    Returns:
        Decoded(SUCCESS, reader) where reader is a decode cursor over the
        message
    """
    cursor = PostcardSlice(buffer)
    if not writable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    err = cobs_decode(cursor.data, cursor)
    if err:
        return failed(err)
    return ok(cursor.reader())


def append_crc32(cursor: PostcardSlice) -> PostcardError:
    """Append the CRC-32 of everything encoded so far, little-endian."""
    if not writable(cursor):
        return PostcardError.INVALID_INPUT
    if cursor.len + CRC_SIZE > cursor.capacity:
        return PostcardError.BUFFER_TOO_SMALL
    _CRC.pack_into(cursor.data, cursor.len, crc32(cursor.encoded()))
    cursor.len += CRC_SIZE
    return PostcardError.SUCCESS


def strip_crc32(cursor: PostcardSlice) -> Decoded:
    """
    Verify the CRC-32 trailing the unread part of a decode cursor.

    The cursor itself is not advanced.

    Returns:
        Decoded(SUCCESS, reader) with a fresh cursor over the message
        without its CRC; INCOMPLETE_DATA if fewer than 4 bytes remain;
        INVALID_INPUT if the checksum does not match
    """
    if not readable(cursor):
        return failed(PostcardError.INVALID_INPUT)
    if cursor.remaining < CRC_SIZE:
        return failed(PostcardError.INCOMPLETE_DATA)

    end = cursor.capacity - CRC_SIZE
    message = cursor.data[cursor.len:end]
    (expected,) = _CRC.unpack_from(cursor.data, end)
    if crc32(message) != expected:
        return failed(PostcardError.INVALID_INPUT)
    return ok(PostcardSlice(message))


class FeedStatus(IntEnum):
    """Outcome of CobsAccumulator.feed."""
    CONSUMED = 0
    OVER_FULL = 1
    DECODE_ERROR = 2
    SUCCESS = 3

    def __str__(self) -> str:
        return self.name


class FeedResult(NamedTuple):
    """
    Result of feeding a chunk to a CobsAccumulator.

    remaining is the part of the chunk after the handled frame; feed it
    again to process further frames. reader is only set on SUCCESS.
    """
    status: FeedStatus
    remaining: memoryview
    reader: Optional[PostcardSlice] = None


class CobsAccumulator:
    """
    Fixed-capacity buffer collecting chunked COBS data.

    Example:
        acc = CobsAccumulator(256)
        window = chunk
        while window:
            status, window, reader = acc.feed(window)
            if status == FeedStatus.SUCCESS:
                handle(reader)

    The reader returned on SUCCESS views the accumulator's own buffer and
    is only valid until the next call to feed().
    """

    def __init__(self, capacity: int):
        self._buf = bytearray(capacity)
        self._idx = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    @property
    def pending(self) -> int:
        """Bytes of an incomplete frame currently held."""
        return self._idx

    def reset(self) -> None:
        """Drop any partially received frame."""
        self._idx = 0

    def feed(self, data) -> FeedResult:
        """
        Append a chunk and decode a frame if a delimiter was reached.

        Args:
            data: Bytes received from the stream

        Returns:
            FeedResult describing what happened to the first frame in data
        """
        window = memoryview(data).cast("B")
        if not window:
            return FeedResult(FeedStatus.CONSUMED, window)

        zero_pos = None
        for n, byte in enumerate(window):
            if byte == FRAME_DELIMITER:
                zero_pos = n
                break

        if zero_pos is None:
            if self._idx + len(window) > self.capacity:
                new_start = self.capacity - self._idx
                logger.debug("Accumulator overfull, dropping %d bytes", self._idx + new_start)
                self._idx = 0
                return FeedResult(FeedStatus.OVER_FULL, window[new_start:])
            self._extend(window)
            return FeedResult(FeedStatus.CONSUMED, window[len(window):])

        release = window[zero_pos + 1:]
        if self._idx + zero_pos > self.capacity:
            logger.debug("Frame larger than %d bytes dropped", self.capacity)
            self._idx = 0
            return FeedResult(FeedStatus.OVER_FULL, release)

        self._extend(window[:zero_pos])
        frame_len = self._idx
        self._idx = 0

        if frame_len == 0:
            logger.debug("Empty frame")
            return FeedResult(FeedStatus.DECODE_ERROR, release)

        err, reader = from_bytes_cobs(memoryview(self._buf)[:frame_len])
        if err:
            logger.debug("COBS decode failed: %s", err)
            return FeedResult(FeedStatus.DECODE_ERROR, release)
        return FeedResult(FeedStatus.SUCCESS, release, reader)

    def _extend(self, chunk: memoryview) -> None:
        end = self._idx + len(chunk)
        self._buf[self._idx:end] = chunk
        self._idx = end
