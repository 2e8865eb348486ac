# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Outcome types shared by every codec operation.

Codec functions never raise for malformed data or short buffers. Encoders
return a PostcardError, decoders return a Decoded pair.
"""

from enum import IntEnum
from typing import Any, NamedTuple


class PostcardError(IntEnum):
    """Error kinds returned by encode/decode operations."""
    SUCCESS = 0
    BUFFER_TOO_SMALL = 1
    INVALID_INPUT = 2
    INCOMPLETE_DATA = 3
    OVERFLOW = 4

    def __str__(self) -> str:
        return self.name

    @property
    def is_ok(self) -> bool:
        return self is PostcardError.SUCCESS


class Decoded(NamedTuple):
    """
    Result of a decode operation.

    Unpacks like a tuple:
        err, value = decode_u32(cursor)

    value is None unless error is SUCCESS.
    """
    error: PostcardError
    value: Any = None

    @property
    def is_ok(self) -> bool:
        return self.error is PostcardError.SUCCESS


def failed(error: PostcardError) -> Decoded:
    """Build a Decoded carrying only an error kind."""
    return Decoded(error)


def ok(value: Any) -> Decoded:
    """Build a successful Decoded."""
    return Decoded(PostcardError.SUCCESS, value)
