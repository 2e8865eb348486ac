# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Small helpers shared by the codec tests."""

from postcard_lite import PostcardError, init_slice


def encoded(encode, *args, capacity: int = 64) -> bytes:
    """Encode a single value into a fresh buffer and return the bytes."""
    c = init_slice(bytearray(capacity))
    err = encode(c, *args)
    assert err == PostcardError.SUCCESS, f"{encode.__name__}{args} failed: {err!r}"
    return bytes(c.encoded())


def reader_for(data: bytes):
    """A decode cursor over data."""
    return init_slice(bytes(data))
