# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Cursor over a caller-owned buffer.

A PostcardSlice never owns or grows its memory. The same type is used for
encoding (len counts bytes produced) and decoding (len counts bytes
consumed); never mix the two roles on one instance.
"""

from typing import Optional


class PostcardSlice:
    """
    Bounded view over caller memory with a monotonically increasing offset.

    Attributes:
        data: memoryview of the caller's buffer (not owned)
        len: bytes written (encode) or read (decode) so far
        capacity: usable byte count, fixed at creation
    """

    __slots__ = ("data", "len", "capacity")

    def __init__(self, buffer, capacity: Optional[int] = None):
        self.data = memoryview(buffer).cast("B") if buffer is not None else None
        self.len = 0
        if capacity is None:
            capacity = self.data.nbytes if self.data is not None else 0
        self.capacity = capacity

    def __repr__(self) -> str:
        return f"PostcardSlice(len={self.len}, capacity={self.capacity})"

    @property
    def remaining(self) -> int:
        """Bytes left between the offset and capacity."""
        return self.capacity - self.len

    def encoded(self) -> memoryview:
        """Bytes produced so far, without copying."""
        return self.data[:self.len]

    def reader(self) -> "PostcardSlice":
        """
        Bind a fresh decode cursor over the bytes produced so far.

        The new cursor starts at offset zero and its capacity is the
        encoded length, so bytes past the encoded region are never read.
        """
        return PostcardSlice(self.data[:self.len])


def init_slice(buffer, capacity: Optional[int] = None) -> PostcardSlice:
    """
    Bind a cursor to a caller-owned buffer.

    Args:
        buffer: Any object supporting the buffer protocol. Encoding needs a
            writable one (bytearray, writable memoryview, array.array).
        capacity: Usable byte count (default: the whole buffer). Must not
            exceed the buffer length; this is not checked.

    Returns:
        A cursor at offset zero
    """
    return PostcardSlice(buffer, capacity)


def writable(cursor: Optional[PostcardSlice]) -> bool:
    """True when the cursor is bound to memory that can be written."""
    return (
        cursor is not None
        and cursor.data is not None
        and not cursor.data.readonly
    )


def readable(cursor: Optional[PostcardSlice]) -> bool:
    """True when the cursor is bound to memory."""
    return cursor is not None and cursor.data is not None
