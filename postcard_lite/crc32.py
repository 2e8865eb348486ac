# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
CRC-32 (ISO HDLC / IEEE 802.3) used by the CRC message flavor.

The checksum is appended to a message as 4 little-endian bytes, see
flavors.append_crc32.
"""

POLY = 0xEDB88320


def _make_table():
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ POLY
            else:
                crc >>= 1
        table.append(crc)
    return tuple(table)


_CRC32_TABLE = _make_table()


def crc32(data, crc: int = 0) -> int:
    """
    Compute or continue a CRC-32 (ISO HDLC) checksum.

    Args:
        data: Bytes-like object to checksum
        crc: Result of a previous call, to checksum data in pieces

    Returns:
        32-bit CRC value
    """
    crc ^= 0xFFFFFFFF
    for byte in memoryview(data).cast("B"):
        crc = _CRC32_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF
