#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Demonstration of manual postcard encoding/decoding with postcard_lite.

Encodes the record

    struct Foo {
        id: u32,
        name: String,
        values: Vec<i16>,
        is_active: bool,
    }

field by field into a fixed buffer, prints the bytes, and decodes them back.

Usage:
    python postcard_demo.py
    python postcard_demo.py --name Sensor --values 1 -2 3
    python postcard_demo.py --port /dev/ttyACM0 send
    python postcard_demo.py --port /dev/ttyACM0 echo

Requirements:
    pip install pyserial
"""

import argparse
import sys
from typing import List

import serial

from postcard_lite import (
    PostcardError,
    Transport,
    init_slice,
    encode_u32,
    encode_string,
    start_seq,
    encode_i16,
    encode_bool,
    decode_u32,
    decode_string_len,
    decode_string,
    decode_seq_len,
    decode_i16,
    decode_bool,
    size_u32,
    size_string,
    size_seq,
    size_i16,
    size_bool,
)
from postcard_lite.transport import TransportError


def print_buffer(data) -> None:
    """Print a byte buffer as a list of decimal values."""
    print(f"serialized data [{', '.join(str(b) for b in bytes(data))}]")


def encode_foo(cursor, foo_id: int, name: str, values: List[int], is_active: bool) -> PostcardError:
    """Encode a Foo record field by field, stopping at the first error."""
    err = encode_u32(cursor, foo_id)
    if err:
        return err
    err = encode_string(cursor, name)
    if err:
        return err
    err = start_seq(cursor, len(values))
    if err:
        return err
    for value in values:
        err = encode_i16(cursor, value)
        if err:
            return err
    return encode_bool(cursor, is_active)


def decode_foo(reader) -> PostcardError:
    """Decode and print a Foo record."""
    err, foo_id = decode_u32(reader)
    if err:
        return err
    print(f"id: {foo_id}")

    # The length comes first so the destination can be sized
    err, name_len = decode_string_len(reader)
    if err:
        return err
    name = bytearray(name_len)
    err, _ = decode_string(reader, name, len(name), name_len)
    if err:
        return err
    print(f"name: {name.decode('utf-8', errors='replace')}")

    err, count = decode_seq_len(reader)
    if err:
        return err
    print(f"values len: {count}")
    values = []
    for _ in range(count):
        err, value = decode_i16(reader)
        if err:
            return err
        values.append(value)
    print(f"values: {values}")

    err, is_active = decode_bool(reader)
    if err:
        return err
    print(f"is_active: {'true' if is_active else 'false'}")
    return PostcardError.SUCCESS


def foo_size(foo_id: int, name: str, values: List[int]) -> int:
    """Exact encoded size of a Foo record."""
    return (
        size_u32(foo_id)
        + size_string(len(name.encode("utf-8")))
        + size_seq(len(values))
        + sum(size_i16(v) for v in values)
        + size_bool()
    )


def cmd_local(args) -> int:
    """Encode, print, and decode a record without any device."""
    buffer = bytearray(128)
    cursor = init_slice(buffer)

    err = encode_foo(cursor, args.id, args.name, args.values, not args.inactive)
    if err:
        print(f"Encode failed: {err.name}")
        return 1

    print_buffer(cursor.encoded())
    print(f"size: {cursor.len} bytes (precomputed {foo_size(args.id, args.name, args.values)})")

    err = decode_foo(cursor.reader())
    if err:
        print(f"Decode failed: {err.name}")
        return 1
    return 0


def cmd_send(transport: Transport, args, wait_reply: bool) -> int:
    """Send a record over a serial link, optionally decoding the reply."""
    cursor = init_slice(bytearray(foo_size(args.id, args.name, args.values)))
    err = encode_foo(cursor, args.id, args.name, args.values, not args.inactive)
    if err:
        print(f"Encode failed: {err.name}")
        return 1

    print_buffer(cursor.encoded())
    if not wait_reply:
        transport.send(cursor)
        print(f"Sent {cursor.len} bytes to {transport.port}")
        return 0

    reply = transport.request(cursor)
    print("Reply:")
    err = decode_foo(reply)
    if err:
        print(f"Decode failed: {err.name}")
        return 1
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="postcard_lite encode/decode demonstration"
    )
    parser.add_argument(
        "--port", "-p",
        default=None,
        help="Serial port (e.g., /dev/ttyACM0); required for send/echo"
    )
    parser.add_argument("--id", type=int, default=1234, help="Record id (u32)")
    parser.add_argument("--name", default="PostcardTest", help="Record name")
    parser.add_argument("--values", type=int, nargs="*", default=[-10, 20, -30],
                        help="i16 values")
    parser.add_argument("--inactive", action="store_true", help="Encode is_active=false")
    parser.add_argument("command", nargs="?", default="local",
                        choices=["local", "send", "echo"],
                        help="local: encode/decode in memory; send: write to port; "
                             "echo: write and decode the reply")

    args = parser.parse_args()

    if args.command == "local":
        sys.exit(cmd_local(args))

    if args.port is None:
        print(f"Error: --port is required for '{args.command}'")
        sys.exit(1)

    try:
        transport = Transport(args.port)
    except serial.SerialException as e:
        print(f"Error opening {args.port}: {e}")
        sys.exit(1)

    try:
        sys.exit(cmd_send(transport, args, wait_reply=args.command == "echo"))
    except TransportError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        transport.close()


if __name__ == "__main__":
    main()
