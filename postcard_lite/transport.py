# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Serial transport for postcard messages.

Messages are COBS-framed and delimited by 0x00 on the wire, the usual way
postcard data travels over UART or USB CDC links.
"""

import logging
import time
from typing import Union

import serial

from .errors import PostcardError
from .flavors import FRAME_DELIMITER, CobsAccumulator, FeedStatus, to_slice_cobs
from .slice import PostcardSlice

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
DEFAULT_TIMEOUT = 5.0
DEFAULT_MAX_FRAME = 1024

FRAME_END = bytes([FRAME_DELIMITER])


class TransportError(Exception):
    """Base exception for transport errors."""
    pass


class TimeoutError(TransportError):
    """Timeout waiting for a frame."""
    pass


class ProtocolError(TransportError):
    """A received frame could not be decoded."""

    def __init__(self, message: str, error: PostcardError = PostcardError.INVALID_INPUT):
        super().__init__(message)
        self.error = error


class FrameTooLargeError(TransportError):
    """An outgoing message does not fit in the frame buffer."""
    pass


class Transport:
    """
    Serial transport exchanging COBS-framed postcard messages.

    Can be used as a context manager:
        with Transport("/dev/ttyACM0") as t:
            t.send(cursor)
            reply = t.receive()
            err, value = decode_u32(reply)
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
        max_frame: int = DEFAULT_MAX_FRAME,
    ):
        """
        Open the serial port.

        Args:
            port: Serial port path (e.g., "/dev/ttyACM0")
            baudrate: Baud rate (default 115200)
            timeout: Read timeout in seconds (default 5.0)
            max_frame: Largest decoded message accepted or sent, in bytes
        """
        self._ser = serial.Serial(port, baudrate, timeout=timeout)
        self._tx = bytearray(max_frame + max_frame // 254 + 2)
        self._rx = CobsAccumulator(max_frame + max_frame // 254 + 1)
        self._max_frame = max_frame
        self._discarding = False
        time.sleep(0.1)  # Let the device settle

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Close the serial connection."""
        if self._ser and self._ser.is_open:
            self._ser.close()

    @property
    def port(self) -> str:
        """Return the serial port name."""
        return self._ser.port

    @property
    def max_frame(self) -> int:
        return self._max_frame

    def send(self, message: Union[PostcardSlice, bytes, bytearray, memoryview]) -> None:
        """
        Frame and send an encoded message.

        Args:
            message: Encode cursor (its encoded bytes are sent) or raw
                encoded bytes

        Raises:
            FrameTooLargeError: If the message exceeds max_frame
        """
        payload = message.encoded() if isinstance(message, PostcardSlice) else memoryview(message)
        if payload.nbytes > self._max_frame:
            raise FrameTooLargeError(
                f"Message of {payload.nbytes} bytes exceeds max frame {self._max_frame}"
            )

        frame = PostcardSlice(self._tx)
        err = to_slice_cobs(payload, frame)
        if err:
            raise FrameTooLargeError(f"Cannot frame message: {err.name}")

        logger.debug("TX %d bytes (%d framed)", payload.nbytes, frame.len)
        self._ser.write(frame.encoded())
        self._ser.flush()

    def receive(self) -> PostcardSlice:
        """
        Read until a complete frame arrives and decode it.

        After an oversized frame the rest of it is dropped, up to and
        including its delimiter, before the next frame is collected.

        Returns:
            Decode cursor over the received message. It stays valid until
            the next receive().

        Raises:
            TimeoutError: If the port times out mid-frame
            ProtocolError: If a frame overflows the buffer or is malformed
        """
        while True:
            byte = self._ser.read(1)
            if not byte:
                self._rx.reset()
                raise TimeoutError("Timeout waiting for frame")

            if self._discarding:
                if byte == FRAME_END:
                    self._discarding = False
                continue

            status, _, reader = self._rx.feed(byte)
            if status == FeedStatus.CONSUMED:
                continue
            if status == FeedStatus.SUCCESS:
                logger.debug("RX %d bytes", reader.capacity)
                return reader
            if status == FeedStatus.OVER_FULL:
                logger.warning("Discarding frame larger than %d bytes", self._rx.capacity)
                self._discarding = byte != FRAME_END
                raise ProtocolError("Frame exceeds receive buffer", PostcardError.BUFFER_TOO_SMALL)
            logger.warning("Discarding malformed frame")
            raise ProtocolError("Malformed COBS frame", PostcardError.INCOMPLETE_DATA)

    def request(self, message: Union[PostcardSlice, bytes, bytearray, memoryview]) -> PostcardSlice:
        """Send a message and wait for the reply."""
        self.send(message)
        return self.receive()
