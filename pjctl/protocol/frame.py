# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Slices the byte stream received from a projector into carriage-return terminated
PJLink messages.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import InvalidFrameError, TransportClosedError
from ..pkg_logging import logger
from .constants import READ_BUFFER_SIZE, TERMINATOR_BYTES
from .transport import PjlinkTransport

class FrameReader:
    """Reads one message at a time from a transport.

    Bytes that follow a terminator are kept for the next call to read_frame().
    """
    transport: PjlinkTransport
    max_size: int
    _buffer: bytearray

    def __init__(self, transport: PjlinkTransport, max_size: int=READ_BUFFER_SIZE):
        self.transport = transport
        self.max_size = max_size
        self._buffer = bytearray()

    def _take_frame(self) -> Optional[bytes]:
        end = self._buffer.find(TERMINATOR_BYTES, 0, self.max_size)
        if end < 0:
            if len(self._buffer) >= self.max_size:
                raise InvalidFrameError(
                    f"No message terminator within {self.max_size} bytes: {bytes(self._buffer[:self.max_size])!r}")
            return None
        frame = bytes(self._buffer[:end])
        del self._buffer[:end+1]
        return frame

    async def read_frame(self) -> bytes:
        """Returns the next message, without its terminator.

        raises TransportClosedError if the stream ends before a complete message arrives.
        raises InvalidFrameError if no terminator is found within max_size bytes.
        """
        while True:
            frame = self._take_frame()
            if frame is not None:
                logger.debug(f"Read frame: {frame!r}")
                return frame
            data = await self.transport.read(self.max_size - len(self._buffer))
            if len(data) == 0:
                if len(self._buffer) > 0:
                    raise TransportClosedError(
                        f"Connection closed by projector with partial message: {bytes(self._buffer)!r}")
                raise TransportClosedError("Connection closed by projector while waiting for message")
            self._buffer += data
