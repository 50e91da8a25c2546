# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A single client connection to the PJLink projector emulator.
"""

from __future__ import annotations

import asyncio
import secrets

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol.constants import (
    GREETING_PREFIX,
    TERMINATOR_BYTES,
    READ_BUFFER_SIZE,
    GreetingFlag,
  )

if TYPE_CHECKING:
    from .emulator_impl import PjlinkEmulator

class PjlinkEmulatorSession(asyncio.Protocol):
    emulator: PjlinkEmulator
    session_id: int
    transport: Optional[asyncio.Transport] = None
    salt: Optional[str] = None
    """Authentication salt sent in the greeting; None if no password is set"""
    _recv_buffer: bytes = b''

    def __init__(self, emulator: PjlinkEmulator):
        self.emulator = emulator
        self.session_id = emulator.alloc_session_id(self)

    def greeting(self) -> bytes:
        if self.emulator.password is None:
            return GREETING_PREFIX + GreetingFlag.NO_AUTH.value.encode('ascii') + TERMINATOR_BYTES
        assert self.salt is not None
        return (
            GREETING_PREFIX + GreetingFlag.AUTH_REQUIRED.value.encode('ascii') +
            b' ' + self.salt.encode('ascii') + TERMINATOR_BYTES
          )

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        assert isinstance(transport, asyncio.Transport)
        self.transport = transport
        logger.debug(f"{self}: Connection from {transport.get_extra_info('peername')}")
        if self.emulator.password is not None:
            self.salt = self.emulator.salt if self.emulator.salt is not None else secrets.token_hex(4)
        self.write(self.greeting())

    def connection_lost(self, exc: Optional[Exception]) -> None:
        logger.debug(f"{self}: Connection lost: {exc}")
        self.transport = None
        self.emulator.free_session_id(self.session_id)

    def data_received(self, data: bytes) -> None:
        self._recv_buffer += data
        while True:
            end = self._recv_buffer.find(TERMINATOR_BYTES)
            if end < 0:
                if len(self._recv_buffer) > READ_BUFFER_SIZE * 2:
                    logger.debug(f"{self}: Unterminated request; closing")
                    self.close()
                break
            line = self._recv_buffer[:end]
            self._recv_buffer = self._recv_buffer[end+1:]
            self.emulator.on_line_received(self, line)

    def write(self, data: bytes) -> None:
        if self.transport is not None:
            logger.debug(f"{self}: Sending {data!r}")
            self.transport.write(data)

    def close(self) -> None:
        if self.transport is not None:
            self.transport.close()

    def __str__(self) -> str:
        return f"PjlinkEmulatorSession({self.session_id})"

    def __repr__(self) -> str:
        return str(self)
