# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink Projector emulator.

Provides a simple emulation of a PJLink class 1 projector on TCP/IP.
"""

from __future__ import annotations

import asyncio

from ..internal_types import *
from ..pkg_logging import logger
from ..constants import DEFAULT_PORT
from ..protocol.auth import compute_digest
from ..protocol.command_meta import mute_target_map, on_off_map
from ..protocol.constants import (
    GREETING_PREFIX,
    AUTH_FAILED_PAYLOAD,
    TERMINATOR_BYTES,
    DIGEST_LENGTH,
    OPCODE_OFFSET,
    OPCODE_LENGTH,
    SEPARATOR_OFFSET,
    PARAMETER_OFFSET,
    QUERY_PARAMETER,
    COMMAND_SEPARATOR,
  )
from ..protocol.response import DeviceError

from .session import PjlinkEmulatorSession

def _err(error: DeviceError) -> str:
    return f"ERR{error.value}"

class EmulatedProjectorState:
    """The settings and status reported by the emulator. May be modified by tests."""
    power: str
    """"0" (off), "1" (on), "2" (cooling) or "3" (warming)"""
    input: str
    """Current input, e.g., "31" (digital 1)"""
    mute: str
    """Current AVMT value, e.g., "30" (video and audio unmuted)"""
    name: str
    manufacturer: str
    product: str
    model_info: str
    inputs: List[str]
    lamp_hours: List[int]
    error_status: str
    pjlink_class: str

    def __init__(
            self,
            *,
            power: str="0",
            input: str="31",
            mute: str="30",
            name: str="pjctl emulator",
            manufacturer: str="pjctl",
            product: str="Emulated Projector",
            model_info: str="PJLink class 1 emulator",
            inputs: Optional[List[str]]=None,
            lamp_hours: Optional[List[int]]=None,
            error_status: str="000000",
            pjlink_class: str="1",
          ):
        self.power = power
        self.input = input
        self.mute = mute
        self.name = name
        self.manufacturer = manufacturer
        self.product = product
        self.model_info = model_info
        self.inputs = [ "11", "21", "31", "32", "51" ] if inputs is None else inputs
        self.lamp_hours = [ 1234 ] if lamp_hours is None else lamp_hours
        self.error_status = error_status
        self.pjlink_class = pjlink_class

    @property
    def is_on(self) -> bool:
        return self.power == "1"

    def lamp_payload(self) -> str:
        flag = "1" if self.is_on else "0"
        return " ".join(f"{hours} {flag}" for hours in self.lamp_hours)

    def __str__(self) -> str:
        return f"EmulatedProjectorState(power={self.power}, input={self.input}, mute={self.mute})"

    def __repr__(self) -> str:
        return str(self)

class PjlinkEmulator(AsyncContextManager['PjlinkEmulator']):
    state: EmulatedProjectorState
    password: Optional[str]
    salt: Optional[str]
    """Fixed authentication salt; if None, a random salt is generated per connection"""
    bind_addr: str
    port: int
    sessions: Dict[int, PjlinkEmulatorSession]
    next_session_id: int = 0
    requests: asyncio.Queue[Optional[Tuple[PjlinkEmulatorSession, bytes]]]
    server: Optional[asyncio.Server] = None
    handler_task: Optional[asyncio.Task[None]] = None
    final_result: asyncio.Future[None]
    received_lines: List[bytes]
    """Every command line received, including any digest prefix"""

    def __init__(
            self,
            password: Optional[str] = None,
            bind_addr: Optional[str] = None,
            port: int = DEFAULT_PORT,
            state: Optional[EmulatedProjectorState] = None,
            salt: Optional[str] = None,
          ):
        self.password = None if password == '' else password
        self.salt = salt
        self.bind_addr = '0.0.0.0' if bind_addr is None else bind_addr
        self.port = port
        self.state = EmulatedProjectorState() if state is None else state
        self.sessions = {}
        self.requests = asyncio.Queue()
        self.final_result = asyncio.get_running_loop().create_future()
        self.received_lines = []

    @property
    def bound_port(self) -> int:
        """The port actually being listened on; differs from port if port is 0"""
        assert self.server is not None
        return self.server.sockets[0].getsockname()[1]

    def alloc_session_id(self, session: PjlinkEmulatorSession) -> int:
        result = self.next_session_id
        self.next_session_id += 1
        self.sessions[result] = session
        return result

    def free_session_id(self, session_id: int) -> None:
        self.sessions.pop(session_id, None)

    def on_line_received(self, session: PjlinkEmulatorSession, line: bytes) -> None:
        """Called when a complete command line is received from a session."""
        self.received_lines.append(line)
        self.requests.put_nowait((session, line))

    async def handle_command(
            self,
            opcode: str,
            parameter: str,
          ) -> str:
        """Handle a single command, and return the response payload."""
        state = self.state
        is_query = parameter == QUERY_PARAMETER

        if opcode == "POWR":
            if is_query:
                return state.power
            if not parameter in on_off_map:
                return _err(DeviceError.OUT_OF_PARAMETER)
            state.power = parameter
            return "OK"

        if opcode == "INPT":
            if is_query:
                return state.input if state.is_on else _err(DeviceError.UNAVAILABLE_TIME)
            if not parameter in state.inputs:
                return _err(DeviceError.OUT_OF_PARAMETER)
            if not state.is_on:
                return _err(DeviceError.UNAVAILABLE_TIME)
            state.input = parameter
            return "OK"

        if opcode == "AVMT":
            if is_query:
                return state.mute if state.is_on else _err(DeviceError.UNAVAILABLE_TIME)
            if len(parameter) != 2 or not parameter[0] in mute_target_map or not parameter[1] in on_off_map:
                return _err(DeviceError.OUT_OF_PARAMETER)
            if not state.is_on:
                return _err(DeviceError.UNAVAILABLE_TIME)
            state.mute = parameter
            return "OK"

        query_values: Dict[str, Callable[[], str]] = {
            "NAME": lambda: state.name,
            "INF1": lambda: state.manufacturer,
            "INF2": lambda: state.product,
            "INFO": lambda: state.model_info,
            "INST": lambda: " ".join(state.inputs),
            "LAMP": state.lamp_payload,
            "ERST": lambda: state.error_status,
            "CLSS": lambda: state.pjlink_class,
          }
        get_value = query_values.get(opcode)
        if get_value is None:
            return _err(DeviceError.UNDEFINED_COMMAND)
        if not is_query:
            return _err(DeviceError.OUT_OF_PARAMETER)
        return get_value()

    async def handle_request_line(
            self,
            session: PjlinkEmulatorSession,
            line: bytes
          ) -> Optional[bytes]:
        """Handle a single request line (without terminator), and return the response.

        If None is returned, the session is closed.
        """
        if session.salt is not None:
            assert self.password is not None
            expected_digest = compute_digest(session.salt, self.password).encode('ascii')
            if line[:DIGEST_LENGTH] != expected_digest:
                logger.debug(f"{session}: Authentication failed")
                session.write(GREETING_PREFIX + AUTH_FAILED_PAYLOAD + TERMINATOR_BYTES)
                return None
            line = line[DIGEST_LENGTH:]

        if (not line.startswith(b'%1') or len(line) <= PARAMETER_OFFSET or
                line[SEPARATOR_OFFSET:SEPARATOR_OFFSET+1] != COMMAND_SEPARATOR.encode('ascii')):
            logger.debug(f"{session}: Invalid request line: {line!r}")
            return None

        opcode = line[OPCODE_OFFSET:OPCODE_OFFSET+OPCODE_LENGTH].decode('ascii', errors='replace').upper()
        parameter = line[PARAMETER_OFFSET:].decode('utf-8', errors='replace')
        logger.debug(f"{session}: Received command {opcode} '{parameter}'")
        payload = await self.handle_command(opcode, parameter)
        return b'%1' + opcode.encode('ascii') + b'=' + payload.encode('utf-8') + TERMINATOR_BYTES

    async def handle_requests(self) -> None:
        """Handle requests from sessions."""
        while True:
            session_and_line = await self.requests.get()
            try:
                if session_and_line is None:
                    logger.debug("Emulator handler: Received EOF; exiting")
                    break
                session, line = session_and_line
                try:
                    response = await self.handle_request_line(session, line)
                    if response is None:
                        session.close()
                    else:
                        session.write(response)
                except asyncio.CancelledError as e:
                    logger.debug(f"{session}: Handler task cancelled; exiting")
                    break
                except Exception as e:
                    logger.exception(f"{session}: Handler task: Exception while handling request; killing session: {e}")
                    session.close()
            finally:
                self.requests.task_done()

    async def run(self) -> None:
        """Runs the Emulator until it is closed."""
        async with self:
            await self.wait_closed()

    async def start(self) -> None:
        try:
            loop = asyncio.get_running_loop()
            self.handler_task = asyncio.create_task(self.handle_requests())
            self.server = await loop.create_server(
                lambda: PjlinkEmulatorSession(self),
                host=self.bind_addr,
                port=self.port)
            logger.debug(f"Emulator: Listening on {self.bind_addr}:{self.bound_port}")
            await self.server.start_serving()
        except BaseException as e:
            self.set_final_result(e)
            try:
                await self.wait_closed()
            except BaseException as e:
                pass
            raise

    def close(self, exc: Optional[BaseException]=None) -> None:
        """Stops the Emulator."""
        self.set_final_result(exc)

    async def wait_closed(self) -> None:
        """Waits for the emulator to be fully closed. Does not initiate shutdown."""
        try:
            await self.final_result
        finally:
            try:
                if self.server is not None:
                    try:
                        self.server.close()
                        for session in list(self.sessions.values()):
                            session.close()
                    finally:
                        await self.server.wait_closed()
            finally:
                self.server = None
                if self.handler_task is not None:
                    try:
                        await self.handler_task
                    finally:
                        self.handler_task = None

    def set_final_result(self, exc: Optional[BaseException]=None) -> None:
        if not self.final_result.done():
            if exc is None:
                logger.debug(f"Emulator: Setting final result to success")
                self.final_result.set_result(None)
            else:
                logger.debug(f"Emulator: Setting final exception: {exc}")
                self.final_result.set_exception(exc)
            self.requests.put_nowait(None)
            if self.server is not None:
                self.server.close()

    async def __aenter__(self) -> PjlinkEmulator:
        await self.start()
        return self

    async def __aexit__(self,
            exc_type: Optional[type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType]
      ) -> None:
        self.set_final_result(exc)
        try:
            # ensure that final_result has been awaited
            await self.wait_closed()
        except Exception as e:
            logger.debug(f"Emulator: closed with exception: {e}")

    def __str__(self) -> str:
        return f"PjlinkEmulator({self.bind_addr}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
