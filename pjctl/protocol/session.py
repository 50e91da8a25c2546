# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink class 1 session state machine.

A session runs a queue of commands over one connection:

    Projector: "PJLINK 0" (no authentication) or "PJLINK 1 <salt>" (authentication)
    Client:    [<digest>]%1<OPCODE> <PARAMETER>
    Projector: %1<OPCODE>=<PAYLOAD>    or "PJLINK ERRA" if the digest was rejected
    Client:    [<digest>]<next command>
    ...

Exactly one command is in flight at any time; each response belongs to the oldest
unanswered command. The session is finished when the queue is empty.
"""

from __future__ import annotations

from enum import Enum

from ..internal_types import *
from ..exceptions import (
    PjlinkError,
    InvalidFrameLengthError,
    InvalidGreetingError,
    UnexpectedGreetingError,
    UnexpectedResponseError,
    InvalidHeaderError,
    UnsupportedClassError,
    InvalidSeparatorError,
    AuthRequiredError,
    AuthenticationFailedError,
  )
from ..pkg_logging import logger
from .constants import (
    MIN_FRAME_LENGTH,
    MAX_FRAME_LENGTH,
    HEADER_OFFSET,
    CLASS_OFFSET,
    OPCODE_OFFSET,
    OPCODE_LENGTH,
    SEPARATOR_OFFSET,
    PARAMETER_OFFSET,
    HEADER,
    PJLINK_CLASS_1,
    RESPONSE_SEPARATOR,
    GREETING_PREFIX,
    GREETING_FLAG_OFFSET,
    GREETING_SALT_OFFSET,
    GreetingFlag,
  )
from .auth import Authenticator
from .command import PjlinkCommand
from .command_queue import CommandQueue
from .frame import FrameReader
from .response import PjlinkResult, dispatch_response
from .transport import PjlinkTransport

class SessionState(Enum):
    AWAIT_GREETING = 'await_greeting'
    AWAIT_RESPONSE = 'await_response'
    AWAIT_RESPONSE_OR_AUTH_ERROR = 'await_response_or_auth_error'
    FINISHED = 'finished'

ResultCallback = Callable[[PjlinkResult], None]

class PjlinkSession:
    """Drives the handshake and the request/response cycle for a queue of commands.

    Any exception raised by the session is fatal; the caller must close the transport.
    """
    transport: PjlinkTransport
    frame_reader: FrameReader
    queue: CommandQueue
    authenticator: Authenticator
    state: SessionState
    results: List[PjlinkResult]
    on_result: Optional[ResultCallback]

    def __init__(
            self,
            transport: PjlinkTransport,
            commands: Union[CommandQueue, Iterable[PjlinkCommand]],
            secret: Optional[str]=None,
            on_result: Optional[ResultCallback]=None,
          ):
        self.transport = transport
        self.frame_reader = FrameReader(transport)
        self.queue = commands if isinstance(commands, CommandQueue) else CommandQueue(commands)
        if self.queue.is_empty():
            raise PjlinkError("No commands to send")
        self.authenticator = Authenticator(secret)
        self.state = SessionState.AWAIT_GREETING
        self.results = []
        self.on_result = on_result

    @property
    def secret(self) -> Optional[str]:
        return self.authenticator.secret

    @property
    def pending_digest(self) -> Optional[str]:
        """The digest prefixed to every outgoing command, once authentication has begun"""
        return self.authenticator.digest

    @property
    def is_finished(self) -> bool:
        return self.state == SessionState.FINISHED

    def _set_state(self, state: SessionState) -> None:
        if state != self.state:
            logger.debug(f"{self}: {self.state.value} -> {state.value}")
            self.state = state

    async def run(self) -> List[PjlinkResult]:
        """Reads and handles messages until every queued command has been answered.

        Returns the results, in command order.
        """
        while self.state != SessionState.FINISHED:
            frame = await self.frame_reader.read_frame()
            await self.handle_frame(frame)
        return self.results

    async def handle_frame(self, frame: bytes) -> Optional[PjlinkResult]:
        """Handles a single message (without terminator) received from the projector.

        Returns the result if the message was a command response, or None if it was a greeting.
        """
        if self.state == SessionState.FINISHED:
            raise UnexpectedResponseError(f"Message received after all commands were answered: {frame!r}")
        if len(frame) < MIN_FRAME_LENGTH or len(frame) > MAX_FRAME_LENGTH:
            raise InvalidFrameLengthError(f"Invalid message length {len(frame)}: {frame!r}")
        if frame.startswith(GREETING_PREFIX):
            await self._handle_greeting(frame)
            return None
        return await self._handle_response(frame)

    async def _handle_greeting(self, frame: bytes) -> None:
        flag = frame[GREETING_FLAG_OFFSET:GREETING_FLAG_OFFSET+1].decode('ascii', errors='replace')
        if flag == GreetingFlag.ERROR.value and self.state in (
                SessionState.AWAIT_GREETING, SessionState.AWAIT_RESPONSE_OR_AUTH_ERROR):
            raise AuthenticationFailedError(
                f"Projector rejected authentication: {frame[GREETING_FLAG_OFFSET:].decode('ascii', errors='replace')}")
        if self.state != SessionState.AWAIT_GREETING:
            raise UnexpectedGreetingError(f"Unexpected greeting while {self.state.value}: {frame!r}")

        if flag == GreetingFlag.NO_AUTH.value:
            logger.debug(f"{self}: Projector does not require authentication")
            await self._send_next()
        elif flag == GreetingFlag.AUTH_REQUIRED.value:
            if not self.authenticator.has_secret:
                raise AuthRequiredError("Projector requires authentication, but no password is configured")
            salt = frame[GREETING_SALT_OFFSET:]
            if frame[GREETING_SALT_OFFSET-1:GREETING_SALT_OFFSET] != b' ' or len(salt) == 0:
                raise InvalidGreetingError(f"Authentication greeting has no salt: {frame!r}")
            logger.debug(f"{self}: Projector requires authentication")
            self.authenticator.challenge(salt)
            await self._send_next()
        else:
            raise InvalidGreetingError(f"Invalid greeting received: {frame!r}")

    async def _handle_response(self, frame: bytes) -> PjlinkResult:
        if self.state == SessionState.AWAIT_GREETING:
            raise InvalidGreetingError(f"Expected greeting, got: {frame!r}")
        if frame[HEADER_OFFSET] != HEADER:
            raise InvalidHeaderError(f"Invalid PJLink response received: {frame!r}")
        if frame[CLASS_OFFSET] != PJLINK_CLASS_1:
            raise UnsupportedClassError(f"Unhandled PJLink class '{chr(frame[CLASS_OFFSET])}': {frame!r}")
        if frame[SEPARATOR_OFFSET] != RESPONSE_SEPARATOR:
            raise InvalidSeparatorError(f"Incorrect separator in PJLink response: {frame!r}")
        opcode = frame[OPCODE_OFFSET:OPCODE_OFFSET+OPCODE_LENGTH].decode('ascii', errors='replace')
        payload = frame[PARAMETER_OFFSET:].decode('utf-8', errors='replace')

        command = self.queue.pop_oldest()
        if opcode.upper() != command.opcode:
            logger.warning(f"{self}: Response opcode {opcode} does not match in-flight command {command}")
        result = dispatch_response(command, opcode, payload)
        logger.debug(f"{self}: {command} -> {result}")
        self.results.append(result)
        if self.on_result is not None:
            self.on_result(result)

        await self._send_next()
        return result

    async def _send_next(self) -> None:
        """Sends the oldest queued command, or finishes the session if there is none"""
        if self.queue.is_empty():
            self._set_state(SessionState.FINISHED)
            return
        command = self.queue.peek_oldest()
        data = self.authenticator.sign(command.wire_text)
        logger.debug(f"{self}: Sending {command}")
        await self.transport.write(data)
        if self.authenticator.is_active:
            self._set_state(SessionState.AWAIT_RESPONSE_OR_AUTH_ERROR)
        else:
            self._set_state(SessionState.AWAIT_RESPONSE)

    def __str__(self) -> str:
        return f"PjlinkSession({self.transport})"

    def __repr__(self) -> str:
        return str(self)
