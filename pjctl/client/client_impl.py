# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink projector client.

Runs a queue of commands as a single PJLink session over a connected
transport.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import PjlinkError
from ..constants import DEFAULT_TIMEOUT
from ..pkg_logging import logger
from ..protocol import (
    PjlinkCommand,
    PjlinkResult,
    PjlinkSession,
    power_command,
    source_command,
    mute_command,
    status_commands,
  )
from ..protocol.session import ResultCallback

from .client_transport import PjlinkClientTransport
from .tcp_client_transport import TcpPjlinkClientTransport

class PjlinkClient:
    """PJLink projector client.

    The projector sends its greeting once per connection, so a client runs exactly
    one session. Queue every command for the connection in a single call.
    """

    transport: PjlinkClientTransport
    password: Optional[str]
    session: Optional[PjlinkSession] = None

    def __init__(
            self,
            transport: PjlinkClientTransport,
            password: Optional[str]=None,
          ):
        self.transport = transport
        self.password = password

    async def run_commands(
            self,
            commands: Iterable[PjlinkCommand],
            on_result: Optional[ResultCallback]=None,
          ) -> List[PjlinkResult]:
        """Performs the handshake, sends each command in order, and returns the results
           in the same order.

        on_result, if provided, is called with each result as it arrives.

        raises PjlinkError on any fatal condition; the transport must then be closed.
        """
        if self.session is not None:
            raise PjlinkError(f"{self}: A session has already been run on this connection")
        self.session = PjlinkSession(
            self.transport,
            commands,
            secret=self.password,
            on_result=on_result
          )
        logger.debug(f"{self}: Running session with {len(self.session.queue)} command(s)")
        return await self.session.run()

    async def run_command(self, command: PjlinkCommand) -> PjlinkResult:
        """Runs a session with a single command, and returns its result."""
        results = await self.run_commands([command])
        return results[0]

    async def cmd_power(self, on: bool) -> PjlinkResult:
        """Turns the projector on or off."""
        return await self.run_command(power_command(on))

    async def cmd_source(self, source: str) -> PjlinkResult:
        """Selects an input, e.g., "rgb1" or "digital2"."""
        return await self.run_command(source_command(source))

    async def cmd_mute(self, target: str, on: bool) -> PjlinkResult:
        """Mutes or unmutes "video", "audio" or "av"."""
        return await self.run_command(mute_command(target, on))

    async def cmd_status(self) -> List[PjlinkResult]:
        """Queries name, manufacturer, product, model info, power, input, inputs,
           mute, lamps, error status and class."""
        return await self.run_commands(status_commands())

    async def _async_dispose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> PjlinkClient:
        logger.debug(f"{self}: Entering async context manager")
        return self

    async def __aexit__(
            self,
            exc_type: type[BaseException],
            exc_val: Optional[BaseException],
            exc_tb: TracebackType
          ) -> None:
        logger.debug(f"{self}: Exiting async context manager, exc={exc_val}")
        if exc_val is None:
            await self._async_dispose()
        else:
            await self.transport.__aexit__(exc_type, exc_val, exc_tb)

    @classmethod
    async def create(
            cls,
            host: str,
            password: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float]=DEFAULT_TIMEOUT,
          ) -> Self:
        transport = await TcpPjlinkClientTransport.create(
                host,
                port=port,
                timeout_secs=timeout_secs
              )
        try:
            self = cls(transport, password=password)
        except BaseException as e:
            await transport.aclose()
            raise
        return self

    def __str__(self) -> str:
        return f"PjlinkClient(transport={self.transport})"

    def __repr__(self) -> str:
       return str(self)

    async def aclose(self) -> None:
       await self._async_dispose()
