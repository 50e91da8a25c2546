# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink TCP/IP client transport.

Provides an implementation of PjlinkClientTransport over a TCP/IP
socket.
"""

from __future__ import annotations

import asyncio
from asyncio import Future

from ..internal_types import *
from ..exceptions import PjlinkConnectionError, TransportClosedError
from ..constants import DEFAULT_TIMEOUT, DEFAULT_PORT, CONNECT_TIMEOUT
from ..pkg_logging import logger

from .client_transport import PjlinkClientTransport

from .resolve_host import resolve_projector_tcp_host

class TcpPjlinkClientTransport(PjlinkClientTransport):
    """PJLink TCP/IP client transport."""

    reader: Optional[asyncio.StreamReader] = None
    writer: Optional[asyncio.StreamWriter] = None
    host: str
    port: int
    timeout_secs: Optional[float]
    """Timeout for individual reads and writes. None waits forever."""
    connect_timeout_secs: float
    final_status: Future[None]
    reader_closed: bool = False
    writer_closed: bool = False

    def __init__(
            self,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: Optional[float]=DEFAULT_TIMEOUT,
            connect_timeout_secs: float=CONNECT_TIMEOUT,
          ) -> None:
        """Initializes the transport.
        """
        super().__init__()
        self.host = host
        self.port = port
        self.timeout_secs = timeout_secs
        self.connect_timeout_secs = connect_timeout_secs
        self.final_status = asyncio.get_running_loop().create_future()

    async def _wait_for(self, aw: Awaitable[Any]) -> Any:
        if self.timeout_secs is None:
            return await aw
        return await asyncio.wait_for(aw, self.timeout_secs)

    async def read(self, max_bytes: int) -> bytes:
        """Reads up to max_bytes bytes from the projector. Returns b'' if the projector
           closed the connection.

        On error, the transport will be shut down, and no further interaction is possible.
        """
        assert self.reader is not None

        try:
            data = await self._wait_for(self.reader.read(max_bytes))
            logger.debug(f"Read {len(data)} bytes: {data!r}")
        except (OSError, asyncio.TimeoutError) as e:
            error = TransportClosedError(f"Read from projector failed: {e!r}")
            await self.shutdown(error)
            raise error from e
        except BaseException as e:
            await self.shutdown(e)
            raise
        return data

    async def write(self, data: bytes) -> None:
        """Writes exactly the specified bytes to the projector.

        On error, the transport will be shut down, and no further interaction is possible.
        """
        assert self.writer is not None

        try:
            logger.debug(f"Writing exactly {len(data)} bytes: {data!r}")
            self.writer.write(data)
            await self._wait_for(self.writer.drain())
        except (OSError, asyncio.TimeoutError) as e:
            error = TransportClosedError(f"Write to projector failed: {e!r}")
            await self.shutdown(error)
            raise error from e
        except BaseException as e:
            await self.shutdown(e)
            raise

    @property
    def peer_name(self) -> str:
        return f"{self.host}:{self.port}"

    def _set_final_status(self, exc: Optional[BaseException]) -> None:
        if self.final_status.done():
            return
        if exc is None:
            self.final_status.set_result(None)
        else:
            logger.debug(f"{self}: final status: {exc!r}")
            self.final_status.set_exception(exc)

    def _close_streams(self) -> None:
        if not self.reader_closed:
            self.reader_closed = True
            if self.reader is not None:
                # wakes any pending read with EOF
                self.reader.feed_eof()
        if not self.writer_closed:
            self.writer_closed = True
            if self.writer is not None:
                try:
                    self.writer.close()
                except Exception:
                    logger.debug(f"{self}: exception while closing writer", exc_info=True)

    async def shutdown(self, exc: Optional[BaseException] = None) -> None:
        self._set_final_status(exc)
        self._close_streams()

    async def wait(self) -> None:
        if self.writer is not None:
            try:
                await self.writer.wait_closed()
            except Exception as e:
                # ignored if the final status is already set
                logger.debug(f"{self}: exception while waiting for close: {e!r}")
                self._set_final_status(e)
        await self.shutdown()
        await self.final_status

    async def __aenter__(self) -> TcpPjlinkClientTransport:
        """Enters a context that will close the transport on exit."""
        return self

    async def connect(self) -> None:
        """Connects to the projector, with timeout.

        The PJLink greeting is not consumed; it is read by the session.
        """
        try:
            assert self.reader is None and self.writer is None
            logger.debug(f"Connecting to projector at {self.peer_name}")
            try:
                self.reader, self.writer = await asyncio.wait_for(
                    asyncio.open_connection(self.host, self.port),
                    self.connect_timeout_secs
                  )
            except (OSError, asyncio.TimeoutError) as e:
                raise PjlinkConnectionError(f"Failed to connect to projector at {self.peer_name}: {e!r}") from e
            logger.info(f"{self} connected")
        except BaseException as e:
            await self.aclose(e)
            raise

    @classmethod
    async def create(
            cls,
            host: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float]=DEFAULT_TIMEOUT,
          ) -> Self:
        """Creates and connects a transport to
           a PJLink projector that is reachable over TCP/IP.

              Args:
                host: The hostname or IP address of the projector.
                      may optionally be prefixed with "tcp://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      May be "sddp://" or "sddp://<host>" to use
                      SDDP to discover the projector.
                      If None, the host will be taken from the
                        PJLINK_HOST environment variable.
                port: The default TCP/IP port number to use. If None, the port
                      will be taken from PJLINK_PORT. If that
                      environment variable is not found, the default PJLink
                      port (4352) will be used.
                timeout_secs: The timeout for reads and writes on the
                        transport. If None, operations wait forever.
        """
        final_host, final_port, sddp_info = await resolve_projector_tcp_host(
            host,
            port
          )

        transport = cls(final_host, port=final_port, timeout_secs=timeout_secs)
        await transport.connect()
        # on error, the transport will be shut down, and no further interaction is possible
        return transport

    def __str__(self) -> str:
        return f"TcpPjlinkClientTransport({self.peer_name})"

    def __repr__(self) -> str:
        return str(self)
