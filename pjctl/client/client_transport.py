# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink client abstract transport interface.

A client transport is a connected byte stream to one projector, plus the
lifecycle needed to tear it down. The PJLink greeting, authentication and
message framing are run on top of it by PjlinkSession.
"""

from __future__ import annotations

import asyncio
from abc import abstractmethod

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import PjlinkTransport


class PjlinkClientTransport(PjlinkTransport):
    """A PjlinkTransport that owns its connection.

    The connection has a final status: success, or the exception that ended it.
    A transport is used for exactly one PJLink session and is then closed.
    """

    @property
    @abstractmethod
    def peer_name(self) -> str:
        """A printable "host:port" name for the projector end of the connection"""
        raise NotImplementedError()

    @abstractmethod
    async def shutdown(self, exc: Optional[BaseException] = None) -> None:
        """Begins closing the connection without waiting. Safe to call from a callback
           and more than once; only the first call sets the final status (exc, or success).

        Never raises because of the final status.
        """
        raise NotImplementedError()

    @abstractmethod
    async def wait(self) -> None:
        """Waits until the connection is fully closed, then raises the final status
           exception, if any. Does not begin closing."""
        raise NotImplementedError()

    async def aclose(self, exc: Optional[BaseException] = None) -> None:
        """shutdown(exc), then wait()."""
        await self.shutdown(exc)
        await self.wait()

    async def __aenter__(self) -> PjlinkClientTransport:
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        """Closes the transport. If the block raised, the close status is logged
           and not raised, so the original exception propagates."""
        closer: asyncio.Task[None] = asyncio.ensure_future(self.aclose(exc))
        await asyncio.wait([closer])
        if exc is None:
            closer.result()
        else:
            logger.debug(f"{self}: closed after exception: {closer.exception()!r}")
