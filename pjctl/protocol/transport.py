from __future__ import annotations

from ..internal_types import *

from abc import ABC, abstractmethod

class PjlinkTransport(ABC):
    """A connected, ordered, reliable byte stream to a projector"""

    @abstractmethod
    async def read(self, max_bytes: int) -> bytes:
        """Reads up to max_bytes bytes. Returns b'' at end of stream."""
        raise NotImplementedError()

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Writes all of data"""
        raise NotImplementedError()
