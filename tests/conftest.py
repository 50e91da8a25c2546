"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import List, Optional

import pytest

from pjctl.constants import ENV_HOST, ENV_PORT, ENV_PASSWORD, ENV_TIMEOUT
from pjctl.protocol import PjlinkTransport


class ScriptedTransport(PjlinkTransport):
    """A transport that replays canned projector output and records what the client writes.

    Each read returns the next chunk (split if longer than max_bytes). Once the chunks
    are exhausted, reads return b'' (end of stream).
    """

    def __init__(self, chunks: Optional[List[bytes]] = None):
        self.chunks = list(chunks or [])
        self.written: List[bytes] = []

    async def read(self, max_bytes: int) -> bytes:
        if len(self.chunks) == 0:
            return b''
        chunk = self.chunks.pop(0)
        if len(chunk) > max_bytes:
            self.chunks.insert(0, chunk[max_bytes:])
            chunk = chunk[:max_bytes]
        return chunk

    async def write(self, data: bytes) -> None:
        self.written.append(data)



class UnusableSddpClient:
    """Stands in for an SddpClient on a host where multicast sockets cannot be opened."""

    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        raise OSError(19, "No such device")

    async def __aexit__(self, exc_type, exc, tb):
        return None

@pytest.fixture
def scripted_transport():
    """Factory for ScriptedTransport instances."""
    return ScriptedTransport


@pytest.fixture(autouse=True)
def clean_pjlink_env(monkeypatch):
    """Keeps PJLINK_* environment variables of the developer's shell out of the tests."""
    for name in (ENV_HOST, ENV_PORT, ENV_PASSWORD, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
