"""Tests for splitting the projector byte stream into messages."""

from __future__ import annotations

import pytest

from pjctl.exceptions import InvalidFrameError, TransportClosedError
from pjctl.protocol import FrameReader, READ_BUFFER_SIZE

from conftest import ScriptedTransport


class TestFrameReader:
    @pytest.mark.asyncio
    async def test_strips_terminator(self):
        reader = FrameReader(ScriptedTransport([b'PJLINK 0\r']))
        assert await reader.read_frame() == b'PJLINK 0'

    @pytest.mark.asyncio
    async def test_keeps_bytes_after_terminator(self):
        reader = FrameReader(ScriptedTransport([b'PJLINK 0\r%1POWR=OK\r']))
        assert await reader.read_frame() == b'PJLINK 0'
        assert await reader.read_frame() == b'%1POWR=OK'

    @pytest.mark.asyncio
    async def test_message_split_across_reads(self):
        reader = FrameReader(ScriptedTransport([b'%1PO', b'WR=', b'1\r']))
        assert await reader.read_frame() == b'%1POWR=1'

    @pytest.mark.asyncio
    async def test_terminator_at_start_is_empty_message(self):
        reader = FrameReader(ScriptedTransport([b'\r']))
        assert await reader.read_frame() == b''

    @pytest.mark.asyncio
    async def test_no_terminator_within_buffer(self):
        reader = FrameReader(ScriptedTransport([b'x' * (READ_BUFFER_SIZE + 10)]))
        with pytest.raises(InvalidFrameError):
            await reader.read_frame()

    @pytest.mark.asyncio
    async def test_terminator_as_last_buffer_byte(self):
        data = b'%1NAME=' + b'n' * (READ_BUFFER_SIZE - 8) + b'\r'
        assert len(data) == READ_BUFFER_SIZE
        reader = FrameReader(ScriptedTransport([data]))
        assert await reader.read_frame() == data[:-1]

    @pytest.mark.asyncio
    async def test_end_of_stream(self):
        reader = FrameReader(ScriptedTransport([]))
        with pytest.raises(TransportClosedError):
            await reader.read_frame()

    @pytest.mark.asyncio
    async def test_end_of_stream_with_partial_message(self):
        reader = FrameReader(ScriptedTransport([b'%1POWR=']))
        with pytest.raises(TransportClosedError, match="partial"):
            await reader.read_frame()
