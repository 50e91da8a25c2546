"""Tests for the outbound command queue."""

from __future__ import annotations

import pytest

from pjctl.exceptions import PjlinkError
from pjctl.protocol import CommandQueue, power_command, query_command


def test_fifo_order():
    first = power_command(True)
    second = query_command("POWR")
    third = query_command("LAMP")
    queue = CommandQueue([first, second])
    queue.enqueue(third)

    assert len(queue) == 3
    assert list(queue) == [first, second, third]
    assert queue.peek_oldest() is first
    assert queue.pop_oldest() is first
    assert queue.peek_oldest() is second
    assert queue.pop_oldest() is second
    assert queue.pop_oldest() is third
    assert queue.is_empty()


def test_peek_does_not_remove():
    command = power_command(False)
    queue = CommandQueue()
    queue.enqueue(command)
    assert queue.peek_oldest() is command
    assert queue.peek_oldest() is command
    assert len(queue) == 1


def test_extend_appends_in_order():
    commands = [query_command(op) for op in ("NAME", "INF1", "INF2")]
    queue = CommandQueue()
    queue.extend(commands)
    assert [c.opcode for c in queue] == ["NAME", "INF1", "INF2"]


def test_empty_queue_errors():
    queue = CommandQueue()
    assert queue.is_empty()
    with pytest.raises(PjlinkError):
        queue.peek_oldest()
    with pytest.raises(PjlinkError):
        queue.pop_oldest()
