# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Ordered queue of PJLink commands awaiting a response.

PJLink responses carry no transaction ID; a response always belongs to the oldest
command that has not yet been answered. The queue preserves submission order, and
its head is the in-flight command once sending has begun. Keeping at most one
command in flight is the responsibility of the session, not the queue.
"""

from __future__ import annotations

from collections import deque

from ..internal_types import *
from ..exceptions import PjlinkError
from .command import PjlinkCommand

class CommandQueue:
    """FIFO of PjlinkCommand objects. Not thread-safe."""

    _commands: Deque[PjlinkCommand]

    def __init__(self, commands: Optional[Iterable[PjlinkCommand]]=None):
        self._commands = deque()
        if commands is not None:
            self.extend(commands)

    def enqueue(self, command: PjlinkCommand) -> None:
        """Appends a command at the tail of the queue"""
        self._commands.append(command)

    def extend(self, commands: Iterable[PjlinkCommand]) -> None:
        """Appends commands at the tail of the queue, in iteration order"""
        for command in commands:
            self.enqueue(command)

    def peek_oldest(self) -> PjlinkCommand:
        """Returns the oldest command without removing it"""
        if len(self._commands) == 0:
            raise PjlinkError("Command queue is empty")
        return self._commands[0]

    def pop_oldest(self) -> PjlinkCommand:
        """Removes and returns the oldest command"""
        if len(self._commands) == 0:
            raise PjlinkError("Command queue is empty")
        return self._commands.popleft()

    def is_empty(self) -> bool:
        return len(self._commands) == 0

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[PjlinkCommand]:
        return iter(self._commands)

    def __str__(self) -> str:
        return f"CommandQueue({[ c.opcode for c in self._commands ]})"

    def __repr__(self) -> str:
        return str(self)
