# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Low-level PJLink class 1 wire constants.

All PJLink messages are ASCII text terminated by a carriage return (0x0d).

Command (client to projector):

    [<32-hex-digit digest>]%1<OPCODE> <PARAMETER>\\r

Response (projector to client):

    %1<OPCODE>=<PAYLOAD>\\r

Greeting (projector to client, immediately after connect):

    PJLINK 0\\r             no authentication
    PJLINK 1 <salt>\\r      MD5 digest authentication required
    PJLINK ERRA\\r          authentication failed
"""

from __future__ import annotations

from enum import Enum

TERMINATOR = 0x0d
"""Carriage return; terminates every PJLink message."""

TERMINATOR_BYTES = bytes([TERMINATOR])

READ_BUFFER_SIZE = 136
"""Capacity of the frame read buffer; the largest message PJLink allows."""

MIN_FRAME_LENGTH = 8
"""Smallest valid message, excluding the terminator (e.g., b'%1POWR=0', b'PJLINK 0')."""

MAX_FRAME_LENGTH = 135
"""Largest valid message, excluding the terminator."""

HEADER_OFFSET = 0
CLASS_OFFSET = 1
OPCODE_OFFSET = 2
SEPARATOR_OFFSET = 6
PARAMETER_OFFSET = 7

OPCODE_LENGTH = 4

HEADER = ord('%')
PJLINK_CLASS_1 = ord('1')
RESPONSE_SEPARATOR = ord('=')
COMMAND_SEPARATOR = ' '

QUERY_PARAMETER = '?'
"""Parameter sent to request the current value of a setting."""

GREETING_PREFIX = b'PJLINK '
"""First 7 bytes of the greeting sent by the projector on connect."""

GREETING_FLAG_OFFSET = len(GREETING_PREFIX)

GREETING_SALT_OFFSET = GREETING_FLAG_OFFSET + 2
"""Offset of the authentication salt in b'PJLINK 1 <salt>'."""

AUTH_FAILED_PAYLOAD = b'ERRA'
"""Follows GREETING_PREFIX when the projector rejects the digest."""

DIGEST_LENGTH = 32
"""Length of the hex-encoded MD5 authentication digest."""

class GreetingFlag(Enum):
    """The character following b'PJLINK ' in the greeting."""
    NO_AUTH = '0'
    AUTH_REQUIRED = '1'
    ERROR = 'E'
