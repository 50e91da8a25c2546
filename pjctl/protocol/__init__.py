# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level PJLink class 1 protocol implementation.

Refer to https://pjlink.jbmia.or.jp/english/data/5-1_PJLink_eng_20131210.pdf
for the official protocol documentation.
"""

from .constants import (
    GreetingFlag,
    TERMINATOR,
    READ_BUFFER_SIZE,
    MIN_FRAME_LENGTH,
    MAX_FRAME_LENGTH,
    GREETING_PREFIX,
    DIGEST_LENGTH,
  )

from .transport import PjlinkTransport

from .frame import FrameReader

from .auth import Authenticator, compute_digest

from .command_meta import (
    ResponseKind,
    OpcodeMeta,
    STATUS_OPCODES,
    opcode_metas,
    get_opcode_meta,
  )

from .command import (
    PjlinkCommand,
    query_command,
    status_commands,
    power_command,
    source_command,
    mute_command,
  )

from .command_queue import CommandQueue

from .response import (
    PjlinkResult,
    ResultOutcome,
    DeviceError,
    ErrorCheck,
    interpret_error_code,
    dispatch_response,
    response_handlers,
  )

from .session import (
    PjlinkSession,
    SessionState,
  )
