# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by pjctl"""

from typing import Optional

DEFAULT_PORT = 4352
"""The listen port number used by PJLink projectors for TCP/IP control."""

DEFAULT_TIMEOUT: Optional[float] = None
"""The default timeout for TCP/IP read and write operations, in seconds. None
   means wait forever; PJLink has no retry semantics, so a hung projector
   blocks the session."""

CONNECT_TIMEOUT = 15.0
"""The timeout for connecting to the projector over TCP/IP, in seconds."""

ENV_HOST = 'PJLINK_HOST'
"""Environment variable providing the default projector host."""

ENV_PORT = 'PJLINK_PORT'
"""Environment variable providing the default projector TCP port."""

ENV_PASSWORD = 'PJLINK_PASSWORD'
"""Environment variable providing the PJLink authentication password."""

ENV_TIMEOUT = 'PJLINK_TIMEOUT'
"""Environment variable providing the default read/write timeout, in seconds."""
