# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package pjctl provides a command-line tool and API for controlling
network projectors via the PJLink class 1 TCP/IP protocol.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict

from .exceptions import (
    PjlinkError,
    UsageError,
    PjlinkConnectionError,
    TransportClosedError,
    PjlinkProtocolError,
    AuthRequiredError,
    AuthenticationFailedError,
    HashComputationFailedError,
  )

from .constants import DEFAULT_PORT, DEFAULT_TIMEOUT

from .client import (
    PjlinkClient,
    resolve_projector_tcp_host,
    PjlinkConnector,
    TcpPjlinkConnector,
    pjlink_transport_connect,
    pjlink_connect,
    PjlinkClientConfig,
  )

from .protocol import (
    PjlinkCommand,
    PjlinkResult,
    PjlinkSession,
    ResultOutcome,
    DeviceError,
    power_command,
    source_command,
    mute_command,
    status_commands,
  )
