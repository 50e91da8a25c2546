# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink projector client.

Provides connection, configuration and session APIs for a PJLink projector
reachable over TCP/IP.
"""

from .resolve_host import resolve_projector_tcp_host
from .client_transport import PjlinkClientTransport
from .tcp_client_transport import TcpPjlinkClientTransport
from .connector import PjlinkConnector
from .tcp_connector import TcpPjlinkConnector
from .simple import pjlink_transport_connect, pjlink_connect
from .client_config import PjlinkClientConfig
from .client_impl import (
    PjlinkClient,
  )
