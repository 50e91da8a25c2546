# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink simple client connection API.

Provides a simple API for connecting to a projector.
"""

from __future__ import annotations

from ..internal_types import *
from .client_transport import PjlinkClientTransport
from .tcp_connector import TcpPjlinkConnector
from .client_config import PjlinkClientConfig
from .client_impl import PjlinkClient

async def pjlink_transport_connect(
        host: Optional[str]=None,
        config: Optional[PjlinkClientConfig]=None
      ) -> PjlinkClientTransport:
    """Create and connect a transport for a PJLink projector from a configuration.

    Args:
        host: The hostname or IP address of the projector.
                may optionally be prefixed with "tcp://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                May be "sddp://" or "sddp://<host>" to use
                SDDP to discover the projector.
                If None, the host will be taken from the config.
        config: A PjlinkClientConfig object that specifies
                the default host, port, and timeout to use.
                If None, a default config will be created.
    """
    connector = TcpPjlinkConnector(
        host=host,
        config=config
      )
    transport = await connector.connect()
    return transport

async def pjlink_connect(
        host: Optional[str]=None,
        password: Optional[str]=None,
        config: Optional[PjlinkClientConfig]=None
      ) -> PjlinkClient:
    """Create and connect a PJLink projector client from a configuration.

    Args:
        host: The hostname or IP address of the projector.
                may optionally be prefixed with "tcp://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                May be "sddp://" or "sddp://<host>" to use
                SDDP to discover the projector.
                If None, the host will be taken from the config.
        password:
                The password to use to authenticate with the projector.
                If None, the password will be taken from the
                config.
        config: A PjlinkClientConfig object that specifies
                the default host, port, password, etc. to use.
                If None, a default config will be created.
    """
    config = PjlinkClientConfig(
        default_host=host,
        password=password,
        base_config=config
      )
    transport = await pjlink_transport_connect(
        config=config
      )
    try:
        client = PjlinkClient(
            transport=transport,
            password=config.password,
        )
    except BaseException:
        await transport.aclose()
        raise

    return client
