# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink TCP/IP client connector.

Provides a connector for a PjlinkClientTransport over a TCP/IP
socket.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import PjlinkError
from .connector import PjlinkConnector
from .client_transport import PjlinkClientTransport
from .client_config import PjlinkClientConfig

from .tcp_client_transport import TcpPjlinkClientTransport

class TcpPjlinkConnector(PjlinkConnector):
    """PJLink TCP/IP client transport connector."""

    config: PjlinkClientConfig

    def __init__(
            self,
            host: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float] = None,
            config: Optional[PjlinkClientConfig]=None,
          ) -> None:
        """Creates a connector that can create transports to
           a PJLink projector that is reachable over TCP/IP.

              Args:
                host: The hostname or IP address of the projector.
                      may optionally be prefixed with "tcp://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      May be "sddp://" or "sddp://<host>" to use
                      SDDP to discover the projector.
                      If None, the host will be taken from the config.
                port: The default TCP/IP port number to use. If None, the port
                      will be taken from the config.
                timeout_secs: The timeout for reads and writes on the
                        transport. If None, the config timeout is used.
                config: A PjlinkClientConfig object that specifies
                        the default host, port, etc to use.
                        If None, a default config will be created.
        """
        super().__init__()
        self.config = PjlinkClientConfig(
            default_host=host,
            default_port=port,
            timeout_secs=timeout_secs,
            base_config=config
          )
        host = self.config.default_host
        assert host is not None
        if '://' in host and not host.startswith('tcp://') and not host.startswith('sddp://'):
            raise PjlinkError(f"Invalid host protocol specifier for TCP transport: '{host}'")

    async def connect(self) -> PjlinkClientTransport:
        """Create and connect a TCP/IP client transport for the projector associated with this
           connector.
        """
        transport = await TcpPjlinkClientTransport.create(
            self.config.default_host,
            port=self.config.default_port,
            timeout_secs=self.config.timeout_secs
          )
        return transport

    def __str__(self) -> str:
        return f"TcpPjlinkConnector(host='{self.config.default_host}', port={self.config.default_port})"

    def __repr__(self) -> str:
        return str(self)
