# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink projector host IP/Port resolver.

Provides a method that can resolve various host pathnames, environment variables,
SDDP discovery, etc. into a projector IP address and port.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import PjlinkError, PjlinkConnectionError
from ..constants import DEFAULT_PORT, ENV_HOST, ENV_PORT
from ..pkg_logging import logger

import sddp_discovery_protocol as sddp
from sddp_discovery_protocol import SddpClient, SddpResponseInfo

def split_host_port(host: str, default_port: int) -> Tuple[str, int]:
    """Splits "<host>[:<port>]" into a host and port.

    IPV6 addresses must be enclosed in brackets if a port is given (e.g., "[::1]:4352");
    an unbracketed string containing more than one ':' is taken to be a bare IPV6 address.
    """
    if host.startswith('['):
        bracket_end = host.find(']')
        if bracket_end < 0:
            raise PjlinkError(f"Unterminated '[' in host specifier: '{host}'")
        result_host = host[1:bracket_end]
        rest = host[bracket_end+1:]
        if rest == '':
            return (result_host, default_port)
        if not rest.startswith(':'):
            raise PjlinkError(f"Invalid host specifier: '{host}'")
        port_str = rest[1:]
    elif host.count(':') == 1:
        result_host, port_str = host.rsplit(':', 1)
    else:
        return (host, default_port)
    try:
        port = int(port_str)
    except ValueError as e:
        raise PjlinkError(f"Invalid port in host specifier: '{host}'") from e
    return (result_host, port)

async def resolve_projector_tcp_host(
        host: Optional[str]=None,
        default_port: Optional[int]=None,
      ) -> Tuple[str, int, Optional[SddpResponseInfo]]:
    """Resolves a projector host string into a hostname and port.

        Args:
            host: The hostname or IP address of the projector.
                    may optionally be prefixed with "tcp://".
                    May be suffixed with ":<port>" to specify a
                    non-default port, which will override the default_port argument.
                    May be "sddp://" or "sddp://<sddp-hostname>" to use
                    SDDP to discover the projector.
                    If None, the host will be taken from the
                    PJLINK_HOST environment variable.
            default_port: The default TCP/IP port number to use. If None, the port
                    will be taken from PJLINK_PORT. If that
                    environment variable is not found, the default PJLink
                    port (4352) will be used.

        Returns:
            A tuple of (hostname: str, port: int, sddp_response_info: Optional[SddpResponseInfo]) where:
                hostname: The resolved IP address.
                port:     The resolved port number.
                sddp_response_info:
                          The SDDP response info, if SDDP was used to
                          discover the projector. None otherwise.
    """
    if host is None or host == '':
        host = os.environ.get(ENV_HOST)
        if host is None or host == '':
            host = "sddp://" # Use SDDP discovery

    if default_port is None or default_port <= 0:
        default_port_str = os.environ.get(ENV_PORT)
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            default_port = int(default_port_str)

    result_host: Optional[str] = None
    port: Optional[int] = None
    sddp_response_info: Optional[sddp.SddpResponseInfo] = None

    if host.startswith('sddp://'):
        sddp_host: Optional[str] = host[7:]
        if sddp_host == '':
            sddp_host = None
        filter_headers: Dict[str, str] ={
            "Primary-Proxy": "projector",
          }

        logger.debug(f"Searching for projector with SDDP (host={sddp_host})")
        try:
            async with SddpClient(include_loopback=True) as sddp_client:
                async with sddp_client.search(filter_headers=filter_headers) as search_request:
                    async for response in search_request:
                        if sddp_host is None or response.datagram.hdr_host == sddp_host:
                            sddp_response_info = response
                            break
                    else:
                        raise PjlinkError("SDDP discovery failed to find a projector")
        except OSError as e:
            raise PjlinkConnectionError(f"SDDP discovery failed: {e!r}") from e

        assert sddp_response_info is not None
        result_host = sddp_response_info.src_addr[0]
        # The SDDP "Port" header names the device driver port, not the PJLink port.
        port = default_port
        logger.debug(f"SDDP discovered projector at {result_host}")
    else:
        if host.startswith('tcp://'):
            host = host[6:]
        result_host, port = split_host_port(host, default_port)

    return (result_host, port, sddp_response_info)
