# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink client configuration.

Provides general config object for a PjlinkClientTransport and the
sessions run over it.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import PjlinkError
from ..constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_PORT,
    ENV_HOST,
    ENV_PORT,
    ENV_PASSWORD,
    ENV_TIMEOUT,
  )

class PjlinkClientConfig:
    """PJLink client configuration."""
    default_host: Optional[str]
    default_port: Optional[int]
    password: Optional[str]
    timeout_secs: Optional[float]

    def __init__(
            self,
            default_host: Optional[str]=None,
            password: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            timeout_secs: Optional[float] = None,
            base_config: Optional[PjlinkClientConfig]=None
          ) -> None:
        """Creates a configuration for a PJLink client.

           Args:
             default_host: The default hostname or IP address of the projector.
                   may optionally be prefixed with "tcp://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override the default_port argument.
                   May be "sddp://" or "sddp://<host>" to use
                   SDDP to discover the projector.
                   If None, the default host will be taken from the
                     PJLINK_HOST environment variable.
             default_port: The default TCP/IP port number to use.
                    If None, the default port will be taken from PJLINK_PORT.
                    If that environment variable is not found, the default PJLink
                    port (4352) will be used.
             password:
                   The PJLink password. If None, the password
                   will be taken from the PJLINK_PASSWORD
                   environment variable. If an empty string or the
                   environment variable is not found, no password
                   will be used.
             timeout_secs:
                   The timeout for reads and writes, in seconds.
                   If None, the timeout will be taken from the
                   PJLINK_TIMEOUT environment variable.
                   If the environment variable is not found,
                   operations wait forever.
             base_config:
                     An optional base configuration to use.
        """
        if base_config is None:
            self.init_from_defaults()
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if default_port is not None and default_port > 0:
            self.default_port = default_port

        if password is not None:
            self.password = None if password == '' else password

        if timeout_secs is not None:
            self.timeout_secs = timeout_secs

    def init_from_defaults(self) -> None:
        """Initializes the configuration from environment variables and defaults."""
        default_host: Optional[str] = os.environ.get(ENV_HOST)
        if default_host is None or default_host == '':
            default_host = "sddp://" # Use SDDP discovery by default
        self.default_host = default_host
        default_port_str = os.environ.get(ENV_PORT)
        default_port: Optional[int] = None
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            try:
                default_port = int(default_port_str)
            except ValueError as e:
                raise PjlinkError(f"Invalid {ENV_PORT} value: '{default_port_str}'") from e
        self.default_port = default_port
        password = os.environ.get(ENV_PASSWORD)
        if password == '':
            password = None
        self.password = password
        timeout_str = os.environ.get(ENV_TIMEOUT)
        if timeout_str is None or timeout_str == '':
            self.timeout_secs = DEFAULT_TIMEOUT
        else:
            try:
                self.timeout_secs = float(timeout_str)
            except ValueError as e:
                raise PjlinkError(f"Invalid {ENV_TIMEOUT} value: '{timeout_str}'") from e

    def init_from_base_config(self, base_config: PjlinkClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.password = base_config.password
        self.timeout_secs = base_config.timeout_secs

    def __str__(self) -> str:
        return (
            f"PjlinkClientConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
