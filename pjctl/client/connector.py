# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink client abstract transport connector interface.

Provides a low-level abstract interface for objects that can create
transport connections to a PJLink projector.
This abstraction allows for the implementation of proxies and alternate network
transports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *
from .client_transport import PjlinkClientTransport

class PjlinkConnector(ABC):
    """Abstract base class for PJLink client transport connectors."""

    @abstractmethod
    async def connect(self) -> PjlinkClientTransport:
        """Create and connect a client transport for the projector associated
           with this connector. The PJLink greeting is left unread.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()
