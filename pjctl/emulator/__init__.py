# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink Projector emulator.

Provides a simple emulation of a PJLink class 1 projector on TCP/IP.
"""

from .emulator_impl import PjlinkEmulator, EmulatedProjectorState
from .session import PjlinkEmulatorSession
