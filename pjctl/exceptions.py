#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from typing import Optional

class PjlinkError(Exception):
  """Base class for all error exceptions defined by this package."""
  pass

class UsageError(PjlinkError):
  """Invalid command-line arguments or command parameters. Raised before
     any network activity."""
  pass

class PjlinkConnectionError(PjlinkError):
  """The TCP/IP connection to the projector could not be established."""
  pass

class TransportClosedError(PjlinkError):
  """The projector closed the connection, or a read/write on it failed."""
  pass

class PjlinkProtocolError(PjlinkError):
  """The byte stream received from the projector can no longer be interpreted."""
  pass

class InvalidFrameError(PjlinkProtocolError):
  """No carriage-return terminator was found within the maximum message size."""
  pass

class InvalidFrameLengthError(PjlinkProtocolError):
  """A received message is shorter or longer than PJLink allows."""
  pass

class InvalidGreetingError(PjlinkProtocolError):
  """The initial "PJLINK" message carries an unrecognized flag."""
  pass

class UnexpectedGreetingError(PjlinkProtocolError):
  """A "PJLINK" message arrived when a command response was expected."""
  pass

class UnexpectedResponseError(PjlinkProtocolError):
  """A command response arrived when none was expected."""
  pass

class InvalidHeaderError(PjlinkProtocolError):
  """A command response does not begin with '%'."""
  pass

class UnsupportedClassError(PjlinkProtocolError):
  """A command response carries a PJLink class other than 1."""
  pass

class InvalidSeparatorError(PjlinkProtocolError):
  """A command response does not carry '=' after the 4-character opcode."""
  pass

class AuthRequiredError(PjlinkError):
  """The projector requires authentication, but no password is configured."""
  pass

class AuthenticationFailedError(PjlinkError):
  """The projector rejected the authentication digest (PJLINK ERRA)."""
  pass

class HashComputationFailedError(PjlinkError):
  """The authentication digest could not be computed."""
  pass
