# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

from ..internal_types import *
from ..exceptions import PjlinkError, UsageError
from ..pkg_logging import logger
from .command_meta import (
    Opcode,
    ResponseKind,
    STATUS_OPCODES,
    get_opcode_meta,
    input_class_name_map,
    mute_target_name_map,
  )

from .constants import (
    TERMINATOR_BYTES,
    OPCODE_OFFSET,
    OPCODE_LENGTH,
    SEPARATOR_OFFSET,
    PARAMETER_OFFSET,
    MAX_FRAME_LENGTH,
    COMMAND_SEPARATOR,
    QUERY_PARAMETER,
  )

COMMAND_PREFIX = b'%1'
"""Class 1 command header"""

class PjlinkCommand:
    """A command to a PJLink projector.

    The raw command is of the form:

        %1<OPCODE> <PARAMETER>\\r

    The authentication digest, if any, is not part of the command; it is prepended
    by the session at send time.
    """
    wire_text: bytes
    response_kind: ResponseKind
    display_prefix: Optional[str]

    def __init__(
            self,
            wire_text: bytes,
            response_kind: ResponseKind,
            display_prefix: Optional[str]=None,
          ):
        if not wire_text.startswith(COMMAND_PREFIX):
            raise PjlinkError(f"Command must begin with {COMMAND_PREFIX!r}: {wire_text!r}")
        if not wire_text.endswith(TERMINATOR_BYTES):
            raise PjlinkError(f"Command must end with a carriage return: {wire_text!r}")
        if TERMINATOR_BYTES in wire_text[:-1] or b"\n" in wire_text:
            raise PjlinkError(f"Command must be a single line: {wire_text!r}")
        if len(wire_text) <= PARAMETER_OFFSET + 1 or len(wire_text) > MAX_FRAME_LENGTH + 1:
            raise PjlinkError(f"Invalid command length {len(wire_text)}: {wire_text!r}")
        if wire_text[SEPARATOR_OFFSET:SEPARATOR_OFFSET+1] != COMMAND_SEPARATOR.encode('ascii'):
            raise PjlinkError(f"Command opcode must be followed by a space: {wire_text!r}")
        self.wire_text = wire_text
        self.response_kind = response_kind
        self.display_prefix = display_prefix

    @property
    def opcode(self) -> Opcode:
        """Returns the 4-character opcode of the command"""
        return self.wire_text[OPCODE_OFFSET:OPCODE_OFFSET+OPCODE_LENGTH].decode('ascii')

    @property
    def parameter(self) -> str:
        """Returns the parameter of the command, without the terminator"""
        return self.wire_text[PARAMETER_OFFSET:-1].decode('utf-8')

    @classmethod
    def create(
            cls,
            opcode: Opcode,
            parameter: str,
            response_kind: Optional[ResponseKind]=None,
            display_prefix: Optional[str]=None,
          ) -> Self:
        """Creates a PjlinkCommand from an opcode and a parameter.

        If response_kind is None, the handler registered for the opcode is used.
        """
        if len(opcode) != OPCODE_LENGTH:
            raise PjlinkError(f"Opcode must be {OPCODE_LENGTH} characters: '{opcode}'")
        if any(c in opcode or c in parameter for c in ("\r", "\n")):
            raise PjlinkError(f"Opcode and parameter must not contain line breaks: {opcode!r} {parameter!r}")
        opcode = opcode.upper()
        if response_kind is None:
            try:
                response_kind = get_opcode_meta(opcode).response_kind
            except KeyError as e:
                raise PjlinkError(f"Unknown PJLink opcode: '{opcode}'") from e
        wire_text = (
            COMMAND_PREFIX +
            opcode.encode('ascii') +
            COMMAND_SEPARATOR.encode('ascii') +
            parameter.encode('utf-8') +
            TERMINATOR_BYTES
          )
        return cls(wire_text, response_kind, display_prefix=display_prefix)

    def __str__(self) -> str:
        return f"PjlinkCommand({self.wire_text[:-1].decode('utf-8', errors='replace')})"

    def __repr__(self) -> str:
        return str(self)

def query_command(opcode: Opcode) -> PjlinkCommand:
    """Creates a status query command (e.g., b'%1POWR ?\\r') for a known opcode"""
    try:
        meta = get_opcode_meta(opcode)
    except KeyError as e:
        raise PjlinkError(f"Unknown PJLink opcode: '{opcode}'") from e
    return PjlinkCommand.create(
        meta.opcode,
        QUERY_PARAMETER,
        response_kind=meta.response_kind,
        display_prefix=meta.query_prefix
      )

def status_commands() -> List[PjlinkCommand]:
    """Creates the full set of status query commands, in output order"""
    return [ query_command(opcode) for opcode in STATUS_OPCODES ]

def power_command(on: bool) -> PjlinkCommand:
    """Creates a power on/off command"""
    on_str = "on" if on else "off"
    return PjlinkCommand.create(
        "POWR",
        "1" if on else "0",
        response_kind=ResponseKind.POWER,
        display_prefix=f"power {on_str}: "
      )

def source_command(source: str) -> PjlinkCommand:
    """Creates an input select command.

    source is an input class name (rgb, video, digital, storage or net) optionally
    followed by an input number 1-9, e.g., "digital2". If the number is missing or
    invalid, input number 1 is selected.
    """
    input_class: Optional[str] = None
    input_class_name = ''
    for name, digit in input_class_name_map.items():
        if source.startswith(name):
            input_class_name = name
            input_class = digit
            break
    if input_class is None:
        raise UsageError(f"Incorrect source type given: '{source}'")
    num = source[len(input_class_name):]
    if len(num) != 1 or not num in "123456789":
        logger.warning(f"Missing or invalid source number in '{source}', defaulting to 1")
        num = "1"
    return PjlinkCommand.create(
        "INPT",
        f"{input_class}{num}",
        response_kind=ResponseKind.SOURCE,
        display_prefix=f"source select {input_class_name}{num}: "
      )

def mute_command(target: str, on: bool) -> PjlinkCommand:
    """Creates an audio/video mute command.

    target is one of "video", "audio" or "av".
    """
    target_digit = mute_target_name_map.get(target)
    if target_digit is None:
        raise UsageError(f"Incorrect mute target given: '{target}'")
    on_str = "on" if on else "off"
    return PjlinkCommand.create(
        "AVMT",
        f"{target_digit}{'1' if on else '0'}",
        response_kind=ResponseKind.MUTE,
        display_prefix=f"{target} mute {on_str}: "
      )
