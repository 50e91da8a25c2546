# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

from enum import Enum

from ..internal_types import *
from .command_meta import (
    Opcode,
    ResponseKind,
    power_status_map,
    input_class_map,
    mute_target_map,
    on_off_map,
    error_status_categories,
    error_level_map,
    MAX_LAMP_HOURS_DIGITS,
    UNKNOWN_INPUT_CLASS,
  )

if TYPE_CHECKING:
    from .command import PjlinkCommand

class ErrorCheck(Enum):
    """Result of the generic error-code check shared by all handlers"""
    SUCCESS = 'success'
    DEVICE_ERROR = 'device_error'
    UNKNOWN = 'unknown'

class DeviceError(Enum):
    """Errors reported by the projector as ERR1..ERR4"""
    UNDEFINED_COMMAND = '1'
    OUT_OF_PARAMETER = '2'
    UNAVAILABLE_TIME = '3'
    PROJECTOR_FAILURE = '4'

    @property
    def message(self) -> str:
        return _device_error_messages[self]

_device_error_messages: Dict[DeviceError, str] = {
    DeviceError.UNDEFINED_COMMAND: "Undefined command",
    DeviceError.OUT_OF_PARAMETER: "Out-of-parameter",
    DeviceError.UNAVAILABLE_TIME: "Unavailable time",
    DeviceError.PROJECTOR_FAILURE: "Projector failure",
  }

def interpret_error_code(payload: str) -> Tuple[ErrorCheck, Optional[DeviceError]]:
    """Classifies a response payload as success, a projector-reported error, or
       neither (a normal payload for command-specific parsing).

    "ERR" followed by anything other than a digit 1-4 is not a recognized error
    code, and is treated as a normal payload.
    """
    if payload == "OK":
        return (ErrorCheck.SUCCESS, None)
    if payload.startswith("ERR"):
        if len(payload) < 4:
            return (ErrorCheck.UNKNOWN, None)
        try:
            return (ErrorCheck.DEVICE_ERROR, DeviceError(payload[3]))
        except ValueError:
            return (ErrorCheck.UNKNOWN, None)
    return (ErrorCheck.UNKNOWN, None)

class ResultOutcome(Enum):
    SUCCESS = 'success'
    """The projector acknowledged the command with OK"""

    DEVICE_ERROR = 'device_error'
    """The projector reported ERR1..ERR4"""

    VALUE = 'value'
    """The payload was parsed into a value"""

    MALFORMED = 'malformed'
    """The payload could not be parsed; the session continues"""

    NONE = 'none'
    """The payload produces no output"""

class PjlinkResult:
    """The parsed response to a single PjlinkCommand"""
    command: PjlinkCommand
    opcode: Opcode
    payload: str
    outcome: ResultOutcome
    error: Optional[DeviceError]
    value: Jsonable
    text: Optional[str]
    """Human-readable rendering of the result, or None if nothing should be printed"""

    def __init__(
            self,
            command: PjlinkCommand,
            opcode: Opcode,
            payload: str,
            outcome: ResultOutcome,
            *,
            error: Optional[DeviceError]=None,
            value: Jsonable=None,
            text: Optional[str]=None,
          ):
        self.command = command
        self.opcode = opcode
        self.payload = payload
        self.outcome = outcome
        self.error = error
        self.value = value
        self.text = text

    @property
    def display_prefix(self) -> Optional[str]:
        return self.command.display_prefix

    @property
    def is_error(self) -> bool:
        return self.outcome == ResultOutcome.DEVICE_ERROR

    @property
    def has_output(self) -> bool:
        return self.text is not None

    def display_str(self) -> Optional[str]:
        """Returns the display prefix followed by the text, or None if there is no output"""
        if self.text is None:
            return None
        prefix = self.display_prefix
        return self.text if prefix is None else prefix + self.text

    def to_jsonable(self) -> JsonableDict:
        return dict(
            opcode=self.opcode,
            payload=self.payload,
            outcome=self.outcome.value,
            error=None if self.error is None else self.error.message,
            value=self.value,
            text=self.text,
          )

    def __str__(self) -> str:
        return f"PjlinkResult({self.opcode}={self.payload!r}: {self.outcome.value})"

    def __repr__(self) -> str:
        return str(self)

ResponseHandler = Callable[['PjlinkCommand', Opcode, str], PjlinkResult]

def _checked(command: PjlinkCommand, opcode: Opcode, payload: str) -> Optional[PjlinkResult]:
    """Returns a result for OK and ERR1..ERR4 payloads; None for anything else"""
    check, error = interpret_error_code(payload)
    if check == ErrorCheck.SUCCESS:
        return PjlinkResult(command, opcode, payload, ResultOutcome.SUCCESS, text="OK")
    if check == ErrorCheck.DEVICE_ERROR:
        assert error is not None
        return PjlinkResult(command, opcode, payload, ResultOutcome.DEVICE_ERROR, error=error, text=error.message)
    return None

def _no_output(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    return PjlinkResult(command, opcode, payload, ResultOutcome.NONE)

def _malformed(command: PjlinkCommand, opcode: Opcode, payload: str, text: str) -> PjlinkResult:
    return PjlinkResult(command, opcode, payload, ResultOutcome.MALFORMED, text=text)

def _input_name(input_class: str) -> str:
    return input_class_map.get(input_class, UNKNOWN_INPUT_CLASS)

def handle_power(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    status = power_status_map.get(payload)
    if status is None:
        return _malformed(command, opcode, payload, f"invalid response: {payload}")
    return PjlinkResult(command, opcode, payload, ResultOutcome.VALUE, value=status, text=status)

def handle_source(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    return _no_output(command, opcode, payload)

def handle_mute(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    if len(payload) != 2:
        return _no_output(command, opcode, payload)
    target = mute_target_map.get(payload[0])
    on = on_off_map.get(payload[1])
    if target is None or on is None:
        return _malformed(command, opcode, payload, f"invalid response: {payload}")
    return PjlinkResult(
        command, opcode, payload, ResultOutcome.VALUE,
        value=dict(target=target, muted=on),
        text=f"{target} mute {'on' if on else 'off'}"
      )

def handle_input_list(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    # A malformed length produces no output, unlike ERST, which reports it.
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    if len(payload) % 3 != 2:
        return _no_output(command, opcode, payload)
    inputs: List[Jsonable] = []
    names: List[str] = []
    for i in range(0, len(payload), 3):
        name = _input_name(payload[i])
        number = payload[i+1]
        inputs.append(dict(source=name, number=number))
        names.append(f"{name}{number}")
    return PjlinkResult(command, opcode, payload, ResultOutcome.VALUE, value=inputs, text=" ".join(names))

def handle_input_switch(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    if len(payload) == 0:
        return _no_output(command, opcode, payload)
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    if len(payload) != 2:
        return _malformed(command, opcode, payload, "error: invalid response")
    name = _input_name(payload[0])
    return PjlinkResult(
        command, opcode, payload, ResultOutcome.VALUE,
        value=dict(source=name, number=payload[1]),
        text=f"{name}{payload[1]}"
      )

def parse_lamp_payload(payload: str) -> List[Tuple[str, bool]]:
    """Parses "<hours> <on-flag>[ <hours> <on-flag>...]" into (hours, on) tuples.

    raises ValueError if any segment is malformed.
    """
    lamps: List[Tuple[str, bool]] = []
    pos = 0
    n = len(payload)
    if n == 0:
        raise ValueError("Empty lamp payload")
    while pos < n:
        space = payload.find(' ', pos, pos + MAX_LAMP_HOURS_DIGITS + 1)
        if space <= pos:
            raise ValueError(f"Missing lamp hours at offset {pos}")
        hours = payload[pos:space]
        if not hours.isdigit():
            raise ValueError(f"Invalid lamp hours '{hours}'")
        flag_pos = space + 1
        if flag_pos >= n or not payload[flag_pos] in on_off_map:
            raise ValueError(f"Invalid lamp on/off flag at offset {flag_pos}")
        lamps.append((hours, on_off_map[payload[flag_pos]]))
        pos = flag_pos + 1
        if pos < n:
            if payload[pos] != ' ':
                raise ValueError(f"Missing lamp separator at offset {pos}")
            pos += 1
    return lamps

def handle_lamp(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    try:
        lamps = parse_lamp_payload(payload)
    except ValueError:
        return _malformed(command, opcode, payload, f"invalid message body: {payload}")
    text = ", ".join(f"{hours} hours ({'on' if on else 'off'})" for hours, on in lamps)
    return PjlinkResult(
        command, opcode, payload, ResultOutcome.VALUE,
        value=[ dict(hours=hours, on=on) for hours, on in lamps ],
        text=text
      )

def handle_error_status(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    if len(payload) != len(error_status_categories):
        return _malformed(command, opcode, payload, f"invalid response length {len(payload)}: {payload}")
    levels: Dict[str, Jsonable] = {}
    for category, digit in zip(error_status_categories, payload):
        level = error_level_map.get(digit)
        if level is None:
            return _malformed(command, opcode, payload, f"invalid {category} status '{digit}': {payload}")
        levels[category] = level
    reported = [ f"{category}:{level}" for category, level in levels.items() if level != "none" ]
    text = "none" if len(reported) == 0 else " ".join(reported)
    return PjlinkResult(command, opcode, payload, ResultOutcome.VALUE, value=levels, text=text)

def handle_text(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    """Pass-through handler for NAME, INF1, INF2, INFO and CLSS.

    An empty payload means the projector has no such information, and produces no output.
    """
    if len(payload) == 0:
        return _no_output(command, opcode, payload)
    result = _checked(command, opcode, payload)
    if result is not None:
        return result
    return PjlinkResult(command, opcode, payload, ResultOutcome.VALUE, value=payload, text=payload)

response_handlers: Dict[ResponseKind, ResponseHandler] = {
    ResponseKind.POWER: handle_power,
    ResponseKind.SOURCE: handle_source,
    ResponseKind.MUTE: handle_mute,
    ResponseKind.INPUT_LIST: handle_input_list,
    ResponseKind.INPUT_SWITCH: handle_input_switch,
    ResponseKind.LAMP: handle_lamp,
    ResponseKind.ERROR_STATUS: handle_error_status,
    ResponseKind.CLASS: handle_text,
    ResponseKind.NAME: handle_text,
    ResponseKind.MANUFACTURER: handle_text,
    ResponseKind.PRODUCT: handle_text,
    ResponseKind.MODEL_INFO: handle_text,
  }
assert set(response_handlers.keys()) == set(ResponseKind)

def dispatch_response(command: PjlinkCommand, opcode: Opcode, payload: str) -> PjlinkResult:
    """Invokes the handler bound to command with a response's opcode and payload"""
    return response_handlers[command.response_kind](command, opcode, payload)
