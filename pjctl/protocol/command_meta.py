#!/usr/bin/env python3

"""
PJLink class 1 opcodes and metadata.

This module contains the known class 1 opcodes and the value tables needed to build
commands and interpret responses. The information in this module is derived from the
JBMIA PJLink specification, version 1.04.

There is no protocol implementation here; only metadata about the protocol.
"""
from __future__ import annotations

from enum import Enum

from ..internal_types import *

Opcode = str

class ResponseKind(Enum):
    """Closed set of response handlers. Each command is bound to exactly one."""
    POWER = 'power'
    SOURCE = 'source'
    MUTE = 'mute'
    INPUT_LIST = 'input_list'
    INPUT_SWITCH = 'input_switch'
    LAMP = 'lamp'
    ERROR_STATUS = 'error_status'
    CLASS = 'class'
    NAME = 'name'
    MANUFACTURER = 'manufacturer'
    PRODUCT = 'product'
    MODEL_INFO = 'model_info'

power_status_map: Dict[str, str] = {
    "0": "off",
    "1": "on",
    "2": "cooling",
    "3": "warming",
  }
"""POWR query payloads, and the projector power states they correspond to."""

input_class_map: Dict[str, str] = {
    "1": "rgb",
    "2": "video",
    "3": "digital",
    "4": "storage",
    "5": "net",
  }
"""First digit of an INPT/INST input code, and the input class it selects."""

input_class_name_map: Dict[str, str] = dict((v, k) for k, v in input_class_map.items())
"""Input class name, and the INPT digit that selects it."""

UNKNOWN_INPUT_CLASS = "unknown"

mute_target_map: Dict[str, str] = {
    "1": "video",
    "2": "audio",
    "3": "video&audio",
  }
"""First digit of an AVMT payload, and the outputs it mutes."""

mute_target_name_map: Dict[str, str] = {
    "video": "1",
    "audio": "2",
    "av": "3",
  }
"""AVMT target names accepted on the command line, and the digit that selects them."""

on_off_map: Dict[str, bool] = {
    "0": False,
    "1": True,
  }

error_status_categories: List[str] = [
    "fan",
    "lamp",
    "temperature",
    "cover",
    "filter",
    "other",
  ]
"""ERST payload positions, in order. The payload has one digit per category."""

error_level_map: Dict[str, str] = {
    "0": "none",
    "1": "warning",
    "2": "error",
  }
"""ERST payload digits, and the error level they report."""

MAX_LAMP_HOURS_DIGITS = 5
"""Cumulative lamp hours are reported as 1 to 5 decimal digits (0-99999)."""

class OpcodeMeta:
    """Metadata for a single PJLink class 1 opcode"""
    name: str
    """Friendly name of the opcode"""

    opcode: Opcode
    """4-character opcode as sent on the wire"""

    response_kind: ResponseKind
    """The handler that interprets responses to this opcode"""

    query_prefix: Optional[str]
    """Label printed before the parsed result of a status query, if any"""

    def __init__(
            self,
            name: str,
            opcode: Opcode,
            response_kind: ResponseKind,
            query_prefix: Optional[str]=None,
          ):
        assert len(opcode) == 4 and opcode.isupper()
        self.name = name
        self.opcode = opcode
        self.response_kind = response_kind
        self.query_prefix = query_prefix

    def __str__(self) -> str:
        return f"OpcodeMeta({self.name}: {self.opcode})"

    def __repr__(self) -> str:
        return str(self)

_O = OpcodeMeta

_opcode_metas: List[OpcodeMeta] = [
    _O("name", "NAME", ResponseKind.NAME, "name: "),
    _O("manufacturer", "INF1", ResponseKind.MANUFACTURER, "manufacturer name: "),
    _O("product", "INF2", ResponseKind.PRODUCT, "product name: "),
    _O("model_info", "INFO", ResponseKind.MODEL_INFO, "model info: "),
    _O("power", "POWR", ResponseKind.POWER, "power status: "),
    _O("input", "INPT", ResponseKind.INPUT_SWITCH, "current input: "),
    _O("input_list", "INST", ResponseKind.INPUT_LIST, "available input sources: "),
    _O("mute", "AVMT", ResponseKind.MUTE, "mute status: "),
    _O("lamp", "LAMP", ResponseKind.LAMP, "lamp: "),
    _O("error_status", "ERST", ResponseKind.ERROR_STATUS, "error status: "),
    _O("class", "CLSS", ResponseKind.CLASS, "class: "),
  ]

opcode_metas: Dict[Opcode, OpcodeMeta] = {}
for _meta in _opcode_metas:
    assert not _meta.opcode in opcode_metas
    opcode_metas[_meta.opcode] = _meta

STATUS_OPCODES: List[Opcode] = [
    "NAME",
    "INF1",
    "INF2",
    "INFO",
    "POWR",
    "INPT",
    "INST",
    "AVMT",
    "LAMP",
    "ERST",
    "CLSS",
  ]
"""Opcodes queried by the status command, in output order."""

def get_opcode_meta(opcode: Opcode) -> OpcodeMeta:
    """Returns the metadata for a known opcode. Lookup is case-insensitive.

    raises KeyError if the opcode is not a known class 1 opcode.
    """
    return opcode_metas[opcode.upper()]
