"""Tests for command construction."""

from __future__ import annotations

import pytest

from pjctl.exceptions import PjlinkError, UsageError
from pjctl.protocol import (
    PjlinkCommand,
    ResponseKind,
    STATUS_OPCODES,
    get_opcode_meta,
    mute_command,
    power_command,
    query_command,
    source_command,
    status_commands,
)


class TestPowerCommand:
    def test_on(self):
        command = power_command(True)
        assert command.wire_text == b'%1POWR 1\r'
        assert command.response_kind == ResponseKind.POWER
        assert command.display_prefix == "power on: "

    def test_off(self):
        command = power_command(False)
        assert command.wire_text == b'%1POWR 0\r'
        assert command.display_prefix == "power off: "


class TestSourceCommand:
    @pytest.mark.parametrize(
        "source,wire_text",
        [
            ("rgb1", b'%1INPT 11\r'),
            ("video3", b'%1INPT 23\r'),
            ("digital2", b'%1INPT 32\r'),
            ("storage9", b'%1INPT 49\r'),
            ("net1", b'%1INPT 51\r'),
        ],
    )
    def test_class_and_number(self, source, wire_text):
        command = source_command(source)
        assert command.wire_text == wire_text
        assert command.response_kind == ResponseKind.SOURCE
        assert command.display_prefix == f"source select {source}: "

    @pytest.mark.parametrize("source", ["rgb", "rgb0", "rgb12", "rgbx"])
    def test_missing_or_invalid_number_selects_1(self, source):
        assert source_command(source).wire_text == b'%1INPT 11\r'

    def test_unknown_class(self):
        with pytest.raises(UsageError):
            source_command("hdmi1")


class TestMuteCommand:
    @pytest.mark.parametrize(
        "target,on,wire_text",
        [
            ("video", True, b'%1AVMT 11\r'),
            ("video", False, b'%1AVMT 10\r'),
            ("audio", True, b'%1AVMT 21\r'),
            ("av", False, b'%1AVMT 30\r'),
        ],
    )
    def test_targets(self, target, on, wire_text):
        command = mute_command(target, on)
        assert command.wire_text == wire_text
        assert command.response_kind == ResponseKind.MUTE

    def test_unknown_target(self):
        with pytest.raises(UsageError):
            mute_command("picture", True)


def test_status_commands_are_queries_in_fixed_order():
    commands = status_commands()
    assert [c.opcode for c in commands] == [
        "NAME", "INF1", "INF2", "INFO", "POWR", "INPT", "INST", "AVMT", "LAMP", "ERST", "CLSS",
    ]
    assert [c.opcode for c in commands] == STATUS_OPCODES
    for command in commands:
        assert command.parameter == "?"
        assert command.wire_text == b'%1' + command.opcode.encode('ascii') + b' ?\r'
        assert command.response_kind == get_opcode_meta(command.opcode).response_kind
        assert command.display_prefix is not None


def test_query_command_is_case_insensitive():
    command = query_command("lamp")
    assert command.wire_text == b'%1LAMP ?\r'
    assert command.response_kind == ResponseKind.LAMP


def test_query_command_unknown_opcode():
    with pytest.raises(PjlinkError):
        query_command("XXXX")


class TestPjlinkCommand:
    def test_create_uses_registered_handler(self):
        command = PjlinkCommand.create("inpt", "31")
        assert command.wire_text == b'%1INPT 31\r'
        assert command.response_kind == ResponseKind.INPUT_SWITCH
        assert command.display_prefix is None
        assert command.parameter == "31"

    def test_create_rejects_bad_opcode(self):
        with pytest.raises(PjlinkError):
            PjlinkCommand.create("POW", "1")
        with pytest.raises(PjlinkError):
            PjlinkCommand.create("ABCD", "1")

    @pytest.mark.parametrize(
        "wire_text",
        [
            b'POWR 1\r',
            b'%1POWR 1',
            b'%1POWR\r',
            b'%1POWR=1\r',
            b'%1NAME ' + b'x' * 200 + b'\r',
            b'%1POWR 1\r%1INPT 11\r',
            b'%1POWR 1\n\r',
        ],
    )
    def test_rejects_malformed_wire_text(self, wire_text):
        with pytest.raises(PjlinkError):
            PjlinkCommand(wire_text, ResponseKind.POWER)

    @pytest.mark.parametrize(
        "opcode,parameter",
        [
            ("POWR", "1\r%1INPT 11"),
            ("POWR", "1\n"),
            ("PO\rR", "1"),
        ],
    )
    def test_create_rejects_line_breaks(self, opcode, parameter):
        with pytest.raises(PjlinkError):
            PjlinkCommand.create(opcode, parameter)
