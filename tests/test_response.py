"""Tests for response interpretation."""

from __future__ import annotations

import pytest

from pjctl.protocol import (
    DeviceError,
    ErrorCheck,
    ResponseKind,
    ResultOutcome,
    dispatch_response,
    interpret_error_code,
    mute_command,
    power_command,
    query_command,
    response_handlers,
    source_command,
)


def _query(opcode, payload):
    return dispatch_response(query_command(opcode), opcode, payload)


class TestInterpretErrorCode:
    def test_ok(self):
        assert interpret_error_code("OK") == (ErrorCheck.SUCCESS, None)

    @pytest.mark.parametrize(
        "payload,error",
        [
            ("ERR1", DeviceError.UNDEFINED_COMMAND),
            ("ERR2", DeviceError.OUT_OF_PARAMETER),
            ("ERR3", DeviceError.UNAVAILABLE_TIME),
            ("ERR4", DeviceError.PROJECTOR_FAILURE),
        ],
    )
    def test_device_errors(self, payload, error):
        assert interpret_error_code(payload) == (ErrorCheck.DEVICE_ERROR, error)

    @pytest.mark.parametrize("payload", ["ERR", "ERR5", "ERRA", "1", "", "OKAY"])
    def test_unrecognized(self, payload):
        assert interpret_error_code(payload) == (ErrorCheck.UNKNOWN, None)

    def test_error_messages(self):
        assert DeviceError.UNDEFINED_COMMAND.message == "Undefined command"
        assert DeviceError.OUT_OF_PARAMETER.message == "Out-of-parameter"
        assert DeviceError.UNAVAILABLE_TIME.message == "Unavailable time"
        assert DeviceError.PROJECTOR_FAILURE.message == "Projector failure"


def test_every_response_kind_has_a_handler():
    assert set(response_handlers.keys()) == set(ResponseKind)


class TestPower:
    def test_set_ok(self):
        result = dispatch_response(power_command(True), "POWR", "OK")
        assert result.outcome == ResultOutcome.SUCCESS
        assert result.display_str() == "power on: OK"

    def test_device_error(self):
        result = dispatch_response(power_command(True), "POWR", "ERR3")
        assert result.is_error
        assert result.error == DeviceError.UNAVAILABLE_TIME
        assert result.text == "Unavailable time"

    @pytest.mark.parametrize(
        "payload,status",
        [("0", "off"), ("1", "on"), ("2", "cooling"), ("3", "warming")],
    )
    def test_status(self, payload, status):
        result = _query("POWR", payload)
        assert result.outcome == ResultOutcome.VALUE
        assert result.value == status
        assert result.display_str() == f"power status: {status}"

    def test_invalid_status(self):
        result = _query("POWR", "7")
        assert result.outcome == ResultOutcome.MALFORMED
        assert not result.is_error


class TestSource:
    def test_ok(self):
        result = dispatch_response(source_command("digital2"), "INPT", "OK")
        assert result.outcome == ResultOutcome.SUCCESS
        assert result.display_str() == "source select digital2: OK"

    def test_error(self):
        result = dispatch_response(source_command("net1"), "INPT", "ERR2")
        assert result.error == DeviceError.OUT_OF_PARAMETER

    def test_other_payload_is_silent(self):
        result = dispatch_response(source_command("rgb1"), "INPT", "11")
        assert result.outcome == ResultOutcome.NONE
        assert result.display_str() is None


class TestMute:
    def test_video_off(self):
        result = _query("AVMT", "10")
        assert result.text == "video mute off"
        assert result.value == dict(target="video", muted=False)

    def test_audio_on(self):
        result = _query("AVMT", "21")
        assert result.text == "audio mute on"

    def test_video_and_audio(self):
        result = _query("AVMT", "31")
        assert result.text == "video&audio mute on"

    def test_wrong_length_produces_no_output(self):
        result = _query("AVMT", "1")
        assert result.outcome == ResultOutcome.NONE
        assert not result.has_output
        assert result.display_str() is None

    def test_invalid_characters(self):
        result = _query("AVMT", "41")
        assert result.outcome == ResultOutcome.MALFORMED

    def test_set_ok(self):
        result = dispatch_response(mute_command("av", True), "AVMT", "OK")
        assert result.display_str() == "av mute on: OK"


class TestInputList:
    def test_inputs(self):
        result = _query("INST", "11 21 32 51")
        assert result.text == "rgb1 video1 digital2 net1"
        assert result.value[2] == dict(source="digital", number="2")

    def test_single_input(self):
        assert _query("INST", "31").text == "digital1"

    def test_unknown_class(self):
        assert _query("INST", "91").text == "unknown1"

    def test_malformed_length_produces_no_output(self):
        # Unlike error status (see TestErrorStatus.test_wrong_length), a malformed
        # input list is silently ignored.
        result = _query("INST", "11 2")
        assert result.outcome == ResultOutcome.NONE
        assert result.display_str() is None

    def test_device_error(self):
        assert _query("INST", "ERR3").is_error


class TestInputSwitch:
    def test_current_input(self):
        result = _query("INPT", "32")
        assert result.display_str() == "current input: digital2"

    def test_wrong_length(self):
        result = _query("INPT", "321")
        assert result.outcome == ResultOutcome.MALFORMED
        assert result.text == "error: invalid response"

    def test_empty(self):
        assert _query("INPT", "").outcome == ResultOutcome.NONE

    def test_device_error(self):
        assert _query("INPT", "ERR3").error == DeviceError.UNAVAILABLE_TIME


class TestLamp:
    def test_single_lamp(self):
        result = _query("LAMP", "1234 1")
        assert result.text == "1234 hours (on)"
        assert result.value == [dict(hours="1234", on=True)]

    def test_two_lamps(self):
        result = _query("LAMP", "1234 1 99999 0")
        assert result.text == "1234 hours (on), 99999 hours (off)"

    def test_trailing_space(self):
        assert _query("LAMP", "0 0 ").text == "0 hours (off)"

    @pytest.mark.parametrize(
        "payload", ["123456 1", "abc 1", "12 2", "12", "12 1x", " 1"]
    )
    def test_malformed(self, payload):
        result = _query("LAMP", payload)
        assert result.outcome == ResultOutcome.MALFORMED
        assert result.text.startswith("invalid message body")


class TestErrorStatus:
    def test_no_errors(self):
        result = _query("ERST", "000000")
        assert result.text == "none"
        assert result.display_str() == "error status: none"

    def test_fan_error(self):
        result = _query("ERST", "200000")
        assert result.text == "fan:error"
        assert result.value["fan"] == "error"
        assert result.value["lamp"] == "none"

    def test_several(self):
        assert _query("ERST", "012001").text == "lamp:warning temperature:error other:warning"

    @pytest.mark.parametrize("payload", ["20000", "2000000"])
    def test_wrong_length(self, payload):
        result = _query("ERST", payload)
        assert result.outcome == ResultOutcome.MALFORMED
        assert not result.is_error

    def test_invalid_character(self):
        assert _query("ERST", "003000").outcome == ResultOutcome.MALFORMED


class TestText:
    @pytest.mark.parametrize("opcode", ["NAME", "INF1", "INF2", "INFO", "CLSS"])
    def test_pass_through(self, opcode):
        result = _query(opcode, "Theater 1")
        assert result.outcome == ResultOutcome.VALUE
        assert result.text == "Theater 1"

    @pytest.mark.parametrize("opcode", ["NAME", "INF1", "INF2", "INFO", "CLSS"])
    def test_empty_produces_no_output(self, opcode):
        result = _query(opcode, "")
        assert result.outcome == ResultOutcome.NONE
        assert result.display_str() is None

    def test_prefix(self):
        assert _query("INF1", "Acme").display_str() == "manufacturer name: Acme"


def test_to_jsonable():
    result = _query("ERST", "ERR4")
    assert result.to_jsonable() == dict(
        opcode="ERST",
        payload="ERR4",
        outcome="device_error",
        error="Projector failure",
        value=None,
        text="Projector failure",
    )
