"""Tests for client configuration and host resolution."""

from __future__ import annotations

import pytest

from pjctl.client import PjlinkClientConfig, resolve_host, resolve_projector_tcp_host
from pjctl.client.resolve_host import split_host_port
from pjctl.client.tcp_connector import TcpPjlinkConnector
from pjctl.constants import DEFAULT_PORT
from pjctl.exceptions import PjlinkConnectionError, PjlinkError

from conftest import UnusableSddpClient


class TestSplitHostPort:
    @pytest.mark.parametrize(
        "host,expected",
        [
            ("projector", ("projector", 4352)),
            ("projector:1234", ("projector", 1234)),
            ("10.0.0.5:4353", ("10.0.0.5", 4353)),
            ("[::1]:4000", ("::1", 4000)),
            ("[::1]", ("::1", 4352)),
            ("fe80::1", ("fe80::1", 4352)),
        ],
    )
    def test_split(self, host, expected):
        assert split_host_port(host, DEFAULT_PORT) == expected

    @pytest.mark.parametrize("host", ["projector:abc", "[::1", "[::1]x"])
    def test_invalid(self, host):
        with pytest.raises(PjlinkError):
            split_host_port(host, DEFAULT_PORT)


class TestResolveHost:
    @pytest.mark.asyncio
    async def test_tcp_prefix(self):
        assert await resolve_projector_tcp_host("tcp://10.0.0.5:99") == ("10.0.0.5", 99, None)

    @pytest.mark.asyncio
    async def test_default_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PJLINK_PORT", "4400")
        assert await resolve_projector_tcp_host("10.0.0.5") == ("10.0.0.5", 4400, None)

    @pytest.mark.asyncio
    async def test_sddp_socket_error(self, monkeypatch):
        monkeypatch.setattr(resolve_host, "SddpClient", UnusableSddpClient)
        with pytest.raises(PjlinkConnectionError):
            await resolve_projector_tcp_host("sddp://")

    @pytest.mark.asyncio
    async def test_host_from_env(self, monkeypatch):
        monkeypatch.setenv("PJLINK_HOST", "projector.local:4500")
        assert await resolve_projector_tcp_host(None, 4352) == ("projector.local", 4500, None)


class TestClientConfig:
    def test_defaults(self):
        config = PjlinkClientConfig()
        assert config.default_host == "sddp://"
        assert config.default_port == DEFAULT_PORT
        assert config.password is None
        assert config.timeout_secs is None

    def test_env(self, monkeypatch):
        monkeypatch.setenv("PJLINK_HOST", "10.0.0.5")
        monkeypatch.setenv("PJLINK_PORT", "4400")
        monkeypatch.setenv("PJLINK_PASSWORD", "secret")
        monkeypatch.setenv("PJLINK_TIMEOUT", "2.5")
        config = PjlinkClientConfig()
        assert config.default_host == "10.0.0.5"
        assert config.default_port == 4400
        assert config.password == "secret"
        assert config.timeout_secs == 2.5

    def test_arguments_override_env(self, monkeypatch):
        monkeypatch.setenv("PJLINK_PASSWORD", "secret")
        config = PjlinkClientConfig("10.0.0.6", "", default_port=4401, timeout_secs=1.0)
        assert config.default_host == "10.0.0.6"
        assert config.default_port == 4401
        assert config.password is None
        assert config.timeout_secs == 1.0

    def test_base_config(self):
        base = PjlinkClientConfig("10.0.0.6", "pw", timeout_secs=3.0)
        config = PjlinkClientConfig(default_port=4402, base_config=base)
        assert config.default_host == "10.0.0.6"
        assert config.password == "pw"
        assert config.default_port == 4402
        assert config.timeout_secs == 3.0

    @pytest.mark.parametrize("name,value", [("PJLINK_PORT", "x"), ("PJLINK_TIMEOUT", "soon")])
    def test_invalid_env(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(PjlinkError):
            PjlinkClientConfig()


def test_connector_rejects_other_protocols():
    with pytest.raises(PjlinkError):
        TcpPjlinkConnector("http://10.0.0.5")
