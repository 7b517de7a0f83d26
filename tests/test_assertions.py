"""Tests for the RemoteServer assertion surface."""
import io
import socket
import time
from unittest.mock import MagicMock, patch

import pytest

import remoteserver
from remoteserver import ProbeConfig, RecordingReporter, RemoteServer, TapReporter
from remoteserver.probes.dns import DnsProbe
from remoteserver.probes.tcp import TcpProbe

from conftest import make_result
from test_ssh import SSH_VERBOSE_OUTPUT, UNREACHABLE_OUTPUT


@pytest.fixture
def server(config, recorder, fake_executor, linux_detector):
    return RemoteServer(config=config, reporter=recorder, executor=fake_executor, detector=linux_detector)


def test_ping_ok_and_ping6_ok(server, recorder, fake_executor):
    assert server.ping_ok("localhost", "v4 up") is True
    fake_executor.run_command.return_value = make_result(return_code=2)
    assert server.ping6_ok("localhost", "v6 up") is False

    assert [o.check for o in recorder.outcomes] == ["ping_ok", "ping6_ok"]
    assert recorder.outcomes[1].diagnostic == "Host localhost down"


def test_unreachable_host(server, recorder, fake_executor, closed_port):
    """Down host: ping/resolve/open fail while closed passes."""
    fake_executor.run_command.return_value = make_result(return_code=1)
    error = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    with patch("remoteserver.probes.dns.socket.getaddrinfo", side_effect=error):
        assert server.resolves("gone.example", "resolves") is False
    assert server.ping_ok("gone.example", "ping") is False
    assert server.ping6_ok("gone.example", "ping6") is False
    assert server.socket_open("127.0.0.1", closed_port, "open") is False
    assert server.socket_closed("127.0.0.1", closed_port, "closed") is True
    assert len(recorder.outcomes) == 5


def test_loopback_listener_lifecycle(server, recorder, listener):
    sock, port = listener
    assert server.socket_open("127.0.0.1", port, "listening") is True
    sock.close()
    assert server.socket_open("127.0.0.1", port, "listening") is False
    assert server.socket_closed("127.0.0.1", port, "gone") is True
    assert [o.passed for o in recorder.outcomes] == [True, False, True]


def test_resolves_localhost(server):
    assert server.resolves("localhost", "localhost resolves") is True


def test_ssh_auth_with_advertised_methods(server, recorder, fake_executor):
    fake_executor.run_command.return_value = make_result(return_code=255, stderr=SSH_VERBOSE_OUTPUT)
    assert server.ssh_auth_enabled("server.example", "password", "pw on") is True
    assert server.ssh_auth_enabled("server.example", "keyboard-interactive", "kbd on") is False
    assert server.ssh_auth_disabled("server.example", "password", "pw off") is False
    assert server.ssh_auth_disabled("server.example", "keyboard-interactive", "kbd off") is True
    assert server.ssh_auth_methods("server.example:22") == ["publickey", "password"]
    assert len(recorder.outcomes) == 4


def test_ssh_auth_vacuous_disablement(server, fake_executor):
    """An unreachable SSH server makes every method look disabled."""
    fake_executor.run_command.return_value = make_result(return_code=255, stderr=UNREACHABLE_OUTPUT)
    for method in ("password", "publickey", "none"):
        assert server.ssh_auth_enabled("server.example", method) is False
        assert server.ssh_auth_disabled("server.example", method) is True


def test_option_like_targets_are_rejected_before_running_tools(server, recorder, fake_executor):
    target = "-oProxyCommand=touch /tmp/remoteserver-marker"
    assert server.ssh_auth_enabled(target, "password", "pw on") is False
    assert server.ssh_auth_disabled(target, "password", "pw off") is True
    assert server.ping_ok("-oProxyCommand=x", "ping") is False
    fake_executor.run_command.assert_not_called()
    assert [o.passed for o in recorder.outcomes] == [False, True, False]


def test_timeout_controls_slow_probe(recorder):
    """A tiny timeout fails a slow connect; a larger one passes it."""
    def slow(address, timeout=None):
        time.sleep(0.3)
        return MagicMock()

    with patch("remoteserver.probes.tcp.socket.create_connection", side_effect=slow):
        config = ProbeConfig(timeout=0.05)
        assert RemoteServer(config, recorder).socket_open("192.0.2.1", 443) is False
        assert RemoteServer(config, recorder).socket_closed("192.0.2.1", 443) is True

        config = config.with_timeout(2)
        assert RemoteServer(config, recorder).socket_open("192.0.2.1", 443) is True
        assert RemoteServer(config, recorder).socket_closed("192.0.2.1", 443) is False
    assert len(recorder.outcomes) == 4


def test_probe_exception_still_reports_once(server, recorder):
    with patch.object(DnsProbe, "resolve", side_effect=RuntimeError("resolver exploded")):
        assert server.resolves("example.com", "resolves") is False
    with patch.object(TcpProbe, "closed", side_effect=RuntimeError("socket exploded")):
        assert server.socket_closed("example.com", 23, "telnet closed") is True
    with patch.object(TcpProbe, "open", side_effect=RuntimeError("socket exploded")):
        assert server.socket_open("example.com", 80, "web open") is False

    assert len(recorder.outcomes) == 3
    assert "resolver exploded" in recorder.outcomes[0].diagnostic
    assert recorder.outcomes[1].passed is True
    assert recorder.outcomes[2].diagnostic.startswith("Connection failed to example.com:80")


def test_reporter_failure_does_not_break_assertion(config, fake_executor, linux_detector):
    reporter = MagicMock()
    reporter.report.side_effect = IOError("disk full")
    server = RemoteServer(config, reporter, fake_executor, linux_detector)
    assert server.ping_ok("localhost", "up") is True
    reporter.report.assert_called_once()


def test_every_assertion_emits_one_outcome(server, recorder, fake_executor, closed_port):
    fake_executor.run_command.return_value = make_result(return_code=255, stderr=UNREACHABLE_OUTPUT)
    calls = [
        lambda: server.ping_ok("localhost", "a"),
        lambda: server.ping6_ok("localhost", "b"),
        lambda: server.resolves("bad..name", "c"),
        lambda: server.socket_open("127.0.0.1", closed_port, "d"),
        lambda: server.socket_closed("127.0.0.1", closed_port, "e"),
        lambda: server.ssh_auth_enabled("localhost:notaport", "password", "f"),
        lambda: server.ssh_auth_disabled("", "password", "g"),
    ]
    for expected, call in enumerate(calls, start=1):
        assert isinstance(call(), bool)
        assert len(recorder.outcomes) == expected
    assert [o.description for o in recorder.outcomes] == list("abcdefg")


def test_default_reporter_is_tap(capsys, fake_executor, linux_detector):
    RemoteServer(executor=fake_executor, detector=linux_detector).ping_ok("localhost", "alive")
    assert capsys.readouterr().out == "ok 1 - alive\n"


def test_module_level_functions(recorder, listener, closed_port):
    _sock, port = listener
    config = ProbeConfig(timeout=1)
    assert remoteserver.socket_open("127.0.0.1", port, "open", config=config, reporter=recorder) is True
    assert remoteserver.socket_closed("127.0.0.1", closed_port, "closed", config=config, reporter=recorder) is True
    assert remoteserver.resolves("localhost", "dns", config=config, reporter=recorder) is True
    assert len(recorder.outcomes) == 3


def test_module_level_functions_share_tap_numbering(monkeypatch, listener):
    _sock, port = listener
    stream = io.StringIO()
    monkeypatch.setattr("remoteserver.assertions.default_reporter", TapReporter(stream))
    remoteserver.socket_open("127.0.0.1", port, "first")
    remoteserver.socket_open("127.0.0.1", port, "second")
    assert stream.getvalue().splitlines() == ["ok 1 - first", "ok 2 - second"]
