"""
Assertion surface.

Each assertion runs one probe, reports exactly one outcome and returns
whether it passed::

    from remoteserver import RemoteServer

    server = RemoteServer()
    server.ping_ok("localhost", "Localhost is dead?")
    server.socket_open("localhost", 80, "The webserver is dead!")
    server.resolves("example.com", "Our domain is unreachable!")
    server.ssh_auth_disabled("example.com", "password", "Passwords allowed!")
"""

from typing import Callable, Optional

from loguru import logger

from remoteserver.core.config import ProbeConfig
from remoteserver.core.detector import SystemDetector
from remoteserver.core.executor import CommandExecutor
from remoteserver.probes.base import Outcome
from remoteserver.probes.dns import DnsProbe
from remoteserver.probes.icmp import IcmpProbe
from remoteserver.probes.ssh import SshAuthProbe
from remoteserver.probes.tcp import TcpProbe
from remoteserver.report.reporters import Reporter, TapReporter


class RemoteServer:
    """Health checks against remote hosts, reported as pass/fail outcomes."""

    def __init__(
        self,
        config: Optional[ProbeConfig] = None,
        reporter: Optional[Reporter] = None,
        executor: Optional[CommandExecutor] = None,
        detector: Optional[SystemDetector] = None,
    ):
        self.config = config or ProbeConfig()
        self.reporter = reporter or TapReporter()
        self.executor = executor or CommandExecutor()
        self.detector = detector or SystemDetector()

    def ping_ok(self, host: str, description: str = "") -> bool:
        """Test that an IPv4 ping succeeds against ``host``."""
        return self._run(
            "ping_ok", host, description, (True, f"Host {host} down"),
            lambda: self._icmp().reachable(host, description),
        )

    def ping6_ok(self, host: str, description: str = "") -> bool:
        """Test that an IPv6 ping succeeds against ``host``."""
        return self._run(
            "ping6_ok", host, description, (True, f"Host {host} down"),
            lambda: self._icmp().reachable(host, description, ipv6=True),
        )

    def resolves(self, host: str, description: str = "") -> bool:
        """
        Test that a DNS lookup for ``host`` returns *something*.

        Record contents are not inspected.
        """
        return self._run(
            "resolves", host, description, (True, f"Failed to resolve {host}"),
            lambda: DnsProbe(self.config, self.executor).resolve(host, description),
        )

    def socket_open(self, host: str, port: int, description: str = "") -> bool:
        """Test that a TCP connection to host:port can be established."""
        return self._run(
            "socket_open", f"{host}:{port}", description,
            (True, f"Connection failed to {host}:{port}"),
            lambda: TcpProbe(self.config, self.executor).open(host, port, description),
        )

    def socket_closed(self, host: str, port: int, description: str = "") -> bool:
        """Test that a TCP connection to host:port cannot be established."""
        return self._run(
            "socket_closed", f"{host}:{port}", description, (False, None),
            lambda: TcpProbe(self.config, self.executor).closed(host, port, description),
        )

    def ssh_auth_methods(self, target: str) -> list:
        """Authentication methods the SSH server at ``target`` advertises."""
        return SshAuthProbe(self.config, self.executor).auth_methods(target)

    def ssh_auth_enabled(self, target: str, method: str, description: str = "") -> bool:
        """Test that the SSH server at ``target`` (host or host:port) offers ``method``."""
        return self._run(
            "ssh_auth_enabled", target, description,
            (True, f"Authentication method {method} not offered by {target}"),
            lambda: SshAuthProbe(self.config, self.executor).enabled(target, method, description),
        )

    def ssh_auth_disabled(self, target: str, method: str, description: str = "") -> bool:
        """
        Test that the SSH server at ``target`` does not offer ``method``.

        Also passes when no method list could be obtained at all, e.g. the
        host is unreachable.
        """
        return self._run(
            "ssh_auth_disabled", target, description, (False, None),
            lambda: SshAuthProbe(self.config, self.executor).disabled(target, method, description),
        )

    def _icmp(self) -> IcmpProbe:
        return IcmpProbe(self.config, self.executor, self.detector)

    def _run(
        self,
        check: str,
        target: str,
        description: str,
        on_error: tuple,
        probe: Callable[[], Outcome],
    ) -> bool:
        """
        Run ``probe`` and report its outcome exactly once.

        ``on_error`` is (must_succeed, diagnostic) and decides the outcome if
        the probe itself blows up: a failure for assertions that need the
        probe to succeed, a pass for those that need it to fail.
        """
        try:
            outcome = probe()
        except Exception as e:
            logger.exception(f"{check} {target}: probe raised")
            must_succeed, diagnostic = on_error
            outcome = Outcome(
                passed=not must_succeed,
                description=description,
                diagnostic=f"{diagnostic}: {e}" if diagnostic else str(e),
                check=check,
                target=target,
            )

        try:
            self.reporter.report(outcome)
        except Exception:
            logger.exception(f"Reporter {type(self.reporter).__name__} failed")
        return outcome.passed


# Module-level functions share one TAP stream so test numbers keep counting up.
default_reporter = TapReporter()


def _server(config: Optional[ProbeConfig], reporter: Optional[Reporter]) -> RemoteServer:
    return RemoteServer(config=config, reporter=reporter or default_reporter)


def ping_ok(host: str, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).ping_ok(host, description)


def ping6_ok(host: str, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).ping6_ok(host, description)


def resolves(host: str, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).resolves(host, description)


def socket_open(host: str, port: int, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).socket_open(host, port, description)


def socket_closed(host: str, port: int, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).socket_closed(host, port, description)


def ssh_auth_enabled(target: str, method: str, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).ssh_auth_enabled(target, method, description)


def ssh_auth_disabled(target: str, method: str, description: str = "", *, config=None, reporter=None) -> bool:
    return _server(config, reporter).ssh_auth_disabled(target, method, description)
