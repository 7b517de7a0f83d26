"""
ICMP reachability probe (ping, ping6).
"""

from datetime import datetime
from typing import Optional

from remoteserver.core.config import ProbeConfig
from remoteserver.core.detector import SystemDetector
from remoteserver.core.executor import CommandExecutor
from remoteserver.exceptions import TargetError
from remoteserver.probes.base import BaseProbe, Outcome
from remoteserver.utils.network import validate_host


class IcmpProbe(BaseProbe):
    """Single-packet ping using the platform utility."""

    check_name = "ping_ok"

    def __init__(
        self,
        config: Optional[ProbeConfig] = None,
        executor: Optional[CommandExecutor] = None,
        detector: Optional[SystemDetector] = None,
    ):
        super().__init__(config, executor)
        self.detector = detector or SystemDetector()

    def reachable(self, host: str, description: str = "", ipv6: bool = False) -> Outcome:
        """Ping ``host`` once; passes iff the utility exits with status 0."""
        started = datetime.now()
        check = "ping6_ok" if ipv6 else "ping_ok"

        try:
            validate_host(host)
        except TargetError as e:
            self.logger.warning(f"{check} {host!r}: {e}")
            return self._outcome(
                False, description, host, started,
                diagnostic=f"Host {host} down: {e}", check=check,
            )

        command = self.detector.ping_command(
            host,
            wait=self.config.ping_wait,
            ipv6=ipv6,
            ping_binary=self.config.ping_binary,
            ping6_binary=self.config.ping6_binary,
        )
        # The utility enforces its own deadline; this only reaps a wedged one.
        result = self.executor.run_command(
            command,
            timeout=self.config.ping_wait + self.config.timeout,
            capture_output=False,
        )

        diagnostic = None
        if not result.success:
            diagnostic = f"Host {host} down"
            self.logger.warning(
                f"{check} {host}: exit status {result.return_code}"
                + (f" ({result.stderr})" if result.stderr else "")
            )

        return self._outcome(
            result.success,
            description,
            host,
            started,
            diagnostic=diagnostic,
            check=check,
        )
