"""
TCP port reachability probe: pure-Python connect, no external scanner.
"""

import socket
from datetime import datetime
from typing import Optional, Tuple

from remoteserver.core.deadline import DeadlineExceeded, run_with_deadline
from remoteserver.exceptions import TargetError
from remoteserver.probes.base import BaseProbe, Outcome
from remoteserver.utils.network import ProbeTarget, validate_port


def try_connect(host: str, port: int, timeout: float) -> None:
    """Open and immediately close a TCP connection to host:port."""
    with socket.create_connection((host, port), timeout=timeout):
        pass


class TcpProbe(BaseProbe):
    """Check whether a TCP port accepts connections."""

    check_name = "socket_open"

    def connect(self, host: str, port) -> Tuple[bool, Optional[str]]:
        """
        Attempt one connection within the configured timeout.

        Returns:
            (connected, reason) where reason explains a failed attempt
        """
        try:
            port = validate_port(port)
            run_with_deadline(try_connect, self.config.timeout, host, port, self.config.timeout)
            return True, None
        except TargetError as e:
            return False, str(e)
        except DeadlineExceeded as e:
            return False, str(e)
        except socket.timeout:
            return False, f"timed out after {self.config.timeout:g}s"
        except (OSError, UnicodeError, OverflowError) as e:
            return False, e.strerror if isinstance(e, OSError) and e.strerror else str(e)

    def open(self, host: str, port, description: str = "") -> Outcome:
        """Passes iff a connection is established before the deadline."""
        started = datetime.now()
        label = _label(host, port)
        connected, reason = self.connect(host, port)

        diagnostic = None
        if not connected:
            diagnostic = f"Connection failed to {label}"
            self.logger.warning(f"{diagnostic}: {reason}")

        return self._outcome(
            connected, description, label, started,
            diagnostic=diagnostic, check="socket_open",
        )

    def closed(self, host: str, port, description: str = "") -> Outcome:
        """Passes iff no connection is established; refusal, timeout and errors all count."""
        started = datetime.now()
        label = _label(host, port)
        connected, reason = self.connect(host, port)

        diagnostic = None
        if connected:
            diagnostic = f"Connection succeeded to {label}"
            self.logger.warning(diagnostic)
        else:
            self.logger.debug(f"{label} closed: {reason}")

        return self._outcome(
            not connected, description, label, started,
            diagnostic=diagnostic, check="socket_closed",
        )


def _label(host: str, port) -> str:
    try:
        return str(ProbeTarget(host, int(port)))
    except (TypeError, ValueError):
        return f"{host}:{port}"
