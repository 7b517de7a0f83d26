"""
DNS resolution probe.
"""

import socket
from datetime import datetime
from typing import List, Optional, Tuple

from remoteserver.core.deadline import DeadlineExceeded, run_with_deadline
from remoteserver.probes.base import BaseProbe, Outcome


def lookup(host: str) -> List[str]:
    """Resolve ``host`` through the system resolver; distinct addresses in order."""
    infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
    addresses: List[str] = []
    for info in infos:
        address = info[4][0]
        if address not in addresses:
            addresses.append(address)
    return addresses


class DnsProbe(BaseProbe):
    """Check that a name resolves to at least one record."""

    check_name = "resolves"

    def answers(self, host: str) -> Tuple[List[str], Optional[str]]:
        """Return (answers, error); answers is empty on any failure."""
        try:
            return run_with_deadline(lookup, self.config.timeout, host), None
        except DeadlineExceeded as e:
            return [], str(e)
        except socket.gaierror as e:
            return [], e.strerror or str(e)
        except (OSError, UnicodeError, ValueError) as e:
            # idna failures for labels > 63 chars, embedded NULs
            return [], str(e)

    def resolve(self, host: str, description: str = "") -> Outcome:
        started = datetime.now()
        answers, error = self.answers(host)
        self.logger.debug(f"resolves {host}: {len(answers)} answer(s)")

        passed = len(answers) > 0
        diagnostic = None
        if not passed:
            diagnostic = f"Failed to resolve {host}"
            if error:
                diagnostic += f": {error}"
            self.logger.warning(diagnostic)

        return self._outcome(passed, description, host, started, diagnostic=diagnostic)
