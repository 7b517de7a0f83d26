"""
Probe modules.
"""

from remoteserver.probes.base import BaseProbe, Outcome
from remoteserver.probes.dns import DnsProbe
from remoteserver.probes.icmp import IcmpProbe
from remoteserver.probes.ssh import SshAuthProbe, parse_auth_methods
from remoteserver.probes.tcp import TcpProbe

__all__ = [
    "BaseProbe",
    "Outcome",
    "DnsProbe",
    "IcmpProbe",
    "SshAuthProbe",
    "parse_auth_methods",
    "TcpProbe",
]
