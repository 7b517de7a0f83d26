"""
Network utility functions.
"""

import ipaddress
import re
from typing import NamedTuple, Optional

from remoteserver.exceptions import TargetError

_HOSTNAME_LABEL = re.compile(r'^[a-zA-Z0-9_]([a-zA-Z0-9_-]{0,61}[a-zA-Z0-9_])?$')
_BRACKETED = re.compile(r'^\[([^\]]+)\](?::(\d+))?$')
_HOST_PORT = re.compile(r'^(.*):(\d+)$')


class ProbeTarget(NamedTuple):
    """A host with an optional port."""

    host: str
    port: Optional[int] = None

    def __str__(self) -> str:
        if self.port is None:
            return self.host
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def is_valid_ip(ip: str) -> bool:
    """
    Check if a string is a valid IPv4 or IPv6 address.

    Args:
        ip: String to check

    Returns:
        True if valid IP address
    """
    try:
        ipaddress.ip_address(ip)
        return True
    except ValueError:
        return False


def is_valid_hostname(hostname: str) -> bool:
    """
    Check if a string is a valid hostname.

    Args:
        hostname: String to check

    Returns:
        True if valid hostname
    """
    if not hostname or len(hostname) > 255:
        return False

    # Remove trailing dot
    if hostname.endswith('.'):
        hostname = hostname[:-1]

    return all(_HOSTNAME_LABEL.match(label) for label in hostname.split('.'))


def validate_port(port) -> int:
    """Coerce ``port`` to an int in 1..65535 or raise TargetError."""
    try:
        value = int(port)
    except (TypeError, ValueError):
        raise TargetError(f"Invalid port: {port!r}") from None
    if not 0 < value < 65536:
        raise TargetError(f"Port out of range: {value}")
    return value


def validate_host(host: str) -> str:
    """
    Return ``host`` if it is an IP address or a hostname, else raise TargetError.

    Hosts end up as arguments to ping and ssh, so anything that could be read
    as a command-line option is refused.
    """
    if host.startswith("-") or not (is_valid_ip(host) or is_valid_hostname(host)):
        raise TargetError(f"Invalid host: {host!r}")
    return host


def parse_target(target: str, default_port: Optional[int] = None) -> ProbeTarget:
    """
    Split ``host``, ``host:port`` or ``[v6addr]:port`` into a ProbeTarget.

    The port is the trailing colon-delimited numeric group. A bare IPv6
    literal such as ``::1`` is a host without a port.

    Raises:
        TargetError: empty or invalid host, or invalid port
    """
    target = (target or "").strip()
    if not target:
        raise TargetError("Empty target")

    bracketed = _BRACKETED.match(target)
    if bracketed:
        host, port = bracketed.group(1), bracketed.group(2)
    elif target.count(":") > 1 and is_valid_ip(target):
        host, port = target, None
    else:
        match = _HOST_PORT.match(target)
        if match:
            host, port = match.group(1), match.group(2)
        else:
            host, port = target, None

    if not host:
        raise TargetError(f"Missing host in target: {target!r}")
    validate_host(host)
    if port is None:
        return ProbeTarget(host, default_port)
    return ProbeTarget(host, validate_port(port))
