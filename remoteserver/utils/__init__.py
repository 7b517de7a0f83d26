"""
Utility functions.
"""

from remoteserver.utils.network import (
    ProbeTarget,
    is_valid_hostname,
    is_valid_ip,
    parse_target,
    validate_host,
)

__all__ = [
    "ProbeTarget",
    "is_valid_hostname",
    "is_valid_ip",
    "parse_target",
    "validate_host",
]
