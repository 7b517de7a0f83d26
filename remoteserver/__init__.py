"""
remoteserver - reachability and security-posture assertions for remote hosts
"""

from loguru import logger

from remoteserver.__version__ import __version__
from remoteserver.assertions import (
    RemoteServer,
    ping6_ok,
    ping_ok,
    resolves,
    socket_closed,
    socket_open,
    ssh_auth_disabled,
    ssh_auth_enabled,
)
from remoteserver.core.config import ProbeConfig
from remoteserver.probes.base import Outcome
from remoteserver.report.reporters import (
    CsvReporter,
    LoggingReporter,
    MultiReporter,
    RecordingReporter,
    Reporter,
    TapReporter,
)

# Silent unless an application opts in (the CLI does, via setup_logging).
logger.disable("remoteserver")

__all__ = [
    "RemoteServer",
    "ProbeConfig",
    "Outcome",
    "Reporter",
    "TapReporter",
    "RecordingReporter",
    "LoggingReporter",
    "CsvReporter",
    "MultiReporter",
    "ping_ok",
    "ping6_ok",
    "resolves",
    "socket_open",
    "socket_closed",
    "ssh_auth_enabled",
    "ssh_auth_disabled",
    "__version__",
]
