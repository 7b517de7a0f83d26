"""
Core functionality components.
"""

from remoteserver.core.config import ProbeConfig, load_config_file
from remoteserver.core.deadline import DeadlineExceeded, run_with_deadline
from remoteserver.core.detector import SystemDetector, SystemInfo
from remoteserver.core.executor import CommandExecutor, CommandResult

__all__ = [
    "ProbeConfig",
    "load_config_file",
    "DeadlineExceeded",
    "run_with_deadline",
    "SystemDetector",
    "SystemInfo",
    "CommandExecutor",
    "CommandResult",
]
