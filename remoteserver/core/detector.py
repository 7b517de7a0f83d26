"""
System and tool detection.
"""

import platform
import shutil
import socket
import sys
from typing import List, Optional

from pydantic import BaseModel


class SystemInfo(BaseModel):
    """System information model."""

    os_type: str  # 'Linux', 'Darwin', 'Windows'
    platform: str
    python_version: str
    hostname: str


class MissingTool(BaseModel):
    """Information about a missing tool."""

    name: str
    suggestion: str


class SystemDetector:
    """Detect system information and tool availability."""

    def __init__(self, os_type: Optional[str] = None):
        self.os_type = os_type or platform.system()

    def detect_system(self) -> SystemInfo:
        """Detect current system information."""
        return SystemInfo(
            os_type=self.os_type,
            platform=platform.platform(),
            python_version=sys.version.split()[0],
            hostname=socket.gethostname(),
        )

    def ping_command(
        self,
        host: str,
        wait: int = 1,
        ipv6: bool = False,
        ping_binary: str = "ping",
        ping6_binary: Optional[str] = None,
    ) -> List[str]:
        """
        Build a single-packet ping command for this platform.

        ``wait`` bounds both the reply wait and the overall run, so the
        utility terminates on its own.
        """
        if self.os_type == "Windows":
            command = [ping_binary, "-n", "1", "-w", str(wait * 1000)]
            if ipv6:
                command.append("-6")
            return command + [host]

        if ipv6:
            binary = ping6_binary or self._ping6_binary()
            if binary:
                command = [binary]
            else:
                command = [ping_binary, "-6"]
        else:
            command = [ping_binary]

        if self.os_type == "Darwin":
            # -W is milliseconds on macOS, -t is the overall deadline
            command += ["-c", "1", "-W", str(wait * 1000), "-t", str(wait)]
        else:
            command += ["-c", "1", "-W", str(wait), "-w", str(wait)]
        return command + ["--", host]

    def check_required_tools(self, tools: List[str]) -> List[MissingTool]:
        """Check if required tools are available."""
        missing = []

        for tool in tools:
            if not self._is_tool_available(tool):
                missing.append(MissingTool(
                    name=tool,
                    suggestion=self._get_installation_suggestion(tool),
                ))

        return missing

    def get_tool_path(self, tool: str) -> Optional[str]:
        """Get the full path to a tool."""
        return shutil.which(tool)

    def _ping6_binary(self) -> Optional[str]:
        return "ping6" if self._is_tool_available("ping6") else None

    def _is_tool_available(self, tool: str) -> bool:
        """Check if a tool is available in PATH."""
        return shutil.which(tool) is not None

    def _get_installation_suggestion(self, tool: str) -> str:
        """Get installation suggestion for a missing tool."""
        suggestions = {
            "Linux": {
                "ping": "sudo apt-get install iputils-ping (or yum install iputils)",
                "ping6": "Optional: 'ping -6' is used when ping6 is absent",
                "ssh": "sudo apt-get install openssh-client (or yum install openssh-clients)",
            },
            "Darwin": {
                "ping": "Pre-installed",
                "ping6": "Pre-installed",
                "ssh": "Pre-installed",
            },
            "Windows": {
                "ping": "Pre-installed",
                "ping6": "Optional: 'ping -6' is used instead",
                "ssh": "Settings > Apps > Optional features > OpenSSH Client",
            },
        }

        if self.os_type in suggestions and tool in suggestions[self.os_type]:
            return suggestions[self.os_type][tool]

        return f"Please install {tool} manually"
