"""
Command execution engine.
"""

import subprocess
import time
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel


class CommandResult(BaseModel):
    """Result of a command execution."""

    command: str
    return_code: int
    stdout: str
    stderr: str
    duration: float
    success: bool
    timed_out: bool = False


class CommandExecutor:
    """Run external probe utilities (ping, ssh) with a hard deadline."""

    def __init__(self, app_logger=None):
        self.logger = app_logger or logger

    def run_command(
        self,
        command: List[str],
        timeout: Optional[float] = None,
        capture_output: bool = True,
    ) -> CommandResult:
        """
        Execute a system command.

        The child is killed when ``timeout`` expires. Without
        ``capture_output`` both streams go to ``/dev/null``.

        Args:
            command: Command and arguments as a list
            timeout: Timeout in seconds (None waits forever)
            capture_output: Whether to capture stdout/stderr

        Returns:
            CommandResult object; never raises
        """
        start_time = time.monotonic()
        cmd_str = " ".join(command)

        self.logger.debug(f"Executing command: {cmd_str}")

        if capture_output:
            streams = {"stdout": subprocess.PIPE, "stderr": subprocess.PIPE}
        else:
            streams = {"stdout": subprocess.DEVNULL, "stderr": subprocess.DEVNULL}

        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
                timeout=timeout,
                **streams,
            )

            duration = time.monotonic() - start_time

            self.logger.debug(
                f"Command completed: {cmd_str} "
                f"(return code: {result.returncode}, duration: {duration:.2f}s)"
            )

            return CommandResult(
                command=cmd_str,
                return_code=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                duration=duration,
                success=(result.returncode == 0),
            )

        except subprocess.TimeoutExpired as e:
            duration = time.monotonic() - start_time
            self.logger.warning(f"Command timed out after {timeout}s: {cmd_str}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr) or f"Command timed out after {timeout} seconds",
                duration=duration,
                success=False,
                timed_out=True,
            )

        except (OSError, ValueError) as e:
            duration = time.monotonic() - start_time
            self.logger.error(f"Command failed: {cmd_str} - {e}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=str(e),
                duration=duration,
                success=False,
            )


def _as_text(data) -> str:
    # TimeoutExpired carries whatever was read so far, as bytes even in text mode
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
