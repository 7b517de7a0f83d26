"""Shared fixtures."""
import os
import socket
from unittest.mock import MagicMock

import pytest
from loguru import logger

from remoteserver.core.config import ProbeConfig
from remoteserver.core.detector import SystemDetector
from remoteserver.core.executor import CommandExecutor, CommandResult
from remoteserver.report.reporters import RecordingReporter


def make_result(return_code=0, stdout="", stderr="", timed_out=False) -> CommandResult:
    return CommandResult(
        command="fake",
        return_code=return_code,
        stdout=stdout,
        stderr=stderr,
        duration=0.01,
        success=(return_code == 0),
        timed_out=timed_out,
    )


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep user config files and REMOTESERVER_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in list(os.environ):
        if name.startswith("REMOTESERVER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def config():
    return ProbeConfig(timeout=1.0)


@pytest.fixture
def recorder():
    return RecordingReporter()


@pytest.fixture
def fake_executor():
    """A CommandExecutor whose run_command returns a canned successful result."""
    executor = MagicMock(spec=CommandExecutor)
    executor.run_command.return_value = make_result()
    return executor


@pytest.fixture
def linux_detector():
    return SystemDetector(os_type="Linux")


@pytest.fixture
def listener():
    """A TCP listener on an ephemeral loopback port; yields (sock, port)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    try:
        yield sock, sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def closed_port():
    """An ephemeral loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def log_records():
    """Capture loguru records emitted by the package."""
    records = []
    logger.enable("remoteserver")
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    try:
        yield records
    finally:
        logger.remove(handler_id)
        logger.disable("remoteserver")
