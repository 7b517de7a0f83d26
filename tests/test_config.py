"""Tests for ProbeConfig."""
import pytest
from pydantic import ValidationError

from remoteserver.core.config import DEFAULT_TIMEOUT, ProbeConfig, load_config_file


def test_probe_config_defaults():
    """Without overrides the timeout is five seconds."""
    config = ProbeConfig()
    assert config.timeout == DEFAULT_TIMEOUT == 5.0
    assert config.ping_wait == 1
    assert config.ssh_binary == "ssh"
    assert config.ping6_binary is None


def test_probe_config_from_environment(monkeypatch):
    """REMOTESERVER_* variables override defaults."""
    monkeypatch.setenv("REMOTESERVER_TIMEOUT", "2.5")
    monkeypatch.setenv("REMOTESERVER_SSH_BINARY", "/opt/bin/ssh")
    config = ProbeConfig()
    assert config.timeout == 2.5
    assert config.ssh_binary == "/opt/bin/ssh"


def test_probe_config_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        ProbeConfig(timeout=0)
    with pytest.raises(ValidationError):
        ProbeConfig(timeout=-1)


def test_with_timeout_returns_copy():
    """with_timeout leaves the original untouched."""
    config = ProbeConfig(timeout=5, ssh_user="probe")
    short = config.with_timeout(0.1)
    assert short.timeout == 0.1
    assert short.ssh_user == "probe"
    assert config.timeout == 5


def test_empty_ping6_binary_means_autodetect():
    assert ProbeConfig(ping6_binary="").ping6_binary is None


def test_load_config_file_no_file(tmp_path, monkeypatch):
    """When no config file exists, load_config_file returns an empty dict."""
    monkeypatch.chdir(tmp_path)
    assert load_config_file() == {}


def test_load_config_file_from_cwd(tmp_path, monkeypatch):
    """Known keys are read from ./.remoteserver.yaml, unknown ones dropped."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".remoteserver.yaml").write_text("timeout: 3\nssh_user: audit\ncolour: blue\n")
    assert load_config_file() == {"timeout": 3, "ssh_user": "audit"}


def test_load_config_file_ignores_broken_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".remoteserver.yaml").write_text("timeout: [unclosed\n")
    assert load_config_file() == {}


def test_from_sources_overrides_win(tmp_path, monkeypatch):
    """Explicit values beat the config file; None means 'not given'."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".remoteserver.yaml").write_text("timeout: 3\nping_wait: 2\n")
    config = ProbeConfig.from_sources(timeout=7, ping_wait=None)
    assert config.timeout == 7
    assert config.ping_wait == 2
