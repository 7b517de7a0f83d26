"""
Configuration management.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEOUT = 5.0

CONFIG_FILENAME = ".remoteserver.yaml"


def load_config_file() -> dict[str, Any]:
    """
    Load optional config from ~/.remoteserver.yaml or ./.remoteserver.yaml.

    The file in the current directory wins over the one in the home directory.
    Unknown keys are dropped; missing keys are omitted so callers can use their
    own defaults.
    """
    result: dict[str, Any] = {}
    candidates = [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / CONFIG_FILENAME,
    ]
    raw: dict[str, Any] = {}
    for path in candidates:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    raw = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Ignoring unreadable config file {path}: {e}")
                raw = {}
            break
    if not isinstance(raw, dict):
        return result
    for key in ProbeConfig.model_fields:
        if key in raw:
            result[key] = raw[key]
    return result


class ProbeConfig(BaseSettings):
    """
    Settings consulted by every time-bounded probe.

    Values come from keyword arguments, then ``REMOTESERVER_*`` environment
    variables, then field defaults. Probes only read the config; use
    :meth:`with_timeout` to derive an overridden copy.
    """

    model_config = SettingsConfigDict(env_prefix="REMOTESERVER_", extra="ignore")

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    ping_wait: int = Field(default=1, ge=1)
    ping_binary: str = "ping"
    ping6_binary: Optional[str] = None
    ssh_binary: str = "ssh"
    ssh_user: str = "remoteserver-probe"

    @field_validator("ping6_binary", mode="before")
    @classmethod
    def validate_ping6_binary(cls, v):
        """Treat an empty string as 'auto-detect'."""
        if v == "":
            return None
        return v

    @classmethod
    def from_sources(cls, **overrides: Any) -> "ProbeConfig":
        """Build a config from the YAML file, overlaid with non-None overrides."""
        values = load_config_file()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_timeout(self, timeout: float) -> "ProbeConfig":
        """Return a copy of this config with a different probe timeout."""
        return type(self)(**{**self.model_dump(), "timeout": timeout})
