"""
Check plans: a YAML list of assertions run in order.

Example::

    timeout: 3
    checks:
      - check: ping_ok
        host: localhost
        description: Localhost is dead?
      - check: socket_open
        host: localhost
        port: 80
        description: The webserver is dead!
      - check: ssh_auth_disabled
        target: example.com:2222
        method: password
        description: Password logins are allowed
"""

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from remoteserver.assertions import RemoteServer
from remoteserver.exceptions import RemoteServerError

CheckName = Literal[
    "ping_ok",
    "ping6_ok",
    "resolves",
    "socket_open",
    "socket_closed",
    "ssh_auth_enabled",
    "ssh_auth_disabled",
]

_REQUIRED = {
    "ping_ok": ("host",),
    "ping6_ok": ("host",),
    "resolves": ("host",),
    "socket_open": ("host", "port"),
    "socket_closed": ("host", "port"),
    "ssh_auth_enabled": ("target", "method"),
    "ssh_auth_disabled": ("target", "method"),
}


class PlanError(RemoteServerError):
    """A check plan could not be loaded."""


class CheckSpec(BaseModel):
    """One assertion in a plan."""

    check: CheckName
    description: str = ""
    host: Optional[str] = None
    port: Optional[int] = None
    target: Optional[str] = None
    method: Optional[str] = None

    @model_validator(mode="after")
    def require_arguments(self):
        missing = [f for f in _REQUIRED[self.check] if getattr(self, f) is None]
        if missing:
            raise ValueError(f"{self.check} needs {', '.join(missing)}")
        return self


class CheckPlan(BaseModel):
    """A list of checks with an optional timeout override."""

    timeout: Optional[float] = Field(default=None, gt=0)
    checks: List[CheckSpec] = Field(default_factory=list)


def load_plan(path: Path) -> CheckPlan:
    """Read and validate a YAML plan file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise PlanError(f"Cannot read plan {path}: {e}") from e

    # A bare list is shorthand for {checks: [...]}
    if isinstance(raw, list):
        raw = {"checks": raw}
    try:
        return CheckPlan.model_validate(raw)
    except ValidationError as e:
        raise PlanError(f"Invalid plan {path}:\n{e}") from e


def run_check(server: RemoteServer, spec: CheckSpec) -> bool:
    """Dispatch one CheckSpec to the matching RemoteServer assertion."""
    assertion = getattr(server, spec.check)
    if spec.check in ("ping_ok", "ping6_ok", "resolves"):
        return assertion(spec.host, spec.description)
    if spec.check in ("socket_open", "socket_closed"):
        return assertion(spec.host, spec.port, spec.description)
    return assertion(spec.target, spec.method, spec.description)


def run_plan(server: RemoteServer, plan: CheckPlan) -> List[bool]:
    """Run every check in order; one outcome is reported per check."""
    return [run_check(server, spec) for spec in plan.checks]
