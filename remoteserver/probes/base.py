"""
Base probe class and models.
"""

from abc import ABC
from datetime import datetime
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field, model_validator

from remoteserver.core.config import ProbeConfig
from remoteserver.core.executor import CommandExecutor


class Outcome(BaseModel):
    """The pass/fail record produced by one assertion."""

    passed: bool
    description: str
    diagnostic: Optional[str] = None
    check: str = ""
    target: str = ""
    duration: float = 0.0
    timestamp: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def drop_diagnostic_on_pass(self):
        """A diagnostic only accompanies failures."""
        if self.passed:
            self.diagnostic = None
        return self


class BaseProbe(ABC):
    """
    Base class for all probes.

    A probe does the network work for one kind of assertion and turns the
    result into an :class:`Outcome`. It never raises for network or
    subprocess failures.
    """

    check_name = "probe"

    def __init__(
        self,
        config: Optional[ProbeConfig] = None,
        executor: Optional[CommandExecutor] = None,
    ):
        self.config = config or ProbeConfig()
        self.executor = executor or CommandExecutor()
        self.logger = logger.bind(probe=self.check_name)

    def _outcome(
        self,
        passed: bool,
        description: str,
        target: str,
        started: datetime,
        diagnostic: Optional[str] = None,
        check: Optional[str] = None,
    ) -> Outcome:
        duration = (datetime.now() - started).total_seconds()
        return Outcome(
            passed=passed,
            description=description,
            diagnostic=diagnostic,
            check=check or self.check_name,
            target=target,
            duration=duration,
            timestamp=started,
        )
