"""
Result reporters: where assertion outcomes go.
"""

import csv
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, TextIO

from loguru import logger

from remoteserver.probes.base import Outcome


class Reporter(ABC):
    """Sink for assertion outcomes."""

    @abstractmethod
    def report(self, outcome: Outcome) -> None:
        """Record one pass/fail outcome."""
        pass


class TapReporter(Reporter):
    """
    Emit Test Anything Protocol lines, numbered from 1.

    Failures are followed by their diagnostic as ``#`` comment lines, written
    to ``diag_stream`` (stderr by default) like Test::Builder ``diag`` output.
    """

    def __init__(self, stream: Optional[TextIO] = None, diag_stream: Optional[TextIO] = None):
        self.stream = stream
        self.diag_stream = diag_stream
        self.count = 0
        self.failures = 0
        self.planned: Optional[int] = None

    @property
    def _out(self) -> TextIO:
        return self.stream or sys.stdout

    @property
    def _err(self) -> TextIO:
        return self.diag_stream or sys.stderr

    def plan(self, count: int) -> None:
        self.planned = count
        self._out.write(f"1..{count}\n")

    def report(self, outcome: Outcome) -> None:
        self.count += 1
        status = "ok" if outcome.passed else "not ok"
        line = f"{status} {self.count}"
        if outcome.description:
            line += f" - {outcome.description}"
        self._out.write(line + "\n")
        self._out.flush()

        if not outcome.passed:
            self.failures += 1
            self.diag(f"  Failed test '{outcome.description}'")
            if outcome.diagnostic:
                self.diag(outcome.diagnostic)

    def diag(self, message: str) -> None:
        for line in message.splitlines() or [""]:
            self._err.write(f"# {line}\n")
        self._err.flush()

    def done_testing(self) -> None:
        """Emit a trailing plan unless one was declared up front."""
        if self.planned is None:
            self.plan(self.count)
        elif self.planned != self.count:
            self.diag(f"Looks like you planned {self.planned} test(s) but ran {self.count}.")
        if self.failures:
            self.diag(f"Looks like you failed {self.failures} test(s) of {self.count}.")
        self._out.flush()


class RecordingReporter(Reporter):
    """Keep outcomes in memory, for embedding in other test frameworks."""

    def __init__(self):
        self.outcomes: List[Outcome] = []

    def report(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.passed)

    def clear(self) -> None:
        self.outcomes.clear()


class LoggingReporter(Reporter):
    """Send outcomes to the loguru logger."""

    def report(self, outcome: Outcome) -> None:
        if outcome.passed:
            logger.info(f"ok - {outcome.check} {outcome.target}: {outcome.description}")
        else:
            logger.warning(
                f"not ok - {outcome.check} {outcome.target}: {outcome.description}"
                f" ({outcome.diagnostic})"
            )


class CsvReporter(Reporter):
    """Append one CSV row per outcome."""

    fieldnames = [
        'timestamp',
        'check',
        'target',
        'passed',
        'description',
        'diagnostic',
        'duration',
    ]

    def __init__(self, csv_file: Path):
        """
        Args:
            csv_file: Path to CSV file; created with a header row if missing
        """
        self.csv_file = Path(csv_file)

        if not self.csv_file.exists():
            self._create_csv()

    def _create_csv(self):
        self.csv_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            writer.writeheader()

        logger.debug(f"Created CSV file: {self.csv_file}")

    def report(self, outcome: Outcome) -> None:
        row = {
            'timestamp': outcome.timestamp.isoformat(),
            'check': outcome.check,
            'target': outcome.target,
            'passed': outcome.passed,
            'description': outcome.description,
            'diagnostic': outcome.diagnostic or "",
            'duration': f"{outcome.duration:.3f}",
        }

        with open(self.csv_file, 'a', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            writer.writerow(row)

    def read_results(self) -> list:
        """Read all rows back as dictionaries."""
        if not self.csv_file.exists():
            return []

        with open(self.csv_file, 'r', newline='') as f:
            return list(csv.DictReader(f))


class MultiReporter(Reporter):
    """Fan one outcome out to several reporters."""

    def __init__(self, *reporters: Reporter):
        self.reporters = list(reporters)

    def report(self, outcome: Outcome) -> None:
        for reporter in self.reporters:
            try:
                reporter.report(outcome)
            except Exception:
                logger.exception(f"Reporter {type(reporter).__name__} failed")
