"""Interpretation of the runner's exit code."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from scalatest_launcher.config import ReportSettings

FAILURE_MESSAGE = "There were failing tests"


class OutcomeStatus(str, Enum):
    """Terminal state of one invocation."""

    SUCCESS = "success"
    WARNED = "warned"
    FAILED = "failed"


class TestFailureError(Exception):
    """Raised when failing tests should fail the build."""

    __test__ = False

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


@dataclass
class Outcome:
    """Success, Warned(message) or Failed(message)."""

    status: OutcomeStatus
    message: Optional[str] = None
    exit_code: int = 0

    @property
    def successful(self) -> bool:
        """Whether the invocation counts as successful for the caller."""
        return self.status != OutcomeStatus.FAILED

    def raise_for_failure(self) -> None:
        if self.status == OutcomeStatus.FAILED:
            raise TestFailureError(self.message, self.exit_code)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "exit_code": self.exit_code,
        }


def clickable_url(path: Path) -> str:
    """file:// URL for a report entry point, as terminals render it as a link."""
    return path.absolute().as_uri()


def failure_message(reports: ReportSettings) -> str:
    """Message for a run with failing tests, pointing at the most useful report."""
    message = FAILURE_MESSAGE
    if reports.html_enabled:
        message += ". See the report at: " + clickable_url(reports.html_entry_point)
    elif reports.junit_xml_enabled:
        message += ". See the results at: " + clickable_url(reports.junit_xml_entry_point)
    return message


class OutcomeEvaluator:
    """Maps an exit code onto an Outcome."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the evaluator.

        Args:
            logger: Sink for warnings about ignored failures
        """
        self.logger = logger or logging.getLogger(__name__)

    def evaluate(self, exit_code: int, ignore_failures: bool, reports: ReportSettings) -> Outcome:
        if exit_code == 0:
            return Outcome(status=OutcomeStatus.SUCCESS)

        message = failure_message(reports)
        if ignore_failures:
            self.logger.warning(message)
            return Outcome(status=OutcomeStatus.WARNED, message=message, exit_code=exit_code)

        return Outcome(status=OutcomeStatus.FAILED, message=message, exit_code=exit_code)
