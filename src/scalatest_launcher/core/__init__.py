"""Core ScalaTest invocation functionality."""

from scalatest_launcher.core.action import ScalaTestAction
from scalatest_launcher.core.arguments import ArgumentBuilder, build_arguments, prepare_report_directories
from scalatest_launcher.core.launcher import ProcessLauncher, ProcessOutcome
from scalatest_launcher.core.outcome import Outcome, OutcomeEvaluator, OutcomeStatus, TestFailureError

__all__ = [
    "ScalaTestAction",
    "ArgumentBuilder",
    "build_arguments",
    "prepare_report_directories",
    "ProcessLauncher",
    "ProcessOutcome",
    "Outcome",
    "OutcomeEvaluator",
    "OutcomeStatus",
    "TestFailureError",
]
