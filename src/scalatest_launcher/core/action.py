"""Runs ScalaTest for a configuration and decides the build outcome."""

import logging
from enum import Enum
from typing import Optional

from scalatest_launcher.config import RunConfiguration
from scalatest_launcher.core.arguments import build_arguments, prepare_report_directories
from scalatest_launcher.core.launcher import ProcessLauncher, ProcessOutcome, build_command_line
from scalatest_launcher.core.outcome import Outcome, OutcomeEvaluator


class ActionState(str, Enum):
    """Lifecycle of a ScalaTestAction."""

    IDLE = "idle"
    LAUNCHING = "launching"
    COMPLETED = "completed"


class ScalaTestAction:
    """Replaces a build's test step with a ScalaTest Runner invocation.

    Classpath, JVM flags and environment are propagated from the configuration
    and tests are run against its test root.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the action.

        Args:
            logger: Logger that receives warnings for ignored test failures
        """
        self.logger = logger or logging.getLogger(__name__)
        self.evaluator = OutcomeEvaluator(self.logger)
        self.state = ActionState.IDLE
        self.last_process: Optional[ProcessOutcome] = None

    def execute(self, config: RunConfiguration) -> Outcome:
        """Run the tests described by config.

        Returns:
            Success, Warned or Failed outcome

        Raises:
            OSError: If the runner process could not be started
        """
        prepare_report_directories(config)
        arguments = build_arguments(config)

        self.state = ActionState.LAUNCHING
        try:
            process = ProcessLauncher(config).launch(arguments)
        except OSError:
            self.state = ActionState.IDLE
            raise
        self.state = ActionState.COMPLETED
        self.last_process = process

        return self.evaluator.evaluate(process.exit_code, config.ignore_failures, config.reports)

    @staticmethod
    def command_line(config: RunConfiguration) -> list[str]:
        """Command line execute() would run, without touching the filesystem."""
        return build_command_line(config, build_arguments(config))
