"""Runner process launcher.

Starts the ScalaTest Runner in a JVM, waits for it and reports the exit code.
A nonzero exit code is a normal result here; only a process that cannot be
started at all raises.
"""

import logging
import os
import shlex
import subprocess
import time
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from scalatest_launcher.config import RunConfiguration

logger = logging.getLogger(__name__)

RUNNER_MAIN_CLASS = "org.scalatest.tools.Runner"


@dataclass
class ProcessOutcome:
    """Result of one runner process."""

    exit_code: int
    command: list[str]
    duration_ms: int
    stdout_path: Optional[Path] = None
    stderr_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        """Convert to dictionary format."""
        return {
            "exit_code": self.exit_code,
            "command": self.command,
            "duration_ms": self.duration_ms,
            "stdout_path": str(self.stdout_path) if self.stdout_path else None,
            "stderr_path": str(self.stderr_path) if self.stderr_path else None,
        }


def build_command_line(config: RunConfiguration, arguments: list[str]) -> list[str]:
    """Full JVM command line for the runner with the given Runner arguments."""
    cmd = [config.java_executable]
    cmd.extend(config.all_jvm_args())
    if config.classpath:
        cmd.extend(["-cp", os.pathsep.join(config.classpath)])
    cmd.append(RUNNER_MAIN_CLASS)
    cmd.extend(arguments)
    return cmd


class ProcessLauncher:
    """Runs the ScalaTest Runner as a subprocess."""

    def __init__(self, config: RunConfiguration):
        """Initialize the launcher.

        Args:
            config: Configuration snapshot; classpath, JVM flags, environment,
                working directory and output sinks are read from it
        """
        self.config = config

    def launch(self, arguments: list[str]) -> ProcessOutcome:
        """Run the runner to completion.

        Args:
            arguments: Runner arguments, see scalatest_launcher.core.arguments

        Returns:
            ProcessOutcome with the exit code and any redirected stream files

        Raises:
            OSError: If the process could not be started
        """
        cmd = build_command_line(self.config, arguments)
        # The runner sees only the configured environment.
        env = dict(self.config.environment)
        stdout_path = self.config.output_file
        stderr_path = self.config.error_file

        logger.info("Launching %s", RUNNER_MAIN_CLASS)
        logger.debug("Command: %s", shlex.join(cmd))

        start_time = time.time()

        # Sinks are closed before returning, whichever way the call ends.
        with ExitStack() as stack:
            stdout = stack.enter_context(open(stdout_path, "wb")) if stdout_path else None
            stderr = stack.enter_context(open(stderr_path, "wb")) if stderr_path else None

            try:
                result = subprocess.run(
                    cmd,
                    stdout=stdout,
                    stderr=stderr,
                    cwd=self.config.working_directory,
                    env=env,
                )
            except OSError as e:
                logger.error("Could not start %s: %s", cmd[0], e)
                raise

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info("Runner exited with code %d after %dms", result.returncode, duration_ms)

        return ProcessOutcome(
            exit_code=result.returncode,
            command=cmd,
            duration_ms=duration_ms,
            stdout_path=stdout_path,
            stderr_path=stderr_path,
        )
