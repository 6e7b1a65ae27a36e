"""ScalaTest Runner argument construction.

The runner reads its options positionally, so the groups below are always
appended in the same order. Building the list is pure; the one filesystem
side effect the runner needs (an existing HTML report directory) lives in
``prepare_report_directories`` and has to run before the process starts.
"""

import logging
from pathlib import Path
from typing import Optional

from scalatest_launcher.config import RunConfiguration, display_value

logger = logging.getLogger(__name__)


def prepare_report_directories(config: RunConfiguration) -> Optional[Path]:
    """Create the HTML report destination if the HTML report is enabled.

    Returns:
        The directory that was ensured, or None when there is nothing to do
    """
    reports = config.reports
    if not reports.html_enabled:
        return None

    destination = reports.html_destination.absolute()
    destination.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured HTML report directory %s", destination)
    return destination


def build_arguments(config: RunConfiguration, prepare: bool = False) -> list[str]:
    """Build the Runner argument list for a configuration.

    Args:
        config: Configuration of the invocation
        prepare: Create report directories first (see prepare_report_directories)

    Returns:
        Ordered list of command-line tokens
    """
    if prepare:
        prepare_report_directories(config)
    return ArgumentBuilder(config).build()


class ArgumentBuilder:
    """Translates a RunConfiguration into ScalaTest Runner options."""

    def __init__(self, config: RunConfiguration):
        self.config = config

    def build(self) -> list[str]:
        args: list[str] = []
        args.extend(self._output_mode())
        args.extend(self._parallelism())
        args.extend(self._run_path())
        args.extend(self._filters())
        args.extend(self._junit_xml())
        args.extend(self._html())
        args.extend(self._result_file())
        args.extend(self._tags())
        args.extend(self._suites())
        args.extend(self._config_entries())
        return args

    def _output_mode(self) -> list[str]:
        # D shows durations, W drops colour
        return ["-oD"] if self.config.color_output else ["-oDW"]

    def _parallelism(self) -> list[str]:
        forks = self.config.max_parallel_forks
        if forks == 0:
            return ["-PS"]
        return [f"-PS{forks}"]

    def _run_path(self) -> list[str]:
        root = str(self.config.test_root.absolute())
        return ["-R", root.replace(" ", "\\ ")]

    def _filters(self) -> list[str]:
        return _pairs("-z", self.config.include_patterns)

    def _junit_xml(self) -> list[str]:
        reports = self.config.reports
        if not reports.junit_xml_enabled:
            return []
        return ["-u", str(reports.junit_xml_entry_point.absolute())]

    def _html(self) -> list[str]:
        reports = self.config.reports
        if not reports.html_enabled:
            return []
        return ["-h", str(reports.html_destination.absolute())]

    def _result_file(self) -> list[str]:
        if self.config.result_file is None:
            return []
        return ["-f", str(self.config.result_file)]

    def _tags(self) -> list[str]:
        return _pairs("-n", self.config.tag_includes) + _pairs("-l", self.config.tag_excludes)

    def _suites(self) -> list[str]:
        # Set semantics: duplicates collapse, order is whatever the set yields.
        return _pairs("-s", set(self.config.suites))

    def _config_entries(self) -> list[str]:
        return [f"-D{key}={display_value(value)}" for key, value in self.config.config_entries.items()]


def _pairs(option: str, values) -> list[str]:
    args = []
    for value in values:
        args.append(option)
        args.append(value)
    return args
