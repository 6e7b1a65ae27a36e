"""Tests for ScalaTestAction."""

import logging
import sys

import pytest

from scalatest_launcher.config import ReportSettings, RunConfiguration
from scalatest_launcher.core.action import ActionState, ScalaTestAction
from scalatest_launcher.core.launcher import RUNNER_MAIN_CLASS
from scalatest_launcher.core.outcome import OutcomeStatus


@pytest.fixture
def reports(tmp_path):
    return ReportSettings(
        junit_xml_entry_point=tmp_path / "junit",
        html_destination=tmp_path / "reports" / "html",
        html_entry_point=tmp_path / "reports" / "html" / "index.html",
    )


def runner_exiting_with(code: int, tmp_path, reports, **kwargs) -> RunConfiguration:
    return RunConfiguration(
        java_executable=sys.executable,
        jvm_args=("-c", f"import sys; print('ran'); sys.exit({code})"),
        working_directory=tmp_path,
        test_root=tmp_path / "classes",
        reports=reports,
        **kwargs,
    )


class TestScalaTestAction:
    """Tests for ScalaTestAction.execute."""

    def test_passing_run(self, tmp_path, reports):
        """Test a passing run succeeds."""
        action = ScalaTestAction()

        outcome = action.execute(runner_exiting_with(0, tmp_path, reports))

        assert outcome.status == OutcomeStatus.SUCCESS
        assert action.state == ActionState.COMPLETED
        assert action.last_process.exit_code == 0

    def test_failing_run(self, tmp_path, reports):
        """Test a failing run fails with a report link."""
        outcome = ScalaTestAction().execute(runner_exiting_with(1, tmp_path, reports))

        assert outcome.status == OutcomeStatus.FAILED
        assert "There were failing tests" in outcome.message
        assert (tmp_path / "reports" / "html" / "index.html").as_uri() in outcome.message

    def test_ignored_failures_warn(self, tmp_path, reports, caplog):
        """Test ignored failures warn."""
        logger = logging.getLogger("test.action")
        config = runner_exiting_with(1, tmp_path, reports, ignore_failures=True)

        with caplog.at_level(logging.WARNING, logger="test.action"):
            outcome = ScalaTestAction(logger).execute(config)

        assert outcome.status == OutcomeStatus.WARNED
        assert outcome.successful
        assert any("There were failing tests" in r.getMessage() for r in caplog.records)

    def test_html_directory_is_created(self, tmp_path, reports):
        """Test the HTML directory exists after a run."""
        ScalaTestAction().execute(runner_exiting_with(0, tmp_path, reports))
        assert (tmp_path / "reports" / "html").is_dir()

    def test_output_is_durable_before_evaluation(self, tmp_path, reports):
        """Test captured output is complete after execute returns."""
        out = tmp_path / "testOutput.txt"
        config = runner_exiting_with(1, tmp_path, reports, output_file=out)

        ScalaTestAction().execute(config)

        assert out.read_text() == "ran\n"

    def test_launch_failure_propagates(self, tmp_path, reports):
        """Test launch failures propagate despite ignore_failures."""
        config = RunConfiguration(
            java_executable=str(tmp_path / "missing-java"),
            working_directory=tmp_path,
            reports=reports,
            ignore_failures=True,
        )
        action = ScalaTestAction()

        with pytest.raises(FileNotFoundError):
            action.execute(config)

        assert action.state == ActionState.IDLE
        assert action.last_process is None


class TestCommandLine:
    """Tests for ScalaTestAction.command_line."""

    def test_command_line_without_side_effects(self, tmp_path, reports):
        """Test the command line is built without creating directories."""
        config = RunConfiguration(
            classpath=("lib/scalatest.jar",),
            test_root=tmp_path / "classes",
            reports=reports,
            suites=("a.Spec",),
        )

        cmd = ScalaTestAction.command_line(config)

        assert cmd[:4] == ["java", "-cp", "lib/scalatest.jar", RUNNER_MAIN_CLASS]
        assert cmd[4:6] == ["-oD", "-PS"]
        assert cmd[-2:] == ["-s", "a.Spec"]
        assert not (tmp_path / "reports").exists()
