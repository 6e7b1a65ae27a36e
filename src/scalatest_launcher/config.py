"""Configuration management for scalatest-launcher."""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ConfigValue = Union[bool, str, int, float]

CONFIG_NAMES = ["scalatest.json", ".scalatest.json"]

DEFAULT_HTML_DESTINATION = Path("build/reports/tests/test")


def _blank_to_none(v):
    # An empty path means the feature is switched off.
    if isinstance(v, str) and not v.strip():
        return None
    return v


def display_value(value: ConfigValue) -> str:
    """Text of a -D value as the JVM side spells it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ReportSettings(BaseModel):
    """Report locations handed to the ScalaTest runner."""

    model_config = ConfigDict(frozen=True)

    junit_xml_enabled: bool = Field(default=True, description="Write JUnit-style XML results")
    junit_xml_entry_point: Optional[Path] = Field(
        default=Path("build/test-results/test"),
        description="Directory the JUnit XML results are written to",
    )
    html_enabled: bool = Field(default=True, description="Write the HTML report")
    html_entry_point: Optional[Path] = Field(
        default=None,
        description="Page a reader should open first, defaults to index.html in the destination",
    )
    html_destination: Optional[Path] = Field(
        default=DEFAULT_HTML_DESTINATION,
        description="Directory the HTML report is written to",
    )

    @field_validator("junit_xml_entry_point", "html_entry_point", "html_destination", mode="before")
    @classmethod
    def validate_paths(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="before")
    @classmethod
    def default_html_entry_point(cls, data):
        if not isinstance(data, dict) or _blank_to_none(data.get("html_entry_point")) is not None:
            return data
        destination = _blank_to_none(data.get("html_destination", DEFAULT_HTML_DESTINATION))
        if destination is None:
            return data
        return {**data, "html_entry_point": Path(destination) / "index.html"}

    @model_validator(mode="after")
    def validate_enabled_reports(self) -> "ReportSettings":
        if self.junit_xml_enabled and self.junit_xml_entry_point is None:
            raise ValueError("JUnit XML report is enabled but has no entry point")
        if self.html_enabled and (self.html_destination is None or self.html_entry_point is None):
            raise ValueError("HTML report is enabled but has no destination or entry point")
        return self

    def resolved(self, base_dir: Path) -> "ReportSettings":
        """Return a copy with every report path anchored at base_dir."""
        return self.model_copy(
            update={
                "junit_xml_entry_point": _anchor(self.junit_xml_entry_point, base_dir),
                "html_entry_point": _anchor(self.html_entry_point, base_dir),
                "html_destination": _anchor(self.html_destination, base_dir),
            }
        )


class RunConfiguration(BaseModel):
    """Everything needed for one invocation of the ScalaTest runner."""

    model_config = ConfigDict(frozen=True)

    # JVM
    java_executable: str = Field(default="java", description="Java launcher to invoke")
    classpath: tuple[str, ...] = Field(default=(), description="Classpath entries, in order")
    jvm_args: tuple[str, ...] = Field(default=(), description="Extra JVM flags, in order")
    system_properties: dict[str, ConfigValue] = Field(
        default_factory=dict, description="JVM system properties (-Dkey=value)"
    )
    min_heap_size: Optional[str] = Field(default=None, description="JVM -Xms value, e.g. '256m'")
    max_heap_size: Optional[str] = Field(default=None, description="JVM -Xmx value, e.g. '1g'")
    environment: dict[str, str] = Field(
        default_factory=dict, description="Complete environment of the runner process"
    )
    working_directory: Path = Field(default=Path("."), description="Directory to run the runner in")

    # Runner
    max_parallel_forks: int = Field(default=0, description="Parallel suites, 0 for the runner default")
    color_output: bool = Field(default=True, description="Use ANSI colour in runner output")
    test_root: Path = Field(
        default=Path("build/classes/scala/test"), description="Directory of compiled tests"
    )
    include_patterns: tuple[str, ...] = Field(default=(), description="Test name filters")
    tag_includes: tuple[str, ...] = Field(default=(), description="Tags to run")
    tag_excludes: tuple[str, ...] = Field(default=(), description="Tags to skip")
    suites: tuple[str, ...] = Field(default=(), description="Suite class names to run")
    config_entries: dict[str, ConfigValue] = Field(
        default_factory=dict, description="Runner config map entries (-Dkey=value)"
    )

    # Artifacts
    result_file: Optional[Path] = Field(default=None, description="Runner result file (-f)")
    output_file: Optional[Path] = Field(default=None, description="File capturing standard output")
    error_file: Optional[Path] = Field(default=None, description="File capturing standard error")
    reports: ReportSettings = Field(default_factory=ReportSettings)

    ignore_failures: bool = Field(default=False, description="Warn instead of failing on test failures")

    @field_validator("max_parallel_forks")
    @classmethod
    def validate_forks(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_parallel_forks cannot be negative")
        return v

    @field_validator("java_executable")
    @classmethod
    def validate_java(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Java executable cannot be empty")
        return v

    @field_validator("result_file", "output_file", "error_file", "min_heap_size", "max_heap_size", mode="before")
    @classmethod
    def validate_optional(cls, v):
        return _blank_to_none(v)

    def all_jvm_args(self) -> list[str]:
        """JVM flags in launch order: system properties, heap sizes, then extra args."""
        args = [f"-D{key}={display_value(value)}" for key, value in self.system_properties.items()]
        if self.min_heap_size:
            args.append(f"-Xms{self.min_heap_size}")
        if self.max_heap_size:
            args.append(f"-Xmx{self.max_heap_size}")
        args.extend(self.jvm_args)
        return args

    def resolve_paths(self, base_dir: Path | str) -> "RunConfiguration":
        """Return a copy with relative paths anchored at base_dir."""
        base_dir = Path(base_dir).resolve()
        return self.model_copy(
            update={
                "working_directory": _anchor(self.working_directory, base_dir),
                "test_root": _anchor(self.test_root, base_dir),
                "result_file": _anchor(self.result_file, base_dir),
                "output_file": _anchor(self.output_file, base_dir),
                "error_file": _anchor(self.error_file, base_dir),
                "reports": self.reports.resolved(base_dir),
            }
        )

    @classmethod
    def from_file(cls, path: Path | str) -> "RunConfiguration":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> tuple["RunConfiguration", Path]:
        """Find and load a configuration file, searching up the directory tree.

        Returns the configuration and the path it was loaded from.
        """
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        current = start_dir.resolve()
        while True:
            for name in CONFIG_NAMES:
                config_path = current / name
                if config_path.exists():
                    return cls.from_file(config_path), config_path
            if current == current.parent:
                break
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Create scalatest.json or run 'scalatest-launcher init'"
        )

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)


def _anchor(path: Optional[Path], base_dir: Path) -> Optional[Path]:
    if path is None or path.is_absolute():
        return path
    return base_dir / path


def get_default_config() -> RunConfiguration:
    """Return a default configuration."""
    return RunConfiguration(
        classpath=("build/classes/scala/test", "build/classes/scala/main"),
        max_parallel_forks=0,
    )


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config().model_copy(
        update={
            "tag_excludes": ("org.scalatest.tags.Slow",),
            "config_entries": {"db.name": "testdb"},
            "output_file": Path("build/test-output.txt"),
        }
    )
    config.to_file(output_path)
    return output_path
