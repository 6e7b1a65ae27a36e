"""Command-line interface for scalatest-launcher."""

import shlex
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from scalatest_launcher import __version__
from scalatest_launcher.config import RunConfiguration, create_example_config
from scalatest_launcher.logging_utils import configure_logging


console = Console()


def print_banner() -> None:
    """Print the scalatest-launcher banner."""
    console.print(
        Panel.fit(
            "[bold blue]scalatest-launcher[/bold blue] - ScalaTest Runner for builds",
            subtitle=f"v{__version__}",
        )
    )


@click.group()
@click.version_option(version=__version__, prog_name="scalatest-launcher")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: scalatest.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--log-file", type=click.Path(), help="Also write log records to this file")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool, log_file: Optional[str]) -> None:
    """scalatest-launcher - run ScalaTest suites from a JSON configuration.

    Builds the ScalaTest Runner command line, launches it and fails the
    step when tests fail.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    configure_logging("DEBUG" if verbose else "INFO", Path(log_file) if log_file else None)


def _load_config(ctx: click.Context) -> RunConfiguration:
    """Load the configuration and anchor its paths at the file's directory."""
    config_path = ctx.obj.get("config_path")
    try:
        if config_path:
            config = RunConfiguration.from_file(config_path)
            base_dir = Path(config_path).parent
        else:
            config, found = RunConfiguration.find_and_load()
            base_dir = found.parent
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("Run [bold]scalatest-launcher init[/bold] to create a configuration file")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)

    return config.resolve_paths(base_dir)


def _apply_overrides(config: RunConfiguration, **overrides) -> RunConfiguration:
    updates = {key: value for key, value in overrides.items() if value is not None}
    return config.model_copy(update=updates) if updates else config


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="scalatest.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(f"[yellow]Configuration file already exists:[/yellow] {output_path}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]Created configuration file:[/green] {output_path}")
    console.print("\nNext steps:")
    console.print("  1. Point classpath and test_root at your compiled tests")
    console.print("  2. Run [bold]scalatest-launcher command[/bold] to check the command line")
    console.print("  3. Run [bold]scalatest-launcher run[/bold] to execute tests")


@main.command()
@click.option("--color/--no-color", default=None, help="Override colour output")
@click.pass_context
def command(ctx: click.Context, color: Optional[bool]) -> None:
    """Print the runner command line without running it."""
    from scalatest_launcher.core.action import ScalaTestAction

    config = _apply_overrides(_load_config(ctx), color_output=color)
    click.echo(shlex.join(ScalaTestAction.command_line(config)))


@main.command()
@click.option("--color/--no-color", default=None, help="Override colour output")
@click.option(
    "--ignore-failures/--fail-on-failures",
    default=None,
    help="Override whether failing tests only warn",
)
@click.pass_context
def run(ctx: click.Context, color: Optional[bool], ignore_failures: Optional[bool]) -> None:
    """Execute the tests and report the outcome."""
    print_banner()

    from scalatest_launcher.core.action import ScalaTestAction
    from scalatest_launcher.core.outcome import OutcomeStatus

    config = _apply_overrides(
        _load_config(ctx),
        color_output=color,
        ignore_failures=ignore_failures,
    )
    verbose = ctx.obj.get("verbose", False)

    action = ScalaTestAction()
    try:
        outcome = action.execute(config)
    except OSError as e:
        console.print(f"[red]Could not start the runner:[/red] {e}")
        sys.exit(2)

    if verbose and action.last_process:
        console.print(f"[dim]Runner finished in {action.last_process.duration_ms}ms[/dim]")

    if outcome.status == OutcomeStatus.SUCCESS:
        console.print("\n[green]All tests passed![/green]")
    elif outcome.status == OutcomeStatus.WARNED:
        console.print(f"\n{outcome.message}", style="yellow", markup=False)
    else:
        console.print(f"\n{outcome.message}", style="red", markup=False)
        sys.exit(1)


if __name__ == "__main__":
    main()
